"""
Payload normalizer for CI build webhooks.

Webhook senders disagree on payload shape: build fields may sit under a
``queuedBuild`` key, under a ``build`` key, or at the top level, and the
same datum (who triggered the build, say) travels under several names.
Every field is therefore resolved by walking an ordered table of probe
rules; the first rule whose path resolves to a value of the expected type
wins. The tables below are the single source of truth for lookup order.
"""

import json
import uuid
from dataclasses import dataclass
from typing import Any

from buildticker.core.exceptions import PayloadError
from buildticker.core.logging import get_logger
from buildticker.models import BuildState, NormalizedEvent

logger = get_logger(__name__)

BUILD = "build"
ROOT = "root"

_TEXT = (str,)
_ID = (str, int)


@dataclass(frozen=True)
class Probe:
    """A (path, expected types) lookup rule."""

    path: tuple[str, ...]
    types: tuple[type, ...] = _TEXT
    scope: str = BUILD

    def lookup(self, build: Any, root: Any) -> Any | None:
        """Return the value at ``path`` if it has an expected type, else None."""
        value = root if self.scope == ROOT else build
        for key in self.path:
            if not isinstance(value, dict) or key not in value:
                return None
            value = value[key]
        if isinstance(value, bool) and bool not in self.types:
            return None
        if not isinstance(value, self.types):
            return None
        return value


def _probes(*paths: str, types: tuple[type, ...] = _TEXT, scope: str = BUILD) -> tuple[Probe, ...]:
    return tuple(Probe(tuple(p.split(".")), types, scope) for p in paths)


# Wrapper keys in detection order; the flag marks the queued-wrapper shape
WRAPPERS: tuple[tuple[str, bool], ...] = (
    ("queuedBuild", True),
    ("build", False),
)

ID_PROBES = _probes("id", "buildId", types=_ID) + _probes("buildId", types=_ID, scope=ROOT)

NUMBER_PROBES = _probes("buildNumber", "number", types=_ID)

# The nested pair is tried first; the flat keys only when it yields nothing
DEFINITION_PROBE_GROUPS = (
    _probes("buildType.name", "buildType.id"),
    _probes("buildTypeName", "definition", "buildName"),
)

ISSUER_PROBES = _probes(
    "issuer",
    "user",
    "username",
    "userName",
    "triggered.user",
    "triggered.username",
    "triggered.userName",
    "triggered.displayName",
    "triggered.user.name",
    "triggered.user.username",
    "triggered.user.userName",
    "triggered.user.login",
    "triggeredBy.username",
    "triggeredBy.userName",
    "triggeredBy.name",
    "agent.name",
)

EVENT_PROBES = _probes("event", scope=ROOT)
STATE_PROBES = _probes("state")
STATUS_PROBES = _probes("status")
RUNNING_PROBES = _probes("running", types=(bool,))

CANCELED_KEY = "canceledInfo"

EVENT_QUEUED = "buildQueued"
EVENT_STARTED = "buildStarted"
EVENT_FINISHED = "buildFinished"
EVENT_INTERRUPTED = "buildInterrupted"

_FAILED_STATUSES = ("FAILURE", "ERROR")


def first_match(probes: tuple[Probe, ...], build: Any, root: Any = None) -> Any | None:
    """Evaluate probes in order and return the first hit."""
    for probe in probes:
        value = probe.lookup(build, root)
        if value is not None:
            return value
    return None


def _text(probes: tuple[Probe, ...], build: Any, root: Any) -> str:
    value = first_match(probes, build, root)
    return "" if value is None else str(value)


def _text_grouped(groups: tuple[tuple[Probe, ...], ...], build: Any, root: Any) -> str:
    for probes in groups:
        value = _text(probes, build, root)
        if value:
            return value
    return ""


def detect_shape(payload: Any) -> tuple[Any, bool]:
    """
    Locate the build object inside a payload.

    Returns:
        Tuple of (build object, whether it came from the queued wrapper)
    """
    if isinstance(payload, dict):
        for key, queued in WRAPPERS:
            if key in payload:
                return payload[key], queued
    return payload, False


def _status_state(status: str) -> BuildState | None:
    if status == "SUCCESS":
        return BuildState.SUCCESS
    if status in _FAILED_STATUSES:
        return BuildState.FAILURE
    return None


def classify(
    *,
    queued_wrapper: bool,
    state: str,
    status: str,
    running: bool,
    canceled: bool,
    hint: str,
) -> tuple[BuildState, str | None]:
    """
    Classify a build into a state plus the lifecycle transition it signals.

    The transition is one of ``"queued"``, ``"started"``, ``"finished"`` or
    None when the payload carries no recognizable lifecycle signal.
    """
    if queued_wrapper or state == "queued" or hint == EVENT_QUEUED:
        return BuildState.QUEUED, "queued"

    if state == "running" or running or hint == EVENT_STARTED:
        return BuildState.RUNNING, "started"

    if state == "finished" or hint in (EVENT_FINISHED, EVENT_INTERRUPTED):
        if canceled or hint == EVENT_INTERRUPTED:
            return BuildState.CANCELED, "finished"
        return _status_state(status) or BuildState.UNKNOWN, "finished"

    # No lifecycle signal; status, then the running flag
    if status:
        return _status_state(status) or BuildState.UNKNOWN, None
    if running:
        return BuildState.RUNNING, None
    return BuildState.UNKNOWN, None


def synthesize_id() -> str:
    """Locally unique identifier for payloads without one."""
    return f"anon-{uuid.uuid4().hex}"


def normalize(payload: Any) -> NormalizedEvent:
    """
    Convert a decoded webhook payload into a NormalizedEvent.

    Never raises on odd content: unresolvable fields default to empty
    strings and the state to UNKNOWN. Non-object payloads are treated as
    an empty object.
    """
    root = payload if isinstance(payload, dict) else {}
    build, queued_wrapper = detect_shape(root)

    build_id = _text(ID_PROBES, build, root)
    # An empty id cannot key a card, so it counts as missing
    synthetic = not build_id
    if synthetic:
        build_id = synthesize_id()
        logger.info(f"Payload has no build id, using {build_id}")

    hint = _text(EVENT_PROBES, build, root)
    state, transition = classify(
        queued_wrapper=queued_wrapper,
        state=_text(STATE_PROBES, build, root),
        status=_text(STATUS_PROBES, build, root),
        running=first_match(RUNNING_PROBES, build, root) is True,
        canceled=isinstance(build, dict) and CANCELED_KEY in build,
        hint=hint,
    )

    return NormalizedEvent(
        id=build_id,
        number=_text(NUMBER_PROBES, build, root),
        definition_name=_text_grouped(DEFINITION_PROBE_GROUPS, build, root),
        issuer=_text(ISSUER_PROBES, build, root),
        state=state,
        event_hint=hint,
        just_queued=transition == "queued",
        just_started=transition == "started",
        just_finished=transition == "finished",
        synthetic_id=synthetic,
    )


def decode_payload(body: bytes) -> Any:
    """
    Decode a raw webhook body.

    Raises:
        PayloadError: If the body is not valid JSON
    """
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise PayloadError(str(e)) from e
