"""
Canonical, shape-independent view of one webhook payload.
"""

from dataclasses import dataclass

from .card import BuildState


@dataclass(frozen=True)
class NormalizedEvent:
    """Result of normalizing one inbound payload."""

    id: str
    number: str = ""
    definition_name: str = ""
    issuer: str = ""
    state: BuildState = BuildState.UNKNOWN
    event_hint: str = ""
    just_queued: bool = False
    just_started: bool = False
    just_finished: bool = False
    # True when no identifier was found and `id` was generated locally
    synthetic_id: bool = False
