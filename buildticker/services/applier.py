"""
Applies normalized events to the card store.
"""

from datetime import datetime
import time

from buildticker.core.logging import get_logger
from buildticker.models import BuildCard, BuildState, NormalizedEvent
from buildticker.state.cards import CardStore

logger = get_logger(__name__)

_FINISH_NOTES: dict[BuildState, str] = {
    BuildState.SUCCESS: "finished (SUCCESS)",
    BuildState.FAILURE: "finished (FAILURE)",
    BuildState.CANCELED: "canceled",
}


def finish_note(state: BuildState) -> str:
    """Change note for a finished build."""
    return _FINISH_NOTES.get(state, "finished")


def _fill_in(card: BuildCard, event: NormalizedEvent) -> None:
    # Present values overwrite, missing ones never blank
    if event.number:
        card.number = event.number
    if event.definition_name:
        card.definition_name = event.definition_name
    if event.issuer:
        card.issuer = event.issuer


def apply(store: CardStore, event: NormalizedEvent) -> None:
    """
    Apply one event to the store under its lock.

    Never blocks beyond the lock and never raises for any NormalizedEvent.
    """
    with store.locked():
        card = store.upsert(event.id)
        _fill_in(card, event)
        card.last_updated_at = datetime.now()

        if event.just_queued:
            store.mark_queued(event.id)
            card.state = BuildState.QUEUED
            card.started_at = None
            card.last_change_note = "queued"
        elif event.just_started:
            store.unmark_queued(event.id)
            card.state = BuildState.RUNNING
            card.started_at = time.monotonic()
            card.last_change_note = "started"
        elif event.just_finished:
            store.unmark_queued(event.id)
            card.state = event.state
            card.started_at = None
            card.last_change_note = finish_note(event.state)
        else:
            card.state = event.state
            card.last_change_note = "updated"
        state, note = card.state, card.last_change_note

    logger.debug(f"Applied event to {event.id}: {state.label} ({note})")
