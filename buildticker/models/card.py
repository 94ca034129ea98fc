"""
Data model for a tracked build.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BuildState(str, Enum):
    """Lifecycle state of a build as last observed."""

    QUEUED = "queued"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELED = "canceled"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return self.value.upper()


@dataclass
class BuildCard:
    """Latest known status of one build occurrence."""

    id: str
    number: str = ""
    definition_name: str = ""
    issuer: str = ""
    state: BuildState = BuildState.UNKNOWN
    # time.monotonic() reading taken when the running transition was seen
    started_at: float | None = None
    last_updated_at: datetime | None = None
    last_change_note: str = ""

    @property
    def is_running(self) -> bool:
        return self.state is BuildState.RUNNING
