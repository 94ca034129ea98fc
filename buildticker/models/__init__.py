# Models - build cards and normalized webhook events
from .card import BuildCard, BuildState
from .event import NormalizedEvent

__all__ = ["BuildCard", "BuildState", "NormalizedEvent"]
