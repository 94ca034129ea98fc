"""
Thread-safe, size-bounded storage for build cards.
"""

import threading
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

from buildticker.core.logging import get_logger
from buildticker.models import BuildCard

logger = get_logger(__name__)

DEFAULT_MAX_CARDS = 20


@dataclass(frozen=True)
class BoardSnapshot:
    """Consistent copy of the store taken under one lock acquisition."""

    cards: tuple[BuildCard, ...]
    queued_count: int
    max_cards: int

    @property
    def running_count(self) -> int:
        return sum(1 for card in self.cards if card.is_running)

    @property
    def shown_count(self) -> int:
        return min(len(self.cards), self.max_cards)


class CardStore:
    """
    Most-recently-touched-first collection of build cards.

    Cards are keyed by build id. Every upsert moves the card to the front;
    inserting past ``max_cards`` evicts from the back. A separate queued-set
    tracks ids currently waiting in the CI queue and is not subject to
    eviction.
    """

    def __init__(self, max_cards: int = DEFAULT_MAX_CARDS):
        if max_cards < 1:
            raise ValueError(f"max_cards must be >= 1, got {max_cards}")
        self._max_cards = max_cards
        # First item is the most recently touched card
        self._cards: OrderedDict[str, BuildCard] = OrderedDict()
        self._queued: set[str] = set()
        self._lock = threading.Lock()

    @property
    def max_cards(self) -> int:
        return self._max_cards

    @contextmanager
    def locked(self) -> Iterator["CardStore"]:
        """Hold the store lock for a compound mutation."""
        with self._lock:
            yield self

    # Methods below expect the caller to hold ``locked()``

    def upsert(self, build_id: str) -> BuildCard:
        """Return the card for ``build_id``, creating it if needed, moved to the front."""
        card = self._cards.get(build_id)
        if card is not None:
            self._cards.move_to_end(build_id, last=False)
            return card

        card = BuildCard(id=build_id)
        self._cards[build_id] = card
        self._cards.move_to_end(build_id, last=False)
        while len(self._cards) > self._max_cards:
            evicted, _ = self._cards.popitem(last=True)
            logger.debug(f"Evicted card {evicted}")
        return card

    def mark_queued(self, build_id: str) -> None:
        self._queued.add(build_id)

    def unmark_queued(self, build_id: str) -> None:
        self._queued.discard(build_id)

    # Self-locking readers

    def snapshot(self) -> list[BuildCard]:
        """Copies of all cards, front to back."""
        with self._lock:
            return [replace(card) for card in self._cards.values()]

    def board(self) -> BoardSnapshot:
        """Cards plus queue counters for the renderer."""
        with self._lock:
            return BoardSnapshot(
                cards=tuple(replace(card) for card in self._cards.values()),
                queued_count=len(self._queued),
                max_cards=self._max_cards,
            )

    def queued_ids(self) -> set[str]:
        with self._lock:
            return set(self._queued)

    def get(self, build_id: str) -> BuildCard | None:
        """Copy of a card by id without reordering."""
        with self._lock:
            card = self._cards.get(build_id)
            return replace(card) if card is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)

    def __contains__(self, build_id: str) -> bool:
        with self._lock:
            return build_id in self._cards
