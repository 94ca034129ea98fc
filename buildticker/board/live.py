"""
Periodic redraw of the build board.
"""

import asyncio

from rich.live import Live

from buildticker.core.logging import get_logger
from buildticker.state.cards import CardStore

from .renderer import BoardRenderer

logger = get_logger(__name__)


async def run_board(
    store: CardStore,
    stop: asyncio.Event,
    *,
    renderer: BoardRenderer | None = None,
    interval: float = 1.0,
    screen: bool = False,
) -> None:
    """
    Redraw the board every ``interval`` seconds until ``stop`` is set.

    Each tick renders whatever snapshot is current; the loop never waits
    for events.
    """
    renderer = renderer or BoardRenderer()

    with Live(
        renderer.render(store.board()),
        console=renderer.console,
        auto_refresh=False,
        screen=screen,
        transient=False,
    ) as live:
        while not stop.is_set():
            live.update(renderer.render(store.board()), refresh=True)
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue

    logger.info("Board stopped")
