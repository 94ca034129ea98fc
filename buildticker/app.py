"""
Application wiring and main entry point.
"""

import asyncio
import signal

from buildticker.board import BoardRenderer, run_board
from buildticker.core.config import Settings
from buildticker.core.logging import get_logger
from buildticker.state.cards import CardStore
from buildticker.webhooks.server import start_webhook_server

logger = get_logger(__name__)


def install_stop_handlers(stop: asyncio.Event) -> None:
    """Set ``stop`` on SIGINT/SIGTERM where the loop supports signal handlers."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Windows: KeyboardInterrupt ends asyncio.run instead
            logger.debug(f"No handler for {sig.name}")


async def main(settings: Settings, *, renderer: BoardRenderer | None = None, stop: asyncio.Event | None = None) -> None:
    """Serve webhooks and redraw the board until stopped."""
    store = CardStore(settings.max_cards)
    renderer = renderer or BoardRenderer(listen_url=settings.listen_url)
    if stop is None:
        stop = asyncio.Event()
        install_stop_handlers(stop)

    runner = await start_webhook_server(store, settings.bind, settings.port)

    try:
        await run_board(store, stop, renderer=renderer, interval=settings.refresh_interval)
    finally:
        await runner.cleanup()
        logger.info("Webhook server stopped")
