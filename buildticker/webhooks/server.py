"""
Webhook server setup.
"""

from aiohttp import web

from buildticker.core.logging import get_logger
from buildticker.state.cards import CardStore
from buildticker.webhooks.teamcity import STORE_KEY, handle_build_event, handle_index, handle_ping

logger = get_logger(__name__)


def create_web_app(store: CardStore) -> web.Application:
    """Build the aiohttp application bound to ``store``."""
    app = web.Application()
    app[STORE_KEY] = store
    app.router.add_get("/", handle_index)
    app.router.add_get("/ping", handle_ping)
    app.router.add_post("/webhook", handle_build_event)
    return app


async def start_webhook_server(
    store: CardStore,
    host: str = "127.0.0.1",
    port: int = 9876,
) -> web.AppRunner:
    """
    Start the webhook server.

    Args:
        store: Card store that receives applied events
        host: Host to bind to
        port: Port to bind to

    Returns:
        The runner; call ``cleanup()`` on it to stop serving
    """
    runner = web.AppRunner(create_web_app(store), access_log=None)
    await runner.setup()

    site = web.TCPSite(runner, host, port)
    try:
        await site.start()
    except OSError:
        await runner.cleanup()
        raise

    logger.info(f"Webhook server started on {host}:{port}")
    return runner
