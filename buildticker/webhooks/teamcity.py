"""
Webhook handlers for CI build events.
"""

from aiohttp import web

from buildticker.core.exceptions import PayloadError
from buildticker.core.logging import get_logger
from buildticker.services import apply, decode_payload, normalize
from buildticker.state.cards import CardStore

logger = get_logger(__name__)

STORE_KEY = web.AppKey("store", CardStore)


async def handle_build_event(request: web.Request) -> web.Response:
    """Normalize one build payload and apply it to the card store."""
    body = await request.read()

    try:
        payload = decode_payload(body)
    except PayloadError as e:
        logger.warning(f"Rejected webhook body: {e}")
        return web.Response(status=400, text=f"bad request: {e}\n")

    try:
        event = normalize(payload)
        apply(request.app[STORE_KEY], event)
    except Exception as e:
        logger.exception(f"Webhook error: {e}")
        return web.Response(status=500, text="Internal Server Error")

    return web.Response(status=200, text="ok\n")


async def handle_index(request: web.Request) -> web.Response:
    return web.Response(text="buildticker: POST JSON to /webhook")


async def handle_ping(request: web.Request) -> web.Response:
    return web.Response(text="OK")
