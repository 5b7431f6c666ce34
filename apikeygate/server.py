"""aiohttp application: /auth (an nginx auth_request target) and /healthz."""

from __future__ import annotations

import logging

from aiohttp import web

from apikeygate.auth import SCHEME, extract_api_key
from apikeygate.headers import HeaderCollection
from apikeygate.keystore import KeyStore

log = logging.getLogger(__name__)

KEYSTORE = web.AppKey("keystore", KeyStore)
CLIENT_ID_HEADER = "X-ApiKeyGate-Client"


async def healthz(request: web.Request) -> web.Response:
    return web.Response(text="ok")


async def auth(request: web.Request) -> web.Response:
    """401 for a missing or malformed header, 403 for an unknown key."""
    key, err = extract_api_key(HeaderCollection.from_pairs(request.headers.items()))
    if err is not None:
        log.debug("Rejected %s %s: %s", request.method, request.path, err.kind.value)
        return web.Response(
            status=err.status,
            text=err.message,
            headers={"WWW-Authenticate": SCHEME},
        )

    client = request.app[KEYSTORE].lookup(key)
    if client is None:
        log.debug("Rejected %s %s: unknown key", request.method, request.path)
        return web.Response(status=403, text="forbidden")
    return web.Response(text="ok", headers={CLIENT_ID_HEADER: client.id})


def create_app(keystore: KeyStore) -> web.Application:
    app = web.Application()
    app[KEYSTORE] = keystore
    app.router.add_get("/auth", auth)
    app.router.add_get("/healthz", healthz)
    return app
