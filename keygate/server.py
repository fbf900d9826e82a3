"""aiohttp application: /auth and /healthz endpoints."""

from __future__ import annotations

import logging
from typing import Any

from aiohttp import web

from keygate.auth import API_KEY_SCHEME, get_api_key, mask_key
from keygate.headers import HeaderMap

log = logging.getLogger(__name__)


def _unauthorized(request: web.Request, reason: str) -> web.Response:
    realm = request.app["config"]["auth"]["realm"]
    return web.Response(
        status=401,
        text=reason,
        headers={"WWW-Authenticate": f'{API_KEY_SCHEME} realm="{realm}"'},
    )


async def healthz(request: web.Request) -> web.Response:
    return web.Response(text="ok")


async def auth(request: web.Request) -> web.Response:
    headers = HeaderMap.from_pairs(request.headers.items())
    key, err = get_api_key(headers)
    if err is not None:
        log.debug("Rejected %s %s: %s", request.method, request.path, err)
        return _unauthorized(request, err.message)
    if not key:
        log.debug("Rejected %s %s: empty api key", request.method, request.path)
        return _unauthorized(request, "empty api key")
    log.debug("Accepted api key ...%s", mask_key(key))
    return web.Response(
        status=200, text="ok", headers={"X-Keygate-Key-Suffix": mask_key(key)}
    )


def create_app(config: dict[str, Any]) -> web.Application:
    app = web.Application()
    app["config"] = config

    app.router.add_get("/auth", auth)
    app.router.add_get("/healthz", healthz)
    return app
