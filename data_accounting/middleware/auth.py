"""API key authentication middleware for the verification API.

Requests fall into three tiers:

- **Public**: no auth required (healthz, docs, proof and hash lookups)
- **Read**: requires the API key only when `API_READ_AUTH` is on (config listing)
- **Write**: any mutating method (PUT/POST/PATCH/DELETE), always requires the key

Configuration via environment variables:

- `API_KEY`: the shared secret. When unset, all endpoints are open.
- `API_PUBLIC_PREFIXES`: comma-separated path prefixes that never require auth
  for reads. Default: `/healthz,/docs,/redoc,/openapi.json,/data_accounting/v1/standard,/data_accounting/v1/witness`
- `API_READ_AUTH`: if `true`, reads outside the public prefixes need the key too.

The key can be sent as:
- `X-API-Key: <key>` header
- `Authorization: Bearer <key>` header
- `?api_key=<key>` query parameter
"""
from __future__ import annotations

import hmac
import logging
import os
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

_DEFAULT_PUBLIC_PREFIXES = (
    "/healthz",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/data_accounting/v1/standard",
    "/data_accounting/v1/witness",
)

_WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def _parse_prefixes(env_var: str, defaults: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(env_var, "").strip()
    if not raw:
        return defaults
    return tuple(p.strip() for p in raw.split(",") if p.strip())


def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=401, content={"detail": "API key required"})


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Gates write requests (and optionally non-public reads) by API key.

    Inactive when `api_key` is None.
    """

    def __init__(
        self,
        app,
        api_key: str | None = None,
        public_prefixes: tuple[str, ...] | None = None,
        read_auth: bool = False,
    ):
        super().__init__(app)
        self.api_key = api_key
        self.public_prefixes = public_prefixes or _parse_prefixes(
            "API_PUBLIC_PREFIXES", _DEFAULT_PUBLIC_PREFIXES
        )
        self.read_auth = read_auth

    async def dispatch(self, request: Request, call_next: Callable):
        if not self.api_key:
            return await call_next(request)

        if request.method.upper() in _WRITE_METHODS:
            if not self._check_key(request):
                return _unauthorized()
            return await call_next(request)

        if self._is_public(request.url.path):
            return await call_next(request)

        if self.read_auth and not self._check_key(request):
            return _unauthorized()

        return await call_next(request)

    def _is_public(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.public_prefixes)

    def _check_key(self, request: Request) -> bool:
        key = request.headers.get("x-api-key")
        if not key:
            auth = request.headers.get("authorization", "")
            if auth.lower().startswith("bearer "):
                key = auth[7:].strip()
        if not key:
            key = request.query_params.get("api_key")
        if not key:
            return False
        return hmac.compare_digest(key.encode("utf-8"), self.api_key.encode("utf-8"))


def configure_auth(app) -> None:
    """Read env vars and add API key middleware to a FastAPI app.

    Does nothing if API_KEY is not set.
    """
    api_key = os.getenv("API_KEY", "").strip() or None
    read_auth = os.getenv("API_READ_AUTH", "false").lower() in ("true", "1", "yes")

    if api_key:
        app.add_middleware(
            APIKeyMiddleware,
            api_key=api_key,
            read_auth=read_auth,
        )
        logger.info("API key auth enabled (read_auth=%s)", read_auth)
    else:
        logger.info("API key auth disabled (API_KEY not set)")
