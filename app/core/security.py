"""
HTTP hardening middleware: origin allow-list, global rate limit and
security headers.
"""

import logging
from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import Settings
from app.core.errors import OriginDenied, RateLimited, error_response
from app.core.rate_limit import RateLimiter, client_ip

logger = logging.getLogger(__name__)

# helmet() defaults, without the Content-Security-Policy header
SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class OriginPolicyMiddleware(BaseHTTPMiddleware):
    """Reject any request whose Origin header is present and not allowed."""

    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")
        if origin and origin not in self.allowed_origins:
            logger.warning(f"Blocked request from disallowed origin {origin} to {request.url.path}")
            return error_response(OriginDenied())
        return await call_next(request)


class GlobalRateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: RateLimiter, trust_proxy: bool = False):
        super().__init__(app)
        self.limiter = limiter
        self.trust_proxy = trust_proxy

    async def dispatch(self, request, call_next):
        result = await self.limiter.check(client_ip(request, self.trust_proxy))
        if not result.allowed:
            return error_response(RateLimited(headers=result.headers()))

        response = await call_next(request)
        for name, value in result.headers().items():
            response.headers.setdefault(name, value)
        return response


def add_security_middleware(app: FastAPI, settings: Settings, global_limiter: RateLimiter) -> None:
    # Starlette runs the last-added middleware first, so the order below is
    # innermost to outermost: rate limit, CORS, origin check, headers.
    # Limiter 429s must pass back through CORS to carry allow-origin headers.
    app.add_middleware(
        GlobalRateLimitMiddleware,
        limiter=global_limiter,
        trust_proxy=settings.trust_proxy,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(OriginPolicyMiddleware, allowed_origins=settings.allowed_origin_list)
    app.add_middleware(SecurityHeadersMiddleware)
