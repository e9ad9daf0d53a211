"""
FastAPI application factory for the Web Firm Solutions site server.

Serves the contact API, the i18n/SEO assets and the single-page shell.
"""

import logging
import os
import sys

# Ensure the project root is in Python path for local imports
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.captcha import CaptchaRegistry
from api.config import ensure_admin_key, load_site_config
from api.rate_limit import limiter, rate_limit_exceeded_handler, set_captcha_limit, set_contact_limit
from api.store import MessageStore
from i18n.assets import LocalAssetFetcher
from seo.metadata import SEOLoader

logger = logging.getLogger(__name__)

# Sent on every response unless a route already set them
SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Referrer-Policy': 'no-referrer',
    'Cross-Origin-Opener-Policy': 'same-origin',
    'X-DNS-Prefetch-Control': 'off',
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup/shutdown hooks."""
    app.state.messages.ensure_file()
    logger.info("Contact form endpoint: POST /api/contact")
    logger.info("Admin messages endpoint: GET /api/admin/messages?key=<admin key>")
    logger.info(f"Messages stored in: {app.state.messages.path}")
    yield
    app.state.captchas.clear()


def _error_response(status_code, error, headers=None):
    return JSONResponse(
        status_code=status_code,
        content={'success': False, 'error': error},
        headers=headers,
    )


def create_app(config=None) -> FastAPI:
    """FastAPI application factory.

    Args:
        config: Site config dict (merged over defaults); read from
            site_config.json when None
    """
    config = load_site_config(config)
    ensure_admin_key(config)

    app = FastAPI(
        title="Web Firm Solutions API",
        description="Contact form backend and localized site server",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )

    assets_dir = config['i18n'].get('assets_dir')
    assets = LocalAssetFetcher(assets_dir) if assets_dir else LocalAssetFetcher()

    app.state.config = config
    app.state.messages = MessageStore(config['contact']['messages_file'])
    app.state.captchas = CaptchaRegistry(config['contact']['captcha_ttl_seconds'])
    app.state.assets = assets
    app.state.asset_cache = {}
    app.state.seo_loader = SEOLoader(assets)
    app.state.dist_dir = config['site'].get('dist_dir')

    # Rate limiting (per client IP, in memory)
    set_contact_limit(config['contact'].get('rate_limit'))
    set_captcha_limit(config['contact'].get('captcha_rate_limit'))
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # CORS middleware (dev: allow Angular dev server)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config['cors']['allow_origins'],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, exc.detail, getattr(exc, 'headers', None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Server error on {request.method} {request.url.path}")
        return _error_response(500, "Internal server error")

    # Register routers
    from api.routers.contact import router as contact_router
    from api.routers.admin import router as admin_router
    from api.routers.i18n import router as i18n_router
    from api.routers.pages import router as pages_router

    app.include_router(contact_router)
    app.include_router(admin_router)
    app.include_router(i18n_router)
    # SPA catch-all must come last
    app.include_router(pages_router)

    return app
