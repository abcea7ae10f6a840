"""StorePulse API entry point.

create_app() only wires things together: lifespan resources (HTTP client,
report cache, DB engine), error envelopes, middleware and the v1 router.
Settings are read inside create_app() so tests can set env first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import RequestIDMiddleware

API_PREFIX = "/api/v1"


def _cors_origins(settings: Settings) -> list[str]:
    return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    # SlowAPI decorators look the limiter up on app.state.
    app.state.limiter = limiter
    register_exception_handlers(app)

    # First added is innermost: the request id wraps CORS and every handler.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix=API_PREFIX)
    return app


app = create_app()
