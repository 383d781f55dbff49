"""FastAPI application factory.

Learn: App factory pattern — create_app(settings) returns a configured
FastAPI instance. Everything stateful (engine, session factory, password
hasher, token service) is built here from the Settings passed in and
parked on app.state, where dependencies look it up per request. There is
no module-level app; run it with

    uvicorn voyagehub.main:create_app --factory

or `voyagehub serve`.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voyagehub import __version__
from voyagehub.api import api_router
from voyagehub.api.errors import register_exception_handlers
from voyagehub.auth.jwt import TokenService
from voyagehub.auth.password import PasswordHasher
from voyagehub.config import Settings
from voyagehub.db.engine import build_engine, build_session_factory
from voyagehub.middleware.request_id import RequestIdMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` at
    shutdown. The engine is created eagerly in create_app (so tests can
    use it without running the lifespan) and disposed here.
    """
    settings: Settings = app.state.settings
    logger.info(
        "voyagehub.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    yield

    logger.info("voyagehub.shutdown")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application.

    Without an explicit Settings, one is loaded from the environment;
    that fails if VOYAGEHUB_JWT_SECRET is not set.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="VoyageHub",
        description="Personal travel-journal API",
        version=__version__,
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(settings)

    # Starlette runs middleware in reverse order of registration:
    # RequestId → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app
