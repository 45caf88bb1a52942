"""FastAPI application setup."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from .routes import create_assets_router, create_chat_router, create_cinema_router


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure the local API around one Application."""
    application = application or Application()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Lucy Chat Client API",
        description="Local API driving the Lucy conversation engine",
        version="0.1.0",
        lifespan=lifespan,
    )

    origins = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174")
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_chat_router(application))
    fastapi_app.include_router(create_assets_router(application))
    fastapi_app.include_router(create_cinema_router(application))

    return fastapi_app
