from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tortoise.contrib.fastapi import register_tortoise

from .config import Settings
from .routers import races as races_router
from .routers import sessions as sessions_router
from .routers import websockets as ws_router
from .state import Runtime


def create_app(settings: Optional[Settings] = None, runtime: Optional[Runtime] = None) -> FastAPI:
    settings = settings or Settings()

    logging.getLogger("racesync").setLevel(settings.log_level)

    # -----------------------------
    # FastAPI app instance
    # -----------------------------

    app = FastAPI(title="Racesync")
    app.state.settings = settings
    app.state.runtime = runtime or Runtime()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(sessions_router.router)
    app.include_router(races_router.router)
    app.include_router(ws_router.router)

    # -----------------------------
    # Race archive (Tortoise ORM)
    # -----------------------------

    register_tortoise(
        app,
        db_url=settings.database_url,
        modules={"models": ["racesync.models"]},
        generate_schemas=settings.generate_schemas,
        add_exception_handlers=True,
    )

    return app


app = create_app()

__all__ = ["app", "create_app"]
