from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from hospital.bootstrap import bootstrap
from hospital.config import Settings
from hospital.logging_config import get_logger

logger = get_logger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """
    Processus hôte : réserve le port d'écoute et exécute le démarrage.

    Aucun endpoint n'est exposé dans cette version (docs et OpenAPI
    désactivés) ; le port est gardé pour une future API.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # le seed est synchrone : le serveur n'est prêt qu'après
        records = bootstrap(settings)
        app.state.records = records
        try:
            yield
        finally:
            records.close()

    return FastAPI(
        title="Hospital Records",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )


def serve(settings: Settings) -> None:
    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,  # garde la configuration de logging_config
    )
