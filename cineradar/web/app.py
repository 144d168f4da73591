"""
Application FastAPI de CineRadar.

Initialise le Container DI, restaure les sources activees au demarrage
et monte les routes de messagerie et de consultation des sources.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from ..container import Container
from .routes.messages import router as messages_router
from .routes.sources import router as sources_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise le Container DI au demarrage, restaure les sources et les ferme a l'arret."""
    container = Container()
    restored = await container.source_registry().restore()
    logger.info("Serveur CineRadar pret", active_sources=restored)
    app.state.container = container
    yield
    await container.source_registry().close()


app = FastAPI(title="CineRadar", lifespan=lifespan)

app.include_router(messages_router)
app.include_router(sources_router)
