"""
Leitner Trainer API

FastAPI application exposing the card store and the Leitner scheduler.

Run:
    uvicorn leitner.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leitner import __version__
from leitner.config import settings
from leitner.enums import CardStoreBackend
from leitner.middleware import setup_error_handling, setup_rate_limiting
from leitner.routers import cards_router, health_router
from leitner.services.learning import build_card_store

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    # Reduce noise from SQLAlchemy and HTTP libs (unless debugging)
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the card store on startup, dispose the engine on shutdown."""
    if settings.CARD_STORE == CardStoreBackend.SQL:
        from leitner.db.base import engine, init_db

        await init_db()
        logger.info("Database tables ready")

    app.state.card_store = build_card_store(settings)
    logger.info(f"{settings.APP_NAME} {__version__} started")

    yield

    if settings.CARD_STORE == CardStoreBackend.SQL:
        await engine.dispose()
    logger.info(f"{settings.APP_NAME} stopped")


setup_logging(settings.DEBUG)

app = FastAPI(title=f"{settings.APP_NAME} API", version=__version__, lifespan=lifespan)

setup_error_handling(app, debug=settings.DEBUG)
setup_rate_limiting(app, enabled=settings.RATE_LIMIT_ENABLED)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router.router)
app.include_router(cards_router.router)


@app.get("/")
async def root():
    return {"message": f"{settings.APP_NAME} API", "docs": "/docs"}
