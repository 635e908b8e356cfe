# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from . import products
from .config import Settings, get_settings
from .database import Database, connect_db
from .errors import register_exception_handlers
from .middleware import setup_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A failed connection check is logged by connect_db; keep serving regardless.
    await connect_db(app.state.db)
    yield
    await app.state.db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Products REST API",
        description="CRUD API for the product catalogue",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[{"name": "Products", "description": "Product catalogue operations"}],
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url, echo=settings.sql_echo)

    setup_middleware(app, settings.frontend_url)
    register_exception_handlers(app)
    app.include_router(products.router)

    logger.debug("CORS origin: %s", settings.frontend_url)
    return app


settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    logger.info("REST API en el puerto %s", settings.port)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
