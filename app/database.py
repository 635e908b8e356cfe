# app/database.py
import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

# Base declarative
Base = declarative_base()

CONNECTION_ERROR_MESSAGE = "Hubo un error al conectar a la base de datos"


class Database:
    """
    Owns the async engine and the session factory.

    Built once by the application factory and kept on ``app.state.db``;
    request handlers reach it through :func:`get_session`.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True)
        self.session_maker = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    def session(self) -> AsyncSession:
        return self.session_maker()

    async def dispose(self) -> None:
        await self.engine.dispose()


async def connect_db(db: Database) -> bool:
    """
    Check the connection and create missing tables.

    A failure is logged and swallowed so the process keeps serving requests;
    returns whether the check succeeded.
    """
    try:
        async with db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError):
        logger.exception(CONNECTION_ERROR_MESSAGE)
        return False

    logger.info("Conexion exitosa a la base de datos")
    return True


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session
