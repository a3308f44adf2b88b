"""
Database connection and session management.
Wraps an async SQLAlchemy engine and session factory in an explicitly constructed
context that is handed to the repositories and the query service.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool
from sqlalchemy import Integer, text
from contextlib import asynccontextmanager
from typing import AsyncIterator
from lightbnb.config import Settings
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table carries a serial integer primary key.
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True
    )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


class DatabaseContext:
    """
    Engine plus session factory for one database.
    Construct once per process (or per test) and pass it to whoever runs queries.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False, **pool_options) -> "DatabaseContext":
        """
        Create a context for a database URL.

        SQLite URLs share a single connection so in-memory databases survive
        across sessions; pool options only apply to server databases.
        """
        if database_url.startswith("sqlite"):
            engine = create_async_engine(
                database_url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            engine = create_async_engine(
                database_url,
                echo=echo,
                pool_pre_ping=True,
                connect_args={
                    "server_settings": {
                        "application_name": "lightbnb",
                    }
                },
                **pool_options
            )
        logger.debug(f"Created database engine for {engine.url.render_as_string(hide_password=True)}")
        return cls(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseContext":
        """Create a context from application settings."""
        pool_options = {}
        if not settings.is_sqlite:
            pool_options = {
                "pool_size": settings.pool_size,
                "max_overflow": settings.max_overflow,
                "pool_recycle": settings.pool_recycle,
                "pool_timeout": settings.pool_timeout,
            }
        return cls.from_url(settings.database_url, echo=settings.sql_echo, **pool_options)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield an async database session and ensure it's closed after use.
        Rolls back if the block raises.
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.session() as session:
                result = await session.execute(text("SELECT 1"))
                result.scalar()
                logger.info("Database connection successful")
                return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    async def create_tables(self) -> None:
        """Create all database tables."""
        import lightbnb.models  # noqa: F401  registers every table on Base.metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all database tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("Database tables dropped successfully")

    async def dispose(self) -> None:
        """Close pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")

    async def get_database_info(self) -> dict:
        """
        Get database connection information for monitoring.
        Returns connection pool status and the dialect in use.
        """
        pool = self.engine.pool
        info = {
            "dialect": self.engine.dialect.name,
            "pool_class": type(pool).__name__,
        }
        if hasattr(pool, "checkedout"):
            info.update({
                "pool_size": pool.size(),
                "checked_in_connections": pool.checkedin(),
                "checked_out_connections": pool.checkedout(),
                "overflow_connections": pool.overflow(),
            })
        return info
