"""
Database engine, sessions and the request-scoped session dependency
"""

import asyncio
import time
from typing import AsyncGenerator, Dict, Any
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import text, event
from sqlalchemy.exc import DisconnectionError, OperationalError
import structlog

from core.config import settings

logger = structlog.get_logger()

# Errors worth retrying when opening a session
TRANSIENT_ERRORS = (DisconnectionError, OperationalError, ConnectionError)

def async_database_url() -> str:
    return settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)

def engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the current environment"""
    options: Dict[str, Any] = {
        "echo": settings.DEBUG,
        "connect_args": {
            "server_settings": {"application_name": "lawdesk"},
            "command_timeout": 60,
        },
    }

    if settings.TESTING:
        # Connections must not outlive a test's event loop
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_timeout=30,
        )
    return options

class DatabaseConnectionManager:
    """Owns the engine and session factory; validates connectivity and retries session setup"""

    VALIDATION_TTL_SECONDS = 300

    def __init__(self):
        self.engine: AsyncEngine = create_async_engine(async_database_url(), **engine_options())
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )
        self._validated_at = None

        @event.listens_for(self.engine.sync_engine, "connect")
        def on_connect(dbapi_connection, connection_record):
            logger.info("Database connection established", connection_id=id(dbapi_connection))

    async def validate_connection(self, force: bool = False) -> bool:
        """
        Run ``SELECT 1`` against the database

        A success is remembered for a few minutes so health probes do not hit
        the database on every call.
        """
        now = time.monotonic()
        if not force and self._validated_at is not None and now - self._validated_at < self.VALIDATION_TTL_SECONDS:
            return True

        try:
            async with self.engine.connect() as conn:
                value = (await conn.execute(text("SELECT 1"))).scalar()
        except Exception as e:
            logger.error("Database connection validation failed", error=str(e))
            self._validated_at = None
            return False

        if value != 1:
            logger.error("Database connection validation failed: unexpected result", result=value)
            self._validated_at = None
            return False

        self._validated_at = now
        logger.info("Database connection validation successful")
        return True

    async def get_session_with_retry(self, max_retries: int = 3, retry_delay: float = 1.0) -> AsyncSession:
        """
        Open a session that has answered a ping

        Transient connection errors are retried with exponential backoff:
        ``retry_delay``, then twice that, and so on, ``max_retries`` times.
        """
        attempt = 0
        while True:
            session = self.session_factory()
            try:
                await session.execute(text("SELECT 1"))
                return session
            except TRANSIENT_ERRORS as e:
                await session.close()
                if attempt >= max_retries:
                    logger.error("All database connection attempts failed", attempts=attempt + 1, error=str(e))
                    raise

                delay = retry_delay * (2 ** attempt)
                attempt += 1
                logger.warning(
                    "Database connection attempt failed, retrying",
                    attempt=attempt,
                    max_retries=max_retries,
                    delay=delay,
                    error=str(e)
                )
                await asyncio.sleep(delay)

# Global database connection manager
db_manager = DatabaseConnectionManager()

engine = db_manager.engine
AsyncSessionLocal = db_manager.session_factory

Base = declarative_base()

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped database session dependency

    Commits on success, rolls back on any error and always closes the session.
    """
    session = await db_manager.get_session_with_retry()
    try:
        yield session
        await session.commit()
    except Exception as e:
        logger.error("Database session error", error=str(e), error_type=type(e).__name__)
        await session.rollback()
        raise
    finally:
        await session.close()

async def validate_database_connection() -> bool:
    """Validate database connection for health checks"""
    return await db_manager.validate_connection()

async def create_tables() -> None:
    """Create all tables known to the declarative base"""
    import models  # noqa: F401  registers every mapper on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", table_count=len(Base.metadata.tables))
