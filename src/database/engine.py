from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.config import settings

# SQLite (tests, local dev) uses the dialect's default pool; pool sizing only applies to server databases.
_engine_options: dict = {} if settings.is_sqlite else {
    "pool_size": 20,
    "pool_pre_ping": True,
    "pool_recycle": 3600,
    "max_overflow": 5,
}


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on FK enforcement (ON DELETE CASCADE / SET NULL) for every new SQLite connection."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    settings.database_url,
    echo=settings.environment == "development" and not settings.is_sqlite,
    **_engine_options,
)

if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
