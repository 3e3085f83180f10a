"""Database engine for direct-SQL maintenance jobs."""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from courseloop.config import Settings
from courseloop.persistence.functions import SERVER_FUNCTIONS
from courseloop.persistence.tables import metadata


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables, plus server functions on Postgres.

    Existing tables are left untouched.
    """
    with logfire.span("database.create_schema", dialect=engine.dialect.name):
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
            if engine.dialect.name == "postgresql":
                for statement in SERVER_FUNCTIONS:
                    await conn.execute(statement)
        logfire.info("Schema created", tables=sorted(metadata.tables))
