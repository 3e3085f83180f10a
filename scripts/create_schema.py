#!/usr/bin/env python3
"""Create the database schema with Logfire error tracking."""

import asyncio
import sys

import logfire

from courseloop.config import Settings
from courseloop.persistence.database import create_engine, create_schema
from courseloop.util.logging import setup_logging
from courseloop.util.observability import configure_logfire, instrument_sqlalchemy


async def run(settings: Settings) -> None:
    engine = create_engine(settings)
    instrument_sqlalchemy(engine)
    try:
        await create_schema(engine)
    finally:
        await engine.dispose()


def main() -> int:
    """Create tables and server functions, logging any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Creating database schema")
        asyncio.run(run(settings))
        logfire.info("Database schema ready")
        return 0

    except Exception as e:
        logfire.error(
            "Schema creation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
