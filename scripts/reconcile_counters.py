#!/usr/bin/env python3
"""Repair drifted post comment counts with Logfire error tracking.

Meant to run on a schedule. Pass post ids to limit the run:

    python scripts/reconcile_counters.py 5f0c... 9a1e...
"""

import argparse
import asyncio
import sys
from uuid import UUID

import logfire

from courseloop.config import Settings
from courseloop.domain.value import PostId
from courseloop.persistence.database import create_engine
from courseloop.persistence.reconciler import SqlCounterReconciler
from courseloop.util.logging import setup_logging
from courseloop.util.observability import configure_logfire, instrument_sqlalchemy


async def run(settings: Settings, post_ids: list[PostId] | None) -> int:
    engine = create_engine(settings)
    instrument_sqlalchemy(engine)
    try:
        report = await SqlCounterReconciler(engine).reconcile_comment_counts(post_ids)
    finally:
        await engine.dispose()
    return len(report.corrected)


def main(argv: list[str] | None = None) -> int:
    """Reconcile comment counts and log any errors to Logfire."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("post_ids", nargs="*", type=UUID, help="Posts to check (default: all)")
    args = parser.parse_args(argv)

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    post_ids = [PostId(post_id) for post_id in args.post_ids] or None
    try:
        corrected = asyncio.run(run(settings, post_ids))
        logfire.info("Counter reconciliation finished", corrected=corrected)
        return 0

    except Exception as e:
        logfire.error(
            "Counter reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
