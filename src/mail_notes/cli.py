"""
Schema Migration Command

Runs the schema initializer outside the API process, e.g. as a deploy step.

Usage:
    $ mail-notes-migrate
    $ mail-notes-migrate --database-url postgresql://user:pw@host/db
"""

import argparse
import asyncio
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncEngine

from mail_notes.core.config import Settings
from mail_notes.core.database import build_engine
from mail_notes.core.logging import setup_logging
from mail_notes.services.schema import ensure_schema

logger = logging.getLogger("mail_notes.cli")


async def migrate(engine: AsyncEngine) -> list[str]:
    try:
        return await ensure_schema(engine)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Bring the notes schema up to date")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Store URL (defaults to DATABASE_URL / POSTGRES_* settings)",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    overrides = {"DATABASE_URL": args.database_url} if args.database_url else {}
    app_settings = Settings(**overrides)

    try:
        applied = asyncio.run(migrate(build_engine(app_settings)))
    except Exception:
        logger.critical("Schema migration failed", exc_info=True)
        return 1

    print(f"Applied {len(applied)} schema step(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
