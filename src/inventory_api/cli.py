"""
Database management commands.

Usage:
    inventory-admin create-tables
    inventory-admin drop-tables --yes
    inventory-admin check-db
"""

import argparse
import asyncio
import logging

from sqlalchemy import func, select

from inventory_api.core.logging_config import setup_logging
from inventory_api.db.base import Base
from inventory_api.db.session import SessionLocal, engine
from inventory_api.models.category import Category
from inventory_api.models.product import Product
from inventory_api.models.user import User

logger = logging.getLogger("inventory_api.cli")


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")


async def drop_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("Tables dropped")


async def check_db() -> dict[str, int]:
    """Row counts per table."""
    counts = {}
    async with SessionLocal() as session:
        for model in (User, Category, Product):
            counts[model.__tablename__] = await session.scalar(select(func.count()).select_from(model))
    for table, count in counts.items():
        logger.info("%s: %d rows", table, count)
    return counts


async def _run(command: str) -> None:
    commands = {
        "create-tables": create_tables,
        "drop-tables": drop_tables,
        "check-db": check_db,
    }
    try:
        await commands[command]()
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inventory API database management")
    parser.add_argument("command", choices=["create-tables", "drop-tables", "check-db"])
    parser.add_argument("--yes", action="store_true", help="confirm destructive commands")
    args = parser.parse_args(argv)

    setup_logging()
    if args.command == "drop-tables" and not args.yes:
        logger.error("drop-tables deletes every row; re-run with --yes to confirm")
        return 1

    asyncio.run(_run(args.command))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
