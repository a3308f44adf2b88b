#!/usr/bin/env python3
"""
Database management script.
Creates, drops, seeds and resets the LightBnB schema using the configured database.
"""

import asyncio
import sys
import argparse
import logging
from typing import List, Optional

from lightbnb.config import get_settings, configure_logging
from lightbnb.database import DatabaseContext
from lightbnb.seed import DatabaseManager

logger = logging.getLogger(__name__)


async def run_command(args: argparse.Namespace, manager: DatabaseManager) -> int:
    """Dispatch one parsed command. Returns the process exit code."""
    try:
        if args.command == "create":
            await manager.create_tables()

        elif args.command == "drop":
            if not args.confirm:
                print("Dropping tables requires --confirm flag")
                return 1
            await manager.drop_tables()

        elif args.command == "seed":
            counts = await manager.seed()
            print(f"Seeded {counts['users']} users and {counts['properties']} properties")

        elif args.command == "reset":
            if not args.confirm:
                print("Database reset requires --confirm flag")
                return 1
            counts = await manager.reset()
            print(f"Seeded {counts['users']} users and {counts['properties']} properties")

        elif args.command == "check":
            if not await manager.check_connection():
                return 1
            print("Database connection OK")

        return 0
    finally:
        await manager.context.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LightBnB database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")

    drop_parser = subparsers.add_parser("drop", help="Drop all tables")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping tables")

    subparsers.add_parser("seed", help="Seed database with fixture users and properties")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (not in production)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    subparsers.add_parser("check", help="Check database connectivity")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI interface for database management."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    settings = get_settings()
    configure_logging(settings)
    manager = DatabaseManager(DatabaseContext.from_settings(settings), settings)

    try:
        return asyncio.run(run_command(args, manager))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
