"""Run one table maintenance sweep against the configured database.

Configuration comes from DB_* environment variables or a .env file.
"""

import argparse
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from dblayer.core import ConnectionManager, MaintenanceRunner, QueryExecutor
from dblayer.core.connection import FATAL_CONNECT_MESSAGE
from dblayer.exceptions import DatabaseConnectionError
from dblayer.models.config import DatabaseConfig

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Connect, sweep, and print the processed table names.

    Args:
        argv: Command line arguments, defaults to sys.argv

    Returns:
        Process exit status
    """
    parser = argparse.ArgumentParser(
        prog="dblayer", description="Repair, optimize and analyze database tables"
    )
    parser.add_argument(
        "--force", action="store_true", help="sweep every table, not only fragmented ones"
    )
    parser.add_argument("--env-file", help="path to a .env file with DB_* settings")
    args = parser.parse_args(argv)

    config = DatabaseConfig.from_env(args.env_file)
    manager = ConnectionManager(config)
    try:
        manager.connect()
    except DatabaseConnectionError as e:
        logger.critical(f"{FATAL_CONNECT_MESSAGE} {e}")
        sys.exit(f"{FATAL_CONNECT_MESSAGE} {e}")

    try:
        tables = MaintenanceRunner(QueryExecutor(manager)).optimise(force=args.force)
    finally:
        manager.close()

    for table in tables:
        print(table)
    return 0


def cli_entry() -> None:
    """Synchronous entry point for the dblayer-optimise console script."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Maintenance stopped by user")


if __name__ == "__main__":
    cli_entry()
