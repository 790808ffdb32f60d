"""Command-line entry point for database setup and fraud statistics.

Usage:
    expense-guard init-db
    expense-guard check-db
    expense-guard stats
"""

import argparse
import asyncio
import json
import sys

from src.config import settings
from src.db.database import async_session_factory, check_db, init_db
from src.domains.fraud.models import FraudStatistics
from src.domains.fraud.statistics import FraudStatisticsAggregator
from src.domains.fraud.store import SQLAlchemyExpenseStore
from src.shared.logging import setup_logging


async def _statistics() -> FraudStatistics:
    async with async_session_factory() as session:
        aggregator = FraudStatisticsAggregator(SQLAlchemyExpenseStore(session))
        return await aggregator.get_statistics()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Expense Guard fraud screening tools")
    parser.add_argument(
        "command",
        choices=["init-db", "check-db", "stats"],
        help="Which task to run",
    )
    args = parser.parse_args(argv)

    setup_logging(settings.log_level, settings.log_format)

    if args.command == "init-db":
        asyncio.run(init_db())
    elif args.command == "check-db":
        ok = asyncio.run(check_db())
        print(json.dumps({"database": "ok" if ok else "unreachable"}))
        return 0 if ok else 1
    elif args.command == "stats":
        stats = asyncio.run(_statistics())
        print(json.dumps(stats.model_dump()))

    return 0


if __name__ == "__main__":
    sys.exit(main())
