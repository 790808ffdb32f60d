"""Unit tests for the command-line entry point."""

import json
from unittest.mock import AsyncMock, patch

from src import cli
from src.config import settings
from src.domains.fraud.models import FraudStatistics


class TestCli:
    def test_stats_configures_logging_and_prints_json(self, capsys):
        stats = FraudStatistics(
            total_expenses=4, flagged_expenses=1, pending_review=1, fraud_rate="25.00"
        )
        with (
            patch.object(cli, "setup_logging") as setup_logging,
            patch.object(cli, "_statistics", AsyncMock(return_value=stats)),
        ):
            exit_code = cli.main(["stats"])

        assert exit_code == 0
        setup_logging.assert_called_once_with(settings.log_level, settings.log_format)
        assert json.loads(capsys.readouterr().out) == {
            "total_expenses": 4,
            "flagged_expenses": 1,
            "pending_review": 1,
            "fraud_rate": "25.00",
        }

    def test_check_db_unreachable(self, capsys):
        with (
            patch.object(cli, "setup_logging"),
            patch.object(cli, "check_db", AsyncMock(return_value=False)),
        ):
            exit_code = cli.main(["check-db"])

        assert exit_code == 1
        assert json.loads(capsys.readouterr().out) == {"database": "unreachable"}

    def test_init_db(self):
        init_db = AsyncMock()
        with patch.object(cli, "setup_logging"), patch.object(cli, "init_db", init_db):
            assert cli.main(["init-db"]) == 0
        init_db.assert_awaited_once()
