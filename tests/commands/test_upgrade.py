"""Tests for the upgrade CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from storectl.cli import cli


@pytest.mark.usefixtures("_isolated_store")
class TestUpgradeCommand:
    def test_check(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "upgrade", "--check"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"]["head"] == "002_admin_log"

    def test_apply_then_check(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["upgrade"]).exit_code == 0
        result = cli_runner.invoke(cli, ["--json", "upgrade", "--check"])
        assert json.loads(result.output)["data"]["pending_count"] == 0
