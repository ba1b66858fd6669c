"""Tests for the customer command group."""

from __future__ import annotations

import json
from typing import Any

import pytest
from click.testing import CliRunner

from storectl.cli import cli


def _run(cli_runner: CliRunner, *args: str) -> dict[str, Any]:
    result = cli_runner.invoke(cli, ["--json", "--sync", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


@pytest.mark.usefixtures("_isolated_store")
class TestCustomerCommands:
    def test_remember_authenticate_forget(self, cli_runner: CliRunner) -> None:
        _run(cli_runner, "customer", "add", "jane@example.com", "--firstname", "Jane")
        issued = _run(cli_runner, "customer", "remember", "jane@example.com")["data"]

        found = _run(
            cli_runner,
            "customer",
            "authenticate",
            "--",
            "jane@example.com",
            issued["serial"],
            issued["token"],
        )
        assert found["data"]["firstname"] == "Jane"

        _run(cli_runner, "customer", "forget", "jane@example.com")
        result = cli_runner.invoke(
            cli,
            ["customer", "authenticate", "--", "jane@example.com", issued["serial"], issued["token"]],
        )
        assert result.exit_code == 1

    def test_duplicate_customer(self, cli_runner: CliRunner) -> None:
        _run(cli_runner, "customer", "add", "jane@example.com")
        result = cli_runner.invoke(cli, ["customer", "add", "jane@example.com"])
        assert result.exit_code == 1
