"""Tests for the hook command group."""

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
class TestHookCommands:
    def test_create_and_get(self, cli_runner: CliRunner) -> None:
        created = _run(cli_runner, "hook", "create", "product.top", "--type", "pdf")
        assert created["data"]["type"] == "pdf"
        fetched = _run(cli_runner, "hook", "get", str(created["data"]["id"]))
        assert fetched["data"]["code"] == "product.top"

    def test_create_all(self, cli_runner: CliRunner) -> None:
        data = _run(
            cli_runner, "hook", "create-all", "product.tabs", "--block", "--by-module", "--native"
        )["data"]
        assert data["block"] is True
        assert data["by_module"] is True
        assert data["native"] is True

    def test_create_all_invalid_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["hook", "create-all", "Bad Code"])
        assert result.exit_code == 1
        assert "Invalid hook code" in result.output

    def test_update(self, cli_runner: CliRunner) -> None:
        hook_id = _run(cli_runner, "hook", "create", "a")["data"]["id"]
        data = _run(cli_runner, "hook", "update", str(hook_id), "b", "--title", "Bee")["data"]
        assert data["code"] == "b"
        assert data["title"] == "Bee"

    def test_toggles(self, cli_runner: CliRunner) -> None:
        hook_id = str(_run(cli_runner, "hook", "create", "a")["data"]["id"])
        assert _run(cli_runner, "hook", "toggle-native", hook_id)["data"]["native"] is True
        assert _run(cli_runner, "hook", "toggle-activation", hook_id)["data"]["active"] is False
        assert _run(cli_runner, "hook", "deactivate", hook_id)["data"]["active"] is False

    def test_list_filters(self, cli_runner: CliRunner) -> None:
        _run(cli_runner, "hook", "create", "a")
        _run(cli_runner, "hook", "create", "b", "--inactive")
        items = _run(cli_runner, "hook", "list", "--inactive")["data"]["items"]
        assert [h["code"] for h in items] == ["b"]
        assert _run(cli_runner, "hook", "list")["data"]["count"] == 2

    def test_delete_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["hook", "delete", "404"])
        assert result.exit_code == 1
        assert "No hook found" in result.output
