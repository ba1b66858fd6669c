"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from storectl.cli import cli

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--examples"], ["storectl init", "cart add"]),
    (["init", "--examples"], ["storectl init"]),
    (["upgrade", "--examples"], ["storectl upgrade --check"]),
    (["catalog", "--examples"], ["storectl catalog add-product"]),
    (["catalog", "set-stock", "--examples"], ["storectl catalog set-stock"]),
    (["cart", "--examples"], ["storectl cart validate"]),
    (["cart", "add", "--examples"], ["--append", "--newness"]),
    (["hook", "--examples"], ["storectl hook create"]),
    (["hook", "toggle-activation", "--examples"], ["storectl hook toggle-activation"]),
    (["config", "store-save", "--examples"], ["store_name="]),
    (["customer", "authenticate", "--examples"], ["SERIAL TOKEN"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_do_not_open_store(
    cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    cli_runner.invoke(cli, ["cart", "add", "--examples"])
    assert not (tmp_path / ".storectl").exists()
