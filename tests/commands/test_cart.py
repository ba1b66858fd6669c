"""Tests for the cart command group."""

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


@pytest.fixture
def catalog(cli_runner: CliRunner) -> dict[str, int]:
    """One visible product with a 3-unit variant."""
    pid = _run(cli_runner, "catalog", "add-product", "TSHIRT")["data"]["id"]
    vid = _run(cli_runner, "catalog", "add-variant", str(pid), "--quantity", "3")["data"]["id"]
    return {"product": pid, "variant": vid}


@pytest.mark.usefixtures("_isolated_store")
class TestValidate:
    def test_accepted(self, cli_runner: CliRunner, catalog: dict[str, int]) -> None:
        data = _run(
            cli_runner,
            "cart",
            "validate",
            str(catalog["product"]),
            "--variant",
            str(catalog["variant"]),
            "--quantity",
            "2",
        )
        assert data["data"]["accepted"] is True

    def test_insufficient_stock(self, cli_runner: CliRunner, catalog: dict[str, int]) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "cart",
                "validate",
                str(catalog["product"]),
                "--variant",
                str(catalog["variant"]),
                "--quantity",
                "9",
            ],
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        kinds = [v["kind"] for v in data["error"]["detail"]["violations"]]
        assert kinds == ["insufficient_stock"]

    def test_negative_quantity_rendered(
        self, cli_runner: CliRunner, catalog: dict[str, int]
    ) -> None:
        result = cli_runner.invoke(
            cli, ["cart", "validate", str(catalog["product"]), "--quantity", "-1"]
        )
        assert result.exit_code == 1
        assert "invalid_quantity" in result.output

    def test_stock_check_disabled_by_config(
        self, cli_runner: CliRunner, catalog: dict[str, int]
    ) -> None:
        _run(cli_runner, "config", "set", "verifyStock", "0")
        data = _run(
            cli_runner,
            "cart",
            "validate",
            str(catalog["product"]),
            "--variant",
            str(catalog["variant"]),
            "--quantity",
            "50",
        )
        assert data["data"]["verify_stock"] is False


@pytest.mark.usefixtures("_isolated_store")
class TestAdd:
    def test_add_and_show(self, cli_runner: CliRunner, catalog: dict[str, int]) -> None:
        args = [str(catalog["product"]), "--variant", str(catalog["variant"])]
        _run(cli_runner, "cart", "add", *args, "--quantity", "1", "--cart", "guest")
        _run(cli_runner, "cart", "add", *args, "--quantity", "2", "--cart", "guest", "--append")

        shown = _run(cli_runner, "cart", "show", "guest")
        assert shown["data"]["count"] == 1
        assert shown["data"]["items"][0]["quantity"] == 3

    def test_rejected_line_exits_nonzero(
        self, cli_runner: CliRunner, catalog: dict[str, int]
    ) -> None:
        result = cli_runner.invoke(cli, ["cart", "add", "404", "--quantity", "1"])
        assert result.exit_code == 1
        assert "product_not_found" in result.output
        assert _run(cli_runner, "cart", "show")["data"]["count"] == 0
