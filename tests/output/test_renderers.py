"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from storectl.output.renderers import render_quiet, render_result
from storectl.services.result import ServiceError, ServiceResult


def _rejected(op: str = "validate_cart_line") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="VALIDATION_FAILED",
            message="quantity: quantity value is not valid",
            detail={
                "violations": [
                    {
                        "field": "quantity",
                        "kind": "insufficient_stock",
                        "message": "quantity value is not valid",
                    }
                ],
                "request": {"product_id": 5, "quantity": 9},
            },
        ),
    )


class TestRenderQuiet:
    def test_success(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="hook_delete")) == "OK: hook_delete"

    def test_list_prints_ids(self) -> None:
        result = ServiceResult(ok=True, op="hook_list", data={"items": [{"id": 3}, {"id": 8}]})
        assert render_quiet(result) == "3\n8"

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="config_get", error=ServiceError(code="NOT_FOUND", message="nope")
        )
        assert render_quiet(result) == "ERROR: config_get — nope"


class TestRenderErrors:
    def test_plain_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="hook_get",
            error=ServiceError(code="NOT_FOUND", message="No hook", detail={"hook_id": 4}),
        )
        out = render_result(result)
        assert "ERROR" in out
        assert "No hook" in out
        assert "detail" not in out

    def test_verbose_error_shows_detail(self) -> None:
        result = ServiceResult(
            ok=False,
            op="hook_get",
            error=ServiceError(code="NOT_FOUND", message="No hook", detail={"hook_id": 4}),
        )
        out = render_result(result, verbose=True)
        assert "detail:" in out
        assert "hook_id: 4" in out

    def test_violations_table(self) -> None:
        out = render_result(_rejected())
        assert "cart line rejected" in out
        assert "insufficient_stock" in out
        assert "quantity value is not valid" in out

    def test_violations_verbose_shows_request(self) -> None:
        out = render_result(_rejected("add_cart_line"), verbose=True)
        assert "request:" in out
        assert "product_id: 5" in out


class TestRenderSuccess:
    def test_generic_fallback(self) -> None:
        out = render_result(ServiceResult(ok=True, op="config_set", data={"name": "verifyStock"}))
        assert out.startswith("OK")
        assert "name: verifyStock" in out

    def test_cart_line(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_cart_line",
            data={"id": 1, "cart_token": "c1", "product_id": 5, "quantity": 2, "created": True},
        )
        out = render_result(result)
        assert "cart_token: c1" in out
        assert "created" not in out
        assert "created: yes" in render_result(result, verbose=True)

    def test_hook_with_cache_note(self) -> None:
        result = ServiceResult(
            ok=True,
            op="hook_create",
            data={"id": 4, "code": "product.top", "type": "front", "cache_cleared": True},
        )
        out = render_result(result)
        assert "code: product.top" in out
        assert "cache cleared" in out

    def test_empty_list(self) -> None:
        out = render_result(ServiceResult(ok=True, op="hook_list", data={"count": 0, "items": []}))
        assert "(none)" in out

    def test_product_list_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_products",
            data={"items": [{"id": 5, "ref": "TSHIRT", "title": "Tee", "visible": False}]},
        )
        out = render_result(result)
        assert "TSHIRT" in out
        assert "no" in out

    def test_product_with_variants(self) -> None:
        result = ServiceResult(
            ok=True,
            op="get_product",
            data={
                "id": 5,
                "ref": "TSHIRT",
                "title": "Tee",
                "visible": True,
                "variants": [{"id": 10, "ref": "TSHIRT-M", "quantity": 3}],
            },
        )
        out = render_result(result)
        assert "TSHIRT-M" in out
        assert "Stock" in out

    def test_config_values(self) -> None:
        result = ServiceResult(
            ok=True, op="config_list", data={"values": {"verifyStock": "1"}, "count": 1}
        )
        assert "verifyStock: 1" in render_result(result)

    def test_upgrade_check(self) -> None:
        result = ServiceResult(
            ok=True,
            op="upgrade",
            data={
                "pending_count": 1,
                "pending": [{"revision": "002_admin_log", "description": "Add admin_log"}],
                "current": "001_baseline",
                "head": "002_admin_log",
            },
        )
        out = render_result(result)
        assert "002_admin_log" in out
        assert "pending_count: 1" in out
