"""Tests for customer accounts and remember-me authentication."""

from __future__ import annotations

import pytest

from storectl.infrastructure.store import Store
from storectl.services.customer import CustomerService, CustomerTokenService
from tests.conftest import add_customer


class TestCustomerService:
    def test_add_normalizes_email(self, store: Store) -> None:
        result = CustomerService(store).add(" Jane@Example.COM ", firstname="Jane")
        assert result.ok
        assert result.data["email"] == "jane@example.com"

    @pytest.mark.parametrize("email", ["jane", "@", "a@b@c.com", "x y@z.io", "jane@localhost"])
    def test_invalid_email(self, store: Store, email: str) -> None:
        result = CustomerService(store).add(email)
        assert result.error is not None
        assert result.error.code == "INVALID_EMAIL"

    def test_invalid_email_writes_nothing(self, store: Store) -> None:
        CustomerService(store).add("@")
        result = CustomerTokenService(store).remember("@")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_duplicate_email(self, store: Store) -> None:
        add_customer(store, "jane@example.com")
        result = CustomerService(store).add("JANE@example.com")
        assert result.error is not None
        assert result.error.code == "DUPLICATE_EMAIL"


class TestRememberMe:
    def test_round_trip(self, store: Store) -> None:
        add_customer(store, "jane@example.com", firstname="Jane")
        svc = CustomerTokenService(store)
        issued = svc.remember("jane@example.com").data

        result = svc.authenticate("jane@example.com", issued["serial"], issued["token"])
        assert result.ok
        assert result.data["firstname"] == "Jane"
        assert "remember_me_token" not in result.data

    def test_wrong_token(self, store: Store) -> None:
        add_customer(store, "jane@example.com")
        svc = CustomerTokenService(store)
        issued = svc.remember("jane@example.com").data
        result = svc.authenticate("jane@example.com", issued["serial"], "forged")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_wrong_user(self, store: Store) -> None:
        add_customer(store, "jane@example.com")
        add_customer(store, "john@example.com")
        svc = CustomerTokenService(store)
        issued = svc.remember("jane@example.com").data
        assert not svc.authenticate("john@example.com", issued["serial"], issued["token"]).ok

    def test_reissue_invalidates_previous(self, store: Store) -> None:
        add_customer(store, "jane@example.com")
        svc = CustomerTokenService(store)
        first = svc.remember("jane@example.com").data
        svc.remember("jane@example.com")
        assert not svc.authenticate("jane@example.com", first["serial"], first["token"]).ok

    def test_forget(self, store: Store) -> None:
        add_customer(store, "jane@example.com")
        svc = CustomerTokenService(store)
        issued = svc.remember("jane@example.com").data
        assert svc.forget("jane@example.com").ok
        assert not svc.authenticate("jane@example.com", issued["serial"], issued["token"]).ok

    def test_empty_credentials(self, store: Store) -> None:
        assert not CustomerTokenService(store).authenticate("", "", "").ok

    def test_unknown_customer(self, store: Store) -> None:
        svc = CustomerTokenService(store)
        assert svc.remember("ghost@example.com").error is not None
        assert svc.forget("ghost@example.com").error is not None
