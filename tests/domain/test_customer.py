"""Tests for customer account identity."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from storectl.domain.customer import CustomerAccount


class TestCustomerAccount:
    def test_email_is_lowercased(self) -> None:
        account = CustomerAccount(email="  Jane@Example.COM ")
        assert account.email == "jane@example.com"

    @pytest.mark.parametrize("email", ["@", "jane", "a@b@c.com", "x y@z.io", "jane@"])
    def test_invalid_email_rejected(self, email: str) -> None:
        with pytest.raises(ValidationError):
            CustomerAccount(email=email)

    def test_names_default_blank(self) -> None:
        account = CustomerAccount(email="jane@example.com")
        assert (account.firstname, account.lastname) == ("", "")
