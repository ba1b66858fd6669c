"""Tests for the store identity form."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from storectl.domain.store import NON_PERSISTED_FIELDS, StoreConfigForm


def _form(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"store_name": "Corner Shop", "store_email": "shop@example.com"}
    data.update(overrides)
    return data


class TestStoreConfigForm:
    def test_minimal_form(self) -> None:
        form = StoreConfigForm.model_validate(_form())
        assert form.store_name == "Corner Shop"
        assert form.store_city == ""

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be blank"):
            StoreConfigForm.model_validate(_form(store_name="   "))

    @pytest.mark.parametrize(
        "email", ["nobody", "a@b", "@example.com", "a@b@c.com", "x y@z.io"]
    )
    def test_bad_email_rejected(self, email: str) -> None:
        with pytest.raises(ValidationError):
            StoreConfigForm.model_validate(_form(store_email=email))

    def test_notification_emails_normalized(self) -> None:
        form = StoreConfigForm.model_validate(
            _form(store_notification_emails=" a@example.com , b@example.org")
        )
        assert form.store_notification_emails == ["a@example.com", "b@example.org"]
        assert form.persisted_values()["store_notification_emails"] == "a@example.com,b@example.org"

    def test_blank_notification_emails(self) -> None:
        form = StoreConfigForm.model_validate(_form(store_notification_emails=" "))
        assert form.persisted_values()["store_notification_emails"] == ""

    def test_one_bad_notification_email_rejects(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfigForm.model_validate(
                _form(store_notification_emails="a@example.com,a@b@c.com")
            )

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfigForm.model_validate(_form(store_color="red"))


class TestPersistedValues:
    def test_excludes_form_plumbing(self) -> None:
        form = StoreConfigForm.model_validate(
            _form(success_url="/admin/store", error_message="oops")
        )
        values = form.persisted_values()
        assert NON_PERSISTED_FIELDS.isdisjoint(values)
        assert values["store_name"] == "Corner Shop"
        assert values["store_email"] == "shop@example.com"

    def test_all_values_are_strings(self) -> None:
        values = StoreConfigForm.model_validate(_form()).persisted_values()
        assert all(isinstance(v, str) for v in values.values())
