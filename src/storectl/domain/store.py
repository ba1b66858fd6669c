"""Store identity form — the values edited on the store configuration screen."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# Form plumbing fields that are submitted with the form but never persisted.
NON_PERSISTED_FIELDS = frozenset({"success_url", "error_message"})

STORE_LOG_RESOURCE = "admin.configuration.store"


class StoreConfigForm(BaseModel):
    """Validated store configuration submission.

    ``store_notification_emails`` is submitted and stored as one
    comma-separated string; every address in it must be valid.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    store_name: str
    store_description: str = ""
    store_email: EmailStr
    store_notification_emails: list[EmailStr] = Field(default_factory=list)
    store_business_id: str = ""
    store_phone: str = ""
    store_fax: str = ""
    store_address1: str = ""
    store_address2: str = ""
    store_address3: str = ""
    store_zipcode: str = ""
    store_city: str = ""
    store_country: str = ""
    success_url: str | None = None
    error_message: str | None = None

    @field_validator("store_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Store name must not be blank")
        return value.strip()

    @field_validator("store_email", mode="before")
    @classmethod
    def _strip_email(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("store_notification_emails", mode="before")
    @classmethod
    def _split_emails(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    def persisted_values(self) -> dict[str, str]:
        """Field name -> value for every field written to store config."""
        values: dict[str, str] = {}
        for name, value in self.model_dump(exclude=set(NON_PERSISTED_FIELDS)).items():
            values[name] = ",".join(value) if isinstance(value, list) else str(value)
        return values
