"""Customer account identity."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, field_validator


class CustomerAccount(BaseModel):
    """A customer as registered: the email is the login name."""

    model_config = {"frozen": True}

    email: EmailStr
    firstname: str = ""
    lastname: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value
