"""Hook records — named extension points templates and modules attach to.

storectl only stores and toggles these records. Which hooks clear the
cache when changed is part of the rule set below.
"""

from __future__ import annotations

import re
from enum import IntEnum, StrEnum

from pydantic import BaseModel, field_validator

_CODE_RE = re.compile(r"^[a-z0-9][a-z0-9_.\-]*$")


class HookType(IntEnum):
    """Where a hook lives. Values match the persisted ``hooks.type`` column."""

    FRONT = 1
    BACK = 2
    PDF = 3
    EMAIL = 4

    @classmethod
    def from_name(cls, name: str) -> HookType:
        return cls[name.upper()]


class HookAction(StrEnum):
    """Hook mutations, as reported to ``post_hook_change`` listeners."""

    CREATE = "create"
    CREATE_ALL = "create_all"
    UPDATE = "update"
    DELETE = "delete"
    DEACTIVATE = "deactivate"
    TOGGLE_NATIVE = "toggle_native"
    TOGGLE_ACTIVATION = "toggle_activation"


# Mutations after which rendered template caches are stale.
CACHE_CLEARING_ACTIONS = frozenset(
    {
        HookAction.CREATE,
        HookAction.UPDATE,
        HookAction.DELETE,
        HookAction.TOGGLE_ACTIVATION,
    }
)


class HookFields(BaseModel):
    """Writable hook attributes shared by create, create_all, and update."""

    model_config = {"frozen": True}

    code: str
    type: HookType = HookType.FRONT
    locale: str = "en_US"
    native: bool = False
    active: bool = True
    block: bool = False
    by_module: bool = False
    title: str = ""
    chapo: str = ""
    description: str = ""

    @field_validator("code")
    @classmethod
    def _check_code(cls, value: str) -> str:
        value = value.strip()
        if not _CODE_RE.match(value):
            msg = f"Invalid hook code: {value!r} (lowercase letters, digits, '.', '_', '-')"
            raise ValueError(msg)
        return value
