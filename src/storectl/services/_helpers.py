"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (for row timestamps and audit trails)."""
    return datetime.now(UTC).isoformat()


def now_compact() -> str:
    """Current UTC time as compact ISO (YYYYMMDDTHHmmss, for backup filenames)."""
    return datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
