"""Shared schema helpers for PATCH payloads."""

from typing import Any


def reject_explicit_nulls(data: Any, fields: tuple[str, ...]) -> Any:
    """PATCH bodies may omit a required field but may not null it out."""
    if isinstance(data, dict):
        for name in fields:
            if name in data and data[name] is None:
                raise ValueError(f"{name} cannot be null")
    return data


def strip_required(v: str | None, field: str) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError(f"{field} cannot be empty or whitespace")
    return v
