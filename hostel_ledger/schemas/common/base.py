# --- File: hostel_ledger/schemas/common/base.py ---
"""
Base schema classes with common configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

__all__ = [
    "BaseSchema",
    "FrozenSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Field names are snake_case in Python and camelCase on the wire, matching
    the hostel backend's documents.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
        extra="ignore",
    )


class FrozenSchema(BaseSchema):
    """Immutable schema for derived, never-mutated values."""

    model_config = ConfigDict(frozen=True)
