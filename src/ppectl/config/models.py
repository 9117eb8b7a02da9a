"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ppectl.toml only contains
overrides. An empty (or missing) ppectl.toml is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class DisplayConfig(BaseModel):
    """[display] section — fixed-width record rendering."""

    model_config = {"frozen": True}

    name_width: int = 15
    department_width: int = 10
    quantity_width: int = 3
    expiry_width: int = 10
    registration_digits: int = 6
    none_label: str = "none"
    removed_label: str = "<removed>"


class ReferencesConfig(BaseModel):
    """[references] section.

    ``on_delete`` decides what happens when a referenced record is removed:

    - ``reject``: refuse while any loan/return still points at it.
    - ``orphan``: remove it; dependents report a dangling reference.
    """

    model_config = {"frozen": True}

    on_delete: Literal["reject", "orphan"] = "reject"
