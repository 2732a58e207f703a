"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, orderentry.toml only contains
overrides. An empty (or missing) file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class OrdersConfig(BaseModel):
    """[orders] section."""

    model_config = {"frozen": True}

    delivery_days: int = Field(default=7, ge=0)


class NotificationsConfig(BaseModel):
    """[notifications] section.

    With ``best_effort`` a failed confirmation email becomes a warning on
    the placement result; otherwise the email error propagates.
    """

    model_config = {"frozen": True}

    best_effort: bool = True


class StoreConfig(BaseModel):
    """[store] section — JSON file backing the in-memory collaborators."""

    model_config = {"frozen": True}

    path: str = "store.json"

