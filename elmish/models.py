"""Models for data embedded in saved pages."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class PageStateModel(BaseModel):
    """Contents of the elmish-state script tag."""

    model_config = {"extra": "forbid"}

    version: int = Field(ge=1)
    state: Any = None


class ActionRecordModel(BaseModel):
    """One entry of the elmish-actions script tag."""

    model_config = {"extra": "forbid"}

    sequence: int = Field(ge=1)
    timestamp: str
    action: dict[str, Any]
