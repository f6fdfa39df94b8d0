"""Pydantic base schema utilities for agent core models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base model for values the package builds itself (results, events, outcomes).

    Fields may be set by alias or by name; unknown fields are rejected.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
    )


class CompletionSchema(BaseModel):
    """
    Base Pydantic model for payloads parsed out of completion-service replies.

    Model output is noisy, so unknown keys are ignored rather than rejected and
    parsed values are frozen once validated.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )
