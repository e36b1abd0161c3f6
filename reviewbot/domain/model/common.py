"""Shared configuration for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity; updates go through ``model_copy`` or the store."""

    model_config = ConfigDict(frozen=True)
