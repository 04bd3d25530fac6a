"""Base DTO class."""

from pydantic import BaseModel, ConfigDict


class DTO(BaseModel):
    """Base class for application DTOs. Immutable; unknown fields are rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")
