"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, compared by value; unknown fields are a bug, not data."""

    model_config = ConfigDict(frozen=True, extra="forbid")
