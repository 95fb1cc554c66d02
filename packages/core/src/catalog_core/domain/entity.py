"""Entity base class."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base class for everything a catalog repository stores.

    ``id`` is numeric and unique within the entity's collection.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int
