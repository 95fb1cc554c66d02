"""Entity <-> document conversion.

The entity ``id`` is stored as the document ``_id`` (kept numeric so the
default ``_id`` ordering is numeric). Values are dumped in JSON mode.
"""

from __future__ import annotations

from typing import Any, TypeVar

from bson import Decimal128
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import MongoPersistenceError

TModel = TypeVar("TModel", bound=BaseModel)


def _deserialize_value(value: Any) -> Any:
    # Prices written by other tools as decimals come back as floats
    if isinstance(value, Decimal128):
        return float(value.to_decimal())
    return value


def model_to_doc(model: BaseModel, *, id_field: str = "id") -> dict[str, Any]:
    """Dump a pydantic model to a BSON-ready document keyed by ``_id``."""
    data = model.model_dump(mode="json")
    if id_field in data:
        data["_id"] = data.pop(id_field)
    return data


def model_from_doc(
    cls: type[TModel],
    doc: dict[str, Any],
    *,
    id_field: str = "id",
) -> TModel:
    """Rebuild a pydantic model from a stored document."""
    data = {k: _deserialize_value(v) for k, v in doc.items()}
    if "_id" in data:
        data[id_field] = data.pop("_id")
    try:
        return cls.model_validate(data)
    except PydanticValidationError as e:
        raise MongoPersistenceError(
            f"Cannot build {cls.__name__} from document {data.get(id_field)!r}: {e}"
        ) from e
