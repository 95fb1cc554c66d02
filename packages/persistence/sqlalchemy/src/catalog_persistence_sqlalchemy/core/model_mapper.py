"""
ModelMapper: maps pydantic entities to SQLAlchemy rows and back.

Only columns declared on the table are written; only pydantic fields are
read back, and the entity is rebuilt with ``model_validate`` on a plain
dict so that unloaded attributes are never touched.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm.attributes import NO_VALUE

from ..exceptions import MappingError

logger = logging.getLogger(__name__)

T_Entity = TypeVar("T_Entity", bound=BaseModel)


class ModelMapper(Generic[T_Entity]):
    """
    Bidirectional mapper between a pydantic entity and a declarative model.

    Parameters
    ----------
    entity_cls:
        The pydantic entity class.
    db_model_cls:
        The mapped SQLAlchemy class.
    field_map:
        Domain field name -> column name, for fields stored under another
        name.
    """

    def __init__(
        self,
        entity_cls: type[T_Entity],
        db_model_cls: type[Any],
        *,
        field_map: dict[str, str] | None = None,
    ) -> None:
        self.entity_cls = entity_cls
        self.db_model_cls = db_model_cls
        self._field_map: dict[str, str] = field_map or {}
        self._reverse_field_map = {v: k for k, v in self._field_map.items()}
        self._columns: frozenset[str] = frozenset(
            attr.key for attr in sa_inspect(db_model_cls).column_attrs
        )
        self._fields: frozenset[str] = frozenset(entity_cls.model_fields)

    @property
    def columns(self) -> frozenset[str]:
        return self._columns

    def column_for(self, field: str) -> str:
        """Column name a domain field is stored under."""
        return self._field_map.get(field, field)

    # -- Domain -> DB ---------------------------------------------------------

    def to_model(self, entity: T_Entity) -> Any:
        data = {
            self.column_for(k): v
            for k, v in entity.model_dump(mode="python").items()
        }
        return self.db_model_cls(
            **{k: v for k, v in data.items() if k in self._columns}
        )

    # -- DB -> Domain ---------------------------------------------------------

    def from_model(self, model: Any) -> T_Entity:
        state = sa_inspect(model)
        data: dict[str, Any] = {}
        for column in self._columns:
            value = state.attrs[column].loaded_value
            if value is NO_VALUE:
                continue
            field = self._reverse_field_map.get(column, column)
            if field in self._fields:
                data[field] = value
        try:
            return self.entity_cls.model_validate(data)
        except PydanticValidationError as exc:
            raise MappingError(
                f"Cannot build {self.entity_cls.__name__} from "
                f"{self.db_model_cls.__name__}: {exc}"
            ) from exc

    def from_models(self, models: list[Any]) -> list[T_Entity]:
        return [self.from_model(m) for m in models]
