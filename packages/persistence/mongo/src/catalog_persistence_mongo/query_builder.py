"""Compile query specifications to MongoDB filters and pipelines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from catalog_specifications.operators import SpecificationOperator

from .exceptions import MongoQueryError
from .operators import compile_leaf

if TYPE_CHECKING:
    from catalog_core.domain.specification import IQuerySpecification

logger = logging.getLogger(__name__)

_LOGICAL = {
    SpecificationOperator.AND.value: "$and",
    SpecificationOperator.OR.value: "$or",
}


class MongoQueryBuilder:
    """
    Turns criteria ASTs and specifications into MongoDB documents.

    Entity field names are mapped to document fields through ``field_map``;
    ``id`` always maps to ``_id``.
    """

    def __init__(self, field_map: dict[str, str] | None = None) -> None:
        self._field_map = {"id": "_id", **(field_map or {})}

    def field(self, name: str) -> str:
        return self._field_map.get(name, name)

    # -- filter ---------------------------------------------------------------

    def build_match(self, spec: IQuerySpecification[Any]) -> dict[str, Any]:
        """``$match`` document for the criteria; ``{}`` matches everything."""
        if spec.criteria is None:
            return {}
        return self.compile(spec.criteria.to_dict())

    def compile(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively compile an AST dictionary."""
        if not isinstance(data, dict):
            raise MongoQueryError("Specification node must be a dict")
        op_str = str(data.get("op", "")).lower()

        if op_str in _LOGICAL:
            conditions = data.get("conditions") or []
            if not conditions:
                raise MongoQueryError(
                    f"Logical operator '{op_str}' requires conditions"
                )
            return {_LOGICAL[op_str]: [self.compile(c) for c in conditions]}
        if op_str == SpecificationOperator.NOT.value:
            conditions = data.get("conditions") or []
            if len(conditions) != 1:
                raise MongoQueryError("'not' takes exactly one condition")
            return {"$nor": [self.compile(conditions[0])]}
        return self._compile_leaf(data, op_str)

    def _compile_leaf(self, data: dict[str, Any], op_str: str) -> dict[str, Any]:
        attr = data.get("attr")
        if not attr:
            raise MongoQueryError(f"Specification missing 'attr': {data}")
        try:
            op = SpecificationOperator(op_str)
        except ValueError as e:
            raise MongoQueryError(f"Unknown operator: {op_str!r}") from e
        return compile_leaf(self.field(attr), op, data.get("val"))

    # -- ordering and paging ----------------------------------------------------

    def build_sort(self, spec: IQuerySpecification[Any]) -> list[tuple[str, int]]:
        """Sort keys: the requested one (if any), then ``_id`` ascending."""
        keys: list[tuple[str, int]] = []
        if spec.order_by is not None:
            keys.append((self.field(spec.order_by), 1))
        elif spec.order_by_descending is not None:
            keys.append((self.field(spec.order_by_descending), -1))
        if all(field != "_id" for field, _ in keys):
            keys.append(("_id", 1))
        return keys

    def build_pipeline(self, spec: IQuerySpecification[Any]) -> list[dict[str, Any]]:
        pipeline: list[dict[str, Any]] = []
        match = self.build_match(spec)
        if match:
            pipeline.append({"$match": match})
        pipeline.append({"$sort": dict(self.build_sort(spec))})
        if spec.is_paging_enabled:
            pipeline.append({"$skip": spec.skip})
            pipeline.append({"$limit": spec.take})
        logger.debug("Compiled pipeline: %s", pipeline)
        return pipeline
