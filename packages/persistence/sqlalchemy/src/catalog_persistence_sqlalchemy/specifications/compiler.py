"""
Compile query specifications into SQLAlchemy ``Select`` statements.

``build_sqla_filter`` walks the criteria AST (``criteria.to_dict()``) and
delegates each leaf to a :class:`SQLAlchemyOperatorRegistry`. The
``apply_*`` helpers add ordering and paging the way every catalog
repository does: ``order_by`` ascending, else ``order_by_descending``,
else ``id``, with ``id`` appended as a tie breaker so pages are stable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import ColumnElement, Select, and_, asc, desc, func, not_, or_, select
from sqlalchemy import inspect as sa_inspect

from catalog_specifications.exceptions import FieldNotFoundError, ValidationError
from catalog_specifications.operators import SpecificationOperator

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalog_core.domain.specification import IQuerySpecification

    from .strategy import SQLAlchemyOperatorRegistry


# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------


def build_sqla_filter(
    model: type[Any],
    data: dict[str, Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a filter expression from a criteria dictionary.

    Args:
        model: The mapped class.
        data: The AST produced by ``criteria.to_dict()``.
        registry: Operator registry; ``DEFAULT_SQLA_REGISTRY`` when omitted.

    Raises:
        FieldNotFoundError: A leaf names a column the model does not have.
        ValidationError: A logical node has no conditions.
    """
    return _compile_node(model, data, registry or DEFAULT_SQLA_REGISTRY)


def resolve_column(model: type[Any], field: str) -> Any:
    """Return the instrumented column attribute for *field*."""
    columns = [attr.key for attr in sa_inspect(model).column_attrs]
    if field not in columns:
        raise FieldNotFoundError(field, model.__name__, columns)
    return getattr(model, field)


def _compile_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    op_str = str(data.get("op", "")).lower()

    if op_str in (
        SpecificationOperator.AND.value,
        SpecificationOperator.OR.value,
        SpecificationOperator.NOT.value,
    ):
        children = [
            _compile_node(model, c, registry) for c in data.get("conditions") or ()
        ]
        if not children:
            raise ValidationError(f"Logical operator '{op_str}' requires conditions")
        if op_str == SpecificationOperator.AND.value:
            return and_(*children)
        if op_str == SpecificationOperator.OR.value:
            return or_(*children)
        return not_(children[0] if len(children) == 1 else and_(*children))

    attr = data.get("attr")
    if not attr:
        raise ValidationError(f"Specification missing 'attr': {data}")
    column = resolve_column(model, attr)
    return registry.apply(op_str, column, data.get("val"))


def apply_criteria(
    stmt: Select[Any],
    model: type[Any],
    spec: IQuerySpecification[Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """Add the WHERE clause; no criteria leaves *stmt* unfiltered."""
    if spec.criteria is None:
        return stmt
    return stmt.where(
        build_sqla_filter(model, spec.criteria.to_dict(), registry=registry)
    )


# ---------------------------------------------------------------------------
# Ordering and paging
# ---------------------------------------------------------------------------


def order_clauses(
    model: type[Any],
    spec: IQuerySpecification[Any],
    *,
    selectable_fields: Sequence[str] | None = None,
) -> list[Any]:
    """
    ORDER BY clauses for *spec*.

    When ``selectable_fields`` is given (a DISTINCT projection) keys outside
    it are dropped, since DISTINCT can only be ordered by selected columns.
    """
    keys: list[tuple[str, bool]] = []
    if spec.order_by is not None:
        keys.append((spec.order_by, False))
    elif spec.order_by_descending is not None:
        keys.append((spec.order_by_descending, True))
    if all(field != "id" for field, _ in keys):
        keys.append(("id", False))

    clauses: list[Any] = []
    for field, descending in keys:
        if selectable_fields is not None and field not in selectable_fields:
            continue
        column = resolve_column(model, field)
        clauses.append(desc(column) if descending else asc(column))
    return clauses


def apply_paging(stmt: Select[Any], spec: IQuerySpecification[Any]) -> Select[Any]:
    if not spec.is_paging_enabled:
        return stmt
    return stmt.offset(spec.skip).limit(spec.take)


def build_select(
    model: type[Any],
    spec: IQuerySpecification[Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """Entity query: filter, order, page."""
    stmt = apply_criteria(select(model), model, spec, registry=registry)
    stmt = stmt.order_by(*order_clauses(model, spec))
    return apply_paging(stmt, spec)


def build_projected_select(
    model: type[Any],
    spec: IQuerySpecification[Any],
    fields: Sequence[str],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> tuple[Select[Any], bool]:
    """
    Column query for a projection.

    Returns the statement and whether DISTINCT was applied in SQL. With
    paging, DISTINCT would run before OFFSET/LIMIT; the caller then
    de-duplicates the fetched page instead.
    """
    columns = [resolve_column(model, f) for f in fields]
    stmt = apply_criteria(select(*columns), model, spec, registry=registry)
    sql_distinct = spec.is_distinct and not spec.is_paging_enabled
    if sql_distinct:
        stmt = stmt.distinct().order_by(
            *order_clauses(model, spec, selectable_fields=fields)
        )
    else:
        stmt = stmt.order_by(*order_clauses(model, spec))
    return apply_paging(stmt, spec), sql_distinct


def build_count(
    model: type[Any],
    spec: IQuerySpecification[Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> Select[Any]:
    """COUNT(*) over the criteria only; ordering and paging are ignored."""
    stmt = select(func.count()).select_from(model)
    return apply_criteria(stmt, model, spec, registry=registry)
