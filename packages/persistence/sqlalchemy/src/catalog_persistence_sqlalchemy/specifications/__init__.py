from .compiler import (
    apply_criteria,
    apply_paging,
    build_count,
    build_projected_select,
    build_select,
    build_sqla_filter,
    order_clauses,
    resolve_column,
)
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "apply_criteria",
    "apply_paging",
    "build_count",
    "build_default_sqla_registry",
    "build_projected_select",
    "build_select",
    "build_sqla_filter",
    "order_clauses",
    "resolve_column",
]
