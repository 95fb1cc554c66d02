"""String operators -> anchored, escaped ``$regex``.

Matching is case-sensitive; the catalog canonicalises search input instead
of relying on ``$options: "i"``.
"""

from __future__ import annotations

import re
from typing import Any

from catalog_specifications.operators import SpecificationOperator

from ..exceptions import MongoQueryError

_PATTERNS: dict[SpecificationOperator, str] = {
    SpecificationOperator.CONTAINS: "{}",
    SpecificationOperator.STARTSWITH: "^{}",
    SpecificationOperator.ENDSWITH: "{}$",
}


def compile_string(
    field: str, op: SpecificationOperator, val: Any
) -> dict[str, Any] | None:
    template = _PATTERNS.get(op)
    if template is None:
        return None
    if not isinstance(val, str):
        raise MongoQueryError(f"String operator {op.value} requires a string value")
    return {field: {"$regex": template.format(re.escape(val))}}
