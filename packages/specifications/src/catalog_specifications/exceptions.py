"""
Errors raised while building, validating or compiling criteria.

Each error carries a stable ``code`` and serialises with ``to_dict()``
so a caller can return it as a 400 response body. Unknown operators and
fields come with close-match suggestions.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, ClassVar

from catalog_core.primitives.exceptions import InvalidInputError


def _suggest(word: str, candidates: list[str], *, limit: int, cutoff: float) -> list[str]:
    return get_close_matches(word, candidates, n=limit, cutoff=cutoff)


class SpecificationError(InvalidInputError):
    """Base class for criteria errors."""

    code: ClassVar[str] = "SPECIFICATION_ERROR"

    def details(self) -> dict[str, Any]:
        return {"message": str(self)}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, **self.details()}


class ValidationError(SpecificationError):
    """Malformed AST node; ``path`` locates it, e.g. ``<root>.conditions[1]``."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def details(self) -> dict[str, Any]:
        return {"message": self.message, "path": self.path}


class OperatorNotFoundError(SpecificationError):
    """A leaf names an operator no store understands."""

    code = "OPERATOR_NOT_FOUND"

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = sorted(valid_operators)
        self.suggestions = _suggest(operator, valid_operators, limit=3, cutoff=0.6)
        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(f"{message} Valid operators: {', '.join(self.valid_operators)}")

    def details(self) -> dict[str, Any]:
        return {
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": self.valid_operators,
        }


class FieldNotFoundError(SpecificationError):
    """
    A criteria or ordering field is not a column of the target model::

        Invalid field 'prise' on 'ProductModel'.
        Did you mean: price?
        Available fields: brand, description, id, name, price, ...
    """

    code = "FIELD_NOT_FOUND"
    _PREVIEW = 15

    def __init__(
        self,
        invalid_field: str,
        model_name: str,
        available_fields: list[str],
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        self.available_fields = sorted(available_fields)
        self.suggestions = _suggest(
            invalid_field, available_fields, limit=5, cutoff=cutoff
        )
        lines = [f"Invalid field '{invalid_field}' on '{model_name}'."]
        if self.suggestions:
            lines.append(f"Did you mean: {', '.join(self.suggestions)}?")
        preview = ", ".join(self.available_fields[: self._PREVIEW])
        if len(self.available_fields) > self._PREVIEW:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        super().__init__("\n".join(lines))

    def details(self) -> dict[str, Any]:
        return {
            "field": self.invalid_field,
            "model": self.model_name,
            "suggestions": self.suggestions,
            "available_fields": self.available_fields,
        }
