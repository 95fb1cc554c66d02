from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from catalog_core.domain.entity import Entity
from catalog_core.utils import read_field

from .base import BaseSpecification
from .exceptions import ValidationError
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True, bound=Entity)

_LOGICAL_OPERATORS: frozenset[str] = frozenset(
    m.value
    for m in (
        SpecificationOperator.AND,
        SpecificationOperator.OR,
        SpecificationOperator.NOT,
    )
)


class AttributeSpecification(BaseSpecification[T]):
    """
    Leaf criteria node: ``<attr> <op> <val>``.

    In-memory evaluation is delegated to the injected
    :class:`MemoryOperatorRegistry`; stores compile ``to_dict()`` instead.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
        *,
        registry: MemoryOperatorRegistry,
    ) -> None:
        if registry is None:
            raise ValueError("a MemoryOperatorRegistry is required, see build_default_registry()")
        self.attr = attr
        self.op = SpecificationOperator(op)
        if self.op.value in _LOGICAL_OPERATORS:
            raise ValidationError(f"'{self.op.value}' is not a leaf operator")
        self.val = val
        self._registry = registry

    def is_satisfied_by(self, candidate: T) -> bool:
        return self._registry.evaluate(
            self.op, self._resolve_field(candidate, self.attr), self.val
        )

    @staticmethod
    def _resolve_field(obj: Any, attr_path: str) -> Any:
        """Resolve a dot-separated path on an object or a mapping."""
        for part in attr_path.split("."):
            if obj is None:
                return None
            obj = read_field(obj, part)
        return obj

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op.value, "attr": self.attr, "val": self.val}

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r} {self.op.value} {self.val!r})"

