"""
Fluent builder for criteria trees.

Example::

    criteria = (
        SpecificationBuilder()
        .where("brand", "in", ["Angular", "React"])
        .or_group()
            .where("name", "contains", "ang")
            .where("name", "contains", "Ang")
        .end_group()
        .build()
    )
    # -> AND(brand IN [...], OR(name contains "ang", name contains "Ang"))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .ast import AttributeSpecification
from .base import AndSpecification, NotSpecification, OrSpecification
from .operators_memory import build_default_registry

if TYPE_CHECKING:
    from catalog_core.domain.specification import ISpecification

    from .evaluator import MemoryOperatorRegistry
    from .operators import SpecificationOperator


class _Frame:
    """Children collected for one group until it is closed."""

    def __init__(self, kind: type[Any]) -> None:
        self.kind = kind
        self.children: list[ISpecification[Any]] = []

    def fold(self) -> ISpecification[Any] | None:
        if not self.children:
            return None
        if self.kind is NotSpecification:
            if len(self.children) != 1:
                raise ValueError("NOT group must contain exactly one condition")
            return NotSpecification(self.children[0])
        if len(self.children) == 1:
            return self.children[0]
        return self.kind(*self.children)


class SpecificationBuilder:
    """
    Compose criteria nodes.

    Conditions at the same level are ANDed. Explicit groups are opened with
    ``or_group()``, ``and_group()`` or ``not_group()`` and closed with
    ``end_group()``. A group closed with no children adds nothing.
    """

    def __init__(self, registry: MemoryOperatorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else build_default_registry()
        self._root = _Frame(AndSpecification)
        self._open: list[_Frame] = []

    @property
    def registry(self) -> MemoryOperatorRegistry:
        return self._registry

    @property
    def is_empty(self) -> bool:
        return not self._root.children

    def where(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
    ) -> SpecificationBuilder:
        """Add a leaf condition to the innermost open group."""
        return self.add(AttributeSpecification(attr, op, val, registry=self._registry))

    def add(self, spec: ISpecification[Any]) -> SpecificationBuilder:
        frame = self._open[-1] if self._open else self._root
        frame.children.append(spec)
        return self

    def and_group(self) -> SpecificationBuilder:
        return self._push(AndSpecification)

    def or_group(self) -> SpecificationBuilder:
        return self._push(OrSpecification)

    def not_group(self) -> SpecificationBuilder:
        return self._push(NotSpecification)

    def end_group(self) -> SpecificationBuilder:
        if not self._open:
            raise ValueError("No open group to close")
        node = self._open.pop().fold()
        return self if node is None else self.add(node)

    def build(self) -> ISpecification[Any]:
        """
        Return the composed tree; a lone top-level condition comes back as is.

        Raises:
            ValueError: Groups are still open or nothing was added.
        """
        criteria = self.build_or_none()
        if criteria is None:
            raise ValueError("No conditions added to builder")
        return criteria

    def build_or_none(self) -> ISpecification[Any] | None:
        """Like :meth:`build` but ``None`` (match all) when empty."""
        if self._open:
            raise ValueError(
                f"{len(self._open)} group(s) still open, "
                "call end_group() before build()"
            )
        return self._root.fold()

    def reset(self) -> SpecificationBuilder:
        self._root = _Frame(AndSpecification)
        self._open.clear()
        return self

    def _push(self, kind: type[Any]) -> SpecificationBuilder:
        self._open.append(_Frame(kind))
        return self
