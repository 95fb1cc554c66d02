"""Tests for the SpecificationBuilder fluent API."""

from __future__ import annotations

import pytest

from catalog_core import Product
from catalog_specifications import (
    AndSpecification,
    AttributeSpecification,
    NotSpecification,
    OrSpecification,
    SpecificationBuilder,
    SpecificationOperator,
)


@pytest.fixture
def builder(registry) -> SpecificationBuilder:
    return SpecificationBuilder(registry=registry)


@pytest.fixture
def hat() -> Product:
    return Product(
        id=8, name="Green React Woolen Hat", price=8.0, type="Hats", brand="React"
    )


def test_single_where_is_returned_as_is(builder, hat):
    spec = builder.where("brand", "=", "React").build()

    assert isinstance(spec, AttributeSpecification)
    assert spec.is_satisfied_by(hat) is True


def test_multiple_where_is_and(builder, hat):
    spec = (
        builder.where("brand", SpecificationOperator.EQ, "React")
        .where("price", SpecificationOperator.GT, 10)
        .build()
    )

    assert isinstance(spec, AndSpecification)
    assert spec.is_satisfied_by(hat) is False


def test_or_group(builder, hat):
    spec = (
        builder.or_group()
        .where("name", "contains", "wool")
        .where("name", "contains", "Wool")
        .end_group()
        .build()
    )

    assert isinstance(spec, OrSpecification)
    assert spec.is_satisfied_by(hat) is True


def test_not_group(builder, hat):
    spec = builder.not_group().where("type", "=", "Hats").end_group().build()

    assert isinstance(spec, NotSpecification)
    assert spec.is_satisfied_by(hat) is False


def test_empty_group_is_dropped(builder):
    builder.or_group().end_group()

    assert builder.is_empty is True
    assert builder.build_or_none() is None


def test_build_without_conditions_raises(builder):
    with pytest.raises(ValueError, match="No conditions"):
        builder.build()


def test_build_with_open_group_raises(builder):
    builder.and_group().where("brand", "=", "React")

    with pytest.raises(ValueError, match="still open"):
        builder.build()


def test_end_group_without_open_group_raises(builder):
    with pytest.raises(ValueError, match="No open group"):
        builder.end_group()


def test_not_group_takes_one_condition(builder):
    builder.not_group().where("a", "=", 1).where("b", "=", 2)

    with pytest.raises(ValueError, match="exactly one"):
        builder.end_group()


def test_reset_clears_state(builder):
    builder.where("brand", "=", "React").reset()
    assert builder.is_empty is True


def test_default_registry_is_created():
    assert SpecificationBuilder().registry.has(SpecificationOperator.CONTAINS)
