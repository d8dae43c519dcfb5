"""
@file: builders.py
Convenience constructors for filter expressions.

Examples:
    equal("status", Text("published"))
    all_of(equal("status", Text("published")), greater_than("views", Integer(100)))
    not_(equal("archived", Boolean(True)))
"""
from typing import Sequence, Union

from .models import (
    Boolean,
    Combinator,
    CombinatorKind,
    FilterExpression,
    GeoRange,
    Operator,
    Predicate,
    Text,
    TextList,
    Value,
)

Path = Union[str, Sequence[str]]


def by_property(path: Path, operator: Union[Operator, str], value: Value) -> Predicate:
    return Predicate(path, operator, value)


def by_id(operator: Union[Operator, str], uuid: str) -> Predicate:
    """Filter on the object id."""
    return Predicate(("id",), operator, Text(uuid))


def by_ref(ref_property: str, target_collection: str, property_name: str,
           operator: Union[Operator, str], value: Value) -> Predicate:
    """Filter on a property of a referenced object, e.g. by_ref('hasAuthor', 'Author', 'name', ...)."""
    return Predicate((ref_property, target_collection, property_name), operator, value)


def equal(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.EQUAL, value)


def not_equal(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.NOT_EQUAL, value)


def less_than(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.LESS_THAN, value)


def less_or_equal(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.LESS_OR_EQUAL, value)


def greater_than(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.GREATER_THAN, value)


def greater_or_equal(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.GREATER_OR_EQUAL, value)


def like(path: Path, pattern: str) -> Predicate:
    """Wildcard match; '*' matches any run of characters, '?' a single one."""
    return Predicate(path, Operator.LIKE, Text(pattern))


def contains_any(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.CONTAINS_ANY, value)


def contains_all(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.CONTAINS_ALL, value)


def contains_none(path: Path, value: Value) -> Predicate:
    return Predicate(path, Operator.CONTAINS_NONE, value)


def is_null(path: Path, null: bool = True) -> Predicate:
    return Predicate(path, Operator.IS_NULL, Boolean(null))


def within_geo_range(path: Path, latitude: float, longitude: float, distance: float) -> Predicate:
    return Predicate(path, Operator.WITHIN_GEO_RANGE, GeoRange(latitude, longitude, distance))


def text_list(*values: str) -> TextList:
    return TextList(values)


def all_of(*operands: FilterExpression) -> Combinator:
    """All operands must match."""
    return Combinator(CombinatorKind.AND, operands)


def any_of(*operands: FilterExpression) -> Combinator:
    """At least one operand must match."""
    return Combinator(CombinatorKind.OR, operands)


def not_(operand: FilterExpression) -> Combinator:
    return Combinator(CombinatorKind.NOT, (operand,))
