"""
@file: models.py
Filter expression model: typed values, predicates and logical combinators.

A filter expression is either a Predicate (one condition over a property path) or a
Combinator (AND / OR / NOT over nested expressions). Values are explicit variants, so
the wire field (valueText, valueInt, ...) never depends on guessing a runtime type.

Classes:
    Value and its variants: Text, Integer, Number, Boolean, Date, TextList, IntegerList,
        NumberList, BooleanList, GeoRange.
    Operator: Supported predicate operators.
    Predicate: A single condition.
    Combinator: A logical combination of expressions.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Sequence, Tuple, Union

from weaviate_query.exceptions import ValidationError
from weaviate_query.graphql import is_name

PropertyPath = Tuple[str, ...]


def to_path(path: Union[str, Sequence[str]]) -> PropertyPath:
    """
    Normalize a property path.

    Args:
        path: Dotted string ('author.name') or sequence of identifiers.

    Returns:
        Tuple of path segments.

    Raises:
        ValidationError: If the path or any segment is empty.
    """
    if isinstance(path, str):
        segments = tuple(part.strip() for part in path.split("."))
    else:
        segments = tuple(path)
    if not segments or any(not isinstance(s, str) or not s for s in segments):
        raise ValidationError(f"Invalid property path: {path!r}")
    return segments


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def _is_int64(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX


class Value:
    """Base class of filter values. WIRE_FIELD names the argument the value is sent under."""
    WIRE_FIELD: ClassVar[str] = ""

    def to_wire(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Text(Value):
    WIRE_FIELD: ClassVar[str] = "valueText"
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError(f"Text value must be a string, got {self.value!r}")


@dataclass(frozen=True)
class Integer(Value):
    WIRE_FIELD: ClassVar[str] = "valueInt"
    value: int

    def __post_init__(self):
        if not _is_int64(self.value):
            raise ValidationError(f"Integer value must be a 64-bit int, got {self.value!r}")


@dataclass(frozen=True)
class Number(Value):
    WIRE_FIELD: ClassVar[str] = "valueNumber"
    value: float

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)) or not math.isfinite(self.value):
            raise ValidationError(f"Number value must be a finite number, got {self.value!r}")

    def to_wire(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class Boolean(Value):
    WIRE_FIELD: ClassVar[str] = "valueBoolean"
    value: bool

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise ValidationError(f"Boolean value must be a bool, got {self.value!r}")


@dataclass(frozen=True)
class Date(Value):
    """A date value; datetimes are sent as RFC 3339 text, naive datetimes are taken as UTC."""
    WIRE_FIELD: ClassVar[str] = "valueDate"
    value: Union[datetime, str]

    def __post_init__(self):
        if not isinstance(self.value, (datetime, str)):
            raise ValidationError(f"Date value must be a datetime or RFC 3339 string, got {self.value!r}")

    def to_wire(self) -> str:
        if isinstance(self.value, str):
            return self.value
        moment = self.value if self.value.tzinfo else self.value.replace(tzinfo=timezone.utc)
        return moment.isoformat()


def _check_items(values, accept, kind):
    items = tuple(values)
    if not all(accept(item) for item in items):
        raise ValidationError(f"{kind} items have the wrong type: {values!r}")
    return items


@dataclass(frozen=True)
class TextList(Value):
    WIRE_FIELD: ClassVar[str] = "valueTextArray"
    value: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "value", _check_items(self.value, lambda v: isinstance(v, str), "TextList"))

    def to_wire(self):
        return list(self.value)


@dataclass(frozen=True)
class IntegerList(Value):
    WIRE_FIELD: ClassVar[str] = "valueIntArray"
    value: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "value", _check_items(self.value, _is_int64, "IntegerList"))

    def to_wire(self):
        return list(self.value)


@dataclass(frozen=True)
class NumberList(Value):
    WIRE_FIELD: ClassVar[str] = "valueNumberArray"
    value: Tuple[float, ...]

    def __post_init__(self):
        object.__setattr__(self, "value", _check_items(
            self.value,
            lambda v: isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v),
            "NumberList"))

    def to_wire(self):
        return [float(v) for v in self.value]


@dataclass(frozen=True)
class BooleanList(Value):
    WIRE_FIELD: ClassVar[str] = "valueBooleanArray"
    value: Tuple[bool, ...]

    def __post_init__(self):
        object.__setattr__(self, "value", _check_items(self.value, lambda v: isinstance(v, bool), "BooleanList"))

    def to_wire(self):
        return list(self.value)


@dataclass(frozen=True)
class GeoRange(Value):
    """Geo circle: coordinates in degrees, distance in meters."""
    WIRE_FIELD: ClassVar[str] = "valueGeoRange"
    latitude: float
    longitude: float
    distance: float

    def __post_init__(self):
        for name in ("latitude", "longitude", "distance"):
            number = getattr(self, name)
            if isinstance(number, bool) or not isinstance(number, (int, float)) or not math.isfinite(number):
                raise ValidationError(f"GeoRange {name} must be a finite number, got {number!r}")
        if not -90 <= self.latitude <= 90 or not -180 <= self.longitude <= 180:
            raise ValidationError(f"GeoRange coordinates out of range: ({self.latitude}, {self.longitude})")
        if self.distance < 0:
            raise ValidationError(f"GeoRange distance must be non-negative, got {self.distance}")

    def to_wire(self):
        return {
            "geoCoordinates": {"latitude": float(self.latitude), "longitude": float(self.longitude)},
            "distance": {"max": float(self.distance)},
        }


class Operator(str, Enum):
    """Predicate operators."""
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    LESS_THAN = "less_than"
    LESS_OR_EQUAL = "less_or_equal"
    GREATER_THAN = "greater_than"
    GREATER_OR_EQUAL = "greater_or_equal"
    LIKE = "like"
    CONTAINS_ANY = "contains_any"
    CONTAINS_ALL = "contains_all"
    CONTAINS_NONE = "contains_none"
    IS_NULL = "is_null"
    WITHIN_GEO_RANGE = "within_geo_range"


class CombinatorKind(str, Enum):
    AND = "and"
    OR = "or"
    NOT = "not"


def camelize(symbol: str) -> str:
    """'within_geo_range' -> 'WithinGeoRange'."""
    return "".join(part[:1].upper() + part[1:] for part in symbol.split("_") if part)


def _to_operator(operator: Union[Operator, str]) -> Union[Operator, str]:
    if isinstance(operator, Operator):
        return operator
    if not isinstance(operator, str) or not operator:
        raise ValidationError(f"Invalid operator: {operator!r}")
    try:
        return Operator(operator)
    except ValueError:
        pass
    # Unknown operators are sent camel-cased as a bare enum value, which must be a GraphQL name
    if not is_name(camelize(operator)):
        raise ValidationError(f"Invalid operator: {operator!r}")
    return operator


@dataclass(frozen=True)
class Predicate:
    """
    A single filter condition.

    Attributes:
        path (tuple): Property path, e.g. ('author', 'name').
        operator (Operator | str): Operator; unknown strings are kept verbatim and must
            camel-case to a GraphQL name.
        value (Value): Explicit typed value.
    """
    path: PropertyPath
    operator: Union[Operator, str]
    value: Value

    def __post_init__(self):
        object.__setattr__(self, "path", to_path(self.path))
        object.__setattr__(self, "operator", _to_operator(self.operator))
        if not isinstance(self.value, Value):
            raise ValidationError(
                f"Predicate value must be a typed Value (Text, Integer, ...), got {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class Combinator:
    """
    Logical combination of filter expressions.

    'not' takes exactly one operand; 'and' and 'or' take at least one.
    """
    kind: CombinatorKind
    operands: Tuple["FilterExpression", ...]

    def __post_init__(self):
        try:
            kind = CombinatorKind(self.kind)
        except ValueError:
            raise ValidationError(f"Unknown combinator: {self.kind!r}")
        operands = tuple(self.operands)
        for operand in operands:
            if not isinstance(operand, (Predicate, Combinator)):
                raise ValidationError(f"Combinator operand must be a filter expression, got {operand!r}")
        if kind is CombinatorKind.NOT and len(operands) != 1:
            raise ValidationError(f"'not' requires exactly one operand, got {len(operands)}")
        if not operands:
            raise ValidationError(f"'{kind.value}' requires at least one operand")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "operands", operands)


FilterExpression = Union[Predicate, Combinator]
