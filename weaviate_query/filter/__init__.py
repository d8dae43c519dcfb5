"""
@file: __init__.py
Filter module public API.

This module exposes:
    - Value variants, Operator, Predicate, Combinator: the filter expression model
    - Builders (equal, greater_than, all_of, not_, ...): convenience constructors
    - compile_filter, render_where: the filter compiler
"""
from .models import (
    Boolean,
    BooleanList,
    Combinator,
    CombinatorKind,
    Date,
    FilterExpression,
    GeoRange,
    Integer,
    IntegerList,
    Number,
    NumberList,
    Operator,
    Predicate,
    PropertyPath,
    Text,
    TextList,
    Value,
    to_path,
)
from .builders import (
    all_of,
    any_of,
    by_id,
    by_property,
    by_ref,
    contains_all,
    contains_any,
    contains_none,
    equal,
    greater_or_equal,
    greater_than,
    is_null,
    less_or_equal,
    less_than,
    like,
    not_,
    not_equal,
    text_list,
    within_geo_range,
)
from .compiler import compile_filter, operator_name, render_where
