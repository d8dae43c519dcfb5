"""
@file: compiler.py
Filter compiler: renders a filter expression into the 'where' argument of a query.

compile_filter produces the wire argument as a plain mapping (operator names are
EnumValue strings, so they render unquoted); render_where turns it into GraphQL text.
Compilation is total over valid expressions and has no side effects apart from a
warning when an operator outside the lookup table is rendered generically.
"""
import logging
from typing import Any, Dict

from weaviate_query.graphql import EnumValue, render_value
from .models import Combinator, CombinatorKind, FilterExpression, Operator, Predicate, camelize

logger = logging.getLogger(__name__)

OPERATOR_NAMES = {
    Operator.EQUAL: "Equal",
    Operator.NOT_EQUAL: "NotEqual",
    Operator.LESS_THAN: "LessThan",
    Operator.LESS_OR_EQUAL: "LessThanEqual",
    Operator.GREATER_THAN: "GreaterThan",
    Operator.GREATER_OR_EQUAL: "GreaterThanEqual",
    Operator.LIKE: "Like",
    Operator.CONTAINS_ANY: "ContainsAny",
    Operator.CONTAINS_ALL: "ContainsAll",
    Operator.CONTAINS_NONE: "ContainsNone",
    Operator.IS_NULL: "IsNull",
    Operator.WITHIN_GEO_RANGE: "WithinGeoRange",
}

COMBINATOR_NAMES = {
    CombinatorKind.AND: "And",
    CombinatorKind.OR: "Or",
    CombinatorKind.NOT: "Not",
}


def operator_name(operator) -> str:
    """Wire name of an operator; symbols outside the table are camel-cased."""
    name = OPERATOR_NAMES.get(operator)
    if name is None:
        name = camelize(str(operator))
        logger.warning("Operator %r is not a known filter operator, sending it as %r", operator, name)
    return name


def compile_filter(expr: FilterExpression) -> Dict[str, Any]:
    """
    Compile a filter expression into its wire argument.

    Args:
        expr: Predicate or Combinator.

    Returns:
        Mapping such as {'path': ['status'], 'operator': 'Equal', 'valueText': 'published'}
        or {'operator': 'And', 'operands': [...]}.
    """
    if isinstance(expr, Combinator):
        return {
            "operator": EnumValue(COMBINATOR_NAMES[expr.kind]),
            "operands": [compile_filter(operand) for operand in expr.operands],
        }
    return {
        "path": list(expr.path),
        "operator": EnumValue(operator_name(expr.operator)),
        expr.value.WIRE_FIELD: expr.value.to_wire(),
    }


def render_where(expr: FilterExpression) -> str:
    """Render a filter expression as GraphQL input-object text."""
    return render_value(compile_filter(expr))
