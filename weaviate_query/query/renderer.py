"""
@file: renderer.py
Query renderer: assembles a Get document from a QueryDescriptor.

Argument order is fixed: limit, offset, where, the search argument, sort, groupBy,
autocut, consistencyLevel, tenant. Only clauses present on the descriptor are emitted,
so rendering the same descriptor always yields byte-identical text.
"""
import logging
from typing import Any, List, Optional, Tuple

from weaviate_query.filter.builders import all_of, by_id
from weaviate_query.filter.compiler import compile_filter
from weaviate_query.filter.models import Operator
from weaviate_query.generative import compile_generate
from weaviate_query.graphql import EnumValue, render_arguments, render_document
from weaviate_query.render_config import DEFAULT_RENDERER_CONFIG, RendererConfig
from .models import QueryDescriptor
from .search import FetchById

logger = logging.getLogger(__name__)

# Selection used when a query selects nothing else; an empty selection set is not valid GraphQL
FALLBACK_SELECTION = "_additional { id }"


def build_where(descriptor: QueryDescriptor) -> Optional[Any]:
    """Compile the effective filter; FetchById becomes an id predicate AND-ed with any user filter."""
    expr = descriptor.filter
    if isinstance(descriptor.search, FetchById):
        id_filter = by_id(Operator.EQUAL, descriptor.search.id)
        expr = id_filter if expr is None else all_of(id_filter, expr)
    return compile_filter(expr) if expr is not None else None


def build_arguments(descriptor: QueryDescriptor, config: RendererConfig) -> List[Tuple[str, Any]]:
    arguments: List[Tuple[str, Any]] = []
    if descriptor.limit is not None:
        arguments.append(("limit", descriptor.limit))
    if descriptor.offset is not None:
        arguments.append(("offset", descriptor.offset))
    where = build_where(descriptor)
    if where is not None:
        arguments.append(("where", where))
    if descriptor.search is not None:
        search_argument = descriptor.search.to_argument()
        if search_argument is not None:
            arguments.append(search_argument)
    if descriptor.sort:
        arguments.append(("sort", [spec.to_wire() for spec in descriptor.sort]))
    if descriptor.group_by is not None:
        arguments.append(("groupBy", descriptor.group_by.to_wire()))
    if descriptor.autocut is not None:
        arguments.append(("autocut", descriptor.autocut))
    consistency_level = descriptor.consistency_level or config.default_consistency_level
    if consistency_level is not None:
        arguments.append(("consistencyLevel", EnumValue(consistency_level)))
    if descriptor.tenant is not None:
        arguments.append(("tenant", descriptor.tenant))
    return arguments


def build_selection(descriptor: QueryDescriptor) -> List[Any]:
    """
    Build the selection set: fields, then properties the generate prompt interpolates,
    then one '_additional' block with the additional fields and the generate clause.
    """
    fields = list(descriptor.fields)
    additional = list(descriptor.additional_fields)
    if descriptor.generate is not None:
        compiled = compile_generate(descriptor.generate)
        fields.extend(prop for prop in compiled.properties if prop not in fields)
        additional.append(compiled.clause)
    selection: List[Any] = list(dict.fromkeys(fields))
    if additional:
        selection.append(("_additional", list(dict.fromkeys(additional))))
    if not selection:
        selection.append(FALLBACK_SELECTION)
    return selection


def render_query(descriptor: QueryDescriptor, config: Optional[RendererConfig] = None) -> str:
    """
    Render a Get query document.

    Args:
        descriptor: The query to render.
        config: Renderer defaults; DEFAULT_RENDERER_CONFIG when omitted.

    Returns:
        str: GraphQL document text.
    """
    config = config or DEFAULT_RENDERER_CONFIG
    arguments = render_arguments(build_arguments(descriptor, config))
    text = render_document("Get", descriptor.collection, arguments, build_selection(descriptor), config.indent_unit)
    logger.debug("Rendered Get query for %s:\n%s", descriptor.collection, text)
    return text
