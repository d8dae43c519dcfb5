"""
@file: renderer.py
Aggregate renderer: assembles an Aggregate document from an AggregateDescriptor.

Selection layout:
    groupedBy { path value }       when grouping
    meta { count }                 meta metrics (also the default when nothing is requested)
    <property> { <metric> ... }    per-property metrics; topOccurrences takes a limit

Arguments, in order: where, the search argument, objectLimit, limit, groupBy, tenant.
"""
import logging
from typing import Any, List, Optional, Tuple

from weaviate_query.filter.compiler import compile_filter
from weaviate_query.graphql import render_arguments, render_document
from weaviate_query.render_config import DEFAULT_RENDERER_CONFIG, RendererConfig
from .models import AggregateDescriptor, Metric, PropertyMetrics

logger = logging.getLogger(__name__)


def render_metric(metric: Metric, top_occurrences_limit: int) -> str:
    if metric is Metric.TOP_OCCURRENCES:
        return f"topOccurrences(limit: {top_occurrences_limit}) {{ value occurs }}"
    return metric.value


def build_property_block(entry: PropertyMetrics, config: RendererConfig) -> Tuple[str, List[str]]:
    limit = entry.top_occurrences_limit or config.top_occurrences_limit
    return entry.property, [render_metric(metric, limit) for metric in dict.fromkeys(entry.metrics)]


def build_arguments(descriptor: AggregateDescriptor) -> List[Tuple[str, Any]]:
    arguments: List[Tuple[str, Any]] = []
    if descriptor.filter is not None:
        arguments.append(("where", compile_filter(descriptor.filter)))
    if descriptor.search is not None:
        arguments.append(descriptor.search.to_argument())
    if descriptor.object_limit is not None:
        arguments.append(("objectLimit", descriptor.object_limit))
    if descriptor.limit is not None:
        arguments.append(("limit", descriptor.limit))
    if descriptor.group_by_path is not None:
        arguments.append(("groupBy", list(descriptor.group_by_path)))
    if descriptor.tenant is not None:
        arguments.append(("tenant", descriptor.tenant))
    return arguments


def build_selection(descriptor: AggregateDescriptor, config: RendererConfig) -> List[Any]:
    selection: List[Any] = []
    if descriptor.group_by_path is not None:
        selection.append(("groupedBy", ["path", "value"]))
    meta = [metric.value for metric in dict.fromkeys(descriptor.meta_metrics)]
    if not meta and not descriptor.property_metrics:
        meta = [Metric.COUNT.value]
    if meta:
        selection.append(("meta", meta))
    selection.extend(build_property_block(entry, config) for entry in descriptor.property_metrics)
    return selection


def render_aggregate(descriptor: AggregateDescriptor, config: Optional[RendererConfig] = None) -> str:
    """
    Render an Aggregate query document.

    Args:
        descriptor: The aggregation to render.
        config: Renderer defaults; DEFAULT_RENDERER_CONFIG when omitted.

    Returns:
        str: GraphQL document text.
    """
    config = config or DEFAULT_RENDERER_CONFIG
    arguments = render_arguments(build_arguments(descriptor))
    text = render_document("Aggregate", descriptor.collection, arguments,
                           build_selection(descriptor, config), config.indent_unit)
    logger.debug("Rendered Aggregate query for %s:\n%s", descriptor.collection, text)
    return text
