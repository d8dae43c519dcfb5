"""
@file: models.py
Aggregate descriptor: an immutable description of an Aggregate query.

Metric/property type compatibility is not checked here; the server reports a mismatch.

Classes:
    Metric: Aggregation functions.
    PropertyMetrics: Metrics requested for one property.
    AggregateDescriptor: The complete aggregation definition.

Example:
    agg = (AggregateDescriptor("Product")
           .with_meta_metrics(Metric.COUNT)
           .with_property_metrics("price", Metric.SUM, Metric.MEAN)
           .with_group_by("category"))
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from weaviate_query.exceptions import ValidationError
from weaviate_query.filter.models import Combinator, FilterExpression, Predicate, PropertyPath, to_path
from weaviate_query.graphql import validate_name
from weaviate_query.query.search import Hybrid, NearImage, NearMedia, NearObject, NearText, NearVector

AGGREGATE_SEARCH_CLAUSES = (NearText, NearVector, NearObject, NearImage, NearMedia, Hybrid)


class Metric(str, Enum):
    COUNT = "count"
    TYPE = "type"
    SUM = "sum"
    MEAN = "mean"
    MEDIAN = "median"
    MODE = "mode"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"
    TOP_OCCURRENCES = "topOccurrences"
    PERCENTAGE_TRUE = "percentageTrue"
    PERCENTAGE_FALSE = "percentageFalse"
    TOTAL_TRUE = "totalTrue"
    TOTAL_FALSE = "totalFalse"


def _metrics(metrics) -> Tuple[Metric, ...]:
    items = (metrics,) if isinstance(metrics, str) else tuple(metrics)
    try:
        return tuple(Metric(metric) for metric in items)
    except ValueError as e:
        raise ValidationError(f"Unknown metric: {e}")


def _check_positive(name: str, value):
    if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class PropertyMetrics:
    """
    Metrics for one property.

    Attributes:
        property (str): Property name.
        metrics (tuple): Metric values.
        top_occurrences_limit (int, optional): Result count for topOccurrences; renderer default when None.
    """
    property: str
    metrics: Tuple[Metric, ...]
    top_occurrences_limit: Optional[int] = None

    def __post_init__(self):
        validate_name(self.property, "property name")
        metrics = _metrics(self.metrics)
        if not metrics:
            raise ValidationError(f"No metrics requested for property {self.property!r}")
        object.__setattr__(self, "metrics", metrics)
        _check_positive("top_occurrences_limit", self.top_occurrences_limit)


@dataclass(frozen=True)
class AggregateDescriptor:
    """
    An Aggregate query over one collection.

    Attributes:
        collection (str): Collection name.
        meta_metrics (tuple): Metrics for the 'meta' block (count).
        property_metrics (tuple): PropertyMetrics entries.
        group_by_path (tuple, optional): Property path to group by.
        search: NearText, NearVector, NearObject, NearImage, NearMedia or Hybrid.
        filter: Filter expression for the 'where' argument.
        object_limit (int, optional): Number of nearest objects to aggregate over.
        limit (int, optional): Maximum number of groups.
        tenant (str, optional): Tenant name.
    """
    collection: str
    meta_metrics: Tuple[Metric, ...] = ()
    property_metrics: Tuple[PropertyMetrics, ...] = ()
    group_by_path: Optional[PropertyPath] = None
    search: Optional[object] = None
    filter: Optional[FilterExpression] = None
    object_limit: Optional[int] = None
    limit: Optional[int] = None
    tenant: Optional[str] = None

    def __post_init__(self):
        validate_name(self.collection, "collection name")
        object.__setattr__(self, "meta_metrics", _metrics(self.meta_metrics))
        property_metrics = tuple(self.property_metrics)
        for entry in property_metrics:
            if not isinstance(entry, PropertyMetrics):
                raise ValidationError(f"property_metrics entries must be PropertyMetrics, got {entry!r}")
        object.__setattr__(self, "property_metrics", property_metrics)
        if self.group_by_path is not None:
            object.__setattr__(self, "group_by_path", to_path(self.group_by_path))
        if self.search is not None and not isinstance(self.search, AGGREGATE_SEARCH_CLAUSES):
            raise ValidationError(f"Search clause not supported in aggregations: {type(self.search).__name__}")
        if self.filter is not None and not isinstance(self.filter, (Predicate, Combinator)):
            raise ValidationError(f"filter must be a filter expression, got {self.filter!r}")
        _check_positive("object_limit", self.object_limit)
        _check_positive("limit", self.limit)
        if self.tenant is not None and (not isinstance(self.tenant, str) or not self.tenant):
            raise ValidationError(f"tenant must be a non-empty string, got {self.tenant!r}")

    def with_meta_metrics(self, *metrics: Union[Metric, str]) -> "AggregateDescriptor":
        return replace(self, meta_metrics=metrics)

    def with_property_metrics(self, property_name: str, *metrics: Union[Metric, str],
                              top_occurrences_limit: Optional[int] = None) -> "AggregateDescriptor":
        """Add (or replace) the metrics for one property."""
        entry = PropertyMetrics(property_name, metrics, top_occurrences_limit)
        kept = tuple(existing for existing in self.property_metrics if existing.property != property_name)
        return replace(self, property_metrics=kept + (entry,))

    def with_group_by(self, path: Optional[Union[str, Sequence[str]]]) -> "AggregateDescriptor":
        return replace(self, group_by_path=path)

    def with_search(self, search) -> "AggregateDescriptor":
        return replace(self, search=search)

    def with_filter(self, expr: Optional[FilterExpression]) -> "AggregateDescriptor":
        return replace(self, filter=expr)

    def with_object_limit(self, object_limit: Optional[int]) -> "AggregateDescriptor":
        return replace(self, object_limit=object_limit)

    def with_limit(self, limit: Optional[int]) -> "AggregateDescriptor":
        return replace(self, limit=limit)

    def with_tenant(self, tenant: Optional[str]) -> "AggregateDescriptor":
        return replace(self, tenant=tenant)


def over_all(collection: str, *meta_metrics: Union[Metric, str]) -> AggregateDescriptor:
    """Aggregate a whole collection, e.g. over_all('Article', 'count')."""
    return AggregateDescriptor(collection, meta_metrics=meta_metrics)
