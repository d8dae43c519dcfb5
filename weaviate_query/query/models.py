"""
@file: models.py
Query descriptor: an immutable description of a Get query.

Every with_* builder returns a new descriptor (dataclasses.replace), and every
construction re-runs validation, so a descriptor that exists is always renderable.

Classes:
    SortSpec: One sort key (path and direction).
    GroupBySpec: Result grouping (path, number of groups, objects per group).
    QueryDescriptor: The complete query definition.

Example:
    query = (QueryDescriptor("Article")
             .with_fields("title", "content")
             .near_text("artificial intelligence", certainty=0.7)
             .with_limit(5))
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from weaviate_query.exceptions import ValidationError
from weaviate_query.filter.models import Combinator, FilterExpression, Predicate, PropertyPath, to_path
from weaviate_query.generative import GenerateDirective
from weaviate_query.graphql import EnumValue, validate_name, validate_selection
from weaviate_query.render_config import CONSISTENCY_LEVELS
from .search import (
    SEARCH_CLAUSES,
    Bm25,
    FetchAll,
    FetchById,
    Hybrid,
    Move,
    NearImage,
    NearMedia,
    NearObject,
    NearText,
    NearVector,
)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    path: PropertyPath
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        object.__setattr__(self, "path", to_path(self.path))
        try:
            object.__setattr__(self, "direction", SortDirection(self.direction))
        except ValueError:
            raise ValidationError(f"Sort direction must be 'asc' or 'desc', got {self.direction!r}")

    def to_wire(self) -> Dict[str, Any]:
        return {"path": list(self.path), "order": EnumValue(self.direction.value)}


@dataclass(frozen=True)
class GroupBySpec:
    path: PropertyPath
    groups: int = 1
    objects_per_group: int = 10

    def __post_init__(self):
        object.__setattr__(self, "path", to_path(self.path))
        _check_positive("groups", self.groups)
        _check_positive("objects_per_group", self.objects_per_group)

    def to_wire(self) -> Dict[str, Any]:
        return {"path": list(self.path), "groups": self.groups, "objectsPerGroup": self.objects_per_group}


def _check_positive(name: str, value, allow_zero: bool = False):
    if value is None:
        return
    low = 0 if allow_zero else 1
    if isinstance(value, bool) or not isinstance(value, int) or value < low:
        kind = "non-negative" if allow_zero else "positive"
        raise ValidationError(f"{name} must be a {kind} integer, got {value!r}")


def _field_names(name: str, fields, check) -> Tuple[str, ...]:
    items = (fields,) if isinstance(fields, str) else tuple(fields)
    for item in items:
        check(item, name)
    return items


def _sort_spec(spec: Union[SortSpec, Tuple[Any, Any], str]) -> SortSpec:
    if isinstance(spec, SortSpec):
        return spec
    if isinstance(spec, str):
        return SortSpec(spec)
    path, direction = spec
    return SortSpec(path, direction)


@dataclass(frozen=True)
class QueryDescriptor:
    """
    A Get query over one collection.

    Attributes:
        collection (str): Collection name.
        fields (tuple): Properties to select; a name may carry one '{ ... }' body, as in
            'hasAuthor { ... on Author { name } }'.
        additional_fields (tuple): '_additional' field names such as 'id', 'certainty', 'distance'.
        search: One search clause (NearText, Hybrid, ...) or None for a plain fetch.
        filter: Filter expression for the 'where' argument.
        limit, offset (int): Pagination.
        sort (tuple): SortSpec entries.
        group_by (GroupBySpec): Result grouping.
        autocut (int): Number of score jumps to cut results at.
        consistency_level (str): ONE, QUORUM or ALL.
        tenant (str): Tenant name for multi-tenant collections.
        generate (GenerateDirective): Generative search directive.
    """
    collection: str
    fields: Tuple[str, ...] = ()
    search: Optional[Any] = None
    filter: Optional[FilterExpression] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    sort: Tuple[SortSpec, ...] = ()
    group_by: Optional[GroupBySpec] = None
    autocut: Optional[int] = None
    additional_fields: Tuple[str, ...] = ()
    consistency_level: Optional[str] = None
    tenant: Optional[str] = None
    generate: Optional[GenerateDirective] = None

    def __post_init__(self):
        validate_name(self.collection, "collection name")
        object.__setattr__(self, "fields", _field_names("field", self.fields, validate_selection))
        object.__setattr__(self, "additional_fields",
                           _field_names("additional field", self.additional_fields, validate_name))
        if self.search is not None and not isinstance(self.search, SEARCH_CLAUSES):
            raise ValidationError(f"Unsupported search clause: {self.search!r}")
        if self.filter is not None and not isinstance(self.filter, (Predicate, Combinator)):
            raise ValidationError(f"filter must be a filter expression, got {self.filter!r}")
        _check_positive("limit", self.limit)
        _check_positive("offset", self.offset, allow_zero=True)
        _check_positive("autocut", self.autocut)
        object.__setattr__(self, "sort", tuple(_sort_spec(spec) for spec in self.sort))
        if self.group_by is not None and not isinstance(self.group_by, GroupBySpec):
            raise ValidationError(f"group_by must be a GroupBySpec, got {self.group_by!r}")
        if self.consistency_level is not None and self.consistency_level not in CONSISTENCY_LEVELS:
            raise ValidationError(f"consistency_level must be one of {CONSISTENCY_LEVELS}, got {self.consistency_level!r}")
        if self.tenant is not None and (not isinstance(self.tenant, str) or not self.tenant):
            raise ValidationError(f"tenant must be a non-empty string, got {self.tenant!r}")
        if self.generate is not None and not isinstance(self.generate, GenerateDirective):
            raise ValidationError(f"generate must be a GenerateDirective, got {self.generate!r}")

    # Builders

    def with_fields(self, *fields: str) -> "QueryDescriptor":
        return replace(self, fields=fields)

    def with_search(self, search) -> "QueryDescriptor":
        return replace(self, search=search)

    def with_filter(self, expr: Optional[FilterExpression]) -> "QueryDescriptor":
        return replace(self, filter=expr)

    def with_limit(self, limit: Optional[int]) -> "QueryDescriptor":
        return replace(self, limit=limit)

    def with_offset(self, offset: Optional[int]) -> "QueryDescriptor":
        return replace(self, offset=offset)

    def with_sort(self, *specs: Union[SortSpec, Tuple[Any, Any], str]) -> "QueryDescriptor":
        """Replace the sort keys, e.g. with_sort(('publishedAt', 'desc'), 'title')."""
        return replace(self, sort=specs)

    def with_group_by(self, path: Union[str, Sequence[str]], groups: int = 1, objects_per_group: int = 10) -> "QueryDescriptor":
        return replace(self, group_by=GroupBySpec(path, groups, objects_per_group))

    def with_autocut(self, autocut: Optional[int]) -> "QueryDescriptor":
        return replace(self, autocut=autocut)

    def with_additional_fields(self, *fields: str) -> "QueryDescriptor":
        return replace(self, additional_fields=fields)

    def with_consistency_level(self, level: Optional[str]) -> "QueryDescriptor":
        return replace(self, consistency_level=level)

    def with_tenant(self, tenant: Optional[str]) -> "QueryDescriptor":
        return replace(self, tenant=tenant)

    def with_generate(self, directive: Optional[GenerateDirective]) -> "QueryDescriptor":
        return replace(self, generate=directive)

    # Search shortcuts; each replaces the single search slot

    def fetch_all(self) -> "QueryDescriptor":
        return self.with_search(FetchAll())

    def fetch_by_id(self, uuid: str) -> "QueryDescriptor":
        return self.with_search(FetchById(uuid))

    def near_text(self, concepts: Union[str, Sequence[str]], certainty: Optional[float] = None,
                  distance: Optional[float] = None, move_to: Optional[Move] = None,
                  move_away: Optional[Move] = None) -> "QueryDescriptor":
        return self.with_search(NearText(concepts, certainty, distance, move_to, move_away))

    def near_vector(self, vector: Sequence[float], certainty: Optional[float] = None,
                    distance: Optional[float] = None) -> "QueryDescriptor":
        return self.with_search(NearVector(vector, certainty, distance))

    def near_object(self, uuid: str, certainty: Optional[float] = None,
                    distance: Optional[float] = None) -> "QueryDescriptor":
        return self.with_search(NearObject(uuid, certainty, distance))

    def near_image(self, data: str, certainty: Optional[float] = None,
                   distance: Optional[float] = None) -> "QueryDescriptor":
        return self.with_search(NearImage(data, certainty, distance))

    def near_media(self, kind: str, data: str, certainty: Optional[float] = None,
                   distance: Optional[float] = None) -> "QueryDescriptor":
        return self.with_search(NearMedia(kind, data, certainty, distance))

    def bm25(self, query: str, properties: Optional[Sequence[str]] = None) -> "QueryDescriptor":
        return self.with_search(Bm25(query, properties))

    def hybrid(self, query: str, alpha: Optional[float] = None, fusion_type: Optional[str] = None,
               properties: Optional[Sequence[str]] = None) -> "QueryDescriptor":
        return self.with_search(Hybrid(query, alpha, fusion_type, properties))


def get(collection: str) -> QueryDescriptor:
    """Start a Get query for a collection."""
    return QueryDescriptor(collection)
