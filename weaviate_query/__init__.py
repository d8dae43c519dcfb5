"""
Weaviate Query - compile typed query descriptors into Weaviate GraphQL and extract results.
"""

from weaviate_query.aggregate import AggregateDescriptor, Metric, PropertyMetrics, over_all, render_aggregate
from weaviate_query.client import QueryClient
from weaviate_query.exceptions import (
    ConfigurationError,
    TransportError,
    ValidationError,
    WeaviateQueryError,
)
from weaviate_query.filter import compile_filter, render_where
from weaviate_query.generative import GenerateDirective, ProviderParams, compile_generate, grouped_task, single_prompt
from weaviate_query.query import QueryDescriptor, get, render_query
from weaviate_query.render_config import RendererConfig
from weaviate_query.response import ExtractionResult, extract
from weaviate_query.transport import HttpTransport

__version__ = "0.1.0"
__all__ = [
    "AggregateDescriptor",
    "ConfigurationError",
    "ExtractionResult",
    "GenerateDirective",
    "HttpTransport",
    "Metric",
    "PropertyMetrics",
    "ProviderParams",
    "QueryClient",
    "QueryDescriptor",
    "RendererConfig",
    "TransportError",
    "ValidationError",
    "WeaviateQueryError",
    "compile_filter",
    "compile_generate",
    "extract",
    "get",
    "grouped_task",
    "over_all",
    "render_aggregate",
    "render_query",
    "render_where",
    "single_prompt",
]
