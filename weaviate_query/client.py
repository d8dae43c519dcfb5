"""
@file: client.py
QueryClient: renders descriptors, sends them to the GraphQL endpoint and extracts results.

Every query is sent as POST /v1/graphql with body {"query": <document>}. Server-reported
GraphQL errors come back in the ExtractionResult next to the rows; transport failures
are raised by the transport.

Usage:
    with QueryClient.from_config(get_config("config/config.yaml")) as client:
        rows, errors = client.get(get("Article").with_fields("title").with_limit(5))
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .aggregate import AggregateDescriptor, render_aggregate
from .exceptions import ValidationError
from .generative import GenerateMode, grouped_results, single_result
from .query import QueryDescriptor, render_query
from .render_config import RendererConfig
from .response import ExtractionResult, extract
from .transport import HttpTransport

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "/v1/graphql"


class QueryClient:
    """
    High-level interface for Get, Aggregate and generative queries.
    """
    def __init__(self, transport: Any, renderer_config: Optional[RendererConfig] = None):
        """
        Args:
            transport: Object with execute(method, path, body) returning decoded JSON (e.g. HttpTransport).
            renderer_config: Renderer defaults.
        """
        self.transport = transport
        self.renderer_config = renderer_config or RendererConfig()

    @classmethod
    def from_config(cls, config: Any, transport: Any = None) -> "QueryClient":
        """Build a client with an HttpTransport and renderer defaults from a Config."""
        return cls(
            HttpTransport.from_config(config, transport=transport),
            RendererConfig.from_config(config),
        )

    def raw(self, query_text: str) -> Dict[str, Any]:
        """Send a GraphQL document as-is and return the decoded envelope."""
        logger.debug(f"Executing GraphQL query:\n{query_text}")
        return self.transport.execute("POST", GRAPHQL_PATH, {"query": query_text})

    def get(self, descriptor: QueryDescriptor) -> ExtractionResult:
        """Run a Get query and return (rows, errors)."""
        envelope = self.raw(render_query(descriptor, self.renderer_config))
        return extract(envelope, "Get", descriptor.collection)

    def aggregate(self, descriptor: AggregateDescriptor) -> ExtractionResult:
        """Run an Aggregate query and return (records, errors)."""
        envelope = self.raw(render_aggregate(descriptor, self.renderer_config))
        return extract(envelope, "Aggregate", descriptor.collection)

    def generate(self, descriptor: QueryDescriptor) -> Union[Dict[str, Any], List[Mapping[str, Any]]]:
        """
        Run a generative query.

        Returns:
            For single mode, the generate payload ({'singleResult': ..., 'error': ...}).
            For grouped mode, the retrieved rows with their '_additional.generate' payloads.
        """
        if descriptor.generate is None:
            raise ValidationError("generate() requires a descriptor with a generate directive")
        rows, errors = self.get(descriptor)
        if descriptor.generate.mode is GenerateMode.SINGLE:
            result = single_result(rows)
            if errors and (not rows or result.get("error") is None):
                result["error"] = "; ".join(errors)
            return result
        return grouped_results(rows)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
