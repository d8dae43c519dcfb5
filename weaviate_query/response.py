"""
@file: response.py
Response extraction for GraphQL envelopes returned by Weaviate.

The server answers GraphQL requests with HTTP 200 even when the query fails in part, and
reports problems in an 'errors' array next to whatever 'data' it could produce. extract
returns both together and never raises on missing data:

    rows present, errors empty      -> success
    rows present, errors present    -> partial failure
    rows empty,   errors present    -> query failed
Transport failures never reach this module; the transport raises them.
"""
import logging
from typing import Any, Dict, List, Mapping, NamedTuple

logger = logging.getLogger(__name__)


class ExtractionResult(NamedTuple):
    rows: List[Dict[str, Any]]
    errors: List[str]

    @property
    def ok(self) -> bool:
        return not self.errors


def error_messages(envelope: Any) -> List[str]:
    """Return the message of each server-reported error, in order."""
    if not isinstance(envelope, Mapping):
        return []
    errors = envelope.get("errors") or []
    if not isinstance(errors, list):
        errors = [errors]
    messages = []
    for error in errors:
        if isinstance(error, Mapping) and error.get("message") is not None:
            messages.append(str(error["message"]))
        else:
            messages.append(str(error))
    return messages


def extract(envelope: Any, operation: str, collection: str) -> ExtractionResult:
    """
    Unwrap data.<operation>.<collection> from a decoded response.

    Args:
        envelope: Decoded JSON response body.
        operation: 'Get' or 'Aggregate'.
        collection: Collection name.

    Returns:
        ExtractionResult(rows, errors). Any missing or null level yields no rows.
    """
    node: Any = envelope
    for key in ("data", operation, collection):
        node = node.get(key) if isinstance(node, Mapping) else None
    rows = [row for row in node if isinstance(row, Mapping)] if isinstance(node, list) else []
    errors = error_messages(envelope)
    if errors:
        logger.warning("%s %s returned %d row(s) with errors: %s", operation, collection, len(rows), "; ".join(errors))
    else:
        logger.debug("%s %s returned %d row(s)", operation, collection, len(rows))
    return ExtractionResult(rows, errors)
