"""
@file: transport.py
HTTP transport for the Weaviate REST and GraphQL endpoints.

Configuration:
    - WEAVIATE.BASE_URL: Server URL (default: 'http://localhost:8080')
    - WEAVIATE.API_KEY: Bearer token, usually '${WEAVIATE_API_KEY}' (default: none)
    - WEAVIATE.TIMEOUT: Request timeout in seconds (default: 60)
    - WEAVIATE.MAX_RETRIES: Retries after a connection failure or timeout (default: 3)

Connection failures and timeouts are retried with exponential backoff. Non-2xx responses
are not retried; they raise TransportError with the status code and decoded body.

Raises:
    TransportError: For non-2xx responses
    ConnectionError: If the server cannot be reached after all retries
    TimeoutError: If the server does not answer in time after all retries
"""
import json
import logging
from typing import Any, Dict, Optional

import httpx
import tenacity

from .exceptions import ConnectionError, TimeoutError, TransportError, ValidationError

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD")

STATUS_ERROR_TYPES = {
    400: "bad_request",
    401: "authentication_failed",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
    422: "validation_error",
    500: "server_error",
    503: "service_unavailable",
}


def decode_body(text: str) -> Dict[str, Any]:
    """Decode a response body; empty bodies become {} and non-JSON bodies {'body': text}."""
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return {"body": text}


def error_message(details: Any) -> str:
    """Pick the message out of an error body; Weaviate sends {'error': [{'message': ...}]}."""
    if not isinstance(details, dict):
        return "Request failed"
    error = details.get("error")
    if isinstance(error, list):
        messages = [str(item.get("message")) for item in error if isinstance(item, dict) and item.get("message")]
        if messages:
            return "; ".join(messages)
    return str(details.get("message") or error or "Request failed")


class HttpTransport:
    """
    Sends requests to a Weaviate server and returns decoded JSON bodies.
    """
    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        api_key: Optional[str] = None,
        timeout: float = 60.0,
        max_retries: int = 3,
        wait_min: float = 1.0,
        wait_max: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            base_url: Server URL.
            api_key: Optional bearer token.
            timeout: Request timeout in seconds.
            max_retries: Retries after connection failures or timeouts.
            wait_min: Minimum backoff between retries, in seconds.
            wait_max: Maximum backoff between retries, in seconds.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.wait_min = wait_min
        self.wait_max = wait_max
        headers = {"content-type": "application/json", "accept": "application/json"}
        if api_key:
            headers["authorization"] = f"Bearer {api_key}"
        self.client = httpx.Client(base_url=self.base_url, headers=headers, timeout=timeout, transport=transport)
        logger.info(f"Initialized HttpTransport(base_url={self.base_url}, timeout={timeout}, max_retries={max_retries})")

    @classmethod
    def from_config(cls, config: Any, transport: Optional[httpx.BaseTransport] = None) -> "HttpTransport":
        """Build a transport from the WEAVIATE section of a Config."""
        section = config.get_nested('WEAVIATE', {}) or {}
        return cls(
            base_url=section.get('BASE_URL', 'http://localhost:8080'),
            api_key=section.get('API_KEY'),
            timeout=float(section.get('TIMEOUT', 60)),
            max_retries=int(section.get('MAX_RETRIES', 3)),
            transport=transport,
        )

    def _send(self, method: str, path: str, body: Optional[Any]) -> httpx.Response:
        url = path if path.startswith("/") else f"/{path}"
        if body is None:
            return self.client.request(method, url)
        return self.client.request(method, url, json=body)

    def execute(self, method: str, path: str, body: Optional[Any] = None) -> Dict[str, Any]:
        """
        Send a request and return the decoded response body.

        Args:
            method: One of GET, POST, PUT, PATCH, DELETE, HEAD.
            path: Request path, e.g. '/v1/graphql'.
            body: JSON-serializable request body, or None.

        Returns:
            Decoded JSON body ({} for empty bodies).
        """
        method = method.upper()
        if method not in METHODS:
            raise ValidationError(f"Unsupported HTTP method: {method}")

        retrying = tenacity.Retrying(
            wait=tenacity.wait_exponential(multiplier=1, min=self.wait_min, max=self.wait_max),
            stop=tenacity.stop_after_attempt(self.max_retries + 1),
            retry=tenacity.retry_if_exception_type(httpx.TransportError),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            response = retrying(self._send, method, path, body)
        except httpx.TimeoutException as e:
            logger.error(f"{method} {path} timed out: {e}")
            raise TimeoutError(f"Request timeout: {e}")
        except httpx.TransportError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ConnectionError(f"Connection failed: {e}")

        logger.info(f"{method} {path} -> {response.status_code}")
        details = decode_body(response.text)
        if 200 <= response.status_code < 300:
            return details
        if not details:
            details = {"message": response.reason_phrase}
        elif "body" in details and len(details) == 1:
            details = {"message": details["body"]}
        raise TransportError(
            error_message(details),
            error_type=STATUS_ERROR_TYPES.get(response.status_code, "unknown_error"),
            status_code=response.status_code,
            details=details,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
