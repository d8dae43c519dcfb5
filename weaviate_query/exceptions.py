"""
Custom exception hierarchy for the Weaviate query client.

This module defines all custom exceptions used throughout the client, organized by logical error domains:

- WeaviateQueryError: Base for all client errors
- ValidationError: For malformed descriptors, rejected at construction time
- ConfigurationError: For configuration issues

Transport errors inherit from TransportError:
- TransportError: Non-2xx responses and failed requests (with status code and details)
- ConnectionError: When the server cannot be reached
- TimeoutError: When the server does not answer in time
"""

class WeaviateQueryError(Exception):
    """Base exception for all Weaviate query client errors."""
    pass

class ValidationError(WeaviateQueryError):
    """Raised when a filter, search clause or descriptor is malformed."""
    pass

class ConfigurationError(WeaviateQueryError):
    """Raised when configuration is invalid or missing."""
    pass

class TransportError(WeaviateQueryError):
    """Raised when an HTTP request to the server fails.

    Attributes:
        error_type (str): Category of the failure (e.g. 'not_found', 'server_error').
        status_code (int, optional): HTTP status code, if a response was received.
        details (dict): Decoded response body or other context.
    """
    def __init__(self, message, error_type="unknown_error", status_code=None, details=None):
        super().__init__(message)
        self.error_type = error_type
        self.status_code = status_code
        self.details = details or {}

class ConnectionError(TransportError):
    """Raised when the server refuses or drops the connection."""
    def __init__(self, message, details=None):
        super().__init__(message, error_type="connection_error", details=details)

class TimeoutError(TransportError):
    """Raised when a request times out."""
    def __init__(self, message, details=None):
        super().__init__(message, error_type="timeout_error", details=details)
