"""Error taxonomy shared by the ingestion, analysis and archive services."""

from __future__ import annotations


class ContentServiceError(RuntimeError):
    """Base class for failures raised by the content services."""


class InvalidInputError(ContentServiceError):
    """Raised when a request is missing required fields or is malformed."""


class ExtractionFailedError(ContentServiceError):
    """Raised when a source cannot be fetched or parsed during ingestion."""


class GatewayUnavailableError(ContentServiceError):
    """Raised inside the completion gateway when the API cannot answer."""


class StoreUnavailableError(ContentServiceError):
    """Raised when Redis rejects or cannot serve a request."""
