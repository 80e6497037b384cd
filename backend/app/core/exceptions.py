"""
Custom exceptions for the VKO Air & Procurement Monitor.

This module provides a hierarchy of exceptions for consistent error handling
across the application. All exceptions inherit from MonitorBaseException.

Services raise these; API routes translate them into structured
`{"success": false, "error": ...}` responses. The risk engine itself never
raises for valid input.

Example:
    try:
        station = await service.get_station_details(station_id)
    except StationNotFoundError as e:
        logger.warning(f"Unknown station: {e}")
"""

from typing import Optional


class MonitorBaseException(Exception):
    """
    Base exception class for all monitor errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable description of the error.
            details: Optional additional context for debugging.
        """
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UpstreamDataError(MonitorBaseException):
    """
    Exception raised when a data source is unavailable or malformed.

    Covers the WAQI endpoints (non-2xx, `status != "ok"`, bad JSON, network
    errors) and the static tender dataset.

    Attributes:
        source: Name of the data source that failed.
        status_code: HTTP status returned upstream, if any.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        self.source = source
        self.status_code = status_code

        enhanced_message = message
        if source:
            enhanced_message = f"[{source}] {enhanced_message}"
        if status_code is not None:
            enhanced_message = f"{enhanced_message} (status: {status_code})"

        super().__init__(enhanced_message, details)


class NotFoundError(MonitorBaseException):
    """
    Exception raised when a requested identifier does not exist.

    Attributes:
        resource: Kind of resource looked up (tender, station).
        identifier: The identifier that was not found.
    """

    resource: str = "resource"

    def __init__(self, identifier: str, details: Optional[str] = None) -> None:
        self.identifier = identifier
        super().__init__(f"{self.resource.capitalize()} '{identifier}' not found", details)


class TenderNotFoundError(NotFoundError):
    """No tender with the given id in the dataset."""

    resource = "tender"


class StationNotFoundError(NotFoundError):
    """The upstream provider does not know the station id."""

    resource = "station"


class InvalidTenderError(MonitorBaseException):
    """
    Exception raised when a tender record violates its preconditions.

    Raised at the boundary (dataset loading), before the risk engine is
    reached: negative amount, execution start after execution end, missing
    fields.

    Attributes:
        tender_id: Identifier of the offending record, if known.
    """

    def __init__(
        self,
        message: str,
        tender_id: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.tender_id = tender_id

        enhanced_message = f"[Tender] {message}"
        if tender_id:
            enhanced_message = f"[Tender {tender_id}] {message}"

        super().__init__(enhanced_message, details)


class LLMInvocationError(MonitorBaseException):
    """
    Exception raised when LLM invocation fails.

    This includes timeouts, API errors, and empty or malformed completions.

    Attributes:
        model_name: Name of the LLM model that failed.
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.model_name = model_name

        enhanced_message = f"[LLM] {message}"
        if model_name:
            enhanced_message = f"{enhanced_message} (model: {model_name})"

        super().__init__(enhanced_message, details)


class LLMNotConfiguredError(LLMInvocationError):
    """No API key configured; AI features are unavailable."""

    def __init__(self) -> None:
        super().__init__("GROQ_API_KEY not configured")
