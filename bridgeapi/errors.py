"""Errors raised by the API and their HTTP representations."""

from __future__ import annotations

from http import HTTPStatus

from .models import ErrorResponse
from .web import Response, json_response


class ApiError(Exception):
    """Base class for failures reported to API clients."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    title: str = "Internal Server Error"
    _prefix: str = "Internal server error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self._prefix}: {message}")

    def _response_message(self) -> str:
        return self.message

    def _error_response_message(self) -> str:
        return self.message

    def to_response(self) -> Response:
        """Render as a JSON body with the status reason and a message."""
        body = {"error": self.status.phrase, "message": self._response_message()}
        return json_response(body, int(self.status))

    def to_error_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.title,
            message=self._error_response_message(),
            code=int(self.status),
        )


class ConfigError(ApiError):
    """The service is misconfigured."""

    title = "Configuration Error"
    _prefix = "Configuration error"


class ValidationError(ApiError):
    """The client sent invalid input."""

    status = HTTPStatus.BAD_REQUEST
    title = "Validation Error"
    _prefix = "Validation error"


class NotFoundError(ApiError):
    """A requested resource does not exist."""

    status = HTTPStatus.NOT_FOUND
    title = "Not Found"
    _prefix = "Not found"

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(resource)

    def _response_message(self) -> str:
        return f"Not found: {self.resource}"

    def _error_response_message(self) -> str:
        return f"Resource not found: {self.resource}"


class InternalError(ApiError):
    """An unexpected server-side failure."""


class RelayerError(ApiError):
    """A failure reported by the relayer."""

    title = "Relayer Error"
    _prefix = "Relayer error"

    def __init__(self, source: object) -> None:
        self.source = source
        super().__init__(str(source))


class ThresholdSignatureError(ApiError):
    """A failure in threshold signing."""

    title = "Threshold Signature Error"
    _prefix = "Threshold signature error"

    def __init__(self, source: object) -> None:
        self.source = source
        super().__init__(str(source))