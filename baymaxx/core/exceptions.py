"""
Custom exceptions
Hierarchical exceptions shared by every layer
"""

from typing import Any


class BaymaxxException(Exception):
    """Base exception for the application"""

    def __init__(self, message: str, error_code: str | None = None,
                 details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(BaymaxxException):
    """Configuration error"""


class ExternalServiceError(BaymaxxException):
    """Error from an external service (OpenAI, emotion detectors, ...)"""

    def __init__(self, message: str, service_name: str = "unknown",
                 status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.details['service_name'] = service_name
        if status_code:
            self.details['status_code'] = status_code


class DegradedSignalError(BaymaxxException):
    """
    Non-fatal failure of one input signal

    Raised inside an analyzer or the context lookup and replaced by a
    default value before it reaches the caller of a turn.
    """

    def __init__(self, message: str, source: str = "unknown", **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.details['source'] = source


class InteractionProcessingError(BaymaxxException):
    """
    The single structured error a turn can surface

    `kind` tags the failing step: "fusion", "generation" or "persistence".
    """

    kind = "processing"

    def __init__(self, message: str, kind: str | None = None,
                 user_id: str | None = None, session_id: str | None = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        if kind:
            self.kind = kind
        self.details['kind'] = self.kind
        if user_id:
            self.details['user_id'] = user_id
        if session_id:
            self.details['session_id'] = session_id


class GenerationError(InteractionProcessingError):
    """The generation collaborator raised; nothing was persisted"""

    kind = "generation"


class PersistenceError(InteractionProcessingError):
    """The response was computed but the interaction could not be recorded"""

    kind = "persistence"

    def __init__(self, message: str, response: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if response is not None:
            self.details['response'] = response
