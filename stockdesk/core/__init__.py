"""Core infrastructure: settings, logging, exceptions, formatting."""

from .config import get_settings, settings
from .exceptions import (
    AppException,
    AssessmentError,
    AssessmentUnavailableError,
    ConflictError,
    ExternalServiceError,
    MalformedAssessmentError,
    NotFoundError,
)


__all__ = [
    "AppException",
    "AssessmentError",
    "AssessmentUnavailableError",
    "ConflictError",
    "ExternalServiceError",
    "MalformedAssessmentError",
    "NotFoundError",
    "get_settings",
    "settings",
]
