"""Common error types and helpers for API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping


def _jsonable_details(details: Mapping[str, Any] | list[Any] | None) -> Any:
    if isinstance(details, list):
        return list(details)
    return dict(details or {})


@dataclass(slots=True)
class AppError(Exception):
    """Base application error with a JSON friendly payload."""

    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | list[Any] | None = None

    def to_dict(self) -> Mapping[str, Any]:
        payload: MutableMapping[str, Any] = {
            "code": self.code,
            "message": self.message,
            "details": _jsonable_details(self.details),
        }
        return payload


@dataclass(slots=True)
class ValidationAppError(AppError):
    """Error raised for invalid user input."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class NotFoundAppError(AppError):
    """Error raised when a resource or route is missing."""

    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class PayloadTooLargeAppError(AppError):
    """Error raised when a request body exceeds ``MAX_CONTENT_LENGTH``."""

    code: str = "payload_too_large"
    status_code: int = 413


@dataclass(slots=True)
class InternalAppError(AppError):
    """Server side failure such as missing reference data."""

    code: str = "internal_error"
    status_code: int = 500


__all__ = [
    "AppError",
    "ValidationAppError",
    "NotFoundAppError",
    "PayloadTooLargeAppError",
    "InternalAppError",
]
