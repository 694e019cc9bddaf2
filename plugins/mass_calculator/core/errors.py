"""Exception hierarchy for the mass calculator core."""

from __future__ import annotations


class MassCalculationError(ValueError):
    """Base exception for fatal mass calculation failures."""


class TableLoadError(MassCalculationError):
    """Raised when a reference table is missing or malformed."""


class DocumentLoadError(MassCalculationError):
    """Raised when the input document cannot be read or decoded at all."""


class DocumentParseError(MassCalculationError):
    """Raised when a component of an otherwise readable document is malformed."""

    def __init__(self, message: str, *, index: int | None = None):
        super().__init__(message)
        self.index = index


__all__ = [
    "MassCalculationError",
    "TableLoadError",
    "DocumentLoadError",
    "DocumentParseError",
]
