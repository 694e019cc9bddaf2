"""Validation primitives for plugin APIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, TypeVar

import pydantic
from pydantic import BaseModel
from werkzeug.datastructures import FileStorage


class ValidationError(ValueError):
    """Raised when validation fails."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for request/response validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


TModel = TypeVar("TModel", bound=SchemaModel)


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        details = exc.errors(include_url=False, include_context=False)
        raise ValidationError("Invalid request payload", details=details) from exc


@dataclass(slots=True)
class FileLimit:
    max_files: int
    max_size: int

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any] | None,
        *,
        default_max_files: int,
        default_max_mb: int,
    ) -> "FileLimit":
        """Build a limit from ``config.yml`` style settings.

        Missing or malformed values fall back to the supplied defaults.
        """

        max_files = default_max_files
        max_mb = default_max_mb

        if settings:
            try:
                max_files = int(settings.get("max_files"))
            except (TypeError, ValueError):
                max_files = default_max_files

            try:
                max_mb = int(float(settings.get("max_mb")))
            except (TypeError, ValueError):
                max_mb = default_max_mb

        max_files = max(max_files, 1)
        max_mb = max(max_mb, 1)
        return cls(max_files=max_files, max_size=max_mb * 1024 * 1024)


def enforce_limits(files: Iterable[FileStorage], limit: FileLimit) -> None:
    files = list(files)
    if not files:
        raise ValidationError("At least one file is required")
    if len(files) > limit.max_files:
        raise ValidationError("Too many files uploaded")
    for file in files:
        file.seek(0, 2)
        size = file.tell()
        file.seek(0)
        if size > limit.max_size:
            raise ValidationError("File exceeds allowed size")


_UTF8_BOM = b"\xef\xbb\xbf"


def _looks_like_json(sample: bytes) -> bool:
    text = sample[len(_UTF8_BOM):] if sample.startswith(_UTF8_BOM) else sample
    text = text.lstrip()
    return text[:1] in (b"{", b"[")


_SNIFFERS = {
    "application/json": _looks_like_json,
}


def _matches_signature(sample: bytes, allowed: set[str]) -> bool:
    return any(_SNIFFERS[mime](sample) for mime in allowed if mime in _SNIFFERS)


def validate_mime(files: Iterable[FileStorage], allowed: set[str]) -> None:
    """Reject files whose leading bytes do not look like an ``allowed`` type."""

    for file in files:
        stream = file.stream
        try:
            current = stream.tell()
        except (AttributeError, OSError):
            current = None

        try:
            stream.seek(0)
        except (AttributeError, OSError):
            pass

        sample = stream.read(1024)
        if isinstance(sample, str):
            sample = sample.encode("utf-8", "ignore")

        if current is not None:
            stream.seek(current)
        else:
            try:
                stream.seek(0)
            except (AttributeError, OSError):
                pass

        if not _matches_signature(sample or b"", allowed):
            raise ValidationError("Unsupported or invalid file signature")


__all__ = [
    "ValidationError",
    "SchemaModel",
    "parse_model",
    "FileLimit",
    "enforce_limits",
    "validate_mime",
]
