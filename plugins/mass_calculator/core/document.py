"""Reader for mixture documents.

A document is a JSON object holding a ``components`` array::

    {"components": [{"name": "carbon", "mass": 2, "units": "mol"}, ...]}

Numbers are decoded straight into :class:`~decimal.Decimal` so quantities
keep every digit written in the file. Decoding the outer structure happens
eagerly; components are checked one at a time while they are iterated.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Annotated, Any, Iterator

import pydantic
from pydantic import BaseModel, Field, StrictStr

from .entries import Entry
from .errors import DocumentLoadError, DocumentParseError

COMPONENTS_KEY = "components"


class ComponentRecord(BaseModel):
    """Schema of a single component; unknown keys are ignored."""

    model_config = pydantic.ConfigDict(extra="ignore")

    name: StrictStr
    units: StrictStr
    mass: Annotated[Decimal, Field(strict=True, allow_inf_nan=False)]

    def to_entry(self) -> Entry:
        return Entry(element_name=self.name, quantity=self.mass, unit=self.units)


def _decode(text: str | bytes) -> Any:
    try:
        return json.loads(text, parse_float=Decimal, parse_int=Decimal)
    except (ValueError, RecursionError) as exc:
        raise DocumentLoadError(f"Input document could not be parsed: {exc}") from exc


def _describe(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ())) or "component"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def _iter_components(components: list[Any]) -> Iterator[Entry]:
    for index, raw in enumerate(components):
        if not isinstance(raw, dict):
            raise DocumentParseError(f"Component {index} is not an object", index=index)
        try:
            record = ComponentRecord.model_validate(raw)
        except pydantic.ValidationError as exc:
            raise DocumentParseError(
                f"Component {index} is malformed: {_describe(exc.errors())}", index=index
            ) from exc
        yield record.to_entry()


def parse_document(text: str | bytes) -> Iterator[Entry]:
    """Decode ``text`` and return a lazy iterator over its components.

    Raises:
        DocumentLoadError: If the text is not JSON or lacks a components
            array. Raised immediately.
        DocumentParseError: If a component is malformed. Raised while
            iterating, at the offending component.
    """

    document = _decode(text)
    if not isinstance(document, dict):
        raise DocumentLoadError("Input document must be a JSON object")
    components = document.get(COMPONENTS_KEY)
    if not isinstance(components, list):
        raise DocumentLoadError(f"Input document must contain a '{COMPONENTS_KEY}' array")
    return _iter_components(components)


def read_document(path: str | Path) -> Iterator[Entry]:
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise DocumentLoadError(f"Input file at path {path} does not exist") from exc
    except OSError as exc:
        raise DocumentLoadError(f"Input file at path {path} could not be read: {exc}") from exc
    return parse_document(data)


__all__ = ["COMPONENTS_KEY", "ComponentRecord", "parse_document", "read_document"]
