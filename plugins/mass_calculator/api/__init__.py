"""Mixture mass calculator API with standardized responses."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from flask import Blueprint, Response, current_app, request

from common.errors import InternalAppError, ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import (
    FileLimit,
    SchemaModel,
    ValidationError,
    enforce_limits,
    parse_model,
    validate_mime,
)

from ..core import (
    DocumentLoadError,
    DocumentParseError,
    Entry,
    MassSummary,
    ReferenceTables,
    TableLoadError,
    get_reference_tables,
    list_elements,
    list_units,
    parse_document,
    total_mass,
)

logger = get_logger("mixture_mass.mass_calculator.api")

# Largest accepted magnitude of a quantity exponent, in either direction.
DEFAULT_MAX_EXPONENT = 100


class TotalQuery(SchemaModel):
    include_skipped: bool = True


api_bp = Blueprint("mass_calculator_api", __name__, url_prefix="/api/mass_calculator")


def _settings() -> Mapping[str, Any]:
    return current_app.config.get("PLUGIN_SETTINGS", {}).get("mass_calculator", {}) or {}


def _upload_limit() -> FileLimit:
    return FileLimit.from_settings(
        _settings().get("upload"), default_max_files=1, default_max_mb=1
    )


def _max_exponent() -> int:
    return int(_settings().get("max_exponent", DEFAULT_MAX_EXPONENT))


def _bounded(entries: Iterable[Entry], limit: int) -> Iterator[Entry]:
    """Refuse quantities whose decimal exponent lies outside ``[-limit, limit]``."""

    for index, entry in enumerate(entries):
        exponent = entry.quantity.adjusted()
        if abs(exponent) > limit:
            raise ValidationError(
                f"Component {index} has a quantity exponent of {exponent}; "
                f"the service accepts exponents between -{limit} and {limit}",
                details={"index": index, "max_exponent": limit},
            )
        yield entry


def _tables() -> ReferenceTables:
    return get_reference_tables(_settings())


def _tables_unavailable(exc: TableLoadError) -> Response:
    logger.error("Reference tables unavailable: %s", exc)
    return fail(InternalAppError(message=str(exc), code="mass.tables_unavailable"))


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="mass.invalid_request",
            details=getattr(exc, "details", None),
        )
    )


def _summary_payload(summary: MassSummary, query: TotalQuery) -> dict[str, object]:
    payload = summary.to_dict()
    if not query.include_skipped:
        payload.pop("skipped")
    return payload


def _calculate(data: bytes, query: TotalQuery) -> Response:
    try:
        tables = _tables()
    except TableLoadError as exc:
        return _tables_unavailable(exc)
    try:
        summary = total_mass(_bounded(parse_document(data), _max_exponent()), tables)
    except DocumentLoadError as exc:
        return fail(ValidationAppError(message=str(exc), code="mass.invalid_document"))
    except DocumentParseError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                code="mass.malformed_component",
                details={"index": exc.index},
            )
        )
    except ValidationError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                code="mass.quantity_out_of_range",
                details=exc.details,
            )
        )
    return ok(_summary_payload(summary, query))


@api_bp.get("/units")
def units_endpoint() -> Response:
    try:
        tables = _tables()
    except TableLoadError as exc:
        return _tables_unavailable(exc)
    return ok({"units": list_units(tables)})


@api_bp.get("/elements")
def elements_endpoint() -> Response:
    try:
        tables = _tables()
    except TableLoadError as exc:
        return _tables_unavailable(exc)
    return ok({"elements": list_elements(tables)})


@api_bp.post("/total")
def total_endpoint() -> Response:
    try:
        query = parse_model(TotalQuery, request.args.to_dict())
    except ValidationError as exc:
        return _invalid_request(exc)
    return _calculate(request.get_data(cache=False), query)


@api_bp.post("/total/upload")
def total_upload_endpoint() -> Response:
    try:
        query = parse_model(TotalQuery, request.args.to_dict())
        files = request.files.getlist("document")
        enforce_limits(files, _upload_limit())
        validate_mime(files, {"application/json"})
    except ValidationError as exc:
        return _invalid_request(exc)
    return _calculate(files[0].read(), query)


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "units_endpoint",
    "elements_endpoint",
    "total_endpoint",
    "total_upload_endpoint",
]
