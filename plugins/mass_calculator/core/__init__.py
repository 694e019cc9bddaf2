"""Facade for the mixture mass calculator core."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Mapping

from common.data_store import resolve_data_path

from .document import ComponentRecord, parse_document, read_document
from .entries import Entry, SkippedEntry, ValidationResult, validate_entry
from .errors import (
    DocumentLoadError,
    DocumentParseError,
    MassCalculationError,
    TableLoadError,
)
from .mass import MassAccumulator, to_grams
from .pipeline import MassSummary, calculate_document, calculate_file, total_mass
from .report import MassReport, build_report
from .tables import (
    ElementTable,
    ReferenceTables,
    UnitTable,
    load_element_table,
    load_reference_tables,
    load_unit_table,
)

BASE_DIR = Path(__file__).resolve().parents[3]
DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_ELEMENTS_TABLE = DATA_DIR / "elements_molar_mass.csv"
DEFAULT_UNITS_TABLE = DATA_DIR / "unit_conversion.csv"
ELEMENTS_ENV = "MIXTURE_MASS_ELEMENTS"
UNITS_ENV = "MIXTURE_MASS_UNITS"


def resolve_table_paths(settings: Mapping[str, object] | None = None) -> tuple[Path, Path]:
    """Return ``(elements_path, units_path)`` for the given plugin settings."""

    elements = resolve_data_path(
        settings,
        "elements_table",
        env_var=ELEMENTS_ENV,
        default=DEFAULT_ELEMENTS_TABLE,
        base_dir=BASE_DIR,
    )
    units = resolve_data_path(
        settings,
        "units_table",
        env_var=UNITS_ENV,
        default=DEFAULT_UNITS_TABLE,
        base_dir=BASE_DIR,
    )
    return elements, units


@lru_cache(maxsize=8)
def _cached_tables(elements_path: Path, units_path: Path) -> ReferenceTables:
    return load_reference_tables(elements_path, units_path)


def get_reference_tables(
    settings: Mapping[str, object] | None = None,
    *,
    elements_path: str | Path | None = None,
    units_path: str | Path | None = None,
) -> ReferenceTables:
    """Load (once per path pair) and return the reference tables.

    Explicit paths take precedence over the environment and ``settings``.
    """

    default_elements, default_units = resolve_table_paths(settings)
    return _cached_tables(
        Path(elements_path).resolve() if elements_path else default_elements,
        Path(units_path).resolve() if units_path else default_units,
    )


def list_units(tables: ReferenceTables) -> list[dict[str, str]]:
    """Return unit metadata, including the reserved mole unit."""

    units = [
        {"name": name, "grams": format(tables.units.scale(name), "f")}
        for name in tables.units.names()
    ]
    units.append({"name": "mol", "grams": "molar mass"})
    return units


def list_elements(tables: ReferenceTables) -> list[dict[str, object]]:
    return [
        {"name": name, "molar_mass": tables.elements.molar_mass(name)}
        for name in tables.elements.names()
    ]


__all__ = [
    "DATA_DIR",
    "DEFAULT_ELEMENTS_TABLE",
    "DEFAULT_UNITS_TABLE",
    "ELEMENTS_ENV",
    "UNITS_ENV",
    "ComponentRecord",
    "DocumentLoadError",
    "DocumentParseError",
    "ElementTable",
    "Entry",
    "MassAccumulator",
    "MassCalculationError",
    "MassReport",
    "MassSummary",
    "ReferenceTables",
    "SkippedEntry",
    "TableLoadError",
    "UnitTable",
    "ValidationResult",
    "build_report",
    "calculate_document",
    "calculate_file",
    "get_reference_tables",
    "list_elements",
    "list_units",
    "load_element_table",
    "load_reference_tables",
    "load_unit_table",
    "parse_document",
    "read_document",
    "resolve_table_paths",
    "to_grams",
    "total_mass",
    "validate_entry",
]
