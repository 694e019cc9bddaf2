"""Reference tables: element molar masses and unit multipliers.

Both tables are read from small comma separated files and frozen into
read-only mappings. Element rows are laid out as ``molar_mass,name`` and unit
rows as ``name,multiplier``. Names are case-insensitive and stored in lower
case. Molar masses are kept as binary floats while unit multipliers are kept
as exact :class:`~decimal.Decimal` values.
"""

from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from common.logging import get_logger

from .errors import TableLoadError

MOLE_UNIT = "mol"
POUND_UNIT = "pound"

logger = get_logger("mixture_mass.mass_calculator.tables")


@dataclass(frozen=True)
class ElementTable:
    """Lower-cased element name -> molar mass in grams per mole."""

    masses: Mapping[str, float]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.masses

    def __len__(self) -> int:
        return len(self.masses)

    def molar_mass(self, name: str) -> float:
        return self.masses[name.lower()]

    def names(self) -> list[str]:
        return sorted(self.masses)


@dataclass(frozen=True)
class UnitTable:
    """Lower-cased unit name -> grams per unit."""

    scales: Mapping[str, Decimal]

    def __contains__(self, unit: object) -> bool:
        return isinstance(unit, str) and unit.lower() in self.scales

    def __len__(self) -> int:
        return len(self.scales)

    def scale(self, unit: str) -> Decimal:
        return self.scales[unit.lower()]

    @property
    def pound(self) -> Decimal:
        return self.scales[POUND_UNIT]

    def names(self) -> list[str]:
        return sorted(self.scales)


@dataclass(frozen=True)
class ReferenceTables:
    elements: ElementTable
    units: UnitTable


def _iter_rows(path: Path, label: str) -> Iterator[tuple[int, list[str]]]:
    try:
        handle = path.open("r", encoding="utf-8", newline="")
    except FileNotFoundError as exc:
        raise TableLoadError(f"{label} file not found: {path}") from exc
    except OSError as exc:
        raise TableLoadError(f"{label} file could not be read: {path} ({exc})") from exc
    with handle:
        try:
            for line_number, row in enumerate(csv.reader(handle), start=1):
                if not row or all(not cell.strip() for cell in row):
                    continue
                if len(row) != 2:
                    raise TableLoadError(
                        f"{label} {path}:{line_number}: expected 2 columns, found {len(row)}"
                    )
                yield line_number, [cell.strip() for cell in row]
        except (csv.Error, UnicodeDecodeError) as exc:
            raise TableLoadError(f"{label} file is not valid CSV: {path} ({exc})") from exc


def _store(table: dict, key: str, value, *, label: str, location: str) -> None:
    if not key:
        raise TableLoadError(f"{label} {location}: name is empty")
    if key in table:
        logger.warning("%s %s: duplicate entry '%s' replaces earlier value", label, location, key)
    table[key] = value


def load_element_table(path: str | Path) -> ElementTable:
    """Read ``molar_mass,name`` rows into an :class:`ElementTable`."""

    path = Path(path)
    label = "Element table"
    logger.info("Loading elements molar mass data from %s", path)
    masses: dict[str, float] = {}
    for line_number, (raw_mass, name) in _iter_rows(path, label):
        location = f"{path}:{line_number}"
        try:
            mass = float(raw_mass)
        except ValueError as exc:
            raise TableLoadError(f"{label} {location}: invalid molar mass '{raw_mass}'") from exc
        if not math.isfinite(mass) or mass <= 0:
            raise TableLoadError(f"{label} {location}: molar mass must be positive and finite")
        _store(masses, name.lower(), mass, label=label, location=location)
    if not masses:
        raise TableLoadError(f"{label} {path} contains no elements")
    logger.info("Loaded %d elements from %s", len(masses), path)
    return ElementTable(MappingProxyType(masses))


def load_unit_table(path: str | Path) -> UnitTable:
    """Read ``name,multiplier`` rows into a :class:`UnitTable`.

    The reserved ``mol`` unit is rejected and a ``pound`` row is required.
    """

    path = Path(path)
    label = "Unit table"
    logger.info("Loading unit conversion table from %s", path)
    scales: dict[str, Decimal] = {}
    for line_number, (name, raw_scale) in _iter_rows(path, label):
        location = f"{path}:{line_number}"
        key = name.lower()
        if key == MOLE_UNIT:
            raise TableLoadError(f"{label} {location}: '{MOLE_UNIT}' is reserved and cannot be redefined")
        try:
            scale = Decimal(raw_scale)
        except InvalidOperation as exc:
            raise TableLoadError(f"{label} {location}: invalid multiplier '{raw_scale}'") from exc
        if not scale.is_finite() or scale <= 0:
            raise TableLoadError(f"{label} {location}: multiplier must be positive and finite")
        _store(scales, key, scale, label=label, location=location)
    if POUND_UNIT not in scales:
        raise TableLoadError(f"{label} {path} must define a '{POUND_UNIT}' entry")
    logger.info("Loaded %d units from %s", len(scales), path)
    return UnitTable(MappingProxyType(scales))


def load_reference_tables(elements_path: str | Path, units_path: str | Path) -> ReferenceTables:
    """Load both tables; any failure aborts before a mass can be computed."""

    return ReferenceTables(
        elements=load_element_table(elements_path),
        units=load_unit_table(units_path),
    )


__all__ = [
    "MOLE_UNIT",
    "POUND_UNIT",
    "ElementTable",
    "UnitTable",
    "ReferenceTables",
    "load_element_table",
    "load_unit_table",
    "load_reference_tables",
]
