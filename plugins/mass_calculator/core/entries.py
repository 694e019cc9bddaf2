"""Mixture components and their validation against the reference tables."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from .tables import MOLE_UNIT, ElementTable, UnitTable

ValidationResult = Literal["valid", "invalid_unit", "invalid_element"]


@dataclass(frozen=True)
class Entry:
    """One ``(element, quantity, unit)`` component of a mixture."""

    element_name: str
    quantity: Decimal
    unit: str

    @property
    def is_molar(self) -> bool:
        return self.unit.lower() == MOLE_UNIT


@dataclass(frozen=True)
class SkippedEntry:
    """A component left out of the total, with the reason it was rejected."""

    entry: Entry
    reason: ValidationResult
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.entry.element_name,
            "units": self.entry.unit,
            "mass": format(self.entry.quantity, "f"),
            "reason": self.reason,
            "message": self.message,
        }


def is_valid_unit(unit: str, units: UnitTable) -> bool:
    return unit.lower() == MOLE_UNIT or unit in units


def is_valid_element(element_name: str, elements: ElementTable) -> bool:
    return element_name in elements


def validate_entry(entry: Entry, elements: ElementTable, units: UnitTable) -> ValidationResult:
    """Classify ``entry``; the unit is checked before the element."""

    if not is_valid_unit(entry.unit, units):
        return "invalid_unit"
    if not is_valid_element(entry.element_name, elements):
        return "invalid_element"
    return "valid"


def describe_rejection(entry: Entry, reason: ValidationResult) -> str:
    """Human readable diagnostic for a skipped component."""

    element = entry.element_name.lower()
    if reason == "invalid_unit":
        return (
            f"Unit '{entry.unit}' for element '{element}' is not valid; "
            "this entry will not be used in the total mass calculation."
        )
    return (
        f"Element '{element}' (unit '{entry.unit}') cannot be found in the element table; "
        "this entry will not be used in the total mass calculation."
    )


__all__ = [
    "ValidationResult",
    "Entry",
    "SkippedEntry",
    "is_valid_unit",
    "is_valid_element",
    "validate_entry",
    "describe_rejection",
]
