"""Gram conversion and exact accumulation."""

from __future__ import annotations

from contextlib import contextmanager
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Decimal, localcontext
from typing import Iterator

from .entries import Entry
from .tables import ElementTable, UnitTable


@contextmanager
def exact_context() -> Iterator[None]:
    """Decimal context wide enough that sums and products never round."""

    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        yield


def grams_from_moles(quantity: Decimal, molar_mass: float) -> Decimal:
    # Decimal(float) is the exact binary value of the stored molar mass.
    with exact_context():
        return Decimal(molar_mass) * quantity


def to_grams(entry: Entry, elements: ElementTable, units: UnitTable) -> Decimal:
    """Convert a validated entry to grams.

    Raises:
        KeyError: If the entry was not validated first and its element or
            unit is unknown.
    """

    if entry.is_molar:
        return grams_from_moles(entry.quantity, elements.molar_mass(entry.element_name))
    with exact_context():
        return entry.quantity * units.scale(entry.unit)


class MassAccumulator:
    """Running total of converted masses in grams."""

    def __init__(self) -> None:
        self._total = Decimal(0)
        self._count = 0

    def add(self, grams: Decimal) -> Decimal:
        with exact_context():
            self._total = self._total + grams
        self._count += 1
        return self._total

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def count(self) -> int:
        return self._count


__all__ = ["exact_context", "grams_from_moles", "to_grams", "MassAccumulator"]
