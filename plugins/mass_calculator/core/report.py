"""Final rendering of a total mass in grams and pounds."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from .mass import exact_context
from .tables import UnitTable

CENT = Decimal("0.01")


@dataclass(frozen=True)
class MassReport:
    """Grams rounded up and pounds rounded down, both to two decimals."""

    grams: Decimal
    pounds: Decimal

    @property
    def grams_display(self) -> str:
        return format(self.grams, "f")

    @property
    def pounds_display(self) -> str:
        return format(self.pounds, "f")

    def to_dict(self) -> dict[str, str]:
        return {"grams": self.grams_display, "pounds": self.pounds_display}

    def to_text(self) -> str:
        return f"Total mass: {self.grams_display} grams or {self.pounds_display} lbs"


def ceil_cents(value: Decimal) -> Decimal:
    with exact_context():
        return value.quantize(CENT, rounding=ROUND_CEILING)


def floor_cents_of_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """``numerator / denominator`` floored to two decimals without an inexact quotient.

    ``denominator`` must be positive.
    """

    with exact_context():
        quotient, remainder = divmod(numerator * 100, denominator)
        # divmod truncates toward zero; step down for negative ratios.
        if remainder < 0:
            quotient -= 1
        return quotient.quantize(Decimal(1)).scaleb(-2)


def build_report(total: Decimal, units: UnitTable) -> MassReport:
    return MassReport(
        grams=ceil_cents(total),
        pounds=floor_cents_of_ratio(total, units.pound),
    )


__all__ = ["CENT", "MassReport", "ceil_cents", "floor_cents_of_ratio", "build_report"]
