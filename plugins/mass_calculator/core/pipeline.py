"""Single pass over a mixture: validate, convert, accumulate, report."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Callable, Iterable

from common.logging import get_logger

from .document import parse_document, read_document
from .entries import Entry, SkippedEntry, describe_rejection, validate_entry
from .mass import MassAccumulator, to_grams
from .report import MassReport, build_report
from .tables import ReferenceTables

SkipHandler = Callable[[SkippedEntry], None]

logger = get_logger("mixture_mass.mass_calculator.pipeline")


@dataclass(frozen=True)
class MassSummary:
    report: MassReport
    exact_total: Decimal
    accepted: int
    skipped: list[SkippedEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            **self.report.to_dict(),
            "exact_grams": format(self.exact_total, "f"),
            "accepted": self.accepted,
            "skipped": [item.to_dict() for item in self.skipped],
        }


def log_skipped(skipped: SkippedEntry) -> None:
    logger.warning(skipped.message)


def total_mass(
    entries: Iterable[Entry],
    tables: ReferenceTables,
    *,
    on_skip: SkipHandler | None = log_skipped,
) -> MassSummary:
    """Sum the gram equivalent of every valid entry.

    Invalid entries are passed to ``on_skip`` and left out of the total.
    Errors raised by ``entries`` itself (a malformed document component)
    propagate and no summary is produced.
    """

    accumulator = MassAccumulator()
    skipped: list[SkippedEntry] = []
    for entry in entries:
        verdict = validate_entry(entry, tables.elements, tables.units)
        if verdict != "valid":
            rejection = SkippedEntry(entry, verdict, describe_rejection(entry, verdict))
            skipped.append(rejection)
            if on_skip is not None:
                on_skip(rejection)
            continue
        accumulator.add(to_grams(entry, tables.elements, tables.units))

    report = build_report(accumulator.total, tables.units)
    logger.info(
        "Total mass %s g (%s lb) from %d components, %d skipped",
        report.grams_display,
        report.pounds_display,
        accumulator.count,
        len(skipped),
    )
    return MassSummary(
        report=report,
        exact_total=accumulator.total,
        accepted=accumulator.count,
        skipped=skipped,
    )


def calculate_document(
    text: str | bytes,
    tables: ReferenceTables,
    *,
    on_skip: SkipHandler | None = log_skipped,
) -> MassSummary:
    return total_mass(parse_document(text), tables, on_skip=on_skip)


def calculate_file(
    path: str | Path,
    tables: ReferenceTables,
    *,
    on_skip: SkipHandler | None = log_skipped,
) -> MassSummary:
    logger.info("Loading input file %s", path)
    return total_mass(read_document(path), tables, on_skip=on_skip)


__all__ = [
    "SkipHandler",
    "MassSummary",
    "log_skipped",
    "total_mass",
    "calculate_document",
    "calculate_file",
]
