"""Command line interface for the mixture mass calculator."""

from __future__ import annotations

import argparse
import json
from typing import Any

from common.logging import get_logger
from common.settings import plugin_settings

from .core import (
    MassCalculationError,
    ReferenceTables,
    calculate_file,
    get_reference_tables,
    list_elements,
    list_units,
)

logger = get_logger("mixture_mass.mass_calculator.cli")


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _tables(args: argparse.Namespace) -> ReferenceTables:
    return get_reference_tables(
        plugin_settings("mass_calculator"),
        elements_path=args.elements,
        units_path=args.units,
    )


def command_total(args: argparse.Namespace) -> None:
    summary = calculate_file(args.input, _tables(args))
    if args.text:
        print(summary.report.to_text())
    else:
        _print(summary.to_dict())


def command_units(args: argparse.Namespace) -> None:
    _print({"units": list_units(_tables(args))})


def command_elements(args: argparse.Namespace) -> None:
    _print({"elements": list_elements(_tables(args))})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mixture mass calculator CLI")
    parser.add_argument("--elements", help="Element molar mass CSV (molar_mass,name rows)")
    parser.add_argument("--units", help="Unit conversion CSV (name,grams rows)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    total_parser = subparsers.add_parser("total", help="Total mass of a mixture document")
    total_parser.add_argument("--input", required=True, help="JSON document with a components array")
    total_parser.add_argument(
        "--text", action="store_true", help="Print a single summary line instead of JSON"
    )
    total_parser.set_defaults(func=command_total)

    units_parser = subparsers.add_parser("units", help="List known units")
    units_parser.set_defaults(func=command_units)

    elements_parser = subparsers.add_parser("elements", help="List known elements")
    elements_parser.set_defaults(func=command_elements)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except MassCalculationError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
