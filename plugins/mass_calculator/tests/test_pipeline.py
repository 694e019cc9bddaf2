import itertools
import logging
from decimal import Decimal

import pytest

from plugins.mass_calculator.core import (
    DocumentParseError,
    Entry,
    calculate_document,
    calculate_file,
    total_mass,
)
from plugins.mass_calculator.core.mass import exact_context


def _entries(*rows):
    return [Entry(name, Decimal(str(quantity)), unit) for name, quantity, unit in rows]


def test_carbon_and_oxygen_scenario(tables):
    summary = total_mass(_entries(("carbon", 2, "mol"), ("oxygen", 500, "gram")), tables)
    with exact_context():
        expected = Decimal(12.011) * 2 + 500
    assert summary.exact_total == expected
    assert summary.report.grams_display == "524.03"
    assert summary.report.pounds_display == "1.15"
    assert summary.accepted == 2
    assert summary.skipped == []


def test_empty_mixture(tables):
    summary = total_mass([], tables)
    assert summary.report.to_dict() == {"grams": "0.00", "pounds": "0.00"}
    assert summary.accepted == 0


def test_invalid_entries_are_skipped_and_reported(tables):
    seen = []
    summary = total_mass(
        _entries(
            ("oxygen", 500, "gram"),
            ("nitrogen", 5, "furlong"),
            ("unobtainium", 3, "gram"),
        ),
        tables,
        on_skip=seen.append,
    )
    assert summary.exact_total == Decimal(500)
    assert [item.reason for item in seen] == ["invalid_unit", "invalid_element"]
    assert summary.skipped == seen
    assert summary.accepted == 1


def test_skipped_entries_are_logged_by_default(tables, caplog):
    with caplog.at_level(logging.WARNING):
        total_mass(_entries(("carbon", 1, "furlong")), tables)
    assert "furlong" in caplog.text


def test_skips_without_handler(tables):
    summary = total_mass(_entries(("carbon", 1, "furlong")), tables, on_skip=None)
    assert len(summary.skipped) == 1


def test_permutations_give_identical_totals(tables):
    rows = [
        ("carbon", "0.1", "gram"),
        ("oxygen", "3.75", "mol"),
        ("carbon", "1E+20", "kilogram"),
        ("oxygen", "0.000007", "pound"),
    ]
    totals = {
        total_mass(_entries(*order), tables, on_skip=None).exact_total
        for order in itertools.permutations(rows)
    }
    assert len(totals) == 1


def test_malformed_component_aborts_without_summary(tables):
    document = (
        '{"components": ['
        '{"name": "oxygen", "mass": 500, "units": "gram"},'
        '{"name": "carbon", "units": "gram"}'
        ']}'
    )
    with pytest.raises(DocumentParseError):
        calculate_document(document, tables)


def test_calculate_file(tables, write_document):
    path = write_document(
        [
            {"name": "Carbon", "mass": 2, "units": "mol"},
            {"name": "OXYGEN", "mass": 0.5, "units": "Kilogram"},
        ]
    )
    summary = calculate_file(path, tables)
    assert summary.to_dict()["grams"] == "524.03"
    assert summary.to_dict()["pounds"] == "1.15"


def test_summary_dict_lists_skipped(tables):
    summary = total_mass(_entries(("carbon", "1.5", "furlong")), tables, on_skip=None)
    payload = summary.to_dict()
    assert payload["accepted"] == 0
    assert payload["exact_grams"] == "0"
    assert payload["skipped"][0]["reason"] == "invalid_unit"
    assert payload["skipped"][0]["mass"] == "1.5"
