import logging
from decimal import Decimal

import pytest

from plugins.mass_calculator.core import (
    DEFAULT_ELEMENTS_TABLE,
    DEFAULT_UNITS_TABLE,
    TableLoadError,
    load_element_table,
    load_reference_tables,
    load_unit_table,
)


def test_tables_are_case_insensitive(tables):
    assert "CARBON" in tables.elements
    assert tables.elements.molar_mass("Oxygen") == 15.999
    assert "KiloGram" in tables.units
    assert tables.units.scale("KILOGRAM") == Decimal("1000")
    assert tables.units.pound == Decimal("453.59237")


def test_unit_multipliers_stay_exact(tables):
    assert isinstance(tables.units.scale("gram"), Decimal)
    assert isinstance(tables.elements.molar_mass("carbon"), float)


def test_tables_are_read_only(tables):
    with pytest.raises(TypeError):
        tables.elements.masses["helium"] = 4.0
    with pytest.raises(TypeError):
        tables.units.scales["tonne"] = Decimal("1000000")


def test_blank_lines_are_ignored(tmp_path):
    path = tmp_path / "units.csv"
    path.write_text("gram,1\n\n  ,  \npound,453.59237\n", encoding="utf-8")
    table = load_unit_table(path)
    assert table.names() == ["gram", "pound"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(TableLoadError, match="not found"):
        load_element_table(tmp_path / "missing.csv")


def test_missing_table_aborts_reference_loading(tmp_path, table_paths):
    _, units = table_paths
    with pytest.raises(TableLoadError):
        load_reference_tables(tmp_path / "nope.csv", units)


def test_non_numeric_molar_mass_reports_line(tmp_path):
    path = tmp_path / "elements.csv"
    path.write_text("12.011,Carbon\nheavy,Lead\n", encoding="utf-8")
    with pytest.raises(TableLoadError, match=":2"):
        load_element_table(path)


def test_wrong_column_count_rejected(tmp_path):
    path = tmp_path / "elements.csv"
    path.write_text("12.011,Carbon,extra\n", encoding="utf-8")
    with pytest.raises(TableLoadError, match="expected 2 columns"):
        load_element_table(path)


@pytest.mark.parametrize("value", ["0", "-5", "NaN", "Infinity"])
def test_non_positive_multiplier_rejected(tmp_path, value):
    path = tmp_path / "units.csv"
    path.write_text(f"gram,{value}\npound,453.59237\n", encoding="utf-8")
    with pytest.raises(TableLoadError):
        load_unit_table(path)


def test_mol_is_reserved(tmp_path):
    path = tmp_path / "units.csv"
    path.write_text("MOL,1\npound,453.59237\n", encoding="utf-8")
    with pytest.raises(TableLoadError, match="reserved"):
        load_unit_table(path)


def test_pound_is_required(tmp_path):
    path = tmp_path / "units.csv"
    path.write_text("gram,1\n", encoding="utf-8")
    with pytest.raises(TableLoadError, match="pound"):
        load_unit_table(path)


def test_duplicate_keeps_last_value_and_warns(tmp_path, caplog):
    path = tmp_path / "elements.csv"
    path.write_text("12.0,Carbon\n12.011,carbon\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        table = load_element_table(path)
    assert table.molar_mass("carbon") == 12.011
    assert "duplicate" in caplog.text


def test_bundled_tables_load():
    bundled = load_reference_tables(DEFAULT_ELEMENTS_TABLE, DEFAULT_UNITS_TABLE)
    assert len(bundled.elements) == 118
    assert bundled.elements.molar_mass("carbon") == 12.011
    assert bundled.units.scale("milligram") == Decimal("0.001")
    assert bundled.units.scale("yottagram") == Decimal(10) ** 24
    assert "mol" not in bundled.units
