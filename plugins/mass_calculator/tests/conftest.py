import json
from pathlib import Path

import pytest

from common.settings import CONFIG_ENV
from plugins.mass_calculator.core import ELEMENTS_ENV, UNITS_ENV, load_reference_tables

ELEMENT_ROWS = "12.011,Carbon\n15.999,Oxygen\n"
UNIT_ROWS = "gram,1\nkilogram,1000\npound,453.59237\n"


@pytest.fixture(autouse=True)
def _isolate_table_env(monkeypatch):
    monkeypatch.delenv(ELEMENTS_ENV, raising=False)
    monkeypatch.delenv(UNITS_ENV, raising=False)
    monkeypatch.delenv(CONFIG_ENV, raising=False)


@pytest.fixture
def table_paths(tmp_path: Path) -> tuple[Path, Path]:
    elements = tmp_path / "elements.csv"
    units = tmp_path / "units.csv"
    elements.write_text(ELEMENT_ROWS, encoding="utf-8")
    units.write_text(UNIT_ROWS, encoding="utf-8")
    return elements, units


@pytest.fixture
def tables(table_paths):
    return load_reference_tables(*table_paths)


@pytest.fixture
def write_document(tmp_path: Path):
    def _write(components, name: str = "mixture.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"components": components}), encoding="utf-8")
        return path

    return _write
