import itertools
from decimal import Decimal

from plugins.mass_calculator.core import Entry, MassAccumulator, to_grams
from plugins.mass_calculator.core.mass import exact_context


def test_moles_use_exact_molar_mass(tables):
    entry = Entry("Carbon", Decimal("2"), "mol")
    with exact_context():
        expected = Decimal(12.011) * 2
    assert to_grams(entry, tables.elements, tables.units) == expected


def test_moles_keep_float_expansion_of_molar_mass(tables):
    grams = to_grams(Entry("carbon", Decimal("1"), "MOL"), tables.elements, tables.units)
    # Widened from the binary float, not from the decimal literal.
    assert grams == Decimal(12.011)
    assert grams != Decimal("12.011")


def test_scalar_units_are_exact(tables):
    entry = Entry("oxygen", Decimal("0.1"), "kilogram")
    assert to_grams(entry, tables.elements, tables.units) == Decimal("100.0")


def test_tenths_sum_without_drift(tables):
    accumulator = MassAccumulator()
    for _ in range(10):
        accumulator.add(to_grams(Entry("oxygen", Decimal("0.1"), "gram"), tables.elements, tables.units))
    assert accumulator.total == Decimal(1)
    assert accumulator.count == 10


def test_accumulator_starts_at_zero():
    assert MassAccumulator().total == Decimal(0)


def test_extreme_magnitudes_are_not_rounded():
    accumulator = MassAccumulator()
    accumulator.add(Decimal("1E+40"))
    accumulator.add(Decimal("1E-40"))
    assert accumulator.total - Decimal("1E+40") == Decimal("1E-40")


def test_sum_is_order_independent():
    amounts = [Decimal("0.1"), Decimal("1E+25"), Decimal(12.011) * 3, Decimal("0.000001")]
    totals = set()
    for order in itertools.permutations(amounts):
        accumulator = MassAccumulator()
        for amount in order:
            accumulator.add(amount)
        totals.add(accumulator.total)
    assert len(totals) == 1
