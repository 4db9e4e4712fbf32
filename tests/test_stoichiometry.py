"""Mole/mass proportions and limiting reactant from balanced coefficients."""

from __future__ import annotations

from fractions import Fraction

import pytest

from eq_balance import balance
from eq_balance.stoichiometry import (
    AVOGADRO,
    V_MOLAR,
    convert_amount,
    format_quantity,
    limiting_reactant,
    mole_ratio,
    product_yield,
)


@pytest.fixture(scope="module")
def propane():
    return balance("C3H8 + O2 -> CO2 + H2O")


@pytest.fixture(scope="module")
def ammonia():
    return balance("N2 + H2 -> NH3")


def test_mole_ratio(propane):
    assert mole_ratio(propane, "C3H8", "CO2") == 3
    assert mole_ratio(propane, "O2", "H2O") == Fraction(4, 5)


def test_yield_from_moles(propane):
    res = product_yield(propane, "C3H8", "H2O", 2.0)
    assert res.n_reactant == pytest.approx(2.0)
    assert res.n_product == pytest.approx(8.0)
    assert res.m_product is None


def test_yield_from_grams(propane):
    res = product_yield(
        propane, "C3H8", "CO2", 44.0,
        unit="g", molar_mass_reactant=44.0, molar_mass_product=44.0,
    )
    assert res.n_reactant == pytest.approx(1.0)
    assert res.n_product == pytest.approx(3.0)
    assert res.m_product == pytest.approx(132.0)


def test_yield_rejects_bad_input(propane):
    with pytest.raises(ValueError):
        product_yield(propane, "C3H8", "CO2", 10.0, unit="g")
    with pytest.raises(ValueError):
        product_yield(propane, "C3H8", "CO2", -1.0)
    with pytest.raises(ValueError):
        product_yield(propane, "C3H8", "CO2", 1.0, unit="kg")
    with pytest.raises(ValueError):
        product_yield(propane, "C3H8", "CO2", 1.0, molar_mass_product=0.0)
    with pytest.raises(KeyError):
        product_yield(propane, "C4H10", "CO2", 1.0)


def test_limiting_reactant(ammonia):
    # N2 : H2 = 1 : 3
    assert limiting_reactant(ammonia, {"N2": 1.0, "H2": 2.0}) == "H2"
    assert limiting_reactant(ammonia, {"N2": 0.5, "H2": 6.0}) == "N2"
    assert limiting_reactant(ammonia, {"N2": 1.0, "H2": 3.0}) is None


def test_limiting_reactant_needs_every_reactant(ammonia):
    with pytest.raises(ValueError):
        limiting_reactant(ammonia, {"N2": 1.0})


@pytest.mark.parametrize(
    "x, text",
    [
        (1.5, "1.500"),
        (44.0, "44.000"),
        (123456.0, "1.235e+05"),
        (0.0005, "5.000e-04"),
        (float("nan"), ""),
    ],
)
def test_format_quantity(x, text):
    assert format_quantity(x) == text


class TestConvertAmount:

    def test_from_grams(self):
        a = convert_amount(36.0, "g", 18.0)
        assert a.mol == pytest.approx(2.0)
        assert a.g == pytest.approx(36.0)
        assert a.L == pytest.approx(44.8)
        assert a.particles == pytest.approx(2 * 6.022e23)

    def test_from_litres(self):
        a = convert_amount(22.4, "L", 44.0)
        assert a.mol == pytest.approx(1.0)
        assert a.g == pytest.approx(44.0)

    def test_from_particles(self):
        a = convert_amount(AVOGADRO / 2, "particles", 32.0)
        assert a.mol == pytest.approx(0.5)
        assert a.L == pytest.approx(V_MOLAR / 2)
        assert a.g == pytest.approx(16.0)

    def test_from_moles(self):
        a = convert_amount(3, "mol", 28.0)
        assert a.g == pytest.approx(84.0)
        assert format_quantity(a.particles) == "1.807e+24"

    def test_rejects_bad_input(self):
        with pytest.raises(ValueError):
            convert_amount(1.0, "kg", 18.0)
        with pytest.raises(ValueError):
            convert_amount(1.0, "mol", 0.0)
        with pytest.raises(ValueError):
            convert_amount(0.0, "mol", 18.0)


def test_yield_from_litres(propane):
    # 22.4 L of propane at STP is one mole
    res = product_yield(propane, "C3H8", "CO2", 22.4, unit="L", molar_mass_product=44.0)
    assert res.n_product == pytest.approx(3.0)
    assert res.m_product == pytest.approx(132.0)
