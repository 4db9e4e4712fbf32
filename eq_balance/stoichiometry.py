"""Mole and mass proportions read off a balanced equation.

For a balanced reaction  a R + ... -> b P + ...  the amounts consumed and
formed keep the coefficient ratio:

    n_P = (b / a) * n_R
    m_P = n_P * M_P

Limiting reactant: the reactant with the smallest n_i / a_i runs out first.

Amounts convert through moles, with an ideal gas at STP for volumes:

    n = m / M = V / V_MOLAR = N / AVOGADRO
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Mapping

from .api import BalanceResult


AVOGADRO = 6.022e23    # particles/mol
V_MOLAR = 22.4         # L/mol at STP

UNITS = ("mol", "g", "L", "particles")


@dataclass(frozen=True)
class YieldResult:
    n_reactant: float           # mol of the given reactant
    n_product: float            # mol of product formed
    m_product: float | None     # g of product (None without its molar mass)


@dataclass(frozen=True)
class Amounts:
    mol: float
    g: float
    L: float
    particles: float


def _positive(name: str, v: float) -> float:
    v = float(v)
    if not math.isfinite(v) or v <= 0:
        raise ValueError(f"{name} must be a positive number, got {v!r}")
    return v


def mole_ratio(result: BalanceResult, reactant: str, product: str) -> Fraction:
    """n_product / n_reactant as an exact fraction of coefficients."""
    return Fraction(result.coefficient(product), result.coefficient(reactant))


def to_moles(value: float, unit: str, molar_mass: float | None = None) -> float:
    """Moles in `value` `unit`; grams need the molar mass (g/mol)."""
    if unit not in UNITS:
        raise ValueError(f"unit must be one of {UNITS}, got {unit!r}")
    value = _positive("value", value)
    if unit == "g":
        if molar_mass is None:
            raise ValueError("a molar mass is required to convert grams")
        return value / _positive("molar_mass", molar_mass)
    if unit == "L":
        return value / V_MOLAR
    if unit == "particles":
        return value / AVOGADRO
    return value


def convert_amount(value: float, unit: str, molar_mass: float) -> Amounts:
    """Express an amount of one substance in every unit.

    >>> convert_amount(36.0, "g", 18.0).mol
    2.0
    """
    n = to_moles(value, unit, molar_mass)
    return Amounts(
        mol=n,
        g=n * _positive("molar_mass", molar_mass),
        L=n * V_MOLAR,
        particles=n * AVOGADRO,
    )


def product_yield(
    result: BalanceResult,
    reactant: str,
    product: str,
    amount: float,
    *,
    unit: str = "mol",
    molar_mass_reactant: float | None = None,
    molar_mass_product: float | None = None,
) -> YieldResult:
    """Amount of `product` formed from `amount` of `reactant` (100 % yield).

    Args:
        amount: quantity of reactant, in `unit`
        unit: one of UNITS ("g" needs molar_mass_reactant)
        molar_mass_reactant / molar_mass_product: g/mol
    """
    n_r = to_moles(amount, unit, molar_mass_reactant)

    n_p = float(mole_ratio(result, reactant, product)) * n_r
    m_p = None
    if molar_mass_product is not None:
        m_p = n_p * _positive("molar_mass_product", molar_mass_product)

    return YieldResult(n_reactant=n_r, n_product=n_p, m_product=m_p)


def limiting_reactant(
    result: BalanceResult,
    moles: Mapping[str, float],
    *,
    rel_tol: float = 1e-9,
) -> str | None:
    """Reactant consumed first, or None when all run out together.

    `moles` must give an amount for every reactant of `result`.
    """
    missing = [r for r in result.reactants if r not in moles]
    if missing:
        raise ValueError(f"no amount given for reactant(s): {', '.join(missing)}")

    ratios = {
        r: _positive(f"moles[{r!r}]", moles[r]) / result.coefficient(r)
        for r in result.reactants
    }
    lo = min(ratios.values())
    if all(math.isclose(v, lo, rel_tol=rel_tol) for v in ratios.values()):
        return None
    return min(ratios, key=ratios.get)


def format_quantity(x: float, digits: int = 3) -> str:
    """Fixed notation, switching to scientific for very large/small values."""
    x = float(x)
    if not math.isfinite(x):
        return ""
    if abs(x) >= 1e5 or abs(x) <= 1e-3:
        return f"{x:.{digits}e}"
    return f"{x:.{digits}f}"
