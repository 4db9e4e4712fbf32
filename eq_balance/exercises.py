"""Exercises for worksheets.

Five kinds, each drawn at an "easy", "medium" or "hard" level:
- balancing: balance an unbalanced equation
- conversion: convert an amount of a substance between mol, g, L, particles
- stoichiometry: mass of product from a mass of one reactant
- combustion: mass of CO2 from burning a mass of fuel
- limiting: which reactant runs out first

Answer keys are computed (balance(), product_yield(), ...) rather than
stored, so the tables below only list reactions and molar masses.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .api import BalanceResult, balance
from .equation import split_equation
from .stoichiometry import (
    convert_amount,
    format_quantity,
    limiting_reactant,
    product_yield,
    to_moles,
)
from .utils import ARROW


LEVELS = ("easy", "medium", "hard")

_POOLS = {
    "easy": [
        "H2 + O2 -> H2O",
        "Na + Cl2 -> NaCl",
        "N2 + H2 -> NH3",
    ],
    "medium": [
        "Fe + O2 -> Fe2O3",
        "Al + O2 -> Al2O3",
        "C3H8 + O2 -> CO2 + H2O",
    ],
    "hard": [
        "KMnO4 + HCl -> KCl + MnCl2 + H2O + Cl2",
        "Na3PO4 + MgCl2 -> NaCl + Mg3(PO4)2",
    ],
}

_SUBSCRIPTS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


@dataclass(frozen=True)
class Exercise:
    prompt: str
    answer: str


def pool(level: str) -> list[str]:
    """Reactions available at `level`; harder levels include the easier ones."""
    if level not in LEVELS:
        raise ValueError(f"level must be one of {LEVELS}, got {level!r}")
    out: list[str] = []
    for lv in LEVELS[:LEVELS.index(level) + 1]:
        out.extend(_POOLS[lv])
    return out


def to_subscripts(formula: str) -> str:
    """'Mg3(PO4)2' -> 'Mg₃(PO₄)₂'."""
    return formula.translate(_SUBSCRIPTS)


def render_unicode(result: BalanceResult) -> str:
    """Balanced equation with subscripted formulas, coefficients kept plain."""
    def side(compounds, coeffs):
        return " + ".join(
            f"{'' if k == 1 else k}{to_subscripts(c)}" for c, k in zip(compounds, coeffs)
        )

    n = len(result.reactants)
    left = side(result.reactants, result.coefficients[:n])
    right = side(result.products, result.coefficients[n:])
    return f"{left} {ARROW} {right}"


def render_unbalanced(text: str) -> str:
    reactants, products = split_equation(text)
    left = " + ".join(to_subscripts(c) for c in reactants)
    right = " + ".join(to_subscripts(c) for c in products)
    return f"{left} {ARROW} {right}"


def balancing_exercises(
    level: str,
    count: int,
    *,
    rng: np.random.Generator | None = None,
) -> list[Exercise]:
    """Draw `count` exercises (with replacement) from the pool for `level`."""
    if count < 0:
        raise ValueError("count must be >= 0")
    reactions = pool(level)
    if rng is None:
        rng = np.random.default_rng()

    exs: list[Exercise] = []
    for i in rng.integers(0, len(reactions), size=count):
        text = reactions[int(i)]
        exs.append(
            Exercise(
                prompt=f"Balance the following equation:\n{render_unbalanced(text)}",
                answer=render_unicode(balance(text)),
            )
        )
    return exs


# =============================================================================
# Amount conversions
# =============================================================================
# (name, formula, molar mass g/mol)
SUBSTANCES = [
    ("water", "H2O", 18.0),
    ("carbon dioxide", "CO2", 44.0),
    ("oxygen gas", "O2", 32.0),
    ("nitrogen gas", "N2", 28.0),
    ("sodium chloride", "NaCl", 58.5),
]

_LEVEL_UNITS = {
    "easy": ("mol", "g"),
    "medium": ("mol", "g", "L"),
    "hard": ("mol", "g", "L", "particles"),
}

_UNIT_TEXT = {"mol": "mol", "g": "g", "L": "L (STP)", "particles": "particles"}


def _randint(rng: np.random.Generator, lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi]."""
    return int(rng.integers(lo, hi + 1))


def _choice(rng: np.random.Generator, seq):
    return seq[int(rng.integers(0, len(seq)))]


def _check(level: str, count: int) -> None:
    if level not in LEVELS:
        raise ValueError(f"level must be one of {LEVELS}, got {level!r}")
    if count < 0:
        raise ValueError("count must be >= 0")


def conversion_exercises(
    level: str,
    count: int,
    *,
    rng: np.random.Generator | None = None,
) -> list[Exercise]:
    _check(level, count)
    if rng is None:
        rng = np.random.default_rng()

    units = _LEVEL_UNITS[level]
    exs: list[Exercise] = []
    for _ in range(count):
        name, formula, mm = _choice(rng, SUBSTANCES)
        src = _choice(rng, units)
        dst = _choice(rng, [u for u in units if u != src])
        value = _randint(rng, 2, 50)

        amounts = convert_amount(value, src, mm)
        src_text = f"{value} {_UNIT_TEXT[src]}"
        sub = to_subscripts(formula)
        exs.append(
            Exercise(
                prompt=(
                    f"For {name} ({sub}), with a molar mass of about {mm:g} g/mol, convert:\n"
                    f"{src_text} {ARROW} ({_UNIT_TEXT[dst]})."
                ),
                answer=(
                    f"{src_text} of {sub} corresponds to approximately "
                    f"{format_quantity(getattr(amounts, dst))} {_UNIT_TEXT[dst]}."
                ),
            )
        )
    return exs


# =============================================================================
# Mass-to-mass stoichiometry
# =============================================================================
# (equation, reactant, product, molar mass of reactant, molar mass of product)
MASS_REACTIONS = [
    ("H2 + O2 -> H2O", "H2", "H2O", 2.0, 18.0),
    ("N2 + H2 -> NH3", "H2", "NH3", 2.0, 17.0),
    ("C + O2 -> CO2", "C", "CO2", 12.0, 44.0),
]

_MASS_RANGES = {"easy": (2, 10), "medium": (5, 30), "hard": (10, 50)}


def _mass_answer(reactant, product, mass, mm_r, res) -> str:
    r, p = to_subscripts(reactant), to_subscripts(product)
    return (
        f"n({r}) = {mass} / {mm_r:g} ≈ {format_quantity(res.n_reactant)} mol.\n"
        f"By the stoichiometric ratio, n({p}) ≈ {format_quantity(res.n_product)} mol.\n"
        f"So m({p}) ≈ {format_quantity(res.m_product)} g."
    )


def stoichiometry_exercises(
    level: str,
    count: int,
    *,
    rng: np.random.Generator | None = None,
) -> list[Exercise]:
    _check(level, count)
    if rng is None:
        rng = np.random.default_rng()

    exs: list[Exercise] = []
    for _ in range(count):
        text, reactant, product, mm_r, mm_p = _choice(rng, MASS_REACTIONS)
        mass = _randint(rng, *_MASS_RANGES[level])

        balanced = balance(text)
        res = product_yield(
            balanced, reactant, product, mass,
            unit="g", molar_mass_reactant=mm_r, molar_mass_product=mm_p,
        )
        r, p = to_subscripts(reactant), to_subscripts(product)
        exs.append(
            Exercise(
                prompt=(
                    f"Consider the reaction:\n{render_unicode(balanced)}\n\n"
                    f"Taking {r} as the limiting reagent and the others in excess, "
                    f"what mass of {p} forms from {mass} g of {r} at 100% yield?"
                ),
                answer=_mass_answer(reactant, product, mass, mm_r, res),
            )
        )
    return exs


# =============================================================================
# Combustion
# =============================================================================
# (fuel, molar mass of fuel)
FUELS = [
    ("CH4", 16.0),
    ("C3H8", 44.0),
]
MM_CO2 = 44.0

_FUEL_RANGES = {"easy": (5, 20), "medium": (10, 40), "hard": (20, 80)}


def combustion_exercises(
    level: str,
    count: int,
    *,
    rng: np.random.Generator | None = None,
) -> list[Exercise]:
    _check(level, count)
    if rng is None:
        rng = np.random.default_rng()

    exs: list[Exercise] = []
    for _ in range(count):
        fuel, mm = _choice(rng, FUELS)
        mass = _randint(rng, *_FUEL_RANGES[level])

        balanced = balance(f"{fuel} + O2 -> CO2 + H2O")
        res = product_yield(
            balanced, fuel, "CO2", mass,
            unit="g", molar_mass_reactant=mm, molar_mass_product=MM_CO2,
        )
        f = to_subscripts(fuel)
        exs.append(
            Exercise(
                prompt=(
                    f"The complete combustion of {f} is:\n{render_unicode(balanced)}\n\n"
                    f"What mass of CO₂ is produced by burning {mass} g of {f}, "
                    "with oxygen in excess and 100% yield?"
                ),
                answer=_mass_answer(fuel, "CO2", mass, mm, res),
            )
        )
    return exs


# =============================================================================
# Limiting reactant
# =============================================================================
_LIMITING_TEXT = "N2 + H2 -> NH3"
_LIMITING_MM = {"N2": 28.0, "H2": 2.0}
_LIMITING_RANGES = {
    "easy": {"N2": (10, 30), "H2": (1, 6)},
    "medium": {"N2": (20, 50), "H2": (4, 12)},
    "hard": {"N2": (30, 80), "H2": (8, 20)},
}


def limiting_exercises(
    level: str,
    count: int,
    *,
    rng: np.random.Generator | None = None,
) -> list[Exercise]:
    _check(level, count)
    if rng is None:
        rng = np.random.default_rng()

    balanced = balance(_LIMITING_TEXT)
    exs: list[Exercise] = []
    for _ in range(count):
        masses = {s: _randint(rng, *_LIMITING_RANGES[level][s]) for s in balanced.reactants}
        moles = {s: to_moles(m, "g", _LIMITING_MM[s]) for s, m in masses.items()}
        limiting = limiting_reactant(balanced, moles)

        given = " and ".join(f"{m} g of {to_subscripts(s)}" for s, m in masses.items())
        lines = [
            f"n({to_subscripts(s)}) = {masses[s]} / {_LIMITING_MM[s]:g} ≈ "
            f"{format_quantity(moles[s])} mol;"
            for s in balanced.reactants
        ]
        lines += [
            f"n({to_subscripts(s)}) / {balanced.coefficient(s)} ≈ "
            f"{format_quantity(moles[s] / balanced.coefficient(s))};"
            for s in balanced.reactants
        ]
        if limiting is None:
            verdict = "Both are consumed exactly in the stoichiometric proportion."
        else:
            verdict = f"The limiting reactant is {to_subscripts(limiting)}."

        exs.append(
            Exercise(
                prompt=(
                    f"Consider the synthesis of ammonia:\n{render_unicode(balanced)}\n\n"
                    f"An experiment mixes {given}. At 100% yield, "
                    "which reactant is limiting?"
                ),
                answer="\n".join(lines + ["", verdict]),
            )
        )
    return exs


# =============================================================================
# Dispatch
# =============================================================================
GENERATORS = {
    "balancing": balancing_exercises,
    "conversion": conversion_exercises,
    "stoichiometry": stoichiometry_exercises,
    "combustion": combustion_exercises,
    "limiting": limiting_exercises,
}

KINDS = tuple(GENERATORS)


def generate(
    kind: str,
    level: str,
    count: int,
    *,
    rng: np.random.Generator | None = None,
) -> list[Exercise]:
    """Draw `count` exercises of `kind` at `level`."""
    if kind not in GENERATORS:
        raise ValueError(f"kind must be one of {KINDS}, got {kind!r}")
    return GENERATORS[kind](level, count, rng=rng)
