"""Public entry point: balance a textual chemical equation.

Pipeline:
  text -> compounds (equation.split_equation / formula.parse_formula)
       -> conservation matrix (equation.build_equation)
       -> integer coefficients (solver.solve_coefficients)
       -> rendered sides

This module defines:
- BalanceResult dataclass
- balance() entrypoint
- format_side() / check_conservation() helpers
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .equation import ParsedEquation, build_equation
from .errors import DegenerateSolution, UnsolvableSystem
from .solver import solve_coefficients
from .utils import ARROW


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceResult:
    reactants: tuple[str, ...]
    products: tuple[str, ...]
    coefficients: tuple[int, ...]   # [*reactants, *products]
    left_side: str
    right_side: str

    @property
    def equation(self) -> str:
        return f"{self.left_side} {ARROW} {self.right_side}"

    @property
    def compounds(self) -> tuple[str, ...]:
        return self.reactants + self.products

    def coefficient(self, compound: str) -> int:
        """Coefficient of a compound, looked up by its formula text."""
        try:
            return self.coefficients[self.compounds.index(compound)]
        except ValueError:
            raise KeyError(compound) from None

    def __str__(self) -> str:
        return self.equation


def format_side(compounds: Sequence[str], coefficients: Sequence[int]) -> str:
    """'2H2 + O2': coefficient 1 is left implicit."""
    return " + ".join(
        f"{'' if k == 1 else k}{c}" for c, k in zip(compounds, coefficients)
    )


def check_conservation(parsed: ParsedEquation, coefficients: Sequence[int]) -> bool:
    """True when every element has the same atom total on both sides."""
    x = np.asarray(coefficients, dtype=np.int64)
    if x.shape != (parsed.n_compounds,):
        raise ValueError("need one coefficient per compound")
    return bool(np.all(parsed.matrix.astype(object) @ x.astype(object) == 0))


def balance(text: str, *, method: str = "auto") -> BalanceResult:
    """Balance `text`, e.g. 'C3H8 + O2 -> CO2 + H2O'.

    Raises a BalanceError subclass (InvalidEquationFormat, TooFewCompounds,
    DegenerateSolution, UnsolvableSystem) when no balanced form exists.
    """
    parsed = build_equation(text)
    logger.debug(
        "parsed %d reactant(s), %d product(s), elements=%s",
        len(parsed.reactants), len(parsed.products), ",".join(parsed.elements),
    )

    try:
        coeffs = solve_coefficients(parsed.matrix, parsed.n_compounds, method=method)
    except (DegenerateSolution, UnsolvableSystem):
        if parsed.nullity() > 1:
            logger.warning(
                "%r combines independent reactions; no single balanced form exists",
                text,
            )
        raise

    n_left = parsed.n_reactants
    return BalanceResult(
        reactants=parsed.reactants,
        products=parsed.products,
        coefficients=coeffs,
        left_side=format_side(parsed.reactants, coeffs[:n_left]),
        right_side=format_side(parsed.products, coeffs[n_left:]),
    )
