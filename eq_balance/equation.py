"""Split an equation into compounds and build the conservation matrix.

Rows are elements in first-seen order (reactants left to right, then
products); columns are compounds in the order [*reactants, *products].
Reactant entries are positive, product entries negative:

    M[e, j] = +count(e, j)   j a reactant
    M[e, j] = -count(e, j)   j a product

so a balanced equation is a positive vector x with M x = 0.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .errors import EmptyCompound, InvalidEquationFormat
from .formula import parse_formula


CANONICAL_ARROW = "->"

# "->" and "→", plus "=>"/"⇒" which older input forms used
_ARROWS = re.compile(r"->|=>|→|⇒")
_WHITESPACE = re.compile(r"\s+")
_LEADING_DIGITS = re.compile(r"^[0-9]+")

# largest atom count the int64 matrix can hold
MAX_COUNT = int(np.iinfo(np.int64).max)


@dataclass(frozen=True)
class ParsedEquation:
    """Compounds of both sides and their signed element matrix.

    Shapes:
      matrix: (n_elements, n_compounds), int64, read-only
    """

    reactants: tuple[str, ...]
    products: tuple[str, ...]
    elements: tuple[str, ...]
    matrix: NDArray[np.int64]

    def __post_init__(self):
        M = np.array(self.matrix, dtype=np.int64).reshape(len(self.elements), -1)
        if M.shape[1] != len(self.reactants) + len(self.products):
            raise ValueError(
                f"matrix has {M.shape[1]} columns but there are "
                f"{len(self.reactants) + len(self.products)} compounds"
            )
        M.setflags(write=False)
        object.__setattr__(self, "matrix", M)

    @property
    def compounds(self) -> tuple[str, ...]:
        return self.reactants + self.products

    @property
    def n_elements(self) -> int:
        return int(self.matrix.shape[0])

    @property
    def n_compounds(self) -> int:
        return int(self.matrix.shape[1])

    @property
    def n_reactants(self) -> int:
        return len(self.reactants)

    def nullity(self) -> int:
        """Exact dimension of {x | M x = 0}.

        1 for an ordinary reaction; larger when the text mixes several
        independent reactions.
        """
        import sympy as sp

        return self.n_compounds - sp.Matrix(self.matrix.tolist()).rank()


def normalize_equation(text: str) -> str:
    """Drop all whitespace and rewrite every arrow spelling as '->'."""
    return _ARROWS.sub(CANONICAL_ARROW, _WHITESPACE.sub("", text))


def split_equation(text: str) -> tuple[list[str], list[str]]:
    """Return (reactants, products) as lists of compound strings."""
    cleaned = normalize_equation(text)
    sides = cleaned.split(CANONICAL_ARROW)
    if len(sides) != 2:
        raise InvalidEquationFormat(
            f"expected exactly one arrow, found {len(sides) - 1} "
            "(use the form: H2 + O2 -> H2O)"
        )
    left, right = sides
    if not left or not right:
        raise InvalidEquationFormat(
            "both sides need at least one compound (use the form: H2 + O2 -> H2O)"
        )
    # a coefficient typed before a formula is not part of it
    return (
        [_LEADING_DIGITS.sub("", c) for c in left.split("+")],
        [_LEADING_DIGITS.sub("", c) for c in right.split("+")],
    )


def build_equation(text: str) -> ParsedEquation:
    """Parse every compound and assemble the conservation matrix."""
    reactants, products = split_equation(text)
    compounds = reactants + products

    counts = []
    elements: dict[str, None] = {}  # ordered set
    for compound in compounds:
        c = parse_formula(compound)
        if not any(c.values()):
            where = "reactant" if len(counts) < len(reactants) else "product"
            shown = repr(compound) if compound else "an empty compound"
            raise EmptyCompound(f"{where} {shown} contains no element symbols")
        too_big = [el for el, n in c.items() if n > MAX_COUNT]
        if too_big:
            raise InvalidEquationFormat(
                f"atom count of {too_big[0]} in {compound!r} exceeds {MAX_COUNT}"
            )
        counts.append(c)
        for el in c:
            elements.setdefault(el)

    n_left = len(reactants)
    M = np.zeros((len(elements), len(compounds)), dtype=np.int64)
    for row, el in enumerate(elements):
        for col, c in enumerate(counts):
            n = c.get(el, 0)
            M[row, col] = n if col < n_left else -n

    return ParsedEquation(
        reactants=tuple(reactants),
        products=tuple(products),
        elements=tuple(elements),
        matrix=M,
    )
