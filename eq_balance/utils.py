"""Shared constants and integer helpers.

- Tolerances for the floating point elimination
- Scale used to recover integers from a real solution
- gcd/lcm reductions and sign canonicalization of integer vectors
"""

from __future__ import annotations

from functools import reduce
from math import gcd

import numpy as np
from numpy.typing import NDArray


# =============================================================================
# Numeric defaults
# =============================================================================
PIVOT_TOL = 1e-10
INTEGER_SCALE = 1000

# Glyph used between the two sides of a rendered equation
ARROW = "→"


# =============================================================================
# Integer helpers
# =============================================================================
def _lcm(a: int, b: int) -> int:
    return abs(a * b) // gcd(a, b) if a and b else abs(a or b)


def lcm_list(xs: list[int]) -> int:
    return reduce(_lcm, xs, 1)


def gcd_list(xs: list[int]) -> int:
    """GCD of a list of integers; 0 when every entry is 0."""
    return reduce(gcd, (abs(int(x)) for x in xs), 0)


def primitive_vector(v: NDArray[np.int64]) -> NDArray[np.int64]:
    """Divide an integer vector by the gcd of its entries.

    A zero gcd (all-zero vector) is treated as 1.
    """
    v = np.asarray(v, dtype=np.int64)
    g = gcd_list(v.tolist())
    if g == 0:
        g = 1
    return v // g


def make_positive(v: NDArray[np.int64]) -> NDArray[np.int64]:
    """Flip the whole vector when any entry is negative.

    The null space of a homogeneous system is sign-symmetric, so the
    orientation is fixed globally rather than per entry.
    """
    if np.any(v < 0):
        return -v
    return v
