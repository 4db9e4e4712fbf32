"""Solve the homogeneous conservation system M x = 0 for integer x.

The null space of an element-conservation matrix is (for a single
reaction) one-dimensional, so one unknown is pinned: the last compound's
coefficient is fixed to 1 and the reduced system

    A x' = b,   A = M[:, :-1],   b = -M[:, -1]

is solved for the remaining coefficients. The real solution is then turned
into the smallest positive integer vector.

Two interchangeable paths:
- "float": Gaussian elimination with partial pivoting, integers recovered
  by scaling, rounding and gcd reduction (tolerance based)
- "exact": rational row reduction (sympy), integers recovered by the lcm of
  denominators (no tolerances)

"auto" runs the float path and falls back to the exact one when the
float result does not survive verification.
"""

from __future__ import annotations

import logging
from fractions import Fraction

import numpy as np
from numpy.typing import NDArray

from .errors import DegenerateSolution, TooFewCompounds, UnsolvableSystem
from .utils import INTEGER_SCALE, PIVOT_TOL, lcm_list, make_positive, primitive_vector


logger = logging.getLogger(__name__)

METHODS = ("float", "exact", "auto")


# =============================================================================
# Float path
# =============================================================================
def gaussian_solve(
    A: NDArray[np.float64],
    b: NDArray[np.float64],
    *,
    tol: float = PIVOT_TOL,
) -> NDArray[np.float64]:
    """Solve A x = b by forward elimination and back-substitution.

    A column whose best pivot is below `tol` is skipped; its variable is
    then set by a later row's back-substitution or stays 0. Rows left
    without a nonzero entry are redundant constraints and are ignored.

    Args:
        A: (m, n) coefficient matrix
        b: (m,) right-hand side
        tol: magnitude below which an entry counts as zero

    Returns:
        x: (n,) float solution
    """
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float)
    m, n = A.shape
    if b.shape != (m,):
        raise ValueError("b must have shape (m,)")

    M = np.hstack([A, b.reshape(-1, 1)])

    row = 0
    for col in range(n):
        if row >= m:
            break
        pivot = row + int(np.argmax(np.abs(M[row:, col])))
        if abs(M[pivot, col]) < tol:
            continue

        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        M[row, col:] /= M[row, col]
        M[row + 1:, col:] -= np.outer(M[row + 1:, col], M[row, col:])
        row += 1

    x = np.zeros(n)
    for r in range(m - 1, -1, -1):
        nz = np.flatnonzero(np.abs(M[r, :n]) > tol)
        if nz.size == 0:
            continue
        lead = int(nz[0])
        rest = M[r, lead + 1:n] @ x[lead + 1:]
        x[lead] = (M[r, n] - rest) / M[r, lead]

    return x


def recover_integers(
    x: NDArray[np.float64],
    *,
    scale: int = INTEGER_SCALE,
) -> NDArray[np.int64]:
    """Scale, round and gcd-reduce a real coefficient vector."""
    x = np.asarray(x, dtype=float)
    if not np.all(np.isfinite(x)):
        raise UnsolvableSystem("elimination produced a non-finite coefficient")
    scaled = np.rint(x * scale)
    if np.any(np.abs(scaled) >= 2.0 ** 63):
        raise UnsolvableSystem("coefficients are too large to represent exactly")
    scaled = scaled.astype(np.int64)
    return _canonical(primitive_vector(scaled))


# =============================================================================
# Exact path
# =============================================================================
def exact_solve(
    A: NDArray[np.float64],
    b: NDArray[np.float64],
    *,
    max_den: int = 1_000_000,
) -> list[Fraction]:
    """Exact counterpart of gaussian_solve().

    Row-reduces [A | b] over the rationals; free variables are set to 0,
    which gives the same solution the float path reaches in exact
    arithmetic. An inconsistent row (0 = c, c != 0) is an error here.
    """
    import sympy as sp

    A = np.asarray(A)
    b = np.asarray(b)
    m, n = A.shape
    if b.shape != (m,):
        raise ValueError("b must have shape (m,)")

    def q(v) -> sp.Rational:
        f = Fraction(v).limit_denominator(max_den)
        return sp.Rational(f.numerator, f.denominator)

    aug = sp.Matrix([[q(v) for v in A[i].tolist()] + [q(b[i].item())] for i in range(m)])
    R, pivots = aug.rref()
    if n in pivots:
        raise UnsolvableSystem("the conservation constraints are inconsistent")

    x = [Fraction(0)] * n
    for i, col in enumerate(pivots):
        v = R[i, n]
        x[col] = Fraction(int(v.p), int(v.q))
    return x


def fractions_to_integers(x: list[Fraction]) -> NDArray[np.int64]:
    """Clear denominators with their lcm, then gcd-reduce."""
    L = lcm_list([f.denominator for f in x])
    big = [int(f * L) for f in x]
    if any(abs(v) >= 2 ** 63 for v in big):
        raise UnsolvableSystem("coefficients are too large to represent exactly")
    ints = np.array(big, dtype=np.int64)
    return _canonical(primitive_vector(ints))


# =============================================================================
# Shared
# =============================================================================
def _canonical(ints: NDArray[np.int64]) -> NDArray[np.int64]:
    if np.any(ints == 0):
        raise DegenerateSolution(
            "a compound received a zero coefficient; the equation cannot be balanced as written"
        )
    ints = make_positive(ints)
    if np.any(ints < 0):
        raise DegenerateSolution(
            "no solution has every coefficient positive; check which side each compound is on"
        )
    return ints


def solve_coefficients(
    matrix: NDArray[np.int64],
    n_compounds: int | None = None,
    *,
    method: str = "float",
    tol: float = PIVOT_TOL,
    scale: int = INTEGER_SCALE,
) -> tuple[int, ...]:
    """Smallest positive integer x with matrix @ x == 0.

    Args:
        matrix: (n_elements, n_compounds) signed conservation matrix
        n_compounds: expected column count (defaults to matrix.shape[1])
        method: "float", "exact" or "auto"
        tol: zero threshold for the float path
        scale: integer recovery scale for the float path

    Returns:
        coefficients, one per compound, gcd 1, all > 0
    """
    if method not in METHODS:
        raise ValueError(f"unknown method {method!r}; expected one of {METHODS}")

    M = np.asarray(matrix)
    if M.ndim != 2:
        raise ValueError("matrix must be 2-D (n_elements, n_compounds)")
    n = M.shape[1] if n_compounds is None else int(n_compounds)
    if n != M.shape[1]:
        raise ValueError(f"n_compounds={n} but matrix has {M.shape[1]} columns")
    if n <= 1:
        raise TooFewCompounds("at least two compounds are needed to balance an equation")

    if method == "auto":
        try:
            return solve_coefficients(M, n, method="float", tol=tol, scale=scale)
        except (UnsolvableSystem, DegenerateSolution) as e:
            float_error = e
            logger.debug("float path failed (%s: %s); retrying exactly", e.kind, e.message)
        try:
            return solve_coefficients(M, n, method="exact")
        except (UnsolvableSystem, DegenerateSolution):
            # the exact path confirms the failure; report it as the float path saw it
            raise float_error from None

    logger.debug("solving %dx%d system with method=%s", M.shape[0], n, method)

    A = M[:, :-1]
    b = -M[:, -1]
    if method == "float":
        x = gaussian_solve(A, b, tol=tol)
        ints = recover_integers(np.append(x, 1.0), scale=scale)
    else:
        x = exact_solve(A, b)
        ints = fractions_to_integers(x + [Fraction(1)])

    # python ints: the products may not fit in int64
    if np.any(M.astype(object) @ ints.astype(object) != 0):
        raise UnsolvableSystem(
            "no coefficient vector conserves every element for this equation"
        )

    return tuple(int(v) for v in ints)
