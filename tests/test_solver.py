"""Elimination, integer recovery and the float/exact/auto solver paths."""

from __future__ import annotations

from fractions import Fraction

import numpy as np
import pytest

from eq_balance.errors import DegenerateSolution, TooFewCompounds, UnsolvableSystem
from eq_balance.solver import (
    exact_solve,
    fractions_to_integers,
    gaussian_solve,
    recover_integers,
    solve_coefficients,
)


# H2 + O2 -> H2O
WATER = np.array([
    [2, 0, -2],   # H
    [0, 2, -1],   # O
])

# C6H12O6 + O2 -> CO2 + H2O
GLUCOSE = np.array([
    [ 6, 0, -1,  0],   # C
    [12, 0,  0, -2],   # H
    [ 6, 2, -2, -1],   # O
])


class TestGaussianSolve:

    def test_diagonal(self):
        x = gaussian_solve(np.array([[2.0, 0.0], [0.0, 2.0]]), np.array([2.0, 1.0]))
        assert np.allclose(x, [1.0, 0.5])

    def test_requires_row_swap(self):
        x = gaussian_solve(np.array([[0.0, 1.0], [1.0, 0.0]]), np.array([3.0, 4.0]))
        assert np.allclose(x, [4.0, 3.0])

    def test_redundant_rows_are_ignored(self):
        A = np.array([[1.0, 1.0], [2.0, 2.0], [1.0, -1.0]])
        b = np.array([2.0, 4.0, 0.0])
        assert np.allclose(gaussian_solve(A, b), [1.0, 1.0])

    def test_zero_column_defaults_to_zero(self):
        A = np.array([[0.0, 1.0], [0.0, 2.0]])
        b = np.array([3.0, 6.0])
        assert np.allclose(gaussian_solve(A, b), [0.0, 3.0])

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            gaussian_solve(np.eye(2), np.ones(3))


class TestIntegerRecovery:

    def test_scale_round_reduce(self):
        assert recover_integers(np.array([1.0, 0.5, 1.0])).tolist() == [2, 1, 2]

    def test_round_off_is_absorbed(self):
        x = np.array([0.25 + 1e-9, 1.25 - 1e-9, 0.75, 1.0])
        assert recover_integers(x).tolist() == [1, 5, 3, 4]

    def test_negative_vector_is_flipped(self):
        assert recover_integers(np.array([-1.0, -0.5, -1.0])).tolist() == [2, 1, 2]

    def test_zero_coefficient(self):
        with pytest.raises(DegenerateSolution):
            recover_integers(np.array([0.0, 1.0]))

    def test_mixed_signs(self):
        with pytest.raises(DegenerateSolution):
            recover_integers(np.array([2.0, -2.0, 1.0]))

    def test_non_finite(self):
        with pytest.raises(UnsolvableSystem):
            recover_integers(np.array([np.nan, 1.0]))

    def test_fractions(self):
        x = [Fraction(1, 6), Fraction(1), Fraction(1), Fraction(1)]
        assert fractions_to_integers(x).tolist() == [1, 6, 6, 6]


def test_exact_solve_matches_float():
    A = WATER[:, :-1]
    b = -WATER[:, -1]
    assert exact_solve(A, b) == [Fraction(1), Fraction(1, 2)]
    assert np.allclose(gaussian_solve(A, b), [1.0, 0.5])


def test_exact_solve_inconsistent():
    with pytest.raises(UnsolvableSystem):
        exact_solve(np.array([[2], [0]]), np.array([0, 2]))


@pytest.mark.parametrize("method", ["float", "exact", "auto"])
def test_water(method):
    assert solve_coefficients(WATER, 3, method=method) == (2, 1, 2)


def test_n_compounds_defaults_to_columns():
    assert solve_coefficients(WATER) == (2, 1, 2)


def test_float_rounding_failure_is_caught():
    # last coefficient pinned to 1 makes glucose 1/6, which 1/1000 cannot hold
    with pytest.raises(UnsolvableSystem):
        solve_coefficients(GLUCOSE, method="float")
    assert solve_coefficients(GLUCOSE, method="exact") == (1, 6, 6, 6)
    assert solve_coefficients(GLUCOSE, method="auto") == (1, 6, 6, 6)


def test_no_shared_element():
    # H2 -> O2
    M = np.array([[2, 0], [0, -2]])
    with pytest.raises(DegenerateSolution):
        solve_coefficients(M, method="float")
    with pytest.raises(UnsolvableSystem):
        solve_coefficients(M, method="exact")
    # auto reports what the float path saw
    with pytest.raises(DegenerateSolution):
        solve_coefficients(M, method="auto")


def test_wrong_side_gives_mixed_signs():
    # H2O + H2 -> O2
    M = np.array([[2, 2, 0], [1, 0, -2]])
    for method in ("float", "exact", "auto"):
        with pytest.raises(DegenerateSolution):
            solve_coefficients(M, method=method)


def test_too_few_compounds():
    with pytest.raises(TooFewCompounds):
        solve_coefficients(np.array([[1]]), 1)


def test_bad_arguments():
    with pytest.raises(ValueError):
        solve_coefficients(WATER, method="newton")
    with pytest.raises(ValueError):
        solve_coefficients(WATER, 4)
    with pytest.raises(ValueError):
        solve_coefficients(np.array([1, 2, 3]))


def test_exact_integers_beyond_int64():
    x = [Fraction(1, 3 ** 50), Fraction(1)]
    with pytest.raises(UnsolvableSystem):
        fractions_to_integers(x)


def test_float_integers_beyond_int64():
    with pytest.raises(UnsolvableSystem):
        recover_integers(np.array([1e30, 1.0]))
