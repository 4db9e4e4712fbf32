"""Chemical equation balancing.

Core contract:
- input: an equation such as "C3H8 + O2 -> CO2 + H2O"
- workflow: parse formulas -> conservation matrix -> solve M x = 0
  with the last coefficient pinned to 1 -> smallest positive integers
- output: BalanceResult (coefficients and rendered sides) or a BalanceError
"""

from .api import BalanceResult, balance, check_conservation, format_side
from .equation import ParsedEquation, build_equation
from .errors import (
    BalanceError,
    DegenerateSolution,
    EmptyCompound,
    InvalidEquationFormat,
    TooFewCompounds,
    UnsolvableSystem,
)
from .formula import parse_formula
from .solver import solve_coefficients
