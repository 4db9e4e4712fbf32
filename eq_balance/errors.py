"""Errors raised while balancing an equation.

All of them are recoverable at the call boundary: the computation is
deterministic, so the caller reports the message and moves on.
"""

from __future__ import annotations


class BalanceError(Exception):
    """Base class; `kind` names the error category, `message` the human text.

    The categories are the direct subclasses of BalanceError; a finer
    subclass (EmptyCompound) reports the category it belongs to.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        for cls in type(self).__mro__:
            if BalanceError in cls.__bases__:
                return cls.__name__
        return type(self).__name__


class InvalidEquationFormat(BalanceError):
    """The text lacks exactly one arrow, or a side has no compounds."""


class EmptyCompound(InvalidEquationFormat):
    """A compound contains no recognizable element symbol."""


class TooFewCompounds(BalanceError):
    """Fewer than two compounds: nothing to balance."""


class DegenerateSolution(BalanceError):
    """The reduced integer coefficients contain a zero."""


class UnsolvableSystem(BalanceError):
    """Elimination could not produce a conserving coefficient vector."""
