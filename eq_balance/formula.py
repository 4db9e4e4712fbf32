"""Recursive-descent parser for a single chemical formula.

Grammar (informal):
    formula := (group | atom | other)*
    group   := "(" formula ")"? digits?
    atom    := [A-Z] [a-z]? digits?

Leniencies kept on purpose:
- characters outside the grammar (spaces, charges, dots) are skipped
- an unmatched "(" closes silently at the end of the text
- a ")" with no open group ends the formula
- digits only attach to the atom or group immediately before them;
  a leading or stray digit run is skipped like any other character

The parser does not reject formulas without atoms; an empty result is
reported by the equation builder, which knows which compound it was.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass
class Cursor:
    """Read position into the formula text, shared by all recursion levels."""

    text: str
    pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def advance(self) -> str:
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def take_digits(self) -> int | None:
        """Consume a decimal run and return its value (None if absent)."""
        start = self.pos
        while not self.at_end() and "0" <= self.peek() <= "9":
            self.pos += 1
        if self.pos == start:
            return None
        return int(self.text[start:self.pos])


def _merge(base: dict[str, int], add: Mapping[str, int], factor: int = 1) -> None:
    for el, n in add.items():
        base[el] = base.get(el, 0) + n * factor


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


class FormulaParser:
    """Single pass, no backtracking.

    Each call to `parse` owns a fresh cursor, so one instance may be
    reused (or shared between threads) freely.
    """

    def parse(self, formula: str) -> Mapping[str, int]:
        counts = self._parse_group(Cursor(formula))
        return MappingProxyType(counts)

    def _parse_group(self, cur: Cursor) -> dict[str, int]:
        counts: dict[str, int] = {}
        while not cur.at_end():
            ch = cur.peek()
            if ch == "(":
                cur.advance()
                inner = self._parse_group(cur)
                mult = cur.take_digits()
                _merge(counts, inner, 1 if mult is None else mult)
            elif ch == ")":
                cur.advance()
                break
            elif _is_upper(ch):
                symbol = cur.advance()
                if _is_lower(cur.peek()):
                    symbol += cur.advance()
                n = cur.take_digits()
                counts[symbol] = counts.get(symbol, 0) + (1 if n is None else n)
            else:
                cur.advance()
        return counts


_PARSER = FormulaParser()


def parse_formula(formula: str) -> Mapping[str, int]:
    """Element symbol -> atom count for one compound, e.g.

    >>> dict(parse_formula("Mg3(PO4)2"))
    {'Mg': 3, 'P': 2, 'O': 8}
    """
    return _PARSER.parse(formula)
