#!/usr/bin/env python3
"""
Balance chemical equations from the command line.

Usage:
    python scripts/balance_equation.py "C3H8 + O2 -> CO2 + H2O"
    python scripts/balance_equation.py --method exact --check "Fe + O2 -> Fe2O3"
    echo "H2 + O2 -> H2O" | python scripts/balance_equation.py -
"""

import argparse
import logging
import sys

from eq_balance import BalanceError, balance, build_equation, check_conservation
from eq_balance.solver import METHODS


def read_equations(args):
    if args.equations == ['-']:
        return [line.strip() for line in sys.stdin if line.strip()]
    return args.equations


def main(argv=None):
    parser = argparse.ArgumentParser(description="Balance chemical equations")
    parser.add_argument('equations', nargs='+',
                        help="equation(s) to balance, or '-' to read lines from stdin")
    parser.add_argument('--method', choices=METHODS, default='auto',
                        help="solver path (default: auto)")
    parser.add_argument('--check', action='store_true',
                        help="also print the per-element conservation check")
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    status = 0
    for text in read_equations(args):
        try:
            res = balance(text, method=args.method)
        except BalanceError as e:
            print(f"error [{e.kind}]: {e.message}  ({text})", file=sys.stderr)
            status = 1
            continue

        print(res.equation)
        if args.check:
            parsed = build_equation(text)
            ok = check_conservation(parsed, res.coefficients)
            print(f"  coefficients: {list(res.coefficients)}  conserved: {ok}")

    return status


if __name__ == '__main__':
    sys.exit(main())
