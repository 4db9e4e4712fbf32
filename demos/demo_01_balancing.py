#!/usr/bin/env python3
"""
Demo 1: Balancing by element conservation
=========================================

For each equation we print the balanced form and the element totals on
both sides, then draw the signed conservation matrix of the last one:

    rows    = elements (first-seen order)
    columns = compounds [*reactants, *products]
    entry   = +atoms for reactants, -atoms for products

A balanced coefficient vector x satisfies M x = 0.
"""

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from eq_balance import balance, build_equation

EQUATIONS = [
    "H2 + O2 -> H2O",
    "Fe + O2 -> Fe2O3",
    "C3H8 + O2 -> CO2 + H2O",
    "Na3PO4 + MgCl2 -> NaCl + Mg3(PO4)2",
    "KMnO4 + HCl -> KCl + MnCl2 + H2O + Cl2",
    "C6H12O6 + O2 -> CO2 + H2O",
]


def element_totals(parsed, coeffs):
    """Atoms per element on the reactant and product side."""
    x = np.asarray(coeffs)
    n = parsed.n_reactants
    M = parsed.matrix
    left = M[:, :n] @ x[:n]
    right = -M[:, n:] @ x[n:]
    return left, right


def plot_matrix(parsed, coeffs, out):
    M = parsed.matrix
    lim = int(np.abs(M).max())

    fig, ax = plt.subplots(figsize=(1.2 * parsed.n_compounds + 2, 0.6 * parsed.n_elements + 2))
    im = ax.imshow(M, cmap='RdBu', vmin=-lim, vmax=lim)
    for i in range(M.shape[0]):
        for j in range(M.shape[1]):
            if M[i, j]:
                ax.text(j, i, str(M[i, j]), ha='center', va='center', fontsize=9)

    labels = [f"{k}·{c}" if k != 1 else c for c, k in zip(parsed.compounds, coeffs)]
    ax.set_xticks(range(parsed.n_compounds), labels, rotation=30, ha='right')
    ax.set_yticks(range(parsed.n_elements), parsed.elements)
    ax.axvline(parsed.n_reactants - 0.5, color='k', lw=1.5)
    ax.set_title('Conservation matrix (reactants | products)', fontsize=11)
    fig.colorbar(im, ax=ax, shrink=0.8, label='signed atom count')

    plt.tight_layout()
    plt.savefig(out, dpi=150, bbox_inches='tight')
    plt.close(fig)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--out', default='notes/demo_balancing.png')
    args = parser.parse_args()

    Path(args.out).parent.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("Demo 1: Balancing by element conservation")
    print("=" * 60)

    for text in EQUATIONS:
        res = balance(text)
        parsed = build_equation(text)
        left, right = element_totals(parsed, res.coefficients)
        print(f"\n{text}")
        print(f"  -> {res.equation}")
        for el, l, r in zip(parsed.elements, left, right):
            print(f"     {el:>2}: {l:3d} | {r:3d}")

    plot_matrix(parsed, res.coefficients, args.out)
    print(f"\nSaved: {args.out}")


if __name__ == '__main__':
    main()
