#!/usr/bin/env python3
"""
Quantifier elimination and containers with z3-handles.

This demonstrates:
1. Building quantified formulas
2. Eliminating quantifiers with the qe tactic and with qe_lite
3. Moving terms between contexts through an AstVector
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from z3_handles import AstVector, Context, eliminate_quantifiers, exprs, qe_lite


def main():
    with Context() as ctx, Context() as other:
        x = exprs.int_const("x", ctx)
        y = exprs.int_const("y", ctx)
        zero = exprs.int_val(0, ctx)

        formula = exprs.exists([x], exprs.and_(exprs.gt(x, y), exprs.lt(x, zero)))
        print(f"Input:      {formula}")
        print(f"qe tactic:  {eliminate_quantifiers(formula)}")

        body = exprs.and_(exprs.eq(x, y + 1), exprs.gt(x, zero))
        variables = AstVector.from_iterable([x])
        print(f"\nqe_lite({variables}, {body})")
        print(f"  -> {qe_lite(variables, body)}")

        terms = AstVector.from_iterable([formula, body])
        moved = terms.translate(other)
        print(f"\nTranslated {len(moved)} terms into a second context:")
        for term in moved:
            print(f"  {term}")


if __name__ == "__main__":
    main()
