#!/usr/bin/env python3
"""
Exact real algebraic arithmetic with z3-handles.

This demonstrates:
1. Creating irrational roots with algebraic.root()
2. Comparing and combining them exactly
3. Inspecting the defining polynomial and a decimal approximation
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from z3_handles import Context, algebraic, exprs


def main():
    with Context() as ctx:
        two = exprs.int_val(2, ctx)
        three = exprs.int_val(3, ctx)

        sqrt2 = algebraic.root(two, 2)
        cbrt3 = algebraic.root(three, 3)

        print(f"sqrt(2) ~ {algebraic.to_decimal(sqrt2, 12)}")
        print(f"cbrt(3) ~ {algebraic.to_decimal(cbrt3, 12)}")

        product = algebraic.mul(sqrt2, cbrt3)
        print(f"sqrt(2) * cbrt(3) ~ {algebraic.to_decimal(product, 12)}")
        print(f"sqrt(2) < cbrt(3): {algebraic.lt(sqrt2, cbrt3)}")
        print(f"sqrt(2)^2 == 2: {algebraic.eq(algebraic.power(sqrt2, 2), two)}")

        coefficients = [c.numeral_string() for c in algebraic.get_poly(product)]
        print(f"\nDefining polynomial of the product (lowest degree first):")
        print(f"  {coefficients}")
        print(f"  root index: {algebraic.get_index(product)}")

        print(f"\nLive native references before close: {ctx.live_references()}")

    print("Context closed, all native references released.")


if __name__ == "__main__":
    main()
