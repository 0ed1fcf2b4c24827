"""
Pure-Python integer reference implementations.

These serve as ground truth for correctness checks of the fixed-width
kernel in modring.modular. Everything here runs on Python ints, so no
overflow can occur.
"""

from typing import List

import numpy as np


# ---------------------------------------------------------------------------
# Scalar modular arithmetic
# ---------------------------------------------------------------------------

def reduce_mod(x: int, q: int) -> int:
    """x mod q, canonical representative in [0, q)."""
    return x % q


def add_mod(a: int, b: int, q: int) -> int:
    """(a + b) mod q.  Assumes 0 <= a, b < q."""
    s = a + b
    return s - q if s >= q else s


def sub_mod(a: int, b: int, q: int) -> int:
    """(a - b) mod q."""
    return (a - b) % q


def mul_mod(a: int, b: int, q: int) -> int:
    """(a * b) mod q."""
    return (a * b) % q


def neg_mod(a: int, q: int) -> int:
    """(-a) mod q."""
    return 0 if a % q == 0 else q - a


def pow_mod(base: int, exp: int, q: int) -> int:
    """base^exp mod q via Python built-in three-arg pow."""
    return pow(base, exp, q)


# ---------------------------------------------------------------------------
# Primes and boundary moduli
# ---------------------------------------------------------------------------

# Deterministic for every n < 3.3e24, which covers all 64-bit moduli.
_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)


def is_prime(n: int) -> bool:
    """Deterministic Miller-Rabin primality test."""
    if n < 2:
        return False
    for p in _MR_BASES:
        if n % p == 0:
            return n == p

    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for a in _MR_BASES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def largest_prime_below(limit: int) -> int:
    """Largest prime p with p <= limit."""
    candidate = limit
    while candidate >= 2:
        if is_prime(candidate):
            return candidate
        candidate -= 1
    raise ValueError(f"No prime <= {limit}")


def boundary_moduli(bits: int) -> List[int]:
    """Moduli whose double overflows a `bits`-wide unsigned integer.

    Returns the largest prime that fits the width and the width's maximum
    value itself. Both force the widened addition path.
    """
    max_value = int(np.iinfo(np.dtype(f"uint{bits}")).max)
    return [largest_prime_below(max_value), max_value]
