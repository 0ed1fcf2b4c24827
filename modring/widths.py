"""
Width planning for modular arithmetic.

A modular value is stored in a fixed-width unsigned numpy scalar (the
"narrow" width). Before any arithmetic happens, the modulus is inspected
once and a WidthPlan records which integer type each operation runs in:

  - addition stays in the narrow width when 2Q fits in it, otherwise both
    operands are widened before adding;
  - multiplication always runs in the widened width (Q^2 overflows the
    narrow width for essentially every non-trivial modulus).

The widened width of uint64 is Python's arbitrary precision int.
"""

import operator
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np


NATIVE_WIDTHS = {
    8: np.uint8,
    16: np.uint16,
    32: np.uint32,
    64: np.uint64,
}

WIDENED = {
    8: np.uint16,
    16: np.uint32,
    32: np.uint64,
    64: int,
}


def _read_native_bits(raw: str) -> int:
    """Parse a MODRING_NATIVE_BITS setting; must name a supported width."""
    bits = int(raw)
    if bits not in NATIVE_WIDTHS:
        raise ValueError(
            f"MODRING_NATIVE_BITS={raw!r} is not a supported width "
            f"(expected one of {sorted(NATIVE_WIDTHS)})"
        )
    return bits


DEFAULT_NATIVE_BITS = _read_native_bits(os.environ.get("MODRING_NATIVE_BITS", "32"))


class InvalidModulusError(ValueError):
    """Raised when a modulus cannot define a ring Z/QZ at the chosen width."""


class ZeroModulusError(InvalidModulusError, ZeroDivisionError):
    """Raised for Q = 0; reducing modulo zero is never valid."""


@dataclass(frozen=True)
class WidthPlan:
    """Integer widths used by one modulus.

    Built by plan_for_modulus() and shared by every value of that modulus.
    """
    modulus: int
    bits: int
    narrow: type
    wide: type
    widen_add: bool
    q_narrow: Any = field(repr=False, compare=False)
    q_wide: Any = field(repr=False, compare=False)

    @property
    def max_value(self) -> int:
        return int(np.iinfo(self.narrow).max)

    def describe(self) -> Dict[str, Any]:
        return {
            "modulus": self.modulus,
            "bits": self.bits,
            "narrow": np.dtype(self.narrow).name,
            "wide": "int" if self.wide is int else np.dtype(self.wide).name,
            "widen_add": self.widen_add,
        }


def plan_for_modulus(modulus: int, bits: Optional[int] = None) -> WidthPlan:
    """Validate modulus and choose the arithmetic widths for it.

    Args:
        modulus: Q, a positive integer representable in the narrow width.
        bits: Narrow width in bits (8, 16, 32 or 64). Defaults to
              DEFAULT_NATIVE_BITS.

    Returns:
        WidthPlan for Q.

    Raises:
        TypeError: modulus is not an integer.
        ZeroModulusError: modulus is 0.
        InvalidModulusError: modulus is negative or does not fit the width.
        ValueError: unsupported width.
    """
    modulus = operator.index(modulus)
    if bits is None:
        bits = DEFAULT_NATIVE_BITS
    if bits not in NATIVE_WIDTHS:
        raise ValueError(
            f"Unsupported native width: {bits} bits. "
            f"Available: {sorted(NATIVE_WIDTHS)}"
        )

    if modulus == 0:
        raise ZeroModulusError("Modulus must be positive, got 0")
    if modulus < 0:
        raise InvalidModulusError(f"Modulus must be positive, got {modulus}")

    narrow = NATIVE_WIDTHS[bits]
    wide = WIDENED[bits]
    max_value = int(np.iinfo(narrow).max)
    if modulus > max_value:
        raise InvalidModulusError(
            f"Modulus {modulus} does not fit in {bits}-bit storage "
            f"(max {max_value})"
        )

    return WidthPlan(
        modulus=modulus,
        bits=bits,
        narrow=narrow,
        wide=wide,
        widen_add=2 * modulus > max_value,
        q_narrow=narrow(modulus),
        q_wide=wide(modulus),
    )
