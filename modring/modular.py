"""
Modular integers: elements of Z/QZ.

    Z13 = Modular[13]
    Z13(5) + Z13(9)       # Modular[13](1)

Each modulus gets its own subclass of Modular, created once by
modular_type() and cached. The subclass carries the modulus and its
WidthPlan as class attributes, so Q is a property of the type rather
than of each value, and the addition kernel (narrow or widened) is
selected when the class is built.

Invariant: 0 <= value < Q for every instance.
"""

import functools
import math
import operator
from typing import Optional, Sequence, Tuple

import numpy as np

from .widths import DEFAULT_NATIVE_BITS, WidthPlan, plan_for_modulus


# ---------------------------------------------------------------------------
# Kernels on raw narrow scalars
# ---------------------------------------------------------------------------

def _add_narrow(plan: WidthPlan, a, b):
    # a, b < Q and 2Q fits the narrow width, so a + b cannot wrap
    s = a + b
    if s >= plan.q_narrow:
        s = s - plan.q_narrow
    return s


def _add_widened(plan: WidthPlan, a, b):
    s = (plan.wide(a) + plan.wide(b)) % plan.q_wide
    return plan.narrow(s)


def _mul_widened(plan: WidthPlan, a, b):
    p = (plan.wide(a) * plan.wide(b)) % plan.q_wide
    return plan.narrow(p)


def _neg(plan: WidthPlan, a):
    if a == 0:
        return a
    return plan.q_narrow - a


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------

class Modular:
    """Element of Z/QZ stored as a fixed-width unsigned integer.

    Use Modular[Q] (or Modular[Q, bits]) to obtain the type for a modulus.
    """

    __slots__ = ("_value",)

    modulus: int = None
    plan: WidthPlan = None
    rank = 1
    _add_kernel = None

    def __class_getitem__(cls, params):
        if isinstance(params, tuple):
            return modular_type(*params)
        return modular_type(params)

    def __init__(self, value=0):
        plan = self.plan
        if plan is None:
            raise TypeError(
                "Modular needs a modulus; use Modular[Q](value) or from_value()"
            )
        raw = plan.narrow(operator.index(value) % plan.modulus)
        object.__setattr__(self, "_value", raw)

    @classmethod
    def _wrap(cls, raw) -> "Modular":
        obj = object.__new__(cls)
        object.__setattr__(obj, "_value", raw)
        return obj

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} values are immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} values are immutable")

    # -- identities and coordinates -----------------------------------------

    @classmethod
    def zero(cls) -> "Modular":
        return cls(0)

    @classmethod
    def one(cls) -> "Modular":
        """Multiplicative identity. Equals zero() when Q == 1."""
        return cls(1)

    @classmethod
    def from_coords(cls, coords: Sequence[int]) -> "Modular":
        """Build from a coordinate sequence of length rank (= 1)."""
        coords = tuple(coords)
        if len(coords) != cls.rank:
            raise ValueError(
                f"{cls.__name__} has rank {cls.rank}, got {len(coords)} coordinates"
            )
        return cls(coords[0])

    def coords(self) -> Tuple[int]:
        return (int(self._value),)

    @property
    def value(self) -> int:
        return int(self._value)

    def is_zero(self) -> bool:
        return bool(self._value == 0)

    # -- ring operations ----------------------------------------------------

    def _coerce(self, other):
        if type(other) is type(self):
            return other
        if isinstance(other, (int, np.integer)):
            return type(self)(other)
        return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._wrap(self._add_kernel(self.plan, self._value, other._value))

    def __neg__(self):
        return self._wrap(_neg(self.plan, self._value))

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self + (-other)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._wrap(_mul_widened(self.plan, self._value, other._value))

    def __radd__(self, other):
        return self.__add__(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __pos__(self):
        return self

    def add(self, other: "Modular") -> "Modular":
        return self + other

    def sub(self, other: "Modular") -> "Modular":
        return self - other

    def mul(self, other: "Modular") -> "Modular":
        return self * other

    def neg(self) -> "Modular":
        return -self

    def __pow__(self, exponent):
        exponent = operator.index(exponent)
        base = self
        if exponent < 0:
            base = self.inverse()
            exponent = -exponent
        result = self.one()
        while exponent:
            if exponent & 1:
                result = result * base
            base = base * base
            exponent >>= 1
        return result

    def inverse(self) -> "Modular":
        """Multiplicative inverse. Raises ValueError if gcd(value, Q) != 1."""
        q = self.modulus
        a = int(self._value)
        if q == 1:
            return self
        g = math.gcd(a, q)
        if g != 1:
            raise ValueError(f"No inverse: gcd({a},{q})={g}")
        return type(self)(pow(a, -1, q))

    # -- comparison and conversion ------------------------------------------

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return bool(self._value == other._value)

    def __hash__(self):
        return hash((self.modulus, int(self._value)))

    def __bool__(self):
        return bool(self._value)

    def __int__(self):
        return int(self._value)

    def __repr__(self):
        return f"{type(self).__name__}({int(self._value)})"

    def __str__(self):
        return f"{int(self._value)} (mod {self.modulus})"

    def __reduce__(self):
        return (_rebuild, (self.modulus, self.plan.bits, int(self._value)))


def _rebuild(modulus: int, bits: int, value: int) -> Modular:
    return modular_type(modulus, bits)(value)


@functools.lru_cache(maxsize=None)
def _modular_type(modulus: int, bits: int) -> type:
    plan = plan_for_modulus(modulus, bits)
    if bits == DEFAULT_NATIVE_BITS:
        name = f"Modular[{modulus}]"
    else:
        name = f"Modular[{modulus}, {bits}]"
    namespace = {
        "__slots__": (),
        "modulus": modulus,
        "plan": plan,
        "_add_kernel": staticmethod(_add_widened if plan.widen_add else _add_narrow),
    }
    return type(name, (Modular,), namespace)


def modular_type(modulus: int, bits: Optional[int] = None) -> type:
    """Return the Modular subclass for Z/QZ stored in `bits`-wide integers.

    The same (modulus, bits) pair always yields the same class.
    """
    plan = plan_for_modulus(modulus, bits)
    return _modular_type(plan.modulus, plan.bits)


def from_value(x: int, modulus: int, bits: Optional[int] = None) -> Modular:
    """Reduce integer x modulo `modulus` into a Modular value."""
    return modular_type(modulus, bits)(x)
