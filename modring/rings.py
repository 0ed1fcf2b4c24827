"""
Ring capability protocols.

Structural contracts for the generic vector/matrix layer. A type conforms
by having the members; there is no registration step. Modular[Q] is the
rank-1 instance of FinRankCRing, and a polynomial quotient ring of degree
N would be a rank-N instance with coords() returning its coefficients.
"""

from typing import Any, Optional, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class AdditiveGroup(Protocol):
    """Abelian group under addition."""

    def add(self, other: Any) -> Any: ...

    def sub(self, other: Any) -> Any: ...

    def neg(self) -> Any: ...

    def is_zero(self) -> bool: ...


@runtime_checkable
class Ring(AdditiveGroup, Protocol):
    """Commutative ring with identity: adds mul, zero() and one()."""

    def mul(self, other: Any) -> Any: ...

    @classmethod
    def zero(cls) -> Any: ...

    @classmethod
    def one(cls) -> Any: ...


@runtime_checkable
class FinRankCRing(Ring, Protocol):
    """Commutative ring that is free of finite rank over a base ring.

    Elements convert to and from a fixed-length coordinate sequence of
    `rank` integers.
    """

    rank: int

    @classmethod
    def from_coords(cls, coords: Sequence[int]) -> Any: ...

    def coords(self) -> Tuple[int, ...]: ...


def is_ring(obj: Any) -> bool:
    """True if obj (an instance or a class) satisfies Ring."""
    return isinstance(obj, Ring)


def is_fin_rank_ring(obj: Any, rank: Optional[int] = None) -> bool:
    """True if obj satisfies FinRankCRing, optionally of a given rank."""
    if not isinstance(obj, FinRankCRing):
        return False
    return rank is None or obj.rank == rank


def require_ring(ring: Any) -> type:
    """Return `ring` if it is a finite-rank ring class, else raise TypeError."""
    if not isinstance(ring, type) or not is_fin_rank_ring(ring):
        raise TypeError(f"{ring!r} is not a finite-rank commutative ring type")
    return ring
