"""
Vectors and matrices over finite-rank commutative rings.

    R^dim:        Vector(R, [...])   abelian group under componentwise add
    R^(m x n):    Matrix(R, m, n)    row-major buffer, matrix-vector product

Everything is written against the FinRankCRing protocol and only uses the
ring's add/sub/mul/neg/zero/one, so the same code serves Modular[Q]
and any higher-rank ring with the same members.
"""

from typing import Any, Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from .rings import require_ring


def _coerce(ring: type, x: Any):
    if isinstance(x, ring):
        return x
    if isinstance(x, (int, np.integer)):
        if ring.rank != 1:
            raise TypeError(
                f"Integer {x} is ambiguous for rank-{ring.rank} ring {ring.__name__}"
            )
        return ring.from_coords((x,))
    if isinstance(x, (tuple, list, np.ndarray)):
        return ring.from_coords(x)
    raise TypeError(f"Cannot convert {x!r} to {ring.__name__}")


def _fmt(e: Any) -> str:
    coords = e.coords()
    return str(coords[0]) if len(coords) == 1 else str(list(coords))


def _elements_to_array(elements: Sequence[Any], rank: int) -> np.ndarray:
    arr = np.array([e.coords() for e in elements], dtype=object)
    if rank == 1:
        arr = arr.reshape(len(elements))
    try:
        return arr.astype(np.uint64)
    except OverflowError:
        return arr


# =============================
# VECTORS (R^dim)
# =============================

class Vector:
    """Fixed-length, immutable vector of ring elements."""

    __slots__ = ("ring", "_elements")

    def __init__(self, ring: type, elements: Iterable[Any]):
        ring = require_ring(ring)
        object.__setattr__(self, "ring", ring)
        object.__setattr__(self, "_elements",
                           tuple(_coerce(ring, x) for x in elements))

    def __setattr__(self, name, value):
        raise AttributeError("Vector values are immutable")

    def __delattr__(self, name):
        raise AttributeError("Vector values are immutable")

    @classmethod
    def zeros(cls, ring: type, dim: int) -> "Vector":
        """Additive identity of R^dim."""
        ring = require_ring(ring)
        return cls(ring, [ring.zero() for _ in range(dim)])

    @property
    def dim(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    def __getitem__(self, i):
        return self._elements[i]

    def _check_compatible(self, other: "Vector"):
        if not isinstance(other, Vector):
            raise TypeError(f"Expected Vector, got {type(other).__name__}")
        if other.ring is not self.ring:
            raise TypeError(
                f"Ring mismatch: {self.ring.__name__} vs {other.ring.__name__}"
            )
        if other.dim != self.dim:
            raise ValueError(f"Vector length mismatch: {self.dim} vs {other.dim}")

    def add(self, other: "Vector") -> "Vector":
        """Componentwise addition: (v + w)[i] = v[i] + w[i]."""
        self._check_compatible(other)
        return Vector(self.ring, [a.add(b) for a, b in zip(self, other)])

    def sub(self, other: "Vector") -> "Vector":
        self._check_compatible(other)
        return Vector(self.ring, [a.sub(b) for a, b in zip(self, other)])

    def neg(self) -> "Vector":
        return Vector(self.ring, [a.neg() for a in self])

    def is_zero(self) -> bool:
        return all(a.is_zero() for a in self)

    def scale(self, c: Any) -> "Vector":
        """Scalar multiplication c*v by a ring element (or int for rank 1)."""
        c = _coerce(self.ring, c)
        return Vector(self.ring, [c.mul(a) for a in self])

    def dot(self, other: "Vector") -> Any:
        """Inner product <v, w> = sum v[i]*w[i] in the ring."""
        self._check_compatible(other)
        acc = self.ring.zero()
        for a, b in zip(self, other):
            acc = acc.add(a.mul(b))
        return acc

    def to_array(self) -> np.ndarray:
        """Coordinates as an array: shape (dim,) for rank 1, else (dim, rank)."""
        return _elements_to_array(self._elements, self.ring.rank)

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.sub(other)

    def __neg__(self):
        return self.neg()

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.ring is other.ring and self._elements == other._elements

    def __hash__(self):
        return hash((self.ring, self._elements))

    def __repr__(self):
        inner = ", ".join(_fmt(e) for e in self)
        return f"Vector[{self.ring.__name__}]([{inner}])"


# =============================
# MATRICES (R^(rows x cols))
# =============================

class Matrix:
    """rows x cols matrix over a ring, stored as a flat row-major list.

    set() is the only mutating operation.
    """

    __hash__ = None

    def __init__(self, ring: type, rows: int, cols: int):
        self.ring = require_ring(ring)
        if rows < 0 or cols < 0:
            raise ValueError(f"Invalid matrix shape: {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._data: List[Any] = [ring.zero() for _ in range(rows * cols)]

    @classmethod
    def zeros(cls, ring: type, rows: int, cols: int) -> "Matrix":
        return cls(ring, rows, cols)

    @classmethod
    def identity(cls, ring: type, n: int) -> "Matrix":
        m = cls(ring, n, n)
        one = ring.one()
        for i in range(n):
            m.set(i, i, one)
        return m

    @classmethod
    def from_rows(cls, ring: type, rows: Sequence[Sequence[Any]]) -> "Matrix":
        """Build from nested rows, e.g. [[1, 2], [3, 4]] for a rank-1 ring."""
        n_rows = len(rows)
        n_cols = len(rows[0]) if n_rows else 0
        m = cls(ring, n_rows, n_cols)
        for r, row in enumerate(rows):
            if len(row) != n_cols:
                raise ValueError(
                    f"Ragged rows: row {r} has {len(row)} entries, expected {n_cols}"
                )
            for c, x in enumerate(row):
                m.set(r, c, x)
        return m

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Index ({row}, {col}) out of range for {self.rows}x{self.cols} matrix"
            )
        return row * self.cols + col

    def get(self, row: int, col: int) -> Any:
        return self._data[self._index(row, col)]

    def set(self, row: int, col: int, value: Any):
        self._data[self._index(row, col)] = _coerce(self.ring, value)

    def __getitem__(self, key):
        row, col = key
        return self.get(row, col)

    def row(self, r: int) -> Vector:
        if not 0 <= r < self.rows:
            raise IndexError(f"Row {r} out of range for {self.rows} rows")
        start = r * self.cols
        return Vector(self.ring, self._data[start:start + self.cols])

    def column(self, c: int) -> Vector:
        if not 0 <= c < self.cols:
            raise IndexError(f"Column {c} out of range for {self.cols} columns")
        return Vector(self.ring, self._data[c::self.cols])

    def rows_iter(self) -> Iterator[Vector]:
        for r in range(self.rows):
            yield self.row(r)

    def matvec(self, v: Vector) -> Vector:
        """Matrix-vector product: (Mv)[r] = sum_c M[r][c] * v[c].

        M in R^(rows x cols), v in R^cols -> Mv in R^rows
        """
        if not isinstance(v, Vector):
            raise TypeError(f"Expected Vector, got {type(v).__name__}")
        if v.ring is not self.ring:
            raise TypeError(
                f"Ring mismatch: {self.ring.__name__} vs {v.ring.__name__}"
            )
        if v.dim != self.cols:
            raise ValueError(
                f"Dimension mismatch: matrix is {self.rows}x{self.cols}, "
                f"vector has length {v.dim}"
            )
        result = []
        for r in range(self.rows):
            acc = self.ring.zero()
            start = r * self.cols
            for c in range(self.cols):
                acc = acc.add(self._data[start + c].mul(v[c]))
            result.append(acc)
        return Vector(self.ring, result)

    def matmul(self, other: "Matrix") -> "Matrix":
        """Matrix-matrix product A*B, (m x n) * (n x p) -> (m x p)."""
        self._check_ring(other)
        if self.cols != other.rows:
            raise ValueError(
                f"Dimension mismatch: A is {self.rows}x{self.cols}, "
                f"B has {other.rows} rows"
            )
        out = Matrix(self.ring, self.rows, other.cols)
        for i in range(self.rows):
            for j in range(other.cols):
                acc = self.ring.zero()
                for k in range(self.cols):
                    acc = acc.add(self.get(i, k).mul(other.get(k, j)))
                out._data[i * out.cols + j] = acc
        return out

    def add(self, other: "Matrix") -> "Matrix":
        self._check_ring(other)
        if other.shape != self.shape:
            raise ValueError(f"Shape mismatch: {self.shape} vs {other.shape}")
        out = Matrix(self.ring, self.rows, self.cols)
        out._data = [a.add(b) for a, b in zip(self._data, other._data)]
        return out

    def transpose(self) -> "Matrix":
        out = Matrix(self.ring, self.cols, self.rows)
        for r in range(self.rows):
            for c in range(self.cols):
                out._data[c * self.rows + r] = self._data[r * self.cols + c]
        return out

    def copy(self) -> "Matrix":
        out = Matrix(self.ring, self.rows, self.cols)
        out._data = list(self._data)
        return out

    def is_zero(self) -> bool:
        return all(a.is_zero() for a in self._data)

    def to_array(self) -> np.ndarray:
        """Coordinates as an array: shape (rows, cols) for rank 1,
        else (rows, cols, rank)."""
        arr = _elements_to_array(self._data, self.ring.rank)
        if self.ring.rank == 1:
            return arr.reshape(self.rows, self.cols)
        return arr.reshape(self.rows, self.cols, self.ring.rank)

    def _check_ring(self, other: "Matrix"):
        if not isinstance(other, Matrix):
            raise TypeError(f"Expected Matrix, got {type(other).__name__}")
        if other.ring is not self.ring:
            raise TypeError(
                f"Ring mismatch: {self.ring.__name__} vs {other.ring.__name__}"
            )

    def __matmul__(self, other):
        if isinstance(other, Vector):
            return self.matvec(other)
        if isinstance(other, Matrix):
            return self.matmul(other)
        return NotImplemented

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self.ring is other.ring and self.shape == other.shape
                and self._data == other._data)

    def __repr__(self):
        rows = "; ".join(
            " ".join(_fmt(e) for e in self._data[r * self.cols:(r + 1) * self.cols])
            for r in range(self.rows)
        )
        return f"Matrix[{self.ring.__name__}]({self.rows}x{self.cols}: {rows})"
