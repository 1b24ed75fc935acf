import copy
import numpy as np
from abc import ABC, abstractmethod
from typing import Callable, Optional, Protocol

from .constants import ENTRY_DTYPE
from .mat_errors import OutOfRangeError, UnsupportedOperationError
from .mat_utils import as_entry_dtype, check_shape, unpack_index, format_matrix


class Numeric(Protocol):
    """
    Capabilities an entry type must provide to be stored in a matrix.

    Entries are added, multiplied, divided (diagonal inversion), compared for
    equality, and built from the small integers 0 and 1. numpy integer and
    floating scalars satisfy this; see ``mat_utils.as_entry_dtype``.
    """

    def __add__(self, other): ...

    def __mul__(self, other): ...

    def __truediv__(self, other): ...

    def __eq__(self, other) -> bool: ...


class EntryRef:
    """
    Mutable handle on one stored matrix entry.

    Returned by ``Matrix.get_mut``. The handle refers to cell ``(i, j)`` of its
    matrix, not to the current storage buffer, so it stays valid across
    ``reshape``, ``del`` and ``clear`` for as long as the cell exists.
    Writes through ``value`` are cast to the matrix dtype.
    """

    __slots__ = ("_owner", "_idx")

    def __init__(self, owner: 'Matrix', idx: tuple[int, int]):
        self._owner = owner
        self._idx = idx

    @property
    def value(self):
        val = self._owner.get(self._idx)
        if val is None:
            raise OutOfRangeError(self._idx, self._owner.shape())
        return val

    @value.setter
    def value(self, val) -> None:
        self._owner._store_entry(self._idx, self._owner.dtype.type(val))

    def replace(self, val):
        """Store ``val`` and return the previous value."""
        prev = self.value
        self.value = val
        return prev

    def __repr__(self) -> str:
        return f"EntryRef({self._idx}: {self.value})"


class Matrix(ABC):
    """
    Shared contract of the dense, diagonal and sparse matrix representations.

    All indices are ``(i, j)`` tuples, 0-based, row-major. The checked accessors
    ``get``, ``get_mut`` and ``set`` return None for a cell that does not exist;
    only the indexing operator raises ``OutOfRangeError``.
    """

    def __init__(self, rows: int, cols: int, dtype=ENTRY_DTYPE):
        self.rows, self.cols = check_shape(rows, cols)
        self.dtype = as_entry_dtype(dtype)

    @classmethod
    @abstractmethod
    def zeros(cls, rows: int, cols: int, dtype=ENTRY_DTYPE) -> 'Matrix':
        """Initializes a new ``rows x cols`` matrix filled with zeros."""

    @abstractmethod
    def get(self, idx: tuple[int, int]) -> Optional[Numeric]:
        """Returns the entry at ``idx``, or None if out of range."""

    @abstractmethod
    def get_mut(self, idx: tuple[int, int]) -> Optional[EntryRef]:
        """Returns a mutable handle on the entry at ``idx``, or None if there is no such entry."""

    @abstractmethod
    def _store_entry(self, idx: tuple[int, int], val) -> None:
        """
        Writes an already cast ``val`` into the storage cell at ``idx``.

        Raises:
            OutOfRangeError: If the cell no longer exists, e.g. after a shrinking ``reshape``
        """

    def set(self, idx: tuple[int, int], val) -> Optional[Numeric]:
        """
        Sets ``val`` at ``idx`` and returns the previous value.

        Args:
            idx: (i, j) index
            val: new value, cast to the matrix dtype

        Returns:
            The previous value, or None if there is no such entry. The matrix never grows.
        """
        ref = self.get_mut(idx)
        if ref is None:
            return None
        return ref.replace(val)

    def shape(self) -> tuple[int, int]:
        """Returns the shape of the matrix in the format ``(rows, cols)``."""
        return (self.rows, self.cols)

    def is_square(self) -> bool:
        return self.rows == self.cols

    def is_in_range(self, idx: tuple[int, int]) -> bool:
        i, j = unpack_index(idx)
        return 0 <= i < self.rows and 0 <= j < self.cols

    @abstractmethod
    def reshape(self, shape: tuple[int, int]) -> 'Matrix':
        """Resizes the matrix in-place to ``shape``."""

    @abstractmethod
    def apply(self, f: Callable) -> 'Matrix':
        """Applies ``f`` in-place to every stored entry."""

    def scalar_mul(self, k) -> 'Matrix':
        """Multiplies every entry by ``k`` in-place."""
        return self.apply(lambda e: e * k)

    @abstractmethod
    def det(self) -> Optional[Numeric]:
        """Computes the determinant of the matrix."""

    @abstractmethod
    def inv(self) -> Optional['Matrix']:
        """Inverts the matrix in-place."""

    @abstractmethod
    def to_numpy(self) -> np.ndarray:
        """Returns a dense ``(rows, cols)`` array holding every logical entry."""

    # Arithmetic between matrices is not defined for any representation.
    def add(self, rhs: 'Matrix') -> 'Matrix':
        raise self._unsupported("add")

    def sub(self, rhs: 'Matrix') -> 'Matrix':
        raise self._unsupported("sub")

    def mul(self, rhs: 'Matrix') -> 'Matrix':
        raise self._unsupported("mul")

    def t(self) -> 'Matrix':
        raise self._unsupported("t")

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(operation, type(self).__name__)

    def copy(self) -> 'Matrix':
        """Returns an independent copy of the matrix."""
        return copy.deepcopy(self)

    def is_equal(self, other: 'Matrix', tol: float = 1e-6) -> bool:
        """
        Compares the logical entries of two matrices of any representation.

        Args:
            other: matrix to compare against
            tol: relative and absolute tolerance passed to ``np.allclose``

        Returns:
            True if both shapes match and every entry is within tolerance
        """
        if self.shape() != other.shape():
            return False
        return bool(np.allclose(self.to_numpy(), other.to_numpy(), rtol=tol, atol=tol))

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.shape() == other.shape() and bool(np.array_equal(self.to_numpy(), other.to_numpy()))

    __hash__ = None

    def __getitem__(self, key) -> Numeric:
        """
        Returns the entry at ``mat[i, j]``.

        Raises:
            OutOfRangeError: If the index is out of range. Use ``get`` to avoid raising.
        """
        val = self.get(key)
        if val is None:
            raise OutOfRangeError(key, self.shape())
        return val

    def __setitem__(self, key, value) -> None:
        """
        Sets the entry at ``mat[i, j]``.

        Raises:
            OutOfRangeError: If there is no such entry. Use ``set`` to avoid raising.
        """
        ref = self.get_mut(key)
        if ref is None:
            raise OutOfRangeError(key, self.shape())
        ref.value = value

    def __str__(self) -> str:
        return format_matrix(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape()}, dtype={self.dtype})"
