"""
A sparse matrix storing only the entries that were explicitly written.

Every other in-range entry reads as 0.
"""
import numpy as np
from scipy.sparse import coo_matrix
from typing import Callable, Iterable, Optional

from .constants import ENTRY_DTYPE
from .config import MatrixConfig
from .matrix import Matrix, EntryRef, Numeric
from .mat_errors import InvalidEntryIndexError, OutOfRangeError
from .mat_utils import check_shape, unpack_index, zero_of, get_rng, random_entries


class SparseMatrix(Matrix):
    """
    Matrix backed by a mapping from ``(i, j)`` to entry.

    Every stored key lies within the matrix shape. Iteration over the stored
    entries is in row-major key order.
    """

    def __init__(self, rows: int, cols: int, dtype=ENTRY_DTYPE):
        super().__init__(rows, cols, dtype)
        self.data_store: dict[tuple[int, int], Numeric] = {}

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype=ENTRY_DTYPE) -> 'SparseMatrix':
        return cls(rows, cols, dtype)

    @classmethod
    def from_pairs(cls, shape: tuple[int, int], pairs: Iterable, dtype=ENTRY_DTYPE) -> 'SparseMatrix':
        """
        Builds a sparse matrix from ``((i, j), value)`` pairs.

        Args:
            shape: (rows, cols) of the new matrix
            pairs: iterable of ((i, j), value). A later pair with the same key overwrites an earlier one.
            dtype: entry dtype

        Raises:
            InvalidEntryIndexError: If a key lies outside ``shape``
        """
        mat = cls(*check_shape(*shape), dtype=dtype)
        for idx, val in pairs:
            key = unpack_index(idx)
            if not mat.is_in_range(key):
                raise InvalidEntryIndexError(idx, mat.shape())
            mat.data_store[key] = mat.dtype.type(val)
        return mat

    @classmethod
    def rand(cls, rows: int, cols: int, density: float = 0.1, config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        """
        Initializes a new ``rows x cols`` matrix with random values at random positions.

        Args:
            rows: number of rows
            cols: number of columns
            density: fraction of the cells to fill, in [0, 1]
            config: MatrixConfig supplying the dtype and seed
        """
        if not 0 <= density <= 1:
            raise ValueError(f"density must be in range [0, 1], got {density}")
        config = MatrixConfig() if config is None else config
        config.validate()

        mat = cls(rows, cols, config.dtype)
        rng = get_rng(config.rng())
        size = mat.rows * mat.cols
        count = int(round(density * size))
        positions = np.sort(rng.choice(size, size=count, replace=False))
        values = random_entries(count, mat.dtype, rng)
        for pos, val in zip(positions, values):
            mat.data_store[divmod(int(pos), mat.cols)] = val
        return mat

    @classmethod
    def from_scipy(cls, sp) -> 'SparseMatrix':
        """Builds a sparse matrix from any scipy sparse matrix or array. Duplicate entries are summed first."""
        coo = coo_matrix(sp, copy=True)
        coo.sum_duplicates()
        mat = cls(*coo.shape, dtype=coo.dtype)
        for i, j, val in zip(coo.row, coo.col, coo.data):
            mat.data_store[(int(i), int(j))] = val
        return mat

    def to_scipy(self) -> coo_matrix:
        """Returns the stored entries as a scipy COO matrix, explicit zeros included."""
        keys = self.keys()
        data = np.array(self.values(), dtype=self.dtype)
        row = np.array([i for i, _ in keys], dtype=np.int64)
        col = np.array([j for _, j in keys], dtype=np.int64)
        return coo_matrix((data, (row, col)), shape=self.shape(), dtype=self.dtype)

    def get(self, idx: tuple[int, int]) -> Optional[Numeric]:
        key = unpack_index(idx)
        if not self.is_in_range(key):
            return None
        return self.data_store.get(key, zero_of(self.dtype))

    def get_mut(self, idx: tuple[int, int]) -> Optional[EntryRef]:
        """
        Returns a mutable handle on the entry at ``idx``, or None if out of range.

        An in-range entry that is not stored yet is inserted as an explicit 0,
        so this grows the number of stored entries even if the handle is never written.
        """
        key = unpack_index(idx)
        if not self.is_in_range(key):
            return None
        if key not in self.data_store:
            self.data_store[key] = zero_of(self.dtype)
        return EntryRef(self, key)

    def _store_entry(self, idx: tuple[int, int], val) -> None:
        key = unpack_index(idx)
        if not self.is_in_range(key):
            raise OutOfRangeError(key, self.shape())
        self.data_store[key] = val

    def reshape(self, shape: tuple[int, int]) -> 'SparseMatrix':
        """
        Resizes the matrix in-place.

        Stored entries keep their (i, j) coordinates. Entries outside the new shape are dropped.
        """
        self.rows, self.cols = check_shape(*shape)
        self.data_store = {key: val for key, val in self.data_store.items() if self.is_in_range(key)}
        return self

    def apply(self, f: Callable) -> 'SparseMatrix':
        """Applies ``f`` in-place to every stored entry. Implicit zeros are untouched."""
        for key, val in self.data_store.items():
            self.data_store[key] = self.dtype.type(f(val))
        return self

    def det(self) -> Optional[Numeric]:
        raise self._unsupported("det")

    def inv(self) -> Optional['SparseMatrix']:
        raise self._unsupported("inv")

    def to_numpy(self) -> np.ndarray:
        out = np.zeros((self.rows, self.cols), dtype=self.dtype)
        for (i, j), val in self.data_store.items():
            out[i, j] = val
        return out

    @property
    def nnz(self) -> int:
        """Number of stored entries, explicit zeros included."""
        return len(self.data_store)

    def __delitem__(self, key) -> None:
        """Removes the stored entry at ``mat[i, j]``, which then reads as 0."""
        key = unpack_index(key)
        if not self.is_in_range(key):
            raise OutOfRangeError(key, self.shape())
        self.data_store.pop(key, None)

    def __contains__(self, key) -> bool:
        """Checks if an entry is stored at (i, j)."""
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            return False
        return (i, j) in self.data_store

    def __len__(self) -> int:
        """Returns the number of stored entries."""
        return len(self.data_store)

    def __iter__(self):
        """Iterates over the stored (i, j) keys in row-major order."""
        return iter(self.keys())

    def keys(self) -> list[tuple[int, int]]:
        """Returns the stored keys in row-major order."""
        return sorted(self.data_store.keys())

    def values(self) -> list[Numeric]:
        """Returns the stored values, in row-major key order."""
        return [self.data_store[key] for key in self.keys()]

    def items(self) -> list[tuple[tuple[int, int], Numeric]]:
        """Returns a list of ((i, j), value) pairs in row-major key order, mimicking dict.items()."""
        return [(key, self.data_store[key]) for key in self.keys()]

    def clear(self) -> None:
        """Removes all stored entries. The shape is kept."""
        self.data_store.clear()

    def __repr__(self) -> str:
        """String representation of the stored entries."""
        items_str = ", ".join(f"{k}: {v}" for k, v in self.items())
        return f"SparseMatrix(shape={self.shape()}, {{{items_str}}})"
