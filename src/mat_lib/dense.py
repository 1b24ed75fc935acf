"""
A dense matrix where every entry is explicitly stored in memory.

Used when the majority of entries are nonzero.
"""
import numpy as np
from typing import Callable, Optional

from .constants import ENTRY_DTYPE
from .config import MatrixConfig
from .matrix import Matrix, EntryRef, Numeric
from .mat_errors import OutOfRangeError, TooManyElementsError
from .mat_utils import check_shape, unpack_index, resize_flat, random_entries
from .parse import mat_from_str


class DenseMatrix(Matrix):
    """
    Matrix storing all ``rows * cols`` entries in a flat row-major buffer.

    The buffer length always equals ``rows * cols``, including after ``reshape``.
    """

    def __init__(self, rows: int, cols: int, dtype=ENTRY_DTYPE):
        super().__init__(rows, cols, dtype)
        self.data = np.zeros(self.rows * self.cols, dtype=self.dtype)

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype=ENTRY_DTYPE) -> 'DenseMatrix':
        return cls(rows, cols, dtype)

    @classmethod
    def rand(cls, rows: int, cols: int, config: Optional[MatrixConfig] = None) -> 'DenseMatrix':
        """Initializes a new ``rows x cols`` matrix filled with uniformly distributed random values."""
        config = MatrixConfig() if config is None else config
        config.validate()
        mat = cls(rows, cols, config.dtype)
        mat.data = random_entries(mat.rows * mat.cols, mat.dtype, config.rng())
        return mat

    @classmethod
    def from_elements(cls, shape: tuple[int, int], elems, dtype=ENTRY_DTYPE) -> 'DenseMatrix':
        """
        Builds a matrix from row-major elements.

        Args:
            shape: (rows, cols) of the new matrix
            elems: row-major entries. Missing trailing entries are filled with 0.
            dtype: entry dtype

        Raises:
            TooManyElementsError: If more than rows * cols elements are given
        """
        rows, cols = check_shape(*shape)
        mat = cls(rows, cols, dtype)
        elems = np.asarray(elems, dtype=mat.dtype).reshape(-1)
        if len(elems) > len(mat.data):
            raise TooManyElementsError(len(elems), len(mat.data), (rows, cols))
        mat.data[:len(elems)] = elems
        return mat

    @classmethod
    def from_str(cls, s: str, config: Optional[MatrixConfig] = None) -> 'DenseMatrix':
        """
        Builds a matrix from a literal such as "1 2 3; 4 5 6".

        The row separator and entry dtype come from ``config``.
        Rows must all have the same number of entries.

        Raises:
            InvalidConstructionError: If the literal cannot be parsed, see ``parse.mat_from_str``
        """
        config = MatrixConfig() if config is None else config
        config.validate()
        data, rows, cols = mat_from_str(s, config.row_separator, config.dtype)
        mat = cls(rows, cols, config.dtype)
        mat.data = data
        return mat

    def _flat_index(self, idx: tuple[int, int]) -> Optional[int]:
        i, j = unpack_index(idx)
        if 0 <= i < self.rows and 0 <= j < self.cols:
            return i * self.cols + j
        return None

    def get(self, idx: tuple[int, int]) -> Optional[Numeric]:
        pos = self._flat_index(idx)
        if pos is None:
            return None
        return self.data[pos]

    def get_mut(self, idx: tuple[int, int]) -> Optional[EntryRef]:
        pos = self._flat_index(idx)
        if pos is None:
            return None
        return EntryRef(self, unpack_index(idx))

    def _store_entry(self, idx: tuple[int, int], val) -> None:
        pos = self._flat_index(idx)
        if pos is None:
            raise OutOfRangeError(idx, self.shape())
        self.data[pos] = val

    def reshape(self, shape: tuple[int, int]) -> 'DenseMatrix':
        """
        Resizes the matrix in-place, filling every new entry with 0.

        The flat buffer is resized, not re-gridded: entries keep their flat
        row-major position, so changing the number of columns shifts them
        between rows.
        """
        rows, cols = check_shape(*shape)
        self.data = resize_flat(self.data, rows * cols)
        self.rows, self.cols = rows, cols
        return self

    def apply(self, f: Callable) -> 'DenseMatrix':
        for pos, e in enumerate(self.data):
            self.data[pos] = self.dtype.type(f(e))
        return self

    def scalar_mul(self, k) -> 'DenseMatrix':
        """Multiplies every entry by ``k`` in-place, casting the products back to the matrix dtype."""
        self.data[:] = (self.data * k).astype(self.dtype)
        return self

    def det(self) -> Optional[Numeric]:
        # TODO cofactor expansion for square dense matrices
        raise self._unsupported("det")

    def inv(self) -> Optional['DenseMatrix']:
        raise self._unsupported("inv")

    def to_numpy(self) -> np.ndarray:
        return self.data.reshape(self.rows, self.cols).copy()
