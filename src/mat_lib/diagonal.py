"""
A diagonal matrix where every entry outside the main diagonal is implicitly 0.

Cheaper than a dense matrix when only the diagonal holds data, and gives
exact determinants and (pseudo-)inverses.
"""
import numpy as np
from typing import Callable, Optional

from .constants import ENTRY_DTYPE
from .config import MatrixConfig
from .matrix import Matrix, EntryRef, Numeric
from .mat_errors import OutOfRangeError, TooManyElementsError
from .mat_utils import check_shape, unpack_index, zero_of, one_of, resize_flat, random_entries


class DiagonalMatrix(Matrix):
    """
    Matrix storing only its ``min(rows, cols)`` diagonal entries.

    Off-diagonal cells read as 0 and cannot be written.
    """

    def __init__(self, rows: int, cols: int, dtype=ENTRY_DTYPE):
        super().__init__(rows, cols, dtype)
        self.data = np.zeros(min(self.rows, self.cols), dtype=self.dtype)

    @classmethod
    def ident(cls, rows: int, cols: Optional[int] = None, dtype=ENTRY_DTYPE) -> 'DiagonalMatrix':
        """Returns the identity matrix. It is square unless ``cols`` is given."""
        cols = rows if cols is None else cols
        mat = cls(rows, cols, dtype)
        mat.data[:] = one_of(mat.dtype)
        return mat

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype=ENTRY_DTYPE) -> 'DiagonalMatrix':
        return cls(rows, cols, dtype)

    @classmethod
    def rand(cls, rows: int, cols: int, config: Optional[MatrixConfig] = None) -> 'DiagonalMatrix':
        """Initializes a new ``rows x cols`` matrix whose diagonal holds random values."""
        config = MatrixConfig() if config is None else config
        config.validate()
        mat = cls(rows, cols, config.dtype)
        mat.data = random_entries(len(mat.data), mat.dtype, config.rng())
        return mat

    @classmethod
    def from_elements(cls, shape: tuple[int, int], elems, dtype=ENTRY_DTYPE) -> 'DiagonalMatrix':
        """
        Builds a diagonal matrix of the given shape from its diagonal elements.

        Args:
            shape: (rows, cols) of the new matrix
            elems: diagonal entries, from the top-left corner.
                If fewer than min(rows, cols) are given, the rest of the diagonal is filled with 0.
            dtype: entry dtype

        Returns:
            The new matrix, e.g. ``from_elements((4, 5), [1, 2, 3])`` has diagonal [1, 2, 3, 0]

        Raises:
            TooManyElementsError: If more than min(rows, cols) elements are given
        """
        rows, cols = check_shape(*shape)
        mat = cls(rows, cols, dtype)
        elems = np.asarray(elems, dtype=mat.dtype).reshape(-1)
        if len(elems) > len(mat.data):
            raise TooManyElementsError(len(elems), len(mat.data), (rows, cols))
        mat.data[:len(elems)] = elems
        return mat

    def get(self, idx: tuple[int, int]) -> Optional[Numeric]:
        i, j = unpack_index(idx)
        if i == j and 0 <= i < len(self.data):
            return self.data[i]
        if i != j and self.is_in_range((i, j)):
            return zero_of(self.dtype)
        return None

    def get_mut(self, idx: tuple[int, int]) -> Optional[EntryRef]:
        i, j = unpack_index(idx)
        # off-diagonal cells are not stored, so there is nothing to mutate
        if i == j and 0 <= i < len(self.data):
            return EntryRef(self, (i, j))
        return None

    def _store_entry(self, idx: tuple[int, int], val) -> None:
        i, j = unpack_index(idx)
        if i != j or not 0 <= i < len(self.data):
            raise OutOfRangeError(idx, self.shape())
        self.data[i] = val

    def reshape(self, shape: tuple[int, int]) -> 'DiagonalMatrix':
        """Resizes the matrix in-place, truncating or zero padding the diagonal."""
        rows, cols = check_shape(*shape)
        self.data = resize_flat(self.data, min(rows, cols))
        self.rows, self.cols = rows, cols
        return self

    def apply(self, f: Callable) -> 'DiagonalMatrix':
        """Applies ``f`` in-place to every diagonal entry. Off-diagonal zeros are untouched."""
        for pos, e in enumerate(self.data):
            self.data[pos] = self.dtype.type(f(e))
        return self

    def scalar_mul(self, k) -> 'DiagonalMatrix':
        """Multiplies every diagonal entry by ``k`` in-place."""
        self.data[:] = (self.data * k).astype(self.dtype)
        return self

    def det(self) -> Optional[Numeric]:
        """
        Computes the determinant, the product of the diagonal.

        Returns:
            The determinant, or None if the matrix is not square
        """
        if not self.is_square():
            return None
        return np.prod(self.data, dtype=self.dtype)

    def inv(self) -> Optional['DiagonalMatrix']:
        """
        Inverts the matrix in-place.

        Each nonzero diagonal entry ``e`` becomes ``1 / e``. Zero entries stay 0,
        so a singular matrix yields its pseudo-inverse instead of an error.
        Integer dtypes truncate the quotient.

        Returns:
            self, or None if the matrix is not square
        """
        if not self.is_square():
            return None

        zero = zero_of(self.dtype)
        one = one_of(self.dtype)
        return self.apply(lambda e: one / e if e != zero else zero)

    def to_numpy(self) -> np.ndarray:
        out = np.zeros((self.rows, self.cols), dtype=self.dtype)
        k = len(self.data)
        out[np.arange(k), np.arange(k)] = self.data
        return out
