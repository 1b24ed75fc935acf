"""
Numeric matrices with dense, diagonal and sparse storage.

All three representations share one element access and arithmetic contract, see ``Matrix``.
"""

__version__ = "0.1.0"

from .matrix import Matrix, EntryRef, Numeric
from .dense import DenseMatrix
from .diagonal import DiagonalMatrix
from .sparse import SparseMatrix
from .parse import mat_from_str
from .mat_utils import format_matrix, show, random_entries
from .config import MatrixConfig
from .mat_errors import (
    MatrixError,
    OutOfRangeError,
    InvalidConstructionError,
    UnsupportedOperationError,
)

__all__ = [
    "Matrix",
    "EntryRef",
    "Numeric",
    "DenseMatrix",
    "DiagonalMatrix",
    "SparseMatrix",
    "mat_from_str",
    "format_matrix",
    "show",
    "random_entries",
    "MatrixConfig",
    "MatrixError",
    "OutOfRangeError",
    "InvalidConstructionError",
    "UnsupportedOperationError",
]
