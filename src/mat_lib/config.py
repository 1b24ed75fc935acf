import numpy as np
from typing import Optional
from dataclasses import dataclass, field

from .constants import ENTRY_DTYPE, ROW_SEPARATOR, DISPLAY_PRECISION, DISPLAY_WIDTH
from .mat_errors import InvalidSeparatorError
from .mat_utils import as_entry_dtype


@dataclass
class MatrixConfig:
    """
    Configuration for matrix construction and display.

    This class groups the settings used by the textual literal parser,
    the display formatter and the random-fill constructors.
    """

    dtype: type = field(default=ENTRY_DTYPE)
    """numpy dtype of the matrix entries. Must be an integer or floating type."""

    row_separator: str = ROW_SEPARATOR
    """Token separating rows in a matrix literal, e.g. "1 2; 3 4"."""

    display_precision: int = DISPLAY_PRECISION
    """Number of decimal places used when rendering an entry."""

    display_width: int = DISPLAY_WIDTH
    """Fixed column width of a rendered entry, including its leading space.
    Longer renderings are truncated to this width."""

    seed: Optional[int] = None
    """Seed for the random-fill constructors. If None, the process-wide generator is used."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        as_entry_dtype(self.dtype)
        if self.row_separator.strip() == "":
            raise InvalidSeparatorError(self.row_separator)
        if self.display_precision < 0:
            raise ValueError("display_precision must be >= 0")
        if self.display_width < 1:
            raise ValueError("display_width must be >= 1")

    def rng(self) -> Optional[np.random.Generator]:
        """Returns a generator seeded from `seed`, or None to fall back to the process-wide one."""
        if self.seed is None:
            return None
        return np.random.default_rng(self.seed)
