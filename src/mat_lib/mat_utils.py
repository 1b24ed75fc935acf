import numpy as np
from typing import Optional

from .constants import DISPLAY_PRECISION, DISPLAY_WIDTH
from .mat_errors import InvalidDtypeError, InvalidDimensionsError


# process-wide generator used by the rand() constructors when no seed is configured
_RNG = np.random.default_rng()


def as_entry_dtype(dtype) -> np.dtype:
    """
    Normalize an entry dtype, checking it supports the numeric capabilities matrices need.

    Args:
        dtype: anything accepted by ``np.dtype``

    Returns:
        The normalized numpy dtype

    Raises:
        InvalidDtypeError: If the dtype is not an integer or floating point type
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as e:
        raise InvalidDtypeError(dtype) from e
    if not (np.issubdtype(dt, np.integer) or np.issubdtype(dt, np.floating)):
        raise InvalidDtypeError(dtype)
    return dt


def check_shape(rows, cols) -> tuple[int, int]:
    """Validate a (rows, cols) pair and return it as plain ints."""
    if rows < 0 or cols < 0:
        raise InvalidDimensionsError((rows, cols))
    return int(rows), int(cols)


def unpack_index(idx) -> tuple[int, int]:
    if isinstance(idx, tuple) and len(idx) == 2:
        i, j = idx
    else:
        raise KeyError("Matrix indices must be a tuple of length 2")
    # bool is an int subclass but never a valid index
    for k in (i, j):
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
            raise KeyError(f"Matrix indices must be integers, got {idx!r}")
    return int(i), int(j)


def zero_of(dtype):
    return np.dtype(dtype).type(0)


def one_of(dtype):
    return np.dtype(dtype).type(1)


def resize_flat(data: np.ndarray, size: int) -> np.ndarray:
    """
    Resize a 1-D buffer, keeping the leading entries and zero filling the tail.

    Unlike ``np.resize`` the new entries are zeros, not repeated copies of the data.

    Args:
        data: buffer to resize
        size: length of the returned buffer

    Returns:
        A new buffer of the same dtype
    """
    out = np.zeros(size, dtype=data.dtype)
    keep = min(size, len(data))
    out[:keep] = data[:keep]
    return out


def get_rng(rng: Optional[np.random.Generator] = None) -> np.random.Generator:
    return _RNG if rng is None else rng


def random_entries(count: int, dtype, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Draw uniformly distributed matrix entries.

    Floating dtypes are drawn from [0, 1). Integer dtypes span the full range of the type.

    Args:
        count: number of entries to draw
        dtype: entry dtype
        rng: generator to draw from. If None, the process-wide generator is used.

    Returns:
        1-D array of ``count`` entries
    """
    dtype = as_entry_dtype(dtype)
    rng = get_rng(rng)
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        return rng.integers(info.min, info.max, size=count, dtype=dtype, endpoint=True)
    if dtype in (np.float32, np.float64):
        return rng.random(count, dtype=dtype)
    # casting down from float64 may round up to 1.0
    return np.minimum(rng.random(count).astype(dtype), np.nextafter(dtype.type(1), dtype.type(0)))


def format_entry(val, precision: int = DISPLAY_PRECISION, width: int = DISPLAY_WIDTH) -> str:
    # integer entries ignore the precision
    if isinstance(val, (int, np.integer)):
        text = f" {int(val)}"
    else:
        text = f" {float(val):.{precision}f}"
    return text[:width]


def format_matrix(mat, config=None) -> str:
    """
    Render a matrix as bracketed rows, one row per line.

    Each entry is formatted with a fixed precision and truncated to a fixed column width.

    Args:
        mat: any Matrix
        config: MatrixConfig supplying display_precision and display_width. If None, the defaults are used.

    Returns:
        The rendered matrix, e.g. "[ 1.0000 0.0000 ]\\n[ 0.0000 1.0000 ]"
    """
    precision = DISPLAY_PRECISION if config is None else config.display_precision
    width = DISPLAY_WIDTH if config is None else config.display_width

    rows, cols = mat.shape()
    lines = []
    for i in range(rows):
        entries = "".join(format_entry(mat.get((i, j)), precision, width) for j in range(cols))
        lines.append(f"[{entries} ]")
    return "\n".join(lines)


def show(mat, name: str = "mat", config=None) -> None:
    """Print a matrix preceded by its name and shape."""
    print(f"{name}: {mat.shape()}\n{format_matrix(mat, config)}")
