import numpy as np

from .constants import ENTRY_DTYPE, ROW_SEPARATOR
from .mat_errors import InvalidSeparatorError, EmptyLiteralError, InvalidSyntaxError, InvalidShapeError
from .mat_utils import as_entry_dtype


def mat_from_str(s: str, sep: str = ROW_SEPARATOR, dtype=ENTRY_DTYPE) -> tuple[np.ndarray, int, int]:
    """
    Parse a matrix literal into its row-major entries and dimensions.

    Rows are separated by ``sep`` and entries within a row by whitespace,
    e.g. "1 2 3; 4 5 6" is a 2x3 matrix.

    Args:
        s: the matrix literal
        sep: row separator token
        dtype: entry dtype. Integer dtypes only accept integer tokens.

    Returns:
        (entries, rows, cols) where entries is a flat array of length rows * cols

    Raises:
        InvalidSeparatorError: If ``sep`` is blank
        EmptyLiteralError: If ``s`` is empty
        InvalidSyntaxError: If a token cannot be parsed as ``dtype``
        InvalidShapeError: If the rows do not all have the same number of entries
    """
    if sep.strip() == "":
        raise InvalidSeparatorError(sep)
    if s == "":
        raise EmptyLiteralError()

    dtype = as_entry_dtype(dtype)
    parse_token = int if np.issubdtype(dtype, np.integer) else float

    data = []
    rows = 0
    cols = None
    for row in s.split(sep):
        read = 0
        for token in row.split():
            # int() and float() would otherwise accept digit separators such as "1_000"
            if "_" in token:
                raise InvalidSyntaxError(token, dtype)
            try:
                data.append(dtype.type(parse_token(token)))
            except (ValueError, OverflowError) as e:
                raise InvalidSyntaxError(token, dtype) from e
            read += 1

        # the first row fixes the column count
        if cols is None:
            cols = read
        elif cols != read:
            raise InvalidShapeError(rows, cols, read)
        rows += 1

    return np.array(data, dtype=dtype), rows, cols
