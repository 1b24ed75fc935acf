
class MatrixError(Exception):
    """Base class for mat_lib errors."""
    pass

class InvalidConstructionError(MatrixError, ValueError):
    """Base class for errors raised while building a matrix."""
    pass



class OutOfRangeError(MatrixError, IndexError):
    """Raised by the indexing operator when an index lies outside the matrix shape."""

    def __init__(self, idx, shape: tuple[int, int]):
        self.idx = idx
        self.shape = shape
        message = f"Index {idx} out of range for matrix of shape {shape}"
        super().__init__(message)


class UnsupportedOperationError(MatrixError, NotImplementedError):
    """Raised when an operation is not available for a matrix representation."""

    def __init__(self, operation: str, representation: str):
        self.operation = operation
        self.representation = representation
        message = f"'{operation}' is not supported for {representation}"
        super().__init__(message)


class InvalidSeparatorError(InvalidConstructionError):
    """Raised when a row separator is blank."""

    def __init__(self, sep: str):
        self.sep = sep
        message = f"Invalid separator {sep!r}: row separator cannot be blank"
        super().__init__(message)


class EmptyLiteralError(InvalidConstructionError):
    """Raised when a matrix literal string is empty."""

    def __init__(self):
        message = "Given string is empty"
        super().__init__(message)


class InvalidSyntaxError(InvalidConstructionError):
    """Raised when a token of a matrix literal cannot be parsed as an entry."""

    def __init__(self, token: str, dtype):
        self.token = token
        self.dtype = dtype
        message = f"Invalid syntax in string: cannot parse {token!r} as {dtype}"
        super().__init__(message)


class InvalidShapeError(InvalidConstructionError):
    """Raised when a matrix literal has rows of different lengths."""

    def __init__(self, row: int, expected: int, found: int):
        self.row = row
        self.expected = expected
        self.found = found
        message = f"Invalid shape for matrix: row {row} has {found} entries, expected {expected}"
        super().__init__(message)


class TooManyElementsError(InvalidConstructionError):
    """Raised when more initial elements are given than the matrix can store."""

    def __init__(self, count: int, capacity: int, shape: tuple[int, int]):
        self.count = count
        self.capacity = capacity
        self.shape = shape
        message = f"Invalid quantity of elements: {count} given, matrix of shape {shape} stores at most {capacity}"
        super().__init__(message)


class InvalidDtypeError(InvalidConstructionError):
    """Raised when an entry dtype is not an integer or floating point type."""

    def __init__(self, dtype):
        self.dtype = dtype
        message = f"Unsupported entry dtype: {dtype}. Must be a numpy integer or floating type"
        super().__init__(message)


class InvalidDimensionsError(InvalidConstructionError):
    """Raised when a matrix is given a negative number of rows or columns."""

    def __init__(self, shape):
        self.shape = shape
        message = f"Invalid matrix shape {shape}: rows and cols must be >= 0"
        super().__init__(message)


class InvalidEntryIndexError(InvalidConstructionError):
    """Raised when an initial entry is given at an index outside the matrix shape."""

    def __init__(self, idx, shape: tuple[int, int]):
        self.idx = idx
        self.shape = shape
        message = f"Entry index {idx} out of range for matrix of shape {shape}"
        super().__init__(message)
