import numpy as np

ENTRY_DTYPE = np.float32  # matches the f32 entries of the concrete matrices
ROW_SEPARATOR = ";"

DISPLAY_PRECISION = 4
DISPLAY_WIDTH = 7  # leading space + "x.xxxx"
