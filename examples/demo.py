import os
import sys
import time
import numpy as np

# Add the src directory to Python path to import local mat_lib
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mat_lib import DenseMatrix, DiagonalMatrix, SparseMatrix, MatrixConfig, show


if __name__ == '__main__':
    config = MatrixConfig(seed=42)
    config.validate()

    print("=== Sparse ===")
    mat = SparseMatrix.zeros(25, 10, dtype=np.int32)
    mat.set((0, 0), 1)
    mat.set((1, 1), 2)
    mat.set((2, 2), 3)
    show(mat, "mat")

    print("=== Dense ===")
    dense = DenseMatrix.from_str("1 2 3; 4 5 6", config)
    dense.scalar_mul(2.0)
    show(dense, "dense")
    dense.reshape((3, 3))
    show(dense, "dense")

    print("=== Diagonal ===")
    diag = DiagonalMatrix.from_elements((5, 5), [2.0, 3.0, 4.0])
    print(f"det: {diag.det()}")
    diag.inv()
    show(diag, "diag")

    st = time.time()
    big = DiagonalMatrix.rand(1000, 1000, config)
    big.inv()
    print(f"rand + inv of {big.shape()} took: {time.time() - st} seconds")
