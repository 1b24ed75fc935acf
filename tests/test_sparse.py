import os
import sys
import numpy as np
import pytest
from scipy import sparse

# Add the src directory to Python path to import local mat_lib
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mat_lib import SparseMatrix, MatrixConfig
from mat_lib.mat_errors import OutOfRangeError, UnsupportedOperationError, InvalidEntryIndexError
from test_utils import validate_matrix


@pytest.fixture
def diag_pairs() -> list:
    return [((0, 0), 1.1), ((1, 1), 2.2), ((2, 2), 3.3)]


def test_zeros_is_empty():
    mat = SparseMatrix.zeros(25, 10)
    assert mat.shape() == (25, 10)
    assert len(mat) == 0
    validate_matrix(mat, np.zeros((25, 10)))


def test_get():
    mat = SparseMatrix.zeros(3, 4)
    mat.set((1, 2), 5.0)
    assert mat.get((1, 2)) == 5.0
    assert mat.get((0, 0)) == 0.0
    assert mat.get((3, 0)) is None
    assert mat.get((0, 4)) is None
    # reading never stores anything
    assert len(mat) == 1


def test_set_get_round_trip():
    mat = SparseMatrix.zeros(3, 3)
    assert mat.set((2, 1), 1.1) == 0.0
    assert mat.get((2, 1)) == np.float32(1.1)
    assert mat.set((2, 1), -4.5) == np.float32(1.1)
    assert mat[2, 1] == -4.5


def test_set_out_of_range_is_rejected():
    mat = SparseMatrix.zeros(3, 3)
    assert mat.set((3, 0), 1.0) is None
    assert mat.set((0, 5), 1.0) is None
    assert len(mat) == 0
    with pytest.raises(OutOfRangeError):
        mat[3, 3] = 1.0


def test_set_zero_is_stored():
    mat = SparseMatrix.zeros(2, 2)
    mat.set((0, 1), 0.0)
    assert (0, 1) in mat
    assert mat.nnz == 1


def test_get_mut_materializes_zero():
    mat = SparseMatrix.zeros(3, 3)
    ref = mat.get_mut((1, 1))
    assert ref.value == 0.0
    assert (1, 1) in mat
    assert len(mat) == 1
    # the observable value is unchanged
    validate_matrix(mat, np.zeros((3, 3)))

    ref.value = 2.0
    assert mat[1, 1] == 2.0

    assert mat.get_mut((3, 3)) is None
    assert len(mat) == 1


def test_entry_ref_after_del_and_clear():
    mat = SparseMatrix.from_pairs((3, 3), [((0, 0), 4.0)])
    ref = mat.get_mut((0, 0))
    del mat[0, 0]
    assert ref.value == 0.0
    assert (0, 0) not in mat

    ref.value = 5.0
    assert mat[0, 0] == 5.0
    mat.clear()
    assert ref.replace(6.0) == 0.0
    assert mat.items() == [((0, 0), 6.0)]


def test_from_pairs(diag_pairs):
    mat = SparseMatrix.from_pairs((3, 3), diag_pairs)
    assert mat.keys() == [(0, 0), (1, 1), (2, 2)]
    assert mat[0, 0] == np.float32(1.1)
    assert mat[1, 1] == np.float32(2.2)
    assert mat[2, 2] == np.float32(3.3)
    nonzero = {(i, j) for i in range(3) for j in range(3) if mat[i, j] != 0}
    assert nonzero == {(0, 0), (1, 1), (2, 2)}


def test_from_pairs_later_duplicates_overwrite():
    mat = SparseMatrix.from_pairs((2, 2), [((0, 1), 1.0), ((1, 0), 2.0), ((0, 1), 3.0)])
    assert len(mat) == 2
    assert mat[0, 1] == 3.0


def test_from_pairs_out_of_range():
    with pytest.raises(InvalidEntryIndexError):
        SparseMatrix.from_pairs((2, 2), [((0, 0), 1.0), ((2, 0), 1.0)])


def test_iteration_is_row_major():
    mat = SparseMatrix.zeros(3, 3)
    mat.set((2, 0), 3.0)
    mat.set((0, 2), 1.0)
    mat.set((1, 1), 2.0)
    assert list(mat) == [(0, 2), (1, 1), (2, 0)]
    assert mat.values() == [1.0, 2.0, 3.0]
    assert mat.items()[0] == ((0, 2), 1.0)


def test_reshape_evicts_and_keeps_coordinates(diag_pairs):
    mat = SparseMatrix.from_pairs((3, 3), diag_pairs)
    mat.set((0, 2), 4.0)

    mat.reshape((2, 5))
    assert mat.shape() == (2, 5)
    assert mat.keys() == [(0, 0), (0, 2), (1, 1)]
    assert mat[0, 2] == 4.0
    assert mat.get((2, 2)) is None

    mat.reshape((3, 3))
    # evicted entries do not come back
    assert mat[2, 2] == 0.0
    assert mat[1, 1] == np.float32(2.2)


def test_apply_only_touches_stored_entries():
    mat = SparseMatrix.from_pairs((2, 2), [((0, 0), 1.0)])
    mat.apply(lambda e: e + 1.0)
    validate_matrix(mat, [[2, 0], [0, 0]])
    assert len(mat) == 1


def test_scalar_mul(diag_pairs):
    mat = SparseMatrix.from_pairs((3, 3), diag_pairs)
    mat.scalar_mul(2.0)
    validate_matrix(mat, np.diag([2.2, 4.4, 6.6]))


def test_det_inv_unsupported():
    mat = SparseMatrix.from_pairs((2, 2), [((0, 0), 1.0), ((1, 1), 1.0)])
    with pytest.raises(UnsupportedOperationError):
        mat.det()
    with pytest.raises(NotImplementedError):
        mat.inv()


def test_delete_and_clear(diag_pairs):
    mat = SparseMatrix.from_pairs((3, 3), diag_pairs)
    del mat[1, 1]
    assert (1, 1) not in mat
    assert mat[1, 1] == 0.0
    with pytest.raises(OutOfRangeError):
        del mat[3, 3]

    mat.clear()
    assert len(mat) == 0
    assert mat.shape() == (3, 3)


def test_scipy_round_trip(diag_pairs):
    mat = SparseMatrix.from_pairs((3, 4), diag_pairs)
    sp = mat.to_scipy()
    assert sp.shape == (3, 4)
    assert sp.nnz == 3
    assert np.array_equal(sp.toarray(), mat.to_numpy())

    back = SparseMatrix.from_scipy(sp)
    assert back == mat


def test_from_scipy_sums_duplicates():
    sp = sparse.coo_matrix(([1.0, 2.0, 5.0], ([0, 0, 1], [1, 1, 0])), shape=(2, 2))
    mat = SparseMatrix.from_scipy(sp)
    assert mat.dtype == np.float64
    assert mat[0, 1] == 3.0
    assert mat[1, 0] == 5.0
    assert len(mat) == 2


def test_rand():
    mat = SparseMatrix.rand(10, 10, density=0.2, config=MatrixConfig(seed=1))
    assert mat.nnz == 20
    assert all(mat.is_in_range(key) for key in mat)
    assert all(0 <= v < 1 for v in mat.values())

    with pytest.raises(ValueError):
        SparseMatrix.rand(2, 2, density=1.5)


def test_display():
    mat = SparseMatrix.zeros(2, 2, dtype=np.int32)
    mat.set((1, 1), 2)
    assert str(mat) == "[ 0 0 ]\n[ 0 2 ]"
    assert repr(mat) == "SparseMatrix(shape=(2, 2), {(1, 1): 2})"
