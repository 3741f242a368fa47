"""
Tests for Gauss-Jordan inversion and the SVD pseudo-inverse.
"""

import numpy as np
import pytest

from pylinreg.core.exceptions import DecompositionError, DimensionError
from pylinreg.linalg import Matrix, Vector


class TestInverse:

    def test_known_inverse(self):
        a = Matrix.from_data([[4.0, 7.0], [2.0, 6.0]])
        np.testing.assert_allclose(
            a.inverse().to_numpy(),
            [[0.6, -0.7], [-0.2, 0.4]],
            rtol=1e-12,
        )

    def test_pivot_swap_required(self):
        """Zero in the leading position forces a row swap."""
        a = Matrix.from_data([[0.0, 1.0], [1.0, 0.0]])
        assert a.inverse() == a

    def test_identity_inverse(self):
        assert Matrix.identity(3).inverse() == Matrix.identity(3)

    @pytest.mark.parametrize("n", [1, 3, 5])
    def test_product_is_identity(self, rng, n):
        a = Matrix.from_data(rng.standard_normal((n, n)) + 4.0 * np.eye(n))
        inv = a.inverse()
        np.testing.assert_allclose((a @ inv).to_numpy(), np.eye(n), atol=1e-12)
        np.testing.assert_allclose((inv @ a).to_numpy(), np.eye(n), atol=1e-12)

    def test_matches_numpy(self, rng):
        data = rng.standard_normal((4, 4)) + 3.0 * np.eye(4)
        np.testing.assert_allclose(
            Matrix.from_data(data).inverse().to_numpy(),
            np.linalg.inv(data),
            rtol=1e-10,
            atol=1e-12,
        )

    def test_zero_row_is_singular(self):
        a = Matrix.from_data([[1.0, 2.0], [0.0, 0.0]])
        assert a.inverse() is None

    def test_zero_first_row_is_singular(self):
        a = Matrix.from_data([[0.0, 0.0], [1.0, 2.0]])
        assert a.inverse() is None

    def test_dependent_rows_are_singular(self):
        a = Matrix.from_data([[1.0, 2.0], [2.0, 4.0]])
        assert a.inverse() is None

    def test_does_not_mutate_input(self):
        a = Matrix.from_data([[0.0, 1.0], [2.0, 3.0]])
        a.inverse()
        assert a.to_data() == [[0.0, 1.0], [2.0, 3.0]]

    def test_non_square_rejected(self):
        with pytest.raises(DimensionError, match="square"):
            Matrix.zeros(2, 3).inverse()


class TestPseudoInverse:

    def test_shape_is_transposed(self, rng):
        a = Matrix.from_data(rng.standard_normal((5, 2)))
        assert a.pseudo_inverse().shape == (2, 5)

    def test_left_inverse_for_full_column_rank(self, rng):
        a = Matrix.from_data(rng.standard_normal((6, 3)))
        np.testing.assert_allclose(
            (a.pseudo_inverse() @ a).to_numpy(), np.eye(3), atol=1e-12
        )

    def test_matches_numpy(self, rng):
        data = rng.standard_normal((4, 3))
        np.testing.assert_allclose(
            Matrix.from_data(data).pseudo_inverse().to_numpy(),
            np.linalg.pinv(data),
            rtol=1e-10,
            atol=1e-12,
        )

    def test_square_invertible_matches_inverse(self):
        a = Matrix.from_data([[4.0, 7.0], [2.0, 6.0]])
        np.testing.assert_allclose(
            a.pseudo_inverse().to_numpy(), a.inverse().to_numpy(), atol=1e-12
        )

    def test_zero_singular_values_dropped(self):
        a = Matrix.from_data([[2.0, 0.0], [0.0, 0.0]])
        np.testing.assert_allclose(
            a.pseudo_inverse().to_numpy(), [[0.5, 0.0], [0.0, 0.0]], atol=1e-15
        )

    def test_zero_matrix(self):
        assert Matrix.zeros(2, 3).pseudo_inverse() == Matrix.zeros(3, 2)

    def test_vector_pseudo_inverse(self):
        v = Vector.from_array([3.0, 4.0])
        np.testing.assert_allclose(
            v.pseudo_inverse().to_numpy(), [[0.12, 0.16]], rtol=1e-12
        )

    def test_non_finite_input_raises(self):
        a = Matrix.from_data([[1.0, np.nan], [0.0, 1.0]])
        with pytest.raises(DecompositionError) as excinfo:
            a.pseudo_inverse()
        assert excinfo.value.shape == (2, 2)
