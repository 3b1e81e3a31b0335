import unittest

import numpy as np

from siras.discretization import to_discrete
from siras.exceptions import InvalidParameterError, SingularMatrixError
from siras.linalg import NumpyBackend
from siras.state_space import ContinuousStateSpace, DiscreteStateSpace
from siras.transfer_function import ContinuousTransferFunction


class CountingBackend(NumpyBackend):
    def __init__(self):
        self.solves = 0

    def solve(self, a, b):
        self.solves += 1
        return super().solve(a, b)


class TestGeneralizedBilinear(unittest.TestCase):
    """
    Unit Tests for the generalized bilinear transform.
    """

    def test_three_output_system(self):
        ss = ContinuousStateSpace(
            np.eye(2),
            [[0.5], [0.5]],
            [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]],
            [[1.0], [2.0], [3.0]],
        )
        dss = to_discrete(ss, 0.5, alpha=1.0 / 3.0)

        self.assertIsInstance(dss, DiscreteStateSpace)
        self.assertEqual(dss.dt, 0.5)
        np.testing.assert_allclose(dss.A, 1.6 * np.eye(2))
        np.testing.assert_allclose(dss.B, [[0.3], [0.3]])
        np.testing.assert_allclose(dss.C, [[1.2, 2.4], [3.6, 4.8], [6.0, 7.2]])
        np.testing.assert_allclose(dss.D, [[1.3], [2.7], [4.1]])

    def test_forward_euler(self):
        ss = ContinuousStateSpace([[-2.0]], [[3.0]], [[4.0]], [[5.0]])
        dss = to_discrete(ss, 0.1, alpha=0.0)
        np.testing.assert_allclose(dss.A, [[1.0 - 0.2]])
        np.testing.assert_allclose(dss.B, [[0.3]])
        np.testing.assert_allclose(dss.C, [[4.0]])
        np.testing.assert_allclose(dss.D, [[5.0]])

    def test_backward_euler(self):
        ss = ContinuousStateSpace([[-2.0]], [[3.0]], [[4.0]], [[5.0]])
        dss = to_discrete(ss, 0.1, alpha=1.0)
        m = 1.0 + 0.2
        np.testing.assert_allclose(dss.A, [[1.0 / m]])
        np.testing.assert_allclose(dss.B, [[0.3 / m]])
        np.testing.assert_allclose(dss.C, [[4.0 / m]])
        np.testing.assert_allclose(dss.D, [[5.0 + 4.0 * 0.3 / m]])

    def test_tustin_default(self):
        ss = ContinuousStateSpace([[-2.0]], [[1.0]], [[1.0]], [[0.0]])
        dss = to_discrete(ss, 0.1)
        np.testing.assert_allclose(dss.A, [[0.9 / 1.1]])

    def test_dc_gain_preserved(self):
        """s = 0 maps to z = 1 for every alpha."""
        tf = ContinuousTransferFunction([2.0], [1.0, 3.0, 2.0])
        for alpha in (0.0, 0.25, 0.5, 1.0):
            dtf = tf.to_discrete(0.05, alpha=alpha)
            self.assertAlmostEqual(dtf.evaluate(1.0), 1.0, places=10)

    def test_stable_poles_stay_stable_with_tustin(self):
        tf = ContinuousTransferFunction([1.0], [1.0, 0.4, 4.0])
        dtf = tf.to_discrete(0.5, alpha=0.5)
        self.assertTrue(np.all(np.abs(np.roots(dtf.den)) < 1.0))

    def test_invalid_parameters(self):
        ss = ContinuousStateSpace([[-1.0]], [[1.0]], [[1.0]], [[0.0]])
        with self.assertRaises(InvalidParameterError):
            to_discrete(ss, 0.0)
        with self.assertRaises(InvalidParameterError):
            to_discrete(ss, -0.1)
        with self.assertRaises(InvalidParameterError):
            to_discrete(ss, 0.1, alpha=1.5)
        with self.assertRaises(InvalidParameterError):
            to_discrete(ss, 0.1, alpha=-0.1)

    def test_singular_system_matrix(self):
        """alpha * dt * a == 1 makes I - alpha dt A singular."""
        ss = ContinuousStateSpace([[2.0]], [[1.0]], [[1.0]], [[0.0]])
        with self.assertRaises(SingularMatrixError):
            to_discrete(ss, 1.0, alpha=0.5)

    def test_backend_is_used(self):
        ss = ContinuousStateSpace([[-1.0, 0.0], [0.0, -2.0]], [1.0, 1.0], [1.0, 1.0], [0.0])
        backend = CountingBackend()
        to_discrete(ss, 0.1, backend=backend)
        self.assertEqual(backend.solves, 3)

    def test_rejects_discrete_model(self):
        dss = ContinuousStateSpace([[-1.0]], [[1.0]], [[1.0]], [[0.0]]).to_discrete(0.1)
        with self.assertRaises(TypeError):
            to_discrete(dss, 0.1)
        with self.assertRaises(TypeError):
            to_discrete(object(), 0.1)

    def test_method_on_state_space(self):
        ss = ContinuousStateSpace([[-1.0]], [[1.0]], [[1.0]], [[0.0]])
        dss = ss.to_discrete(0.2, alpha=0.0)
        np.testing.assert_allclose(dss.A, [[0.8]])


if __name__ == "__main__":
    unittest.main()
