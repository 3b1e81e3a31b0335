import unittest

import numpy as np

from siras.exceptions import (
    DimensionMismatchError,
    InvalidParameterError,
    MalformedModelError,
)
from siras.state_space import ContinuousStateSpace, DiscreteStateSpace
from siras.transfer_function import ContinuousTransferFunction, DiscreteTransferFunction


class TestCoreModels(unittest.TestCase):
    """
    Unit Tests for the transfer-function and state-space containers.
    """

    # --- ContinuousTransferFunction Tests ---

    def test_ctf_init_dtype_and_order(self):
        tf = ContinuousTransferFunction([1], [1, 2, 3])
        self.assertEqual(tf.num.dtype, float)
        self.assertEqual(len(tf.num), 1)
        self.assertEqual(tf.order, 2)

    def test_ctf_rejects_improper(self):
        with self.assertRaises(MalformedModelError):
            ContinuousTransferFunction([1, 2, 3], [1, 2])

    def test_ctf_rejects_empty_and_zero_leading(self):
        with self.assertRaises(MalformedModelError):
            ContinuousTransferFunction([], [1, 2])
        with self.assertRaises(MalformedModelError):
            ContinuousTransferFunction([1], [])
        with self.assertRaises(MalformedModelError):
            ContinuousTransferFunction([1], [0, 1])

    def test_ctf_rejects_non_finite(self):
        with self.assertRaises(MalformedModelError):
            ContinuousTransferFunction([np.nan], [1, 1])

    def test_ctf_is_immutable(self):
        tf = ContinuousTransferFunction([1], [1, 1])
        with self.assertRaises(ValueError):
            tf.den[0] = 5.0

    def test_ctf_does_not_alias_input(self):
        den = np.array([1.0, 1.0])
        ContinuousTransferFunction([1], den)
        den[0] = 2.0
        self.assertEqual(den[0], 2.0)

    def test_ctf_evaluate(self):
        tf = ContinuousTransferFunction([1], [1, 1])
        self.assertEqual(tf.evaluate(0), 1.0)
        self.assertEqual(tf.evaluate(-1), np.inf)

    def test_ctf_bode_first_order(self):
        tf = ContinuousTransferFunction([1], [1, 1])
        mags, phases = tf.bode_response([1.0])
        self.assertAlmostEqual(mags[0], -10.0 * np.log10(2.0))
        self.assertAlmostEqual(phases[0], -45.0)

    # --- DiscreteTransferFunction Tests ---

    def test_dtf_zero_initialized(self):
        tf = DiscreteTransferFunction([1.0, 0.5], [1.0, -0.2, 0.1], 0.01)
        np.testing.assert_array_equal(tf.inputs, np.zeros(2))
        np.testing.assert_array_equal(tf.outputs, np.zeros(3))
        self.assertEqual(tf.dt, 0.01)

    def test_dtf_allows_fir(self):
        tf = DiscreteTransferFunction([0.25, 0.5, 0.25], [1.0], 1.0)
        self.assertEqual(tf.order, 0)

    def test_dtf_rejects_bad_inputs(self):
        with self.assertRaises(MalformedModelError):
            DiscreteTransferFunction([1.0], [0.0, 1.0], 0.1)
        with self.assertRaises(InvalidParameterError):
            DiscreteTransferFunction([1.0], [1.0, 0.5], 0.0)
        with self.assertRaises(InvalidParameterError):
            DiscreteTransferFunction([1.0], [1.0, 0.5], -0.1)

    def test_dtf_evaluate_dc(self):
        tf = DiscreteTransferFunction([0.5], [1.0, -0.5], 0.1)
        self.assertAlmostEqual(tf.evaluate(1.0), 1.0)
        resp = tf.frequency_response([0.0])
        self.assertAlmostEqual(abs(resp[0]), 1.0)

    def test_dtf_nyquist_response(self):
        tf = DiscreteTransferFunction([0.5, 0.5], [1.0], 0.1)
        resp = tf.frequency_response([5.0])
        self.assertAlmostEqual(abs(resp[0]), 0.0, places=12)

    # --- StateSpace Tests ---

    def test_ss_init_valid(self):
        ss = ContinuousStateSpace(np.eye(2), np.zeros((2, 1)), np.zeros((1, 2)), np.zeros((1, 1)))
        self.assertEqual(ss.n_states, 2)
        self.assertEqual(ss.n_outputs, 1)

    def test_ss_accepts_vectors(self):
        ss = ContinuousStateSpace([[-2, -3], [1, 0]], [1, 0], [1, 2], [2])
        self.assertEqual(ss.B.shape, (2, 1))
        self.assertEqual(ss.C.shape, (1, 2))
        self.assertEqual(ss.D.shape, (1, 1))

    def test_ss_init_invalid_shapes(self):
        """Catches DimensionMismatchError."""
        with self.assertRaises(DimensionMismatchError):
            ContinuousStateSpace(
                np.ones((2, 3)), np.zeros((2, 1)), np.zeros((1, 2)), np.zeros((1, 1))
            )

        with self.assertRaises(DimensionMismatchError):
            ContinuousStateSpace(np.eye(2), np.zeros((3, 1)), np.zeros((1, 2)), np.zeros((1, 1)))

        with self.assertRaises(DimensionMismatchError):
            ContinuousStateSpace(np.eye(2), np.zeros((2, 1)), np.zeros((1, 3)), np.zeros((1, 1)))

        with self.assertRaises(DimensionMismatchError):
            ContinuousStateSpace(np.eye(2), np.zeros((2, 2)), np.zeros((1, 2)), np.zeros((1, 2)))

        with self.assertRaises(DimensionMismatchError):
            ContinuousStateSpace(np.eye(2), np.zeros((2, 1)), np.zeros((2, 2)), np.zeros((1, 1)))

    def test_dimension_mismatch_is_malformed_model(self):
        self.assertTrue(issubclass(DimensionMismatchError, MalformedModelError))

    def test_ss_freq_response_integrator(self):
        ss = ContinuousStateSpace([[0]], [[1]], [[1]], [[0]])
        mags, phases = ss.get_frequency_response([1.0])
        self.assertAlmostEqual(mags[0], 0.0)
        self.assertAlmostEqual(phases[0], -90.0)

    def test_ss_freq_response_bad_output(self):
        ss = ContinuousStateSpace([[0]], [[1]], [[1]], [[0]])
        with self.assertRaises(ValueError):
            ss.get_frequency_response([1.0], output_idx=1)

    def test_dss_zero_state_and_dt(self):
        dss = DiscreteStateSpace(np.eye(3), np.ones((3, 1)), np.ones((1, 3)), [[0]], 0.5)
        np.testing.assert_array_equal(dss.x, np.zeros((3, 1)))
        self.assertEqual(dss.dt, 0.5)

    def test_dss_rejects_bad_dt(self):
        with self.assertRaises(InvalidParameterError):
            DiscreteStateSpace([[0.5]], [[1]], [[1]], [[0]], 0.0)

    def test_dss_frequency_response_matches_tf(self):
        tf = DiscreteTransferFunction([0.2, 0.1], [1.0, -0.5], 0.01)
        dss = tf.to_state_space()
        freqs = [0.0, 5.0, 20.0, 49.0]
        np.testing.assert_allclose(
            dss.frequency_response(freqs), tf.frequency_response(freqs), rtol=1e-12
        )


if __name__ == "__main__":
    unittest.main()
