from datetime import datetime, timedelta
from unittest import TestCase

import numpy as np
import pandas as pd

from scipy.spatial.transform import Rotation as ScipyRotation

from quatvec.core import quaternion_math as qm


def random_unit_quaternions(count: int, seed: int = 7) -> np.ndarray:
    quaternions = np.random.default_rng(seed).normal(size=(4, count))
    return quaternions / np.linalg.norm(quaternions, axis=0, keepdims=True)


class TestQuaternionNorms(TestCase):

    def test_length(self):

        self.assertEqual(qm.quaternion_length([1, 2, 2, 4]), 5)
        self.assertEqual(qm.quaternion_length_squared([1, 2, 2, 4]), 25)

        np.testing.assert_array_equal(qm.quaternion_length(np.array([[1, 0], [2, 0], [2, 0], [4, 1]])), [5, 1])

    def test_normalize(self):

        np.testing.assert_allclose(qm.quaternion_normalize([1, 2, 2, 4]), np.array([1, 2, 2, 4]) / 5)

        # the sign is not changed
        np.testing.assert_allclose(qm.quaternion_normalize([0, 0, 0, -2]), [0, 0, 0, -1])

        with self.subTest(vectorized=True):
            quaternions = np.random.default_rng(3).normal(size=(4, 10)) * 5

            np.testing.assert_allclose(qm.quaternion_length(qm.quaternion_normalize(quaternions)), np.ones(10))

    def test_normalize_zero(self):

        self.assertTrue(np.isnan(qm.quaternion_normalize([0, 0, 0, 0])).all())

    def test_bad_shape(self):

        with self.assertRaises(ValueError):
            qm.quaternion_length([1, 2, 3])


class TestQuaternionInverse(TestCase):

    def test_conjugate(self):

        original = np.array([1., 2, 3, 4])

        np.testing.assert_array_equal(qm.quaternion_conjugate(original), [-1, -2, -3, 4])

        # the input is not modified
        np.testing.assert_array_equal(original, [1, 2, 3, 4])

    def test_quaternion_inverse(self):

        qinv = qm.quaternion_inverse([1, 2, 3, 4])

        np.testing.assert_allclose(qinv, np.array([-1, -2, -3, 4]) / 30)

        np.testing.assert_allclose(qm.quaternion_multiplication([1, 2, 3, 4], qinv), [0, 0, 0, 1], atol=1e-15)
        np.testing.assert_allclose(qm.quaternion_multiplication(qinv, [1, 2, 3, 4]), [0, 0, 0, 1], atol=1e-15)

        with self.subTest(unit=True):
            q = random_unit_quaternions(1)[:, 0]

            np.testing.assert_allclose(qm.quaternion_inverse(q), qm.quaternion_conjugate(q))

        with self.subTest(vectorized=True):
            quaternions = np.array([[1, 0.5], [2, 0], [3, 0], [4, 0]])

            np.testing.assert_allclose(qm.quaternion_inverse(quaternions),
                                       [[-1 / 30, -2], [-2 / 30, 0], [-3 / 30, 0], [4 / 30, 0]])

    def test_inverse_zero(self):

        self.assertTrue(np.isnan(qm.quaternion_inverse([0, 0, 0, 0])).all())


class TestQuaternionMultiplication(TestCase):

    def test_quaternion_multiplication(self):

        identity = [0, 0, 0, 1]
        q = [0.1, 0.2, 0.3, 0.4]

        np.testing.assert_allclose(qm.quaternion_multiplication(identity, q), q)
        np.testing.assert_allclose(qm.quaternion_multiplication(q, identity), q)

        # i*j = k, j*i = -k
        np.testing.assert_array_equal(qm.quaternion_multiplication([1, 0, 0, 0], [0, 1, 0, 0]), [0, 0, 1, 0])
        np.testing.assert_array_equal(qm.quaternion_multiplication([0, 1, 0, 0], [1, 0, 0, 0]), [0, 0, -1, 0])
        np.testing.assert_array_equal(qm.quaternion_multiplication([1, 0, 0, 0], [1, 0, 0, 0]), [0, 0, 0, -1])

    def test_against_scipy(self):

        first = random_unit_quaternions(20, 1)
        second = random_unit_quaternions(20, 2)

        result = qm.quaternion_multiplication(first, second)

        for index in range(20):
            with self.subTest(index=index):
                expected = (ScipyRotation.from_quat(first[:, index]) *
                            ScipyRotation.from_quat(second[:, index])).as_matrix()

                actual = ScipyRotation.from_quat(result[:, index]).as_matrix()

                np.testing.assert_allclose(actual, expected, atol=1e-12)

    def test_concatenate(self):

        a = random_unit_quaternions(1, 4)[:, 0]
        b = random_unit_quaternions(1, 5)[:, 0]

        np.testing.assert_array_equal(qm.quaternion_concatenate(a, b), qm.quaternion_multiplication(b, a))

    def test_divide(self):

        a = np.array([0.5, -1.0, 2.0, 0.25])
        b = np.array([1.0, 2.0, -0.5, 3.0])

        np.testing.assert_allclose(qm.quaternion_divide(a, b),
                                   qm.quaternion_multiplication(a, qm.quaternion_inverse(b)))

        np.testing.assert_allclose(qm.quaternion_divide(a, a), [0, 0, 0, 1], atol=1e-15)

    def test_add_subtract_scale(self):

        np.testing.assert_array_equal(qm.quaternion_add([1, 2, 3, 4], [1, 1, 1, 1]), [2, 3, 4, 5])
        np.testing.assert_array_equal(qm.quaternion_subtract([1, 2, 3, 4], [1, 1, 1, 1]), [0, 1, 2, 3])
        np.testing.assert_array_equal(qm.quaternion_scale([1, 2, 3, 4], 2), [2, 4, 6, 8])
        np.testing.assert_array_equal(qm.quaternion_negate([1, -2, 3, 4]), [-1, 2, -3, -4])
        self.assertEqual(qm.quaternion_dot([1, 2, 3, 4], [1, 1, 1, 1]), 10)


class TestInterpolationFraction(TestCase):

    def test_floats(self):

        self.assertEqual(qm.interpolation_fraction(0.25), 0.25)
        self.assertEqual(qm.interpolation_fraction(15, 10, 20), 0.5)

    def test_datetimes(self):

        start = datetime(2024, 1, 1)

        self.assertEqual(qm.interpolation_fraction(start + timedelta(seconds=30), start,
                                                   start + timedelta(minutes=2)), 0.25)

        self.assertEqual(qm.interpolation_fraction(pd.Timestamp('2024-01-01T00:00:30'), pd.Timestamp('2024-01-01'),
                                                   pd.Timestamp('2024-01-01T00:02:00')), 0.25)

    def test_bad_types(self):

        with self.assertRaises(TypeError):
            qm.interpolation_fraction(datetime(2024, 1, 1), 0, 1)


class TestNLERP(TestCase):

    def test_lerp(self):

        q0 = np.array([0, 0, 0, 1.0])
        q1 = np.array([0.5, 0.5, 0.5, 0.5])

        np.testing.assert_allclose(qm.lerp(q0, q1, 0), q0)
        np.testing.assert_allclose(qm.lerp(q0, q1, 1), q1)

        qtrue = (q0 + q1) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(qm.lerp(q0, q1, 0.5), qtrue)

        with self.subTest(times=True):
            np.testing.assert_allclose(qm.lerp(q0, q1, 5, 0, 10), qtrue)

    def test_always_unit(self):

        q0 = random_unit_quaternions(1, 8)[:, 0]
        q1 = random_unit_quaternions(1, 9)[:, 0]

        for amount in np.linspace(0, 1, 11):
            with self.subTest(amount=amount):
                self.assertAlmostEqual(qm.quaternion_length(qm.lerp(q0, q1, amount)), 1.0, places=14)

    def test_shortest_path(self):

        q0 = np.array([0, 0, 0, 1.0])
        q1 = -np.array([0.5, 0.5, 0.5, 0.5])

        # the far end is flipped into the same hemisphere as the start
        np.testing.assert_allclose(qm.lerp(q0, q1, 1), -q1)

        for amount in (0.3, 0.5, 0.8):
            with self.subTest(amount=amount):
                flipped = (1 - amount) * q0 - amount * q1
                flipped /= np.linalg.norm(flipped)

                np.testing.assert_allclose(qm.lerp(q0, q1, amount), flipped, atol=1e-15)


class TestSLERP(TestCase):

    def test_slerp(self):

        q0 = [0, 0, 0, 1]
        q1 = [0.5, 0.5, 0.5, 0.5]

        np.testing.assert_allclose(qm.slerp(q0, q1, 0), q0, atol=1e-16)
        np.testing.assert_allclose(qm.slerp(q0, q1, 1), q1)

        qtrue = (np.array(q0) + np.array(q1)) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(qm.slerp(q0, q1, 0.5), qtrue)

        qtrue = (np.array(q0) + qtrue) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(qm.slerp(q0, q1, 0.25), qtrue)

        # comes from ODTBX matlab function
        qtrue = [0.424985851398278, 0.424985851398278, 0.424985851398278, 0.676875969682661]

        np.testing.assert_allclose(qm.slerp(q0, q1, 0.79), qtrue)

        q0 = np.array([0.23, 0.45, 0.67, 0.2])
        q0 /= np.linalg.norm(q0)
        q1 = np.array([-0.3, 0.2, 0.6, 0.33])
        q1 /= np.linalg.norm(q1)

        # comes from ODTBX matlab function
        qtrue = [-0.256224563175732, 0.331694624881600, 0.813762532744541, 0.402639031082742]

        np.testing.assert_allclose(qm.slerp(q0, q1, 0.79), qtrue)

    def test_times(self):

        q0 = [0, 0, 0, 1]
        q1 = [0.5, 0.5, 0.5, 0.5]

        start = datetime(2024, 1, 1)
        stop = start + timedelta(seconds=100)

        np.testing.assert_allclose(qm.slerp(q0, q1, start + timedelta(seconds=79), start, stop),
                                   qm.slerp(q0, q1, 0.79))

    def test_shortest_path(self):

        q0 = np.array([0, 0, 0, 1.0])
        q1 = -np.array([0.5, 0.5, 0.5, 0.5])

        np.testing.assert_allclose(qm.slerp(q0, q1, 1), -q1)
        np.testing.assert_allclose(qm.slerp(q0, q1, 0.5), qm.slerp(q0, -q1, 0.5))

    def test_near_parallel(self):

        q0 = np.array([0, 0, 0, 1.0])
        q1 = np.array([1e-5, 0, 0, 1.0])
        q1 /= np.linalg.norm(q1)

        # cos(omega) is within the epsilon of 1 so the blend is linear and finite
        result = qm.slerp(q0, q1, 0.5)

        self.assertTrue(np.isfinite(result).all())
        np.testing.assert_allclose(result, 0.5 * q0 + 0.5 * q1)

        # identical quaternions give the same quaternion back
        np.testing.assert_allclose(qm.slerp(q0, q0, 0.3), q0)

    def test_constant_rate(self):

        q0 = np.array([0, 0, 0, 1.0])
        q1 = np.array([0, 0, np.sin(0.5), np.cos(0.5)])

        for amount in (0.1, 0.4, 0.7):
            with self.subTest(amount=amount):
                np.testing.assert_allclose(qm.slerp(q0, q1, amount),
                                           [0, 0, np.sin(0.5 * amount), np.cos(0.5 * amount)], atol=1e-15)


class TestHalfTurnSlerp(TestCase):

    def test_halfway_to_half_turn(self):

        identity = np.array([0, 0, 0, 1.0])
        half_turn = np.array([0, 0, np.sin(np.pi / 2), np.cos(np.pi / 2)])

        np.testing.assert_allclose(qm.slerp(identity, half_turn, 0.5),
                                   [0, 0, np.sqrt(2) / 2, np.sqrt(2) / 2], atol=1e-15)

    def test_dot_is_length_squared(self):

        for q in random_unit_quaternions(5, 12).T * 3:
            with self.subTest(q=q):
                self.assertAlmostEqual(qm.quaternion_dot(q, q), qm.quaternion_length_squared(q), places=14)
