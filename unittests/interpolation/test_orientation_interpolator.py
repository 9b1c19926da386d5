from datetime import datetime, timedelta
from unittest import TestCase

import numpy as np
import pandas as pd

from quatvec import Quaternion, Vector3, OrientationInterpolator, OrientationInterpolatorOptions


def about_z(angle: float) -> Quaternion:
    return Quaternion.create_from_axis_angle(Vector3.unit_z(), angle)


class TestOrientationInterpolator(TestCase):

    def setUp(self):

        self.keyframes = [about_z(0.0), about_z(1.0), about_z(3.0)]
        self.times = [0.0, 10.0, 20.0]

    def check_angle(self, quaternion: Quaternion, angle: float):

        np.testing.assert_allclose(np.asarray(quaternion), np.asarray(about_z(angle)), atol=1e-14)

    def test_defaults(self):

        interpolator = OrientationInterpolator(self.times, self.keyframes)

        self.assertEqual(interpolator.method, 'slerp')
        self.assertEqual(interpolator.slerp_epsilon, 1e-6)
        self.assertFalse(interpolator.extrapolate)
        self.assertEqual(interpolator.keyframe_count, 3)
        self.assertEqual(interpolator.keyframes, self.keyframes)

    def test_keyframes_hit_exactly(self):

        interpolator = OrientationInterpolator(self.times, self.keyframes)

        for time, keyframe in zip(self.times, self.keyframes):
            with self.subTest(time=time):
                np.testing.assert_allclose(np.asarray(interpolator(time)), np.asarray(keyframe), atol=1e-15)

    def test_slerp(self):

        interpolator = OrientationInterpolator(self.times, self.keyframes)

        self.check_angle(interpolator(5.0), 0.5)
        self.check_angle(interpolator(15.0), 2.0)
        self.check_angle(interpolator.interpolate(12.5), 1.5)

    def test_lerp(self):

        interpolator = OrientationInterpolator(self.times, self.keyframes,
                                               options=OrientationInterpolatorOptions(method='lerp'))

        # the midpoint of a normalized linear blend lies on the great circle
        self.check_angle(interpolator(15.0), 2.0)
        self.assertAlmostEqual(interpolator(13.0).length(), 1.0)

    def test_clamping(self):

        interpolator = OrientationInterpolator(self.times, self.keyframes)

        with self.assertLogs('quatvec.interpolation', level='DEBUG'):
            result = interpolator(-5.0)

        self.check_angle(result, 0.0)
        self.check_angle(interpolator(100.0), 3.0)

    def test_extrapolation(self):

        interpolator = OrientationInterpolator(self.times, self.keyframes,
                                               options=OrientationInterpolatorOptions(extrapolate=True))

        self.check_angle(interpolator(-5.0), -0.5)
        self.check_angle(interpolator(25.0), 4.0)

    def test_single_keyframe(self):

        interpolator = OrientationInterpolator([3.0], [about_z(0.4)])

        self.assertEqual(interpolator(-10.0), about_z(0.4))
        self.assertEqual(interpolator(10.0), about_z(0.4))

    def test_array_input(self):

        array = np.array([np.asarray(keyframe) for keyframe in self.keyframes])

        interpolator = OrientationInterpolator(self.times, array)

        self.check_angle(interpolator(5.0), 0.5)

    def test_datetimes(self):

        start = datetime(2024, 5, 1, 12)
        times = [start + timedelta(minutes=10 * index) for index in range(3)]

        interpolator = OrientationInterpolator(times, self.keyframes)

        self.check_angle(interpolator(start + timedelta(minutes=5)), 0.5)
        self.check_angle(interpolator(pd.Timestamp(start) + pd.Timedelta(minutes=15)), 2.0)

        with self.assertRaises(TypeError):
            interpolator(5.0)

        with self.assertRaises(TypeError):
            OrientationInterpolator(self.times, self.keyframes)(start)

    def test_invalid_input(self):

        with self.subTest(problem='empty'):
            with self.assertRaises(ValueError):
                OrientationInterpolator([], [])

        with self.subTest(problem='mismatched'):
            with self.assertRaises(ValueError):
                OrientationInterpolator([0.0, 1.0], [about_z(0.0)])

        with self.subTest(problem='unsorted'):
            with self.assertRaises(ValueError):
                OrientationInterpolator([0.0, 2.0, 1.0], self.keyframes)

        with self.subTest(problem='repeated'):
            with self.assertRaises(ValueError):
                OrientationInterpolator([0.0, 1.0, 1.0], self.keyframes)

        with self.subTest(problem='shape'):
            with self.assertRaises(ValueError):
                OrientationInterpolator([0.0, 1.0], [[0, 0, 1], [0, 0, 1]])

    def test_invalid_method(self):

        with self.assertRaises(ValueError):
            OrientationInterpolator(self.times, self.keyframes, options=OrientationInterpolatorOptions(method='cubic'))

        interpolator = OrientationInterpolator(self.times, self.keyframes)
        interpolator.method = 'cubic'

        with self.assertRaises(ValueError):
            interpolator(5.0)

    def test_reset_settings(self):

        options = OrientationInterpolatorOptions(method='lerp')

        interpolator = OrientationInterpolator(self.times, self.keyframes, options=options)

        interpolator.method = 'slerp'
        interpolator.extrapolate = True

        interpolator.reset_settings()

        self.assertEqual(interpolator.method, 'lerp')
        self.assertFalse(interpolator.extrapolate)
        self.assertIs(interpolator.original_options, options)
