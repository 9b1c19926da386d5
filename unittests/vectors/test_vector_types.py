import pickle

from unittest import TestCase

import numpy as np

from quatvec import Vector2, Vector3, Vector4, Quaternion


class TestConstruction(TestCase):

    def test_components(self):

        v = Vector4(1, 2, 3, 4)

        self.assertEqual((v.x, v.y, v.z, v.w), (1.0, 2.0, 3.0, 4.0))
        self.assertEqual(len(v), 4)
        self.assertEqual(list(v), [1.0, 2.0, 3.0, 4.0])
        self.assertEqual(v[2], 3.0)
        self.assertIsInstance(v.x, float)

    def test_defaults_and_constants(self):

        self.assertEqual(Vector3(), Vector3(0, 0, 0))
        self.assertEqual(Vector2.zero(), Vector2(0, 0))
        self.assertEqual(Vector3.one(), Vector3(1, 1, 1))
        self.assertEqual(Vector4.splat(2.5), Vector4(2.5, 2.5, 2.5, 2.5))
        self.assertEqual(Vector2.unit_y(), Vector2(0, 1))
        self.assertEqual(Vector3.unit_z(), Vector3(0, 0, 1))
        self.assertEqual(Vector4.unit_w(), Vector4(0, 0, 0, 1))

    def test_extension(self):

        self.assertEqual(Vector3.from_vector2(Vector2(1, 2), 3), Vector3(1, 2, 3))
        self.assertEqual(Vector4.from_vector2(Vector2(1, 2), 3, 4), Vector4(1, 2, 3, 4))
        self.assertEqual(Vector4.from_vector3(Vector3(1, 2, 3), 4), Vector4(1, 2, 3, 4))

    def test_immutable(self):

        v = Vector3(1, 2, 3)

        with self.assertRaises(AttributeError):
            v.x = 5  # type: ignore

        with self.assertRaises(ValueError):
            v.array[0] = 5

        self.assertEqual(v, Vector3(1, 2, 3))

    def test_numpy_interop(self):

        v = Vector3(1, 2, 3)

        np.testing.assert_array_equal(np.asarray(v), [1, 2, 3])
        self.assertEqual(np.asarray(v).dtype, np.float64)

        # the returned array is a copy
        array = np.asarray(v)
        array[0] = 10
        self.assertEqual(v.x, 1.0)

    def test_pickle(self):

        v = Vector4(1, 2, 3, 4)

        self.assertEqual(pickle.loads(pickle.dumps(v)), v)


class TestOperators(TestCase):

    def test_arithmetic(self):

        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)

        self.assertEqual(a + b, Vector3(5, 7, 9))
        self.assertEqual(b - a, Vector3(3, 3, 3))
        self.assertEqual(a * b, Vector3(4, 10, 18))
        self.assertEqual(a * 2, Vector3(2, 4, 6))
        self.assertEqual(2 * a, Vector3(2, 4, 6))
        self.assertEqual(np.float64(2) * a, Vector3(2, 4, 6))
        self.assertEqual(b / a, Vector3(4, 2.5, 2))
        self.assertEqual(a / 2, Vector3(0.5, 1, 1.5))
        self.assertEqual(-a, Vector3(-1, -2, -3))

    def test_divide_by_zero(self):

        result = Vector2(1, 0) / 0

        self.assertEqual(result.x, np.inf)
        self.assertTrue(np.isnan(result.y))

    def test_type_errors(self):

        with self.assertRaises(TypeError):
            _ = Vector2(1, 2) + Vector3(1, 2, 3)  # type: ignore

        with self.assertRaises(TypeError):
            _ = Vector2(1, 2) * 'a'  # type: ignore

        with self.assertRaises(TypeError):
            _ = Vector2(1, 2) + 1  # type: ignore

    def test_equality(self):

        self.assertEqual(Vector2(1, 2), Vector2(1, 2))
        self.assertNotEqual(Vector2(1, 2), Vector2(1, 2 + 1e-15))
        self.assertNotEqual(Vector3(1, 2, 0), Vector4(1, 2, 0, 0))
        self.assertNotEqual(Vector2(np.nan, 0), Vector2(np.nan, 0))

        self.assertEqual(hash(Vector3(1, 2, 3)), hash(Vector3(1, 2, 3)))
        self.assertEqual(len({Vector3(1, 2, 3), Vector3(1, 2, 3), Vector3(3, 2, 1)}), 2)

    def test_str(self):

        self.assertEqual(str(Vector3(1, 2.5, -3)), '<1, 2.5, -3>')
        self.assertEqual(str(Vector2(0.1, 0)), '<0.1, 0>')
        self.assertEqual(repr(Vector2(1, 2)), 'Vector2(1.0, 2.0)')


class TestMethods(TestCase):

    def test_metrics(self):

        a = Vector3(1, 2, 2)

        self.assertEqual(a.length(), 3)
        self.assertEqual(a.length_squared(), 9)
        self.assertEqual(a.dot(Vector3(1, 1, 1)), 5)
        self.assertEqual(Vector3.dot(a, a), 9)
        self.assertEqual(Vector2(0, 0).distance(Vector2(3, 4)), 5)
        self.assertEqual(Vector2(0, 0).distance_squared(Vector2(3, 4)), 25)

    def test_normalize(self):

        n = Vector2(3, 4).normalize()

        self.assertAlmostEqual(n.x, 0.6)
        self.assertAlmostEqual(n.y, 0.8)

        self.assertTrue(all(np.isnan(value) for value in Vector4.zero().normalize()))

    def test_componentwise(self):

        a = Vector4(1, -5, 3, 0)
        b = Vector4(2, -6, 1, 0)

        self.assertEqual(a.min(b), Vector4(1, -6, 1, 0))
        self.assertEqual(a.max(b), Vector4(2, -5, 3, 0))
        self.assertEqual(a.abs(), Vector4(1, 5, 3, 0))
        self.assertEqual(Vector2(4, 16).square_root(), Vector2(2, 4))
        self.assertEqual(a.lerp(b, 0.5), Vector4(1.5, -5.5, 2, 0))

    def test_clamp(self):

        self.assertEqual(Vector2(-1, 5).clamp(Vector2(0, 0), Vector2(1, 1)), Vector2(0, 1))
        self.assertEqual(Vector2(0.5, 0.5).clamp(Vector2(1, 1), Vector2(0, 0)), Vector2(1, 1))

    def test_cross_and_reflect(self):

        self.assertEqual(Vector3.unit_x().cross(Vector3.unit_y()), Vector3.unit_z())
        self.assertEqual(Vector2(1, -1).reflect(Vector2(0, 1)), Vector2(1, 1))
        self.assertFalse(hasattr(Vector4, 'cross'))
        self.assertFalse(hasattr(Vector4, 'reflect'))

    def test_transform(self):

        q = Quaternion.create_from_axis_angle(Vector3.unit_z(), np.pi / 2)

        np.testing.assert_allclose(Vector3(1, 0, 0).transform(q), [0, 1, 0], atol=1e-15)
        np.testing.assert_allclose(Vector2(1, 0).transform(q), [0, 1], atol=1e-15)
        np.testing.assert_allclose(Vector4(1, 0, 0, 7).transform(q), [0, 1, 0, 7], atol=1e-15)

        self.assertIsInstance(Vector2(1, 0).transform(q), Vector2)

        self.assertEqual(Vector3(1, 2, 3).transform(Quaternion.identity()), Vector3(1, 2, 3))

    def test_transform_matrix(self):

        matrix = np.eye(4)
        matrix[3, :3] = [10, 20, 30]

        self.assertEqual(Vector3(1, 2, 3).transform_matrix(matrix), Vector3(11, 22, 33))
        self.assertEqual(Vector3(1, 2, 3).transform_normal(matrix), Vector3(1, 2, 3))
        self.assertEqual(Vector2(1, 2).transform_matrix([[1, 0], [0, 1], [5, 6]]), Vector2(6, 8))

    def test_transform_from(self):

        q = Quaternion.create_from_axis_angle(Vector3.unit_x(), np.pi / 2)

        result = Vector4.transform_from(Vector2(0, 1), q)

        np.testing.assert_allclose(result, [0, 0, 1, 1], atol=1e-15)

        matrix = np.eye(4)
        matrix[3, :3] = [1, 2, 3]

        self.assertEqual(Vector4.transform_from(Vector3(1, 1, 1), matrix), Vector4(2, 3, 4, 1))


class TestCopyTo(TestCase):

    def test_copy(self):

        destination = [0.0] * 5

        Vector3(1, 2, 3).copy_to(destination, 1)

        self.assertEqual(destination, [0, 1, 2, 3, 0])

        array = np.zeros(4)

        Vector4(1, 2, 3, 4).copy_to(array)

        np.testing.assert_array_equal(array, [1, 2, 3, 4])

    def test_none_destination(self):

        with self.assertRaises(TypeError):
            Vector2(1, 2).copy_to(None)

    def test_bad_index(self):

        for index in (-1, 3, 10):
            with self.subTest(index=index):
                with self.assertRaises(IndexError):
                    Vector2(1, 2).copy_to([0.0, 0.0, 0.0], index)

    def test_insufficient_capacity(self):

        destination = [0.0, 0.0, 0.0]

        with self.assertRaises(ValueError):
            Vector3(1, 2, 3).copy_to(destination, 1)

        with self.assertRaises(ValueError):
            Vector4(1, 2, 3, 4).copy_to(destination)

        self.assertEqual(destination, [0.0, 0.0, 0.0])

    def test_errors_are_distinct(self):

        self.assertFalse(issubclass(IndexError, ValueError))
        self.assertFalse(issubclass(ValueError, IndexError))
        self.assertFalse(issubclass(TypeError, (IndexError, ValueError)))
