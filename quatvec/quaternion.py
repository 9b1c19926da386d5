"""
This module provides the :class:`Quaternion` value type used to represent rotations.

A :class:`Quaternion` stores its vector part first, ``(x, y, z, w)``, and is immutable.  The heavy lifting is done by
the vectorized routines in :mod:`quatvec.core`; this class wraps single quaternions for convenient use::

    >>> from math import pi
    >>> from quatvec import Quaternion, Vector3
    >>> q = Quaternion.create_from_axis_angle(Vector3.unit_z(), pi / 2)
    >>> q.rotate(Vector3.unit_x())
    Vector3(2.220446049250313e-16, 1.0, 0.0)

The multiplication operator is the hamiltonian product, so ``a * b`` is the rotation ``b`` followed by the rotation
``a``.  :meth:`Quaternion.concatenate` composes rotations in the order they are applied, ``a.concatenate(b)`` being
``a`` followed by ``b``.

Like the vector types, nothing here raises for numeric edge cases.  Normalizing or inverting the zero quaternion
produces ``nan`` components.
"""

from numbers import Real
from typing import Iterator, Self, TypeVar

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY, TIME_LIKE

from quatvec.core import quaternion_math, conversions

from quatvec.vector import Vector2, Vector3, Vector4, format_component


__all__ = ['Quaternion']


VectorT = TypeVar('VectorT', Vector2, Vector3, Vector4)


class Quaternion:
    """
    An immutable double precision quaternion ``x i + y j + z k + w``.

    Unit quaternions represent rotations.  The default constructor gives the identity rotation.  Equality is exact
    componentwise comparison, so ``q`` and ``-q`` (which represent the same rotation) compare unequal.
    """

    __slots__ = ('_data',)

    __array_ufunc__ = None

    _data: DOUBLE_ARRAY

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0):
        """
        :param x: The i component of the vector part
        :param y: The j component of the vector part
        :param z: The k component of the vector part
        :param w: The scalar part
        """

        data = np.array([x, y, z, w], dtype=np.float64)
        data.setflags(write=False)
        object.__setattr__(self, '_data', data)

    @classmethod
    def _from_array(cls, array: ARRAY_LIKE) -> Self:
        x, y, z, w = np.asarray(array, dtype=np.float64).ravel()
        return cls(x, y, z, w)

    @classmethod
    def identity(cls) -> Self:
        """
        The quaternion representing no rotation, ``(0, 0, 0, 1)``.
        """
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_parts(cls, vector_part: Vector3, scalar_part: float) -> Self:
        """
        Builds a quaternion from its vector and scalar parts.
        """
        return cls(vector_part.x, vector_part.y, vector_part.z, scalar_part)

    @classmethod
    def create_from_axis_angle(cls, axis: Vector3 | ARRAY_LIKE, angle: float) -> Self:
        """
        Creates the rotation of `angle` radians about `axis`.

        The axis is not normalized, so it must already be of unit length for the result to be a unit quaternion.

        :param axis: The rotation axis
        :param angle: The rotation angle in radians
        :return: The rotation quaternion
        """
        return cls._from_array(conversions.axis_angle_to_quaternion(np.asarray(axis, dtype=np.float64), angle))

    @classmethod
    def create_from_yaw_pitch_roll(cls, yaw: float, pitch: float, roll: float) -> Self:
        """
        Creates the rotation from yaw (about y), pitch (about x), and roll (about z) angles in radians.

        See :func:`.conversions.yaw_pitch_roll_to_quaternion` for the exact composition.
        """
        return cls._from_array(conversions.yaw_pitch_roll_to_quaternion(yaw, pitch, roll))

    @classmethod
    def create_from_rotation_matrix(cls, matrix: ARRAY_LIKE) -> Self:
        """
        Creates a quaternion from a 3x3 or 4x4 row vector layout rotation matrix.

        The sign of the result is not canonicalized.  See :func:`.conversions.rotmat_to_quaternion`.
        """
        return cls._from_array(conversions.rotmat_to_quaternion(matrix))

    @classmethod
    def from_rotation_vector(cls, rotation_vector: Vector3 | ARRAY_LIKE) -> Self:
        """
        Creates a quaternion from a rotation vector (the unit axis scaled by the angle in radians).
        """
        return cls._from_array(conversions.rotvec_to_quaternion(np.asarray(rotation_vector, dtype=np.float64)))

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    @property
    def vector_part(self) -> Vector3:
        """
        The vector part ``(x, y, z)``
        """
        return Vector3(self.x, self.y, self.z)

    @property
    def scalar_part(self) -> float:
        """
        The scalar part ``w``
        """
        return self.w

    @property
    def is_identity(self) -> bool:
        """
        Whether this is exactly ``(0, 0, 0, 1)``.
        """
        return self == Quaternion.identity()

    @property
    def array(self) -> DOUBLE_ARRAY:
        """
        A read only view of the components as a numpy array ``[x, y, z, w]``.
        """
        return self._data

    def __setattr__(self, key, value):
        raise AttributeError('Quaternion is immutable')

    def __len__(self) -> int:
        return 4

    def __iter__(self) -> Iterator[float]:
        return (float(value) for value in self._data)

    def __getitem__(self, item: int) -> float:
        return float(self._data[item])

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self._data, dtype=dtype)

    def __reduce__(self):
        return type(self), tuple(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented

        return bool((self._data == other._data).all())

    def __hash__(self) -> int:
        return hash(('Quaternion',) + tuple(self))

    def __repr__(self) -> str:
        return f'Quaternion({self.x!r}, {self.y!r}, {self.z!r}, {self.w!r})'

    def __str__(self) -> str:
        return '{{X:{} Y:{} Z:{} W:{}}}'.format(*(format_component(value) for value in self))

    def __add__(self, other: 'Quaternion') -> 'Quaternion':
        if not isinstance(other, Quaternion):
            return NotImplemented

        return self._from_array(quaternion_math.quaternion_add(self._data, other._data))

    def __sub__(self, other: 'Quaternion') -> 'Quaternion':
        if not isinstance(other, Quaternion):
            return NotImplemented

        return self._from_array(quaternion_math.quaternion_subtract(self._data, other._data))

    def __neg__(self) -> 'Quaternion':
        return self.negate()

    def __mul__(self, other: 'Quaternion | float') -> 'Quaternion':
        """
        The hamiltonian product with another quaternion, or scaling by a real number.
        """

        if isinstance(other, Quaternion):
            return self._from_array(quaternion_math.quaternion_multiplication(self._data, other._data))

        if isinstance(other, (Real, np.floating, np.integer)):
            return self._from_array(quaternion_math.quaternion_scale(self._data, float(other)))

        return NotImplemented

    def __rmul__(self, other: float) -> 'Quaternion':
        if isinstance(other, (Real, np.floating, np.integer)):
            return self._from_array(quaternion_math.quaternion_scale(self._data, float(other)))

        return NotImplemented

    def __truediv__(self, other: 'Quaternion') -> 'Quaternion':
        """
        Quaternion division, ``self * other.inverse()``.
        """

        if not isinstance(other, Quaternion):
            return NotImplemented

        return self._from_array(quaternion_math.quaternion_divide(self._data, other._data))

    def length(self) -> float:
        return float(quaternion_math.quaternion_length(self._data))

    def length_squared(self) -> float:
        return float(quaternion_math.quaternion_length_squared(self._data))

    def dot(self, other: 'Quaternion') -> float:
        """
        The four dimensional dot product with `other`.
        """
        return float(quaternion_math.quaternion_dot(self._data, other._data))

    def normalize(self) -> 'Quaternion':
        """
        This quaternion scaled to unit length.  The sign is left untouched.
        """
        return self._from_array(quaternion_math.quaternion_normalize(self._data))

    def conjugate(self) -> 'Quaternion':
        """
        The conjugate, ``(-x, -y, -z, w)``.
        """
        return self._from_array(quaternion_math.quaternion_conjugate(self._data))

    def inverse(self) -> 'Quaternion':
        """
        The true multiplicative inverse, the conjugate divided by the squared length.
        """
        return self._from_array(quaternion_math.quaternion_inverse(self._data))

    def negate(self) -> 'Quaternion':
        return self._from_array(quaternion_math.quaternion_negate(self._data))

    def concatenate(self, other: 'Quaternion') -> 'Quaternion':
        """
        The rotation given by this rotation followed by `other`, equal to ``other * self``.
        """
        return self._from_array(quaternion_math.quaternion_concatenate(self._data, other._data))

    def slerp(self, other: 'Quaternion', time: TIME_LIKE, time0: TIME_LIKE = 0, time1: TIME_LIKE = 1) -> 'Quaternion':
        """
        Spherical linear interpolation from this quaternion to `other` along the shorter arc.

        See :func:`.quaternion_math.slerp` for the treatment of nearly parallel inputs and the time arguments.
        """
        return self._from_array(quaternion_math.slerp(self._data, other._data, time, time0, time1))

    def lerp(self, other: 'Quaternion', time: TIME_LIKE, time0: TIME_LIKE = 0, time1: TIME_LIKE = 1) -> 'Quaternion':
        """
        Normalized linear interpolation from this quaternion to `other` along the shorter arc.
        """
        return self._from_array(quaternion_math.lerp(self._data, other._data, time, time0, time1))

    def to_matrix(self) -> DOUBLE_ARRAY:
        """
        The 4x4 row vector layout rotation matrix for this (unit) quaternion.
        """
        return conversions.quaternion_to_matrix(self._data)

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """
        The unit rotation axis and the rotation angle in radians, in ``[0, 2 pi]``.

        The identity rotation returns the zero vector as its axis.
        """

        axis, angle = conversions.quaternion_to_axis_angle(self._data)

        return Vector3(*axis), float(angle)

    def to_yaw_pitch_roll(self) -> tuple[float, float, float]:
        """
        The yaw, pitch, and roll angles in radians which :meth:`create_from_yaw_pitch_roll` maps back to this rotation.
        """

        yaw, pitch, roll = conversions.quaternion_to_yaw_pitch_roll(self._data)

        return float(yaw), float(pitch), float(roll)

    def to_rotation_vector(self) -> Vector3:
        """
        The rotation vector, the rotation axis scaled by the angle in radians.
        """
        return Vector3(*conversions.quaternion_to_rotvec(self._data))

    def rotate(self, vector: VectorT) -> VectorT:
        """
        Rotates a :class:`.Vector2`, :class:`.Vector3`, or :class:`.Vector4` by this quaternion.

        This is the same as ``vector.transform(self)``.
        """
        return vector.transform(self)
