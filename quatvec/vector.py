"""
This module provides the :class:`Vector2`, :class:`Vector3`, and :class:`Vector4` value types.

Each vector is an immutable set of double precision components backed by a read only numpy array.  All of the math is
delegated to the vectorized routines in :mod:`quatvec.core`, so the classes here only deal with wrapping and
unwrapping values.  The vectors work directly with numpy through ``__array__``::

    >>> import numpy as np
    >>> from quatvec import Vector3
    >>> v = Vector3(1, 2, 3)
    >>> np.asarray(v)
    array([1., 2., 3.])
    >>> str(v * 2)
    '<2, 4, 6>'

Numeric edge cases never raise.  Normalizing the zero vector gives ``nan`` components and dividing by zero gives
``inf`` (or ``nan``) components.
"""

from numbers import Real
from typing import Iterator, Self

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY

from quatvec.core import vector_math, transforms


__all__ = ['Vector2', 'Vector3', 'Vector4', 'format_component']


def format_component(value: float) -> str:
    """
    Formats a component the way the vector and quaternion ``str`` forms display them.

    Integral values drop the trailing ``.0`` so that ``1.0`` prints as ``1``.  Everything else uses the shortest round
    tripping representation.
    """

    text = repr(float(value))

    if text.endswith('.0'):
        return text[:-2]

    return text


class _Vector:
    """
    Shared implementation of the fixed size vector types.

    Subclasses set :attr:`dimension` and provide a constructor taking one argument per component.
    """

    __slots__ = ('_data',)

    # let python fall back to our reflected operators instead of numpy broadcasting over __array__
    __array_ufunc__ = None

    dimension: int = 0
    """
    The number of components in the vector
    """

    _data: DOUBLE_ARRAY

    def _set_components(self, *components: float):
        data = np.array(components, dtype=np.float64)
        data.setflags(write=False)
        object.__setattr__(self, '_data', data)

    @classmethod
    def _from_array(cls, array: ARRAY_LIKE) -> Self:
        out = cls.__new__(cls)
        out._set_components(*np.asarray(array, dtype=np.float64).ravel())
        return out

    @classmethod
    def splat(cls, value: float) -> Self:
        """
        Creates a vector with every component set to `value`.
        """
        return cls._from_array(np.full(cls.dimension, value, dtype=np.float64))

    @classmethod
    def zero(cls) -> Self:
        """
        Creates the vector with all components 0.
        """
        return cls.splat(0.0)

    @classmethod
    def one(cls) -> Self:
        """
        Creates the vector with all components 1.
        """
        return cls.splat(1.0)

    @classmethod
    def _unit(cls, axis: int) -> Self:
        data = np.zeros(cls.dimension, dtype=np.float64)
        data[axis] = 1.0
        return cls._from_array(data)

    @classmethod
    def unit_x(cls) -> Self:
        """
        Creates the unit vector along the x axis.
        """
        return cls._unit(0)

    @classmethod
    def unit_y(cls) -> Self:
        """
        Creates the unit vector along the y axis.
        """
        return cls._unit(1)

    @property
    def x(self) -> float:
        """
        The x component
        """
        return float(self._data[0])

    @property
    def y(self) -> float:
        """
        The y component
        """
        return float(self._data[1])

    @property
    def array(self) -> DOUBLE_ARRAY:
        """
        A read only view of the components as a numpy array.
        """
        return self._data

    def __setattr__(self, key, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __len__(self) -> int:
        return self.dimension

    def __iter__(self) -> Iterator[float]:
        return (float(value) for value in self._data)

    def __getitem__(self, item: int) -> float:
        return float(self._data[item])

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self._data, dtype=dtype)

    def __reduce__(self):
        return type(self), tuple(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented

        return bool((self._data == other._data).all())

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + tuple(self))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({", ".join(repr(value) for value in self)})'

    def __str__(self) -> str:
        return '<' + ', '.join(format_component(value) for value in self) + '>'

    def _other_operand(self, other) -> DOUBLE_ARRAY | float | None:
        if isinstance(other, type(self)):
            return other._data
        if isinstance(other, (Real, np.floating, np.integer)):
            return float(other)
        return None

    def __add__(self, other: Self) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented

        return self._from_array(vector_math.add(self._data, other._data))

    def __sub__(self, other: Self) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented

        return self._from_array(vector_math.subtract(self._data, other._data))

    def __mul__(self, other: Self | float) -> Self:
        operand = self._other_operand(other)

        if operand is None:
            return NotImplemented

        return self._from_array(vector_math.multiply(self._data, operand))

    def __rmul__(self, other: float) -> Self:
        return self.__mul__(other)

    def __truediv__(self, other: Self | float) -> Self:
        operand = self._other_operand(other)

        if operand is None:
            return NotImplemented

        return self._from_array(vector_math.divide(self._data, operand))

    def __neg__(self) -> Self:
        return self._from_array(vector_math.negate(self._data))

    def length(self) -> float:
        """
        The Euclidean length of the vector.
        """
        return float(vector_math.length(self._data))

    def length_squared(self) -> float:
        """
        The squared length of the vector.
        """
        return float(vector_math.length_squared(self._data))

    def dot(self, other: Self) -> float:
        """
        The dot product of this vector with `other`.
        """
        return float(vector_math.dot(self._data, other._data))

    def distance(self, other: Self) -> float:
        """
        The Euclidean distance between this point and `other`.
        """
        return float(vector_math.distance(self._data, other._data))

    def distance_squared(self, other: Self) -> float:
        """
        The squared Euclidean distance between this point and `other`.
        """
        return float(vector_math.distance_squared(self._data, other._data))

    def normalize(self) -> Self:
        """
        A unit vector with the direction of this vector.  The zero vector normalizes to ``nan`` components.
        """
        return self._from_array(vector_math.normalize(self._data))

    def lerp(self, other: Self, amount: float) -> Self:
        """
        Linearly interpolates from this vector (``amount=0``) to `other` (``amount=1``).  `amount` is not clamped.
        """
        return self._from_array(vector_math.lerp(self._data, other._data, amount))

    def clamp(self, minimum: Self, maximum: Self) -> Self:
        """
        Restricts each component between the matching components of `minimum` and `maximum`.

        The upper bound is applied before the lower bound, so `minimum` wins when the bounds cross.
        """
        return self._from_array(vector_math.clamp(self._data, minimum._data, maximum._data))

    def min(self, other: Self) -> Self:
        """
        The componentwise minimum of this vector and `other`.
        """
        return self._from_array(vector_math.component_min(self._data, other._data))

    def max(self, other: Self) -> Self:
        """
        The componentwise maximum of this vector and `other`.
        """
        return self._from_array(vector_math.component_max(self._data, other._data))

    def abs(self) -> Self:
        return self._from_array(vector_math.component_abs(self._data))

    def square_root(self) -> Self:
        return self._from_array(vector_math.square_root(self._data))

    def transform(self, quaternion: ARRAY_LIKE) -> Self:
        """
        Rotates this vector by a unit quaternion, keeping the number of components.

        See :func:`.transforms.transform` for how 2 and 4 element vectors are handled.

        :param quaternion: A :class:`.Quaternion` or a length 4 array ordered ``[x, y, z, w]``
        :return: The rotated vector
        """
        return self._from_array(transforms.transform(self._data, np.asarray(quaternion, dtype=np.float64)))

    def transform_matrix(self, matrix: ARRAY_LIKE) -> Self:
        """
        Transforms this vector as a position by a row vector layout matrix, including any translation.

        :param matrix: A 3x2 (2 element vectors only) or 4x4 matrix
        :return: The transformed vector
        """
        return self._from_array(transforms.transform_by_matrix(self._data, matrix))

    def copy_to(self, array, index: int = 0) -> None:
        """
        Copies the components into a mutable sequence starting at `index`.

        :param array: The destination, for instance a list or a 1D numpy array
        :param index: The first slot of `array` to write to
        :raises TypeError: if `array` is ``None``
        :raises IndexError: if `index` is negative or not less than the length of `array`
        :raises ValueError: if there are fewer than :attr:`dimension` slots from `index` to the end of `array`
        """

        if array is None:
            raise TypeError('the destination array must not be None')

        if index < 0 or index >= len(array):
            raise IndexError(f'index {index} is outside of the destination of length {len(array)}')

        if len(array) - index < self.dimension:
            raise ValueError(f'the destination needs {self.dimension} elements from index {index} but only has '
                             f'{len(array) - index}')

        for offset, value in enumerate(self):
            array[index + offset] = value


class _Directional(_Vector):
    """
    Operations that only make sense for the 2 and 3 element vectors.
    """

    __slots__ = ()

    def reflect(self, normal: Self) -> Self:
        """
        Reflects this vector off of a surface with unit normal `normal`.
        """
        return self._from_array(vector_math.reflect(self._data, normal._data))

    def transform_normal(self, matrix: ARRAY_LIKE) -> Self:
        """
        Transforms this vector as a direction, ignoring the translation part of `matrix`.
        """
        return self._from_array(transforms.transform_normal(self._data, matrix))


class Vector2(_Directional):
    """
    An immutable 2 element double precision vector.
    """

    __slots__ = ()

    dimension = 2

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self._set_components(x, y)


class Vector3(_Directional):
    """
    An immutable 3 element double precision vector.
    """

    __slots__ = ()

    dimension = 3

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._set_components(x, y, z)

    @classmethod
    def from_vector2(cls, vector: Vector2, z: float) -> 'Vector3':
        """
        Extends a :class:`Vector2` with a z component.
        """
        return cls(vector.x, vector.y, z)

    @classmethod
    def unit_z(cls) -> 'Vector3':
        """
        Creates the unit vector along the z axis.
        """
        return cls._unit(2)

    @property
    def z(self) -> float:
        """
        The z component
        """
        return float(self._data[2])

    def cross(self, other: 'Vector3') -> 'Vector3':
        """
        The right handed cross product of this vector with `other`.
        """
        return self._from_array(vector_math.cross(self._data, other._data))


class Vector4(_Vector):
    """
    An immutable 4 element double precision vector.
    """

    __slots__ = ()

    dimension = 4

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        self._set_components(x, y, z, w)

    @classmethod
    def from_vector2(cls, vector: Vector2, z: float, w: float) -> 'Vector4':
        """
        Extends a :class:`Vector2` with z and w components.
        """
        return cls(vector.x, vector.y, z, w)

    @classmethod
    def from_vector3(cls, vector: Vector3, w: float) -> 'Vector4':
        """
        Extends a :class:`Vector3` with a w component.
        """
        return cls(vector.x, vector.y, vector.z, w)

    @classmethod
    def unit_z(cls) -> 'Vector4':
        """
        Creates the unit vector along the z axis.
        """
        return cls._unit(2)

    @classmethod
    def unit_w(cls) -> 'Vector4':
        """
        Creates the unit vector along the w axis.
        """
        return cls._unit(3)

    @classmethod
    def transform_from(cls, vector: Vector2 | Vector3, rotation_or_matrix: ARRAY_LIKE) -> 'Vector4':
        """
        Builds a homogeneous 4 element vector from a 2 or 3 element vector.

        If `rotation_or_matrix` is a quaternion (anything of shape ``(4,)``) the vector is rotated with
        :func:`.transforms.transform_to_vector4`, otherwise it is treated as a 4x4 matrix and applied with
        :func:`.transforms.transform_by_matrix_to_vector4`.  In both cases the missing components are z = 0 and w = 1.

        :param vector: The 2 or 3 element vector
        :param rotation_or_matrix: A quaternion or a 4x4 row vector layout matrix
        :return: The homogeneous result
        """

        operator = np.asarray(rotation_or_matrix, dtype=np.float64)
        source = np.asarray(vector, dtype=np.float64)

        if operator.shape == (4,):
            return cls._from_array(transforms.transform_to_vector4(source, operator))

        return cls._from_array(transforms.transform_by_matrix_to_vector4(source, operator))

    @property
    def z(self) -> float:
        """
        The z component
        """
        return float(self._data[2])

    @property
    def w(self) -> float:
        """
        The w component
        """
        return float(self._data[3])
