"""
This module provides small planar value types for drawing style code, along with :func:`rotate_points`.

:class:`Point`, :class:`Size`, and :class:`Rectangle` are immutable and every operation returns a new instance.  Each
can be converted to and from the matching vector type from :mod:`quatvec.vector`:

================== ===================================================
Type               Vector form
================== ===================================================
:class:`Point`     :class:`.Vector2` ``(x, y)``
:class:`Size`      :class:`.Vector2` ``(width, height)``
:class:`Rectangle` :class:`.Vector4` ``(x, y, width, height)``
================== ===================================================

Rectangles are half open, containing their left and top edges but not their right and bottom edges.
"""

from dataclasses import dataclass, replace

from typing import Sequence

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY

from quatvec.core._helpers import _check_vector_array_and_shape
from quatvec.core.transforms import transform

from quatvec.vector import Vector2, Vector4


__all__ = ['Point', 'Size', 'Rectangle', 'rotate_points']


@dataclass(frozen=True)
class Size:
    """
    An ordered pair of width and height.
    """

    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_vector2(cls, vector: Vector2) -> 'Size':
        return cls(vector.x, vector.y)

    def to_vector2(self) -> Vector2:
        return Vector2(self.width, self.height)

    def to_point(self) -> 'Point':
        return Point(self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """
        Whether both the width and height are 0.
        """
        return self.width == 0.0 and self.height == 0.0

    def __add__(self, other: 'Size') -> 'Size':
        if not isinstance(other, Size):
            return NotImplemented

        return Size(self.width + other.width, self.height + other.height)

    def __sub__(self, other: 'Size') -> 'Size':
        if not isinstance(other, Size):
            return NotImplemented

        return Size(self.width - other.width, self.height - other.height)

    def __mul__(self, other: float) -> 'Size':
        if isinstance(other, Size):
            return NotImplemented

        return Size(self.width * other, self.height * other)

    __rmul__ = __mul__

    def __truediv__(self, other: float) -> 'Size':
        if isinstance(other, Size):
            return NotImplemented

        with np.errstate(divide='ignore', invalid='ignore'):
            return Size(float(np.float64(self.width) / other), float(np.float64(self.height) / other))


@dataclass(frozen=True)
class Point:
    """
    An ordered pair of x and y coordinates.
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_vector2(cls, vector: Vector2) -> 'Point':
        return cls(vector.x, vector.y)

    def to_vector2(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def is_empty(self) -> bool:
        """
        Whether both coordinates are 0.
        """
        return self.x == 0.0 and self.y == 0.0

    def __add__(self, other: Size) -> 'Point':
        """
        Translates the point by a :class:`Size`.
        """

        if not isinstance(other, Size):
            return NotImplemented

        return Point(self.x + other.width, self.y + other.height)

    def __sub__(self, other: Size) -> 'Point':
        """
        Translates the point by the negative of a :class:`Size`.
        """

        if not isinstance(other, Size):
            return NotImplemented

        return Point(self.x - other.width, self.y - other.height)


@dataclass(frozen=True)
class Rectangle:
    """
    An axis aligned rectangle given by its top left corner and its size.

    A rectangle with a width or height less than or equal to 0 is empty.
    """

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> 'Rectangle':
        """
        Creates a rectangle from its edges.
        """
        return cls(left, top, right - left, bottom - top)

    @classmethod
    def from_location_size(cls, location: Point, size: Size) -> 'Rectangle':
        return cls(location.x, location.y, size.width, size.height)

    @classmethod
    def from_vector4(cls, vector: Vector4) -> 'Rectangle':
        return cls(vector.x, vector.y, vector.z, vector.w)

    def to_vector4(self) -> Vector4:
        return Vector4(self.x, self.y, self.width, self.height)

    @property
    def location(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    def contains(self, item: 'Point | Rectangle | float', y: float | None = None) -> bool:
        """
        Checks whether a point (given as a :class:`Point` or as ``x, y`` coordinates) or a whole rectangle lies inside
        this rectangle.

        Points on the right or bottom edge are outside.  A rectangle is contained when none of its edges lie outside of
        this rectangle's edges.

        :param item: A :class:`Point`, a :class:`Rectangle`, or the x coordinate of a point
        :param y: The y coordinate of the point when `item` is an x coordinate
        :return: ``True`` if the point or rectangle is inside
        """

        if isinstance(item, Rectangle):
            return (self.x <= item.x and item.right <= self.right and
                    self.y <= item.y and item.bottom <= self.bottom)

        if isinstance(item, Point):
            item, y = item.x, item.y

        elif y is None:
            raise TypeError('a y coordinate is required when checking coordinates')

        return self.x <= item < self.right and self.y <= y < self.bottom

    def inflate(self, x: float | Size, y: float | None = None) -> 'Rectangle':
        """
        Grows the rectangle by `x` on the left and right and by `y` on the top and bottom.

        :param x: The horizontal amount, or a :class:`Size` giving both amounts
        :param y: The vertical amount when `x` is a number
        :return: The inflated rectangle
        """

        if isinstance(x, Size):
            x, y = x.width, x.height

        elif y is None:
            raise TypeError('a vertical amount is required when inflating by a number')

        return Rectangle(self.x - x, self.y - y, self.width + 2.0 * x, self.height + 2.0 * y)

    def intersect(self, other: 'Rectangle') -> 'Rectangle':
        """
        The overlap of this rectangle with `other`.

        Rectangles which only share an edge give a zero area result.  Disjoint rectangles give ``Rectangle()``, the
        all zero rectangle.
        """

        x1 = max(self.x, other.x)
        x2 = min(self.right, other.right)
        y1 = max(self.y, other.y)
        y2 = min(self.bottom, other.bottom)

        if x2 >= x1 and y2 >= y1:
            return Rectangle(x1, y1, x2 - x1, y2 - y1)

        return Rectangle()

    def intersects_with(self, other: 'Rectangle') -> bool:
        """
        Whether the interiors of this rectangle and `other` overlap.
        """
        return (other.x < self.right and self.x < other.right and
                other.y < self.bottom and self.y < other.bottom)

    def union(self, other: 'Rectangle') -> 'Rectangle':
        """
        The smallest rectangle containing both this rectangle and `other`.
        """

        x1 = min(self.x, other.x)
        x2 = max(self.right, other.right)
        y1 = min(self.y, other.y)
        y2 = max(self.bottom, other.bottom)

        return Rectangle(x1, y1, x2 - x1, y2 - y1)

    def offset(self, x: float | Point, y: float | None = None) -> 'Rectangle':
        """
        Moves the rectangle by ``(x, y)`` (or by the coordinates of a :class:`Point`) without changing its size.
        """

        if isinstance(x, Point):
            x, y = x.x, x.y

        elif y is None:
            raise TypeError('a y offset is required when offsetting by a number')

        return replace(self, x=self.x + x, y=self.y + y)


def rotate_points(points: Sequence[Point] | ARRAY_LIKE, quaternion: ARRAY_LIKE,
                  origin: Point | None = None) -> DOUBLE_ARRAY:
    """
    Rotates planar points about `origin` with a quaternion.

    The points are shifted so that `origin` is at zero, rotated with :func:`.transforms.transform` (which keeps only the
    in plane part of the rotated points), and shifted back.  For the usual case of a rotation about the z axis this is
    a plain 2D rotation.

    :param points: A sequence of :class:`Point` or an array like with the x and y coordinates down the first axis
    :param quaternion: The rotation quaternion, for instance a :class:`.Quaternion`
    :param origin: The point to rotate about.  Defaults to ``(0, 0)``
    :return: A 2xn array of the rotated coordinates
    :raises ValueError: if an array like of points does not have the x and y coordinates down the first axis
    """

    if len(points) and isinstance(points[0], Point):
        coordinates = np.array([[point.x for point in points], [point.y for point in points]], dtype=np.float64)
    else:
        coordinates = _check_vector_array_and_shape(points, length=2).reshape(2, -1)

    center = np.zeros((2, 1)) if origin is None else np.array([[origin.x], [origin.y]])

    return transform(coordinates - center, np.asarray(quaternion, dtype=np.float64)) + center
