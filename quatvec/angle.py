"""
This module provides the :class:`Angle` value type, a planar direction kept in a single turn.

Angles are always normalized so that the degrees lie in :math:`[0, 360)` and the radians in :math:`[0, 2\\pi)`.  All
arithmetic renormalizes the result, so ``Angle.from_degrees(350) + Angle.from_degrees(20)`` is 10 degrees.
"""

from dataclasses import dataclass

import numpy as np

from quatvec.vector import Vector2


__all__ = ['Angle']


_DEGREES_PER_RADIAN = 180.0 / np.pi


def _wrap(value: float, period: float) -> float:
    """
    Wraps `value` into ``[0, period)``.
    """

    value = float(np.fmod(value, period))

    if value < 0.0:
        value += period

    # a tiny negative remainder rounds up to exactly one period
    if value >= period:
        value -= period

    return value


@dataclass(frozen=True)
class Angle:
    """
    An immutable angle normalized into a single turn.

    Use :meth:`from_degrees`, :meth:`from_radians`, or :meth:`from_vector` to build one rather than the constructor,
    which does not normalize.
    """

    degrees: float = 0.0
    """
    The angle in degrees, in ``[0, 360)``
    """

    radians: float = 0.0
    """
    The angle in radians, in ``[0, 2 pi)``
    """

    @classmethod
    def zero(cls) -> 'Angle':
        return cls.from_degrees(0.0)

    @classmethod
    def from_degrees(cls, degrees: float) -> 'Angle':
        """
        Creates an angle from degrees, wrapping into ``[0, 360)``.
        """

        degrees = _wrap(degrees, 360.0)

        return cls(degrees=degrees, radians=degrees / _DEGREES_PER_RADIAN)

    @classmethod
    def from_radians(cls, radians: float) -> 'Angle':
        """
        Creates an angle from radians, wrapping into ``[0, 2 pi)``.
        """

        radians = _wrap(radians, 2.0 * np.pi)

        return cls(degrees=radians * _DEGREES_PER_RADIAN, radians=radians)

    @classmethod
    def from_vector(cls, vector: Vector2) -> 'Angle':
        """
        The direction of `vector` measured counter clockwise from the x axis.
        """
        return cls.from_radians(float(np.arctan2(vector.y, vector.x)))

    def to_vector(self) -> Vector2:
        """
        The unit vector pointing in the direction of this angle.
        """
        return Vector2(np.cos(self.radians), np.sin(self.radians))

    def __add__(self, other: 'Angle') -> 'Angle':
        if not isinstance(other, Angle):
            return NotImplemented

        return Angle.from_degrees(self.degrees + other.degrees)

    def __sub__(self, other: 'Angle') -> 'Angle':
        if not isinstance(other, Angle):
            return NotImplemented

        return Angle.from_degrees(self.degrees - other.degrees)

    def __mul__(self, other: float) -> 'Angle':
        if isinstance(other, Angle):
            return NotImplemented

        return Angle.from_degrees(self.degrees * other)

    __rmul__ = __mul__

    def __truediv__(self, other: float) -> 'Angle':
        if isinstance(other, Angle):
            return NotImplemented

        with np.errstate(divide='ignore', invalid='ignore'):
            return Angle.from_degrees(np.float64(self.degrees) / other)

    def __str__(self) -> str:
        return f'{self.radians} ({self.degrees:.2f} deg)'
