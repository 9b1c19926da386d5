"""
This module provides :class:`OrientationInterpolator` for interpolating a rotation from a series of time tagged keyframe
quaternions.

Keyframe times can be plain floats or datetime like objects (python ``datetime`` or pandas ``Timestamp``).  Between
keyframes the bracketing quaternions are blended with either :func:`.quaternion_math.slerp` or
:func:`.quaternion_math.lerp`, as chosen in :class:`OrientationInterpolatorOptions`::

    >>> from quatvec import Quaternion, Vector3
    >>> from quatvec.interpolation import OrientationInterpolator
    >>> keys = [Quaternion.identity(), Quaternion.create_from_axis_angle(Vector3.unit_z(), 1.0)]
    >>> interpolator = OrientationInterpolator([0.0, 10.0], keys)
    >>> round(interpolator(5.0).to_axis_angle()[1], 12)
    0.5
"""

import logging

from dataclasses import dataclass

from datetime import datetime

from typing import Sequence

import numpy as np
import pandas as pd

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY, TIME_LIKE

from quatvec.core.quaternion_math import SLERP_EPSILON, slerp, lerp

from quatvec.quaternion import Quaternion

from quatvec.utilities.options import UserOptions
from quatvec.utilities.mixin_classes import UserOptionConfigured


__all__ = ['OrientationInterpolatorOptions', 'OrientationInterpolator']


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
The logger for reporting interpolator setup and clamping
"""


INTERPOLATION_METHODS = ('slerp', 'lerp')
"""
The names of the supported blending methods
"""


@dataclass
class OrientationInterpolatorOptions(UserOptions):
    """
    Options for configuring :class:`OrientationInterpolator`.
    """

    method: str = 'slerp'
    """
    Which blend to use between keyframes, ``'slerp'`` for constant angular rate or ``'lerp'`` for the cheaper
    normalized linear blend.
    """

    slerp_epsilon: float = SLERP_EPSILON
    """
    The near parallel threshold passed to :func:`.quaternion_math.slerp`.
    """

    extrapolate: bool = False
    """
    Whether requests outside of the keyframe times extend the first and last segments (``True``) or return the first
    and last keyframes (``False``).
    """

    def override_options(self):
        """
        Checks that the method is one of :data:`INTERPOLATION_METHODS`.

        :raises ValueError: if the method is not recognized
        """

        if self.method not in INTERPOLATION_METHODS:
            raise ValueError(f'method must be one of {INTERPOLATION_METHODS}, not {self.method!r}')


def _is_datetime(value) -> bool:
    return isinstance(value, (datetime, pd.Timestamp, np.datetime64))


class OrientationInterpolator(UserOptionConfigured[OrientationInterpolatorOptions], OrientationInterpolatorOptions):
    """
    Interpolates orientations from a sorted series of keyframes.

    The keyframe times must be strictly increasing and are either all floats or all datetime like.  Times given to
    :meth:`interpolate` must be of the same kind as the keyframe times.

    With a single keyframe every request returns that keyframe.
    """

    def __init__(self, times: Sequence[TIME_LIKE], orientations: Sequence[Quaternion] | ARRAY_LIKE,
                 options: OrientationInterpolatorOptions | None = None):
        """
        :param times: The keyframe times in increasing order
        :param orientations: The keyframe quaternions, either :class:`.Quaternion` instances or an nx4 array like
                             ordered ``[x, y, z, w]``
        :param options: The options to configure the interpolator with
        :raises ValueError: if there are no keyframes, the number of times and orientations differ, or the times are
                            not strictly increasing
        """

        super().__init__(OrientationInterpolatorOptions, options=options)

        times = list(times)

        if not times:
            raise ValueError('at least one keyframe is required')

        quaternions = np.array([np.asarray(orientation, dtype=np.float64) for orientation in orientations])

        if quaternions.ndim != 2 or quaternions.shape[1] != 4:
            raise ValueError('the orientations must be quaternions with 4 components each')

        if quaternions.shape[0] != len(times):
            raise ValueError(f'got {len(times)} keyframe times but {quaternions.shape[0]} orientations')

        self._uses_datetimes: bool = _is_datetime(times[0])

        if self._uses_datetimes:
            self._epoch: pd.Timestamp | None = pd.Timestamp(times[0])
        else:
            self._epoch = None

        self._times: DOUBLE_ARRAY = np.array([self._to_seconds(time) for time in times], dtype=np.float64)

        if (np.diff(self._times) <= 0).any():
            raise ValueError('the keyframe times must be strictly increasing')

        self._quaternions: DOUBLE_ARRAY = quaternions.T

        _LOGGER.debug(f'Interpolating {len(times)} keyframes with {self.method}')

    def _to_seconds(self, time: TIME_LIKE) -> float:
        """
        Converts a time into the float scale the keyframes are stored on.

        :raises TypeError: if the kind of `time` does not match the keyframe times
        """

        if self._uses_datetimes:
            if not _is_datetime(time):
                raise TypeError('the keyframes are datetime tagged so times must be datetime like')

            return (pd.Timestamp(time) - self._epoch) / pd.Timedelta(seconds=1)

        if _is_datetime(time):
            raise TypeError('the keyframes are tagged with floats so times must be floats')

        return float(time)  # type: ignore

    @property
    def keyframe_count(self) -> int:
        """
        The number of keyframes
        """
        return self._times.size

    @property
    def keyframes(self) -> list[Quaternion]:
        """
        The keyframe orientations as :class:`.Quaternion` instances
        """
        return [Quaternion(*column) for column in self._quaternions.T]

    def interpolate(self, time: TIME_LIKE) -> Quaternion:
        """
        Computes the orientation at `time`.

        :param time: The time to interpolate at, of the same kind as the keyframe times
        :return: The interpolated orientation
        :raises ValueError: if the configured method is not recognized
        """

        if self.method not in INTERPOLATION_METHODS:
            raise ValueError(f'method must be one of {INTERPOLATION_METHODS}, not {self.method!r}')

        seconds = self._to_seconds(time)

        if self._times.size == 1:
            return Quaternion(*self._quaternions[:, 0])

        if not self.extrapolate and not (self._times[0] <= seconds <= self._times[-1]):
            _LOGGER.debug(f'{time} is outside of the keyframes, clamping to the nearest keyframe')
            seconds = float(np.clip(seconds, self._times[0], self._times[-1]))

        segment = int(np.clip(np.searchsorted(self._times, seconds, side='right') - 1, 0, self._times.size - 2))

        start = self._quaternions[:, segment]
        end = self._quaternions[:, segment + 1]
        time0 = self._times[segment]
        time1 = self._times[segment + 1]

        if self.method == 'slerp':
            result = slerp(start, end, seconds, time0, time1, epsilon=self.slerp_epsilon)
        else:
            result = lerp(start, end, seconds, time0, time1)

        return Quaternion(*result)

    def __call__(self, time: TIME_LIKE) -> Quaternion:
        return self.interpolate(time)
