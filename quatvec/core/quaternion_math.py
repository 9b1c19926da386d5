r"""
Core quaternion algebra.

The routines in this module operate on rotation quaternions of the form discussed in
:ref:`Rotation Representations <representation-table>`, that is, 4 element arrays ordered
:math:`[q_x, q_y, q_z, q_s]` with the scalar term last.  Every routine is vectorized: multiple quaternions can be
processed at once by providing them as the columns of a :math:`4\times n` array.

Nothing in this module canonicalizes the sign of a quaternion.  :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent
the same rotation, and both are passed through unchanged so that component-wise comparisons remain meaningful.
"""

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY, F_SCALAR_OR_ARRAY, TIME_LIKE

from quatvec.core._helpers import _check_quaternion_array_and_shape


__all__ = ['SLERP_EPSILON', 'quaternion_length', 'quaternion_length_squared', 'quaternion_dot',
           'quaternion_normalize', 'quaternion_conjugate', 'quaternion_inverse', 'quaternion_negate',
           'quaternion_add', 'quaternion_subtract', 'quaternion_scale', 'quaternion_multiplication',
           'quaternion_concatenate', 'quaternion_divide', 'interpolation_fraction', 'lerp', 'slerp']


SLERP_EPSILON: float = 1e-6
"""
The threshold on :math:`1-\\text{cos}(\\omega)` below which :func:`slerp` falls back to linear blending of the
coefficients to avoid dividing by a vanishing :math:`\\text{sin}(\\omega)`.
"""


def _hamilton_product(quaternion_1: DOUBLE_ARRAY, quaternion_2: DOUBLE_ARRAY) -> DOUBLE_ARRAY:

    q1x, q1y, q1z, q1w = quaternion_1
    q2x, q2y, q2z, q2w = quaternion_2

    # cross product of the vector portions
    cx = q1y * q2z - q1z * q2y
    cy = q1z * q2x - q1x * q2z
    cz = q1x * q2y - q1y * q2x

    vector_dot = q1x * q2x + q1y * q2y + q1z * q2z

    return np.array([q1x * q2w + q2x * q1w + cx,
                     q1y * q2w + q2y * q1w + cy,
                     q1z * q2w + q2z * q1w + cz,
                     q1w * q2w - vector_dot])


def quaternion_length_squared(quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the squared length of the quaternion(s).

    :param quaternion: the quaternion(s) to measure
    :return: The squared length(s)
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    return (quaternion * quaternion).sum(axis=0)


def quaternion_length(quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the length (2-norm) of the quaternion(s).

    :param quaternion: the quaternion(s) to measure
    :return: The length(s)
    """

    return np.sqrt(quaternion_length_squared(quaternion))


def quaternion_dot(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the 4 element dot product between quaternions.

    For unit quaternions the sign of the result tells whether the two rotations lie in the same hemisphere.  A negative
    value means that the shortest path between the two orientations goes through the negation of one of them.

    :param quaternion_1: The first quaternion(s)
    :param quaternion_2: The second quaternion(s)
    :return: The dot product(s)
    """

    q1 = _check_quaternion_array_and_shape(quaternion_1)
    q2 = _check_quaternion_array_and_shape(quaternion_2)

    return (q1 * q2).sum(axis=0)


def quaternion_normalize(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Normalizes the quaternion(s) to unit length.

    The sign of the quaternion is left as is.  The zero quaternion normalizes to ``nan`` in every component.

    :param quaternion: the quaternion(s) to normalize

    :returns: The normalized quaternions
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    with np.errstate(divide='ignore', invalid='ignore'):
        return work_quaternion / np.linalg.norm(work_quaternion, axis=0, keepdims=True)


def quaternion_conjugate(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function provides the conjugate of a quaternion, which negates the vector portion:

    .. math::
        \mathbf{q}^*=\left[\begin{array}{c}-\mathbf{q}_v\\ q_s\end{array}\right]

    For unit quaternions the conjugate is also the inverse (see :func:`quaternion_inverse`).

    :param quaternion: The quaternion(s) to conjugate
    :return: a numpy array containing the conjugate quaternion(s)
    """

    # ensure the value is an array and break mutability
    quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    # negate the vector portion
    quaternion[:3] *= -1

    return quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function provides the multiplicative inverse of a quaternion.

    The inverse is defined such that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}0&0&0&1\end{array}\right]^T` is the identity quaternion and
    :math:`\otimes` indicates quaternion multiplication.  Mathematically this is

    .. math::
        \mathbf{q}^{-1}=\frac{\mathbf{q}^*}{\mathbf{q}^T\mathbf{q}}

    For a unit (rotation) quaternion this is simply the conjugate.  For a non-unit quaternion this is the true inverse
    rather than the conjugate.  The zero quaternion has no inverse and produces ``nan`` values.

    This function is also vectorized, meaning that you can specify multiple quaternions to be inverted by specifying
    each quaternion as a column.

    :param quaternion: The quaternion(s) to be inverted
    :return: a numpy array representing the inverse quaternion corresponding to the input quaternion
    """

    conjugate = quaternion_conjugate(quaternion)

    with np.errstate(divide='ignore', invalid='ignore'):
        return conjugate * (1.0 / (conjugate * conjugate).sum(axis=0))


def quaternion_negate(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Flips the sign of every component.  The result represents the same rotation as the input.
    """

    return -_check_quaternion_array_and_shape(quaternion)


def quaternion_add(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Adds two quaternions element by element.
    """

    return _check_quaternion_array_and_shape(quaternion_1) + _check_quaternion_array_and_shape(quaternion_2)


def quaternion_subtract(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Subtracts the second quaternion from the first element by element.
    """

    return _check_quaternion_array_and_shape(quaternion_1) - _check_quaternion_array_and_shape(quaternion_2)


def quaternion_scale(quaternion: ARRAY_LIKE, scalar: float) -> DOUBLE_ARRAY:
    """
    Multiplies every component of the quaternion(s) by a scalar.

    The result is generally not of unit length and so is not a pure rotation unless it is renormalized.

    :param quaternion: The quaternion(s) to scale
    :param scalar: The scale factor
    :return: The scaled quaternion(s)
    """

    return _check_quaternion_array_and_shape(quaternion) * scalar


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE,
                              quaternion_2_in: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    The quaternions should be of the form as specified in
    :ref:`Rotation Representations <representation-table>`.

    The product :math:`\mathbf{q}_1\otimes\mathbf{q}_2` represents applying the rotation :math:`\mathbf{q}_2` first and
    then the rotation :math:`\mathbf{q}_1`.  That is
    `q_from_A_to_C = quaternion_multiplication(q_from_B_to_C, q_from_A_to_B)`.  Use :func:`quaternion_concatenate` to
    compose rotations in the order they are applied instead.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{s1}\mathbf{q}_{v2} + q_{s2}\mathbf{q}_{v1} +
        \mathbf{q}_{v1}\times\mathbf{q}_{v2}\\
        q_{s1}q_{s2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\end{array}\right]

    This function is vectorized, therefore you can input multiple quaternions as a 4xn array where each column is an
    independent quaternion.

    :param quaternion_1_in: The first (left) quaternion to multiply
    :param quaternion_2_in: The second (right) quaternion to multiply
    :return: The hamiltonian product of quaternion_1 and quaternion_2
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in)

    return _hamilton_product(quaternion_1, quaternion_2)


def quaternion_concatenate(first_rotation: ARRAY_LIKE, second_rotation: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Composes two rotations in the order they are applied.

    The result represents the `first_rotation` followed by the `second_rotation`.  Because of the hamiltonian
    multiplication convention this is the product :math:`\mathbf{q}_{second}\otimes\mathbf{q}_{first}`, so that::

        transform(transform(v, a), b) == transform(v, quaternion_concatenate(a, b))

    :param first_rotation: The rotation applied first
    :param second_rotation: The rotation applied second
    :return: The combined rotation
    """

    return quaternion_multiplication(second_rotation, first_rotation)


def quaternion_divide(quaternion_1_in: ARRAY_LIKE, quaternion_2_in: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Divides one quaternion by another, :math:`\mathbf{q}_1\otimes\mathbf{q}_2^{-1}`.

    The inverse is formed inline using the true inverse (see :func:`quaternion_inverse`) so the divisor does not need
    to be of unit length.  Dividing by the zero quaternion produces ``nan`` values.

    :param quaternion_1_in: The dividend quaternion(s)
    :param quaternion_2_in: The divisor quaternion(s)
    :return: The quotient
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    divisor = _check_quaternion_array_and_shape(quaternion_2_in)

    with np.errstate(divide='ignore', invalid='ignore'):
        inverse_norm = 1.0 / (divisor * divisor).sum(axis=0)

        inverse = np.array([-divisor[0] * inverse_norm,
                            -divisor[1] * inverse_norm,
                            -divisor[2] * inverse_norm,
                            divisor[3] * inverse_norm])

        return _hamilton_product(quaternion_1, inverse)


def interpolation_fraction(time: TIME_LIKE, time0: TIME_LIKE = 0, time1: TIME_LIKE = 1) -> float:
    """
    Computes the fractional percent of the way from `time0` to `time1` that `time` lies at.

    The times can be floats or datetime like objects, as long as they can be subtracted and the differences divided.

    :param time: The time to interpolate at
    :param time0: The time corresponding to the start of the interval
    :param time1: The time corresponding to the end of the interval
    :return: The fraction, which is `time` itself when the default `time0` and `time1` are used
    :raises TypeError: If the times can't be subtracted and divided
    """

    try:
        return float((time - time0) / (time1 - time0))  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division.  Typically this means they should all be floats or all be DatetimeLike objects')


def lerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
         time: TIME_LIKE, time0: TIME_LIKE = 0, time1: TIME_LIKE = 1) -> DOUBLE_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    The interpolation first blends the coefficients linearly and then renormalizes the result to unit length:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)\pm\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)\pm\mathbf{q}_1p\right\|}

    where :math:`p` is the fractional percent of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1`.  The
    sign is chosen from the sign of :math:`\mathbf{q}_0^T\mathbf{q}_1` so that the interpolation follows the shorter
    path between the orientations.  The renormalization is mandatory, because the linear blend of two unit quaternions
    is shorter than unit length everywhere away from the end points.

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.

    .. warning::
        LERP does not perform a constant angular velocity interpolation.  Use :func:`slerp` for that.

    :param quaternion0: The starting quaternion(s)
    :param quaternion1: The ending quaternion(s)
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion(s)
    :param time1: the time corresponding to the second quaternion(s)
    :return: The interpolated quaternion(s)
    """

    dt = interpolation_fraction(time, time0, time1)

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    # take the shorter path by flipping the second quaternion into the first's hemisphere
    sign = np.where((q0 * q1).sum(axis=0) >= 0.0, 1.0, -1.0)

    q = (1.0 - dt) * q0 + sign * dt * q1

    with np.errstate(divide='ignore', invalid='ignore'):
        return q * (1.0 / np.sqrt((q * q).sum(axis=0)))


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: TIME_LIKE, time0: TIME_LIKE = 0, time1: TIME_LIKE = 1,
          epsilon: float = SLERP_EPSILON) -> DOUBLE_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP of quaternions involves performing a linear interpolation along the great circle arc connecting the two
    quaternions. That is:

    .. math::
        \omega = \text{cos}^{-1}(\left|\mathbf{q}_0^T\mathbf{q}_1\right|)\\
        \mathbf{q}=\frac{\text{sin}((1-p)\omega)}{\text{sin}(\omega)}\mathbf{q}_0\pm
        \frac{\text{sin}(p\omega)}{\text{sin}(\omega)}\mathbf{q}_1

    where :math:`\omega` is the angle between the first and second quaternion and :math:`p` is the fractional percent
    of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that we want to interpolate at.  When the dot
    product is negative the second coefficient is negated so that the shorter great circle arc is followed.

    When the quaternions are nearly parallel (:math:`\text{cos}(\omega)>1-\epsilon`) the coefficients fall back to
    :math:`1-p` and :math:`\pm p`.  The result is not renormalized; for unit inputs it is already of unit length to
    within rounding (the near parallel fallback is only approximately unit length).

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  When using this method
    it is also possible to specify all three of `time`, `time0`, and `time1` as python datetime objects.

    :param quaternion0: The starting quaternion(s)
    :param quaternion1: The ending quaternion(s)
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time(s) corresponding to the first quaternion(s). Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time(s) corresponding to the second quaternion(s). Leave at 1 if you are specifying `time` as a
                  fractional percent
    :param epsilon: The near parallel threshold
    :return: The interpolated quaternion(s)
    """

    dt = interpolation_fraction(time, time0, time1)

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    cos_omega = (q0 * q1).sum(axis=0)

    # the quaternions are in opposite hemispheres so flip to take the shorter arc
    flip = cos_omega < 0.0
    cos_omega = np.where(flip, -cos_omega, cos_omega)

    too_close = cos_omega > (1.0 - epsilon)

    with np.errstate(divide='ignore', invalid='ignore'):
        omega = np.arccos(cos_omega)
        inv_sin_omega = 1.0 / np.sin(omega)

        s1 = np.where(too_close, 1.0 - dt, np.sin((1.0 - dt) * omega) * inv_sin_omega)
        s2 = np.where(too_close, dt, np.sin(dt * omega) * inv_sin_omega)

    s2 = np.where(flip, -s2, s2)

    return s1 * q0 + s2 * q1
