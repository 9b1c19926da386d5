# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains core routines for converting between different rotation representations.
All routines are implemented purely on numpy arrays (or array like objects).

Rotation matrices in this package use the row vector convention of the drawing code that consumes them: a point is
transformed as ``v @ M`` and field :math:`M_{ij}` of the matrix is ``m[i-1, j-1]``.  This is the transpose of the
column vector convention where a point is transformed as ``M @ v``.
"""

from typing import Callable

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY, F_SCALAR_OR_ARRAY, SCALAR_OR_ARRAY

from quatvec.core._helpers import (_check_matrix_array_and_shape, _check_quaternion_array_and_shape,
                                   _check_vector_array_and_shape)


__all__ = ['axis_angle_to_quaternion', 'yaw_pitch_roll_to_quaternion', 'rotmat_branch', 'rotmat_to_quaternion',
           'quaternion_to_matrix', 'quaternion_to_rotmat', 'quaternion_to_axis_angle',
           'quaternion_to_yaw_pitch_roll', 'quaternion_to_rotvec', 'rotvec_to_quaternion']


def axis_angle_to_quaternion(axis: ARRAY_LIKE, angle: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    r"""
    This function creates a rotation quaternion representing a rotation of `angle` radians about `axis`.

    The quaternion is formed by:

    .. math::
        \mathbf{q} = \left[\begin{array}{c} \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}} \\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    The axis is assumed to be of unit length.  This is not checked, and a non-unit axis produces a non-unit quaternion.

    This function is vectorized.  Multiple axes can be provided as the columns of a 3xn array with either a single
    angle or n angles.

    :param axis: The unit axis(es) to rotate about
    :param angle: The angle(s) to rotate by in radians
    :return: The rotation quaternion(s)
    """

    axis = _check_vector_array_and_shape(axis, length=3)

    half_angle = np.asarray(angle, dtype=np.float64) * 0.5
    s = np.sin(half_angle)
    c = np.cos(half_angle)

    return np.array([axis[0] * s, axis[1] * s, axis[2] * s, c * np.ones_like(axis[0])])


def yaw_pitch_roll_to_quaternion(yaw: SCALAR_OR_ARRAY, pitch: SCALAR_OR_ARRAY, roll: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    r"""
    This function creates a rotation quaternion from yaw, pitch, and roll angles in radians.

    Yaw is a rotation about the y axis, pitch is a rotation about the x axis, and roll is a rotation about the z axis.
    The rotations are applied roll first (about the axis the object is facing), then pitch upward, then yaw to face into
    the new heading.  In terms of quaternion multiplication this is
    :math:`\mathbf{q}=\mathbf{q}_y\otimes\mathbf{q}_p\otimes\mathbf{q}_r`, which expands to

    .. math::
        \mathbf{q} = \left[\begin{array}{c}
        c_y s_p c_r + s_y c_p s_r \\
        s_y c_p c_r - c_y s_p s_r \\
        c_y c_p s_r - s_y s_p c_r \\
        c_y c_p c_r + s_y s_p s_r \end{array}\right]

    where :math:`c_*` and :math:`s_*` are the cosine and sine of half of the corresponding angle.  Changing the order
    changes the rotation.

    :param yaw: The yaw angle(s) about the y axis
    :param pitch: The pitch angle(s) about the x axis
    :param roll: The roll angle(s) about the z axis
    :return: The rotation quaternion(s)
    """

    half_roll = np.asarray(roll, dtype=np.float64) * 0.5
    sr = np.sin(half_roll)
    cr = np.cos(half_roll)

    half_pitch = np.asarray(pitch, dtype=np.float64) * 0.5
    sp = np.sin(half_pitch)
    cp = np.cos(half_pitch)

    half_yaw = np.asarray(yaw, dtype=np.float64) * 0.5
    sy = np.sin(half_yaw)
    cy = np.cos(half_yaw)

    return np.array([cy * sp * cr + sy * cp * sr,
                     sy * cp * cr - cy * sp * sr,
                     cy * cp * sr - sy * sp * cr,
                     cy * cp * cr + sy * sp * sr])


def _w_dominant(matrix: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    # positive trace, solve for the scalar term first
    s = np.sqrt(matrix[..., 0, 0] + matrix[..., 1, 1] + matrix[..., 2, 2] + 1.0)
    w = s * 0.5
    s = 0.5 / s

    return np.array([(matrix[..., 1, 2] - matrix[..., 2, 1]) * s,
                     (matrix[..., 2, 0] - matrix[..., 0, 2]) * s,
                     (matrix[..., 0, 1] - matrix[..., 1, 0]) * s,
                     w])


def _x_dominant(matrix: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    s = np.sqrt(1.0 + matrix[..., 0, 0] - matrix[..., 1, 1] - matrix[..., 2, 2])
    inv_s = 0.5 / s

    return np.array([0.5 * s,
                     (matrix[..., 0, 1] + matrix[..., 1, 0]) * inv_s,
                     (matrix[..., 0, 2] + matrix[..., 2, 0]) * inv_s,
                     (matrix[..., 1, 2] - matrix[..., 2, 1]) * inv_s])


def _y_dominant(matrix: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    s = np.sqrt(1.0 + matrix[..., 1, 1] - matrix[..., 0, 0] - matrix[..., 2, 2])
    inv_s = 0.5 / s

    return np.array([(matrix[..., 1, 0] + matrix[..., 0, 1]) * inv_s,
                     0.5 * s,
                     (matrix[..., 2, 1] + matrix[..., 1, 2]) * inv_s,
                     (matrix[..., 2, 0] - matrix[..., 0, 2]) * inv_s])


def _z_dominant(matrix: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    s = np.sqrt(1.0 + matrix[..., 2, 2] - matrix[..., 0, 0] - matrix[..., 1, 1])
    inv_s = 0.5 / s

    return np.array([(matrix[..., 2, 0] + matrix[..., 0, 2]) * inv_s,
                     (matrix[..., 2, 1] + matrix[..., 1, 2]) * inv_s,
                     0.5 * s,
                     (matrix[..., 0, 1] - matrix[..., 1, 0]) * inv_s])


ROTMAT_BRANCHES: tuple[Callable[[DOUBLE_ARRAY], DOUBLE_ARRAY], ...] = (_w_dominant, _x_dominant, _y_dominant,
                                                                       _z_dominant)
"""
The branches of the matrix to quaternion conversion, indexed by the value returned from :func:`rotmat_branch`.

====== ============================================= ===================
Index  Condition (checked in order)                  Component solved for
====== ============================================= ===================
0      :math:`M_{11}+M_{22}+M_{33}>0`                 :math:`q_s`
1      :math:`M_{11}\\geq M_{22}` and
       :math:`M_{11}\\geq M_{33}`                      :math:`q_x`
2      :math:`M_{22}>M_{33}`                          :math:`q_y`
3      otherwise                                     :math:`q_z`
====== ============================================= ===================
"""


def rotmat_branch(rotation_matrix: ARRAY_LIKE) -> int | np.ndarray:
    """
    Selects which branch of :data:`ROTMAT_BRANCHES` is used to convert the rotation matrix(ces) to a quaternion.

    The branch solving for the largest quaternion component first is chosen so that the remaining components are
    formed by dividing by a value safely away from zero.

    :param rotation_matrix: The 3x3 or 4x4 rotation matrix, or an nx3x3/nx4x4 stack of them
    :return: The branch index for a single matrix or an array of indices for a stack
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    m11 = np.atleast_1d(matrix[..., 0, 0])
    m22 = np.atleast_1d(matrix[..., 1, 1])
    m33 = np.atleast_1d(matrix[..., 2, 2])

    conditions = [m11 + m22 + m33 > 0.0,
                  (m11 >= m22) & (m11 >= m33),
                  m22 > m33]

    branch = np.select(conditions, [0, 1, 2], default=3)

    if matrix.ndim == 2:
        return int(branch[0])

    return branch


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation matrix into a rotation quaternion of the form
    discussed in :ref:`Rotation Representations <representation-table>`.

    The matrix should follow the row vector layout described in this module (as produced by
    :func:`quaternion_to_matrix`).  Either a 3x3 matrix or a 4x4 matrix can be provided, in which case only the upper
    left 3x3 block is used.

    The conversion uses the classical trace based algorithm.  When the trace is positive the scalar term is computed
    first from

    .. math::
        q_s = \frac{1}{2}\sqrt{\text{Tr}(\mathbf{M})+1}

    and the vector terms are found by dividing the skew symmetric differences by :math:`4q_s`.  Otherwise the largest
    diagonal element determines which vector component is solved for first, which avoids dividing by a small
    :math:`q_s`.  See :data:`ROTMAT_BRANCHES` and :func:`rotmat_branch` for the decision table.

    Because :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent the same rotation, the result may be the negation of
    the quaternion used to build the matrix.  No attempt is made to canonicalize the sign.

    This function is also vectorized, meaning that you can specify multiple rotation matrices to be converted to
    quaternions by specifying each matrix along the first axis.  The result then has the quaternions down the columns.

    :param rotation_matrix: The rotation matrix to convert to a rotation quaternion
    :return: the rotation quaternion(s) corresponding to the input rotation matrix(ces)
    """

    matrix = _check_matrix_array_and_shape(rotation_matrix)

    branch = rotmat_branch(matrix)

    with np.errstate(divide='ignore', invalid='ignore'):

        if matrix.ndim == 2:
            return ROTMAT_BRANCHES[branch](matrix)

        quaternions = np.empty((4, matrix.shape[0]), dtype=np.float64)

        for index, solver in enumerate(ROTMAT_BRANCHES):
            selected = branch == index

            if selected.any():
                quaternions[:, selected] = solver(matrix[selected])

    return quaternions


def quaternion_to_matrix(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into its equivalent 4x4 rotation matrix.

    The matrix uses the row vector layout described in this module, so that ``v @ M`` rotates the homogeneous row
    vector ``v``.  The elements are

    .. math::
        \mathbf{M} = \left[\begin{array}{cccc}
        1-2(q_y^2+q_z^2) & 2(q_xq_y+q_zq_s) & 2(q_xq_z-q_yq_s) & 0 \\
        2(q_xq_y-q_zq_s) & 1-2(q_x^2+q_z^2) & 2(q_yq_z+q_xq_s) & 0 \\
        2(q_xq_z+q_yq_s) & 2(q_yq_z-q_xq_s) & 1-2(q_x^2+q_y^2) & 0 \\
        0 & 0 & 0 & 1\end{array}\right]

    The quaternion is assumed to be of unit length.

    This function is vectorized.  When multiple quaternions are provided as columns, each matrix is stacked along the
    first axis of the output.

    :param quaternion: The rotation quaternion(s) to be converted to the rotation matrix(ces)
    :return: a numpy array containing the 4x4 rotation matrix(ces) corresponding to the input quaternion(s)
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    x, y, z, w = quaternion

    xx = x * x
    yy = y * y
    zz = z * z

    xy = x * y
    wz = z * w
    xz = z * x
    wy = y * w
    yz = y * z
    wx = x * w

    zeros = np.zeros_like(x)
    ones = np.ones_like(x)

    matrix = np.array([[1.0 - 2.0 * (yy + zz), 2.0 * (xy + wz), 2.0 * (xz - wy), zeros],
                       [2.0 * (xy - wz), 1.0 - 2.0 * (zz + xx), 2.0 * (yz + wx), zeros],
                       [2.0 * (xz + wy), 2.0 * (yz - wx), 1.0 - 2.0 * (yy + xx), zeros],
                       [zeros, zeros, zeros, ones]])

    if matrix.ndim > 2:
        # move the stacking axis to the front
        return np.moveaxis(matrix, -1, 0)

    return matrix


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts a rotation quaternion into its 3x3 rotation matrix.

    This is the upper left block of :func:`quaternion_to_matrix` and uses the same row vector layout.

    :param quaternion: The rotation quaternion(s)
    :return: The 3x3 rotation matrix(ces)
    """

    return quaternion_to_matrix(quaternion)[..., :3, :3]


def quaternion_to_axis_angle(quaternion: ARRAY_LIKE) -> tuple[DOUBLE_ARRAY, F_SCALAR_OR_ARRAY]:
    r"""
    This function converts a rotation quaternion into a unit rotation axis and an angle in radians.

    The quaternion is normalized before the conversion.  The angle is

    .. math::
        \theta = 2\text{cos}^{-1}(q_s)

    which lies in :math:`[0, 2\pi]`, and the axis is :math:`\mathbf{q}_v/\text{sin}(\theta/2)`.  When the angle is
    nearly zero (less than 1e-15) the axis is not defined and the zero vector is returned for it.

    :param quaternion: The rotation quaternion(s)
    :return: A tuple of the axis(es) (down the first axis) and the angle(s)
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    with np.errstate(divide='ignore', invalid='ignore'):
        quaternion = quaternion / np.linalg.norm(quaternion, axis=0, keepdims=True)

        theta = 2 * np.arccos(np.clip(quaternion[-1], -1.0, 1.0))

        axis = quaternion[:3] / np.sin(theta / 2)

    axis = np.where(theta < 1e-15, 0.0, axis)

    return axis, theta


def quaternion_to_yaw_pitch_roll(quaternion: ARRAY_LIKE) -> tuple[F_SCALAR_OR_ARRAY, F_SCALAR_OR_ARRAY,
                                                                    F_SCALAR_OR_ARRAY]:
    r"""
    This function converts a rotation quaternion into the yaw, pitch, and roll angles that
    :func:`yaw_pitch_roll_to_quaternion` would use to build it.

    The angles are recovered as

    .. math::
        \text{yaw} = \text{atan2}(2(q_xq_z+q_yq_s), 1-2(q_x^2+q_y^2)) \\
        \text{pitch} = \text{sin}^{-1}(2(q_xq_s-q_yq_z)) \\
        \text{roll} = \text{atan2}(2(q_xq_y+q_zq_s), 1-2(q_x^2+q_z^2))

    The argument of the arcsine is clipped to :math:`[-1, 1]` to guard against rounding.  When the pitch is
    :math:`\pm\pi/2` the yaw and roll are not unique (gimbal lock) and the split between them is arbitrary.

    :param quaternion: The unit rotation quaternion(s)
    :return: The yaw, pitch, and roll angles in radians
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    x, y, z, w = quaternion

    yaw = np.arctan2(2.0 * (x * z + y * w), 1.0 - 2.0 * (x * x + y * y))
    pitch = np.arcsin(np.clip(2.0 * (x * w - y * z), -1.0, 1.0))
    roll = np.arctan2(2.0 * (x * y + z * w), 1.0 - 2.0 * (x * x + z * z))

    return yaw, pitch, roll


def quaternion_to_rotvec(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation quaternion into a rotation vector of the form discussed in
    :ref:`Rotation Representations <representation-table>`.

    The rotation vector is returned as a numpy array and is formed by:

    .. math::
        \theta = 2*\text{cos}^{-1}(q_s) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{\text{sin}(\theta/2)} \\
        \mathbf{v} = \theta\hat{\mathbf{x}}

    This function is also vectorized, meaning that you can specify multiple rotation quaternions to be converted to
    rotation vectors by specifying each quaternion as a column.  It also checks for cases when theta is nearly zero
    (less than 1e-15) and replaces these with the identity rotation vector [0, 0, 0].

    :param quaternion: the rotation quaternion(s) to be converted to the rotation vector(s)
    :return: The rotation vector(s) corresponding to the input rotation quaternion(s)
    """

    # ensure we have a numpy array of the quaternion(s)
    quaternion = _check_quaternion_array_and_shape(quaternion)

    # get the rotation angle from the scalar portion of the quaternion
    theta = 2 * np.arccos(np.clip(quaternion[-1, ...], -1.0, 1.0))

    with np.errstate(divide='ignore', invalid='ignore'):
        # get the rotation axis
        e_vec = quaternion[:3] / np.sin(theta / 2)

    # replace the rotation axis with 0 in places where there is an identity quaternion
    e_vec = np.where(theta < 1e-15, 0.0, e_vec)

    return theta * e_vec


def rotvec_to_quaternion(rot_vec: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation vector into a rotation quaternion of the form
    discussed in :ref:`Rotation Representations <representation-table>`.

    The quaternion is returned as a numpy array and is formed by:

    .. math::
        \theta = \left\|\mathbf{v}\right\| \\
        \hat{\mathbf{x}} = \frac{\mathbf{v}}{\theta} \\
        \mathbf{q} = \left[\begin{array}{c} \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}} \\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    This function is also vectorized, meaning that you can specify multiple rotation vectors to be converted to
    quaternions by specifying each vector as a column.  It also checks for cases when theta is nearly zero (less than
    1e-15) and replaces these with the identity quaternion [0, 0, 0, 1].

    :param rot_vec: The rotation vector to convert to a rotation quaternion
    :return: the rotation quaternion(s) corresponding to the input rotation vector(s)
    """

    rot_vec = _check_vector_array_and_shape(rot_vec, length=3)

    # get the rotation angle(s)
    theta = np.linalg.norm(rot_vec, axis=0)

    small_angle_check = theta < 1e-15

    with np.errstate(divide='ignore', invalid='ignore'):
        # form the vector portion of the quaternion
        q_vec = np.where(small_angle_check, 0.0, rot_vec / theta * np.sin(theta / 2))

    # form the scalar portion of the quaternion
    q_scal = np.where(small_angle_check, 1.0, np.cos(theta / 2))

    return np.concatenate([q_vec, q_scal[np.newaxis]], axis=0)
