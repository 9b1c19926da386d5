r"""
Routines for applying rotations and matrices to vectors.

Rotating by a quaternion is done with the closed form expansion of :math:`\mathbf{q}\mathbf{v}\mathbf{q}^{-1}`
restricted to the vector part, which avoids building an intermediate rotation matrix.  With

.. math::
    x_2=2q_x,\ y_2=2q_y,\ z_2=2q_z

and the products :math:`wx_2=q_sx_2,\ wy_2=q_sy_2,\ wz_2=q_sz_2,\ xx_2=q_xx_2,\ xy_2=q_xy_2,\ xz_2=q_xz_2,
\ yy_2=q_yy_2,\ yz_2=q_yz_2,\ zz_2=q_zz_2` the rotated vector is

.. math::
    \left[\begin{array}{c}
    v_x(1-yy_2-zz_2)+v_y(xy_2-wz_2)+v_z(xz_2+wy_2) \\
    v_x(xy_2+wz_2)+v_y(1-xx_2-zz_2)+v_z(yz_2-wx_2) \\
    v_x(xz_2-wy_2)+v_y(yz_2+wx_2)+v_z(1-xx_2-yy_2)\end{array}\right]

Matrix transforms use the row vector layout described in :mod:`.conversions`: a point is transformed as
``[v, 1] @ M`` so the translation lives in the last row of the matrix.

All routines are vectorized over vectors stored as the columns of an array.
"""

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY

from quatvec.core._helpers import (_check_quaternion_array_and_shape, _check_vector_array_and_shape,
                                   _check_matrix_array_and_shape)


__all__ = ['transform', 'transform_to_vector4', 'transform_by_matrix', 'transform_by_matrix_to_vector4',
           'transform_normal']


def _rotation_terms(quaternion: ARRAY_LIKE) -> tuple[DOUBLE_ARRAY, ...]:
    """
    Forms the doubled products used by the closed form rotation expansion.
    """

    x, y, z, w = _check_quaternion_array_and_shape(quaternion)

    x2 = x + x
    y2 = y + y
    z2 = z + z

    wx2 = w * x2
    wy2 = w * y2
    wz2 = w * z2
    xx2 = x * x2
    xy2 = x * y2
    xz2 = x * z2
    yy2 = y * y2
    yz2 = y * z2
    zz2 = z * z2

    return wx2, wy2, wz2, xx2, xy2, xz2, yy2, yz2, zz2


def _rotate_xyz(vx, vy, vz, quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:

    wx2, wy2, wz2, xx2, xy2, xz2, yy2, yz2, zz2 = _rotation_terms(quaternion)

    return np.array([vx * (1.0 - yy2 - zz2) + vy * (xy2 - wz2) + vz * (xz2 + wy2),
                     vx * (xy2 + wz2) + vy * (1.0 - xx2 - zz2) + vz * (yz2 - wx2),
                     vx * (xz2 - wy2) + vy * (yz2 + wx2) + vz * (1.0 - xx2 - yy2)])


def transform(vector: ARRAY_LIKE, quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Rotates vector(s) by a quaternion, returning vector(s) with the same number of components.

    * 3 element vectors are rotated with the full closed form expansion.
    * 4 element vectors have their first 3 components rotated and their w component carried through unchanged.
    * 2 element vectors are treated as lying in the xy plane (z = 0) and only the x and y rows of the expansion are
      evaluated.  The z component of the rotated vector is dropped, so a quaternion whose rotation axis is not the z
      axis tilts the vector out of the plane and that out of plane part is silently lost.  Callers that need it should
      use :func:`transform_to_vector4` instead.

    The rotation is exact for the identity quaternion: the input is returned unchanged.  The quaternion is assumed to
    be of unit length.

    :param vector: The vector(s) to rotate with components down the first axis
    :param quaternion: The rotation quaternion
    :return: The rotated vector(s)
    """

    vector = _check_vector_array_and_shape(vector)

    if vector.shape[0] == 2:
        wx2, wy2, wz2, xx2, xy2, xz2, yy2, yz2, zz2 = _rotation_terms(quaternion)

        return np.array([vector[0] * (1.0 - yy2 - zz2) + vector[1] * (xy2 - wz2),
                         vector[0] * (xy2 + wz2) + vector[1] * (1.0 - xx2 - zz2)])

    rotated = _rotate_xyz(vector[0], vector[1], vector[2], quaternion)

    if vector.shape[0] == 4:
        return np.concatenate([rotated, vector[3:]], axis=0)

    return rotated


def transform_to_vector4(vector: ARRAY_LIKE, quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Rotates 2 or 3 element vector(s) by a quaternion and returns homogeneous 4 element vector(s) with w = 1.

    Unlike :func:`transform`, 2 element vectors are rotated with all 3 rows of the expansion (z = 0), so the out of
    plane component is kept in the z component of the result.

    :param vector: The 2 or 3 element vector(s) to rotate
    :param quaternion: The rotation quaternion
    :return: The rotated 4 element vector(s)
    """

    vector = _check_vector_array_and_shape(vector, length=(2, 3))

    vz = vector[2] if vector.shape[0] == 3 else np.zeros_like(vector[0])

    rotated = _rotate_xyz(vector[0], vector[1], vz, quaternion)

    return np.concatenate([rotated, np.ones_like(vector[:1])], axis=0)


def transform_by_matrix(position: ARRAY_LIKE, matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Transforms position(s) by a matrix in the row vector layout, returning vector(s) of the same size.

    Only a single matrix is accepted.  Many positions can be transformed at once by stacking them as columns.

    * 2 element positions accept either a 3x2 matrix (``M31``, ``M32`` hold the translation) or a 4x4 matrix (``M41``,
      ``M42`` hold the translation).
    * 3 element positions accept a 4x4 matrix, applying the translation in ``M41..M43``.  The ``M*4`` column is
      ignored, so no perspective divide is performed.
    * 4 element vectors accept a 4x4 matrix and are multiplied in full.

    :param position: The position(s) to transform
    :param matrix: The transformation matrix
    :return: The transformed position(s)
    :raises ValueError: if the matrix shape does not fit the vector size or a stack of matrices is given
    """

    position = _check_vector_array_and_shape(position)
    size = position.shape[0]

    if size == 2:
        matrix = _check_matrix_array_and_shape(matrix, rows=(3, 4), columns=(2, 4), single=True)

        if matrix.shape[-2:] == (3, 2) or matrix.shape[-2:] == (4, 4):
            translation = matrix[-1, :2] if matrix.shape[-2] == 3 else matrix[3, :2]

            return (matrix[:2, :2].T @ position) + translation.reshape((2,) + (1,) * (position.ndim - 1))

        raise ValueError('2 element positions must be transformed by a 3x2 or a 4x4 matrix')

    matrix = _check_matrix_array_and_shape(matrix, rows=4, columns=4, single=True)

    if size == 3:
        return matrix[:3, :3].T @ position + matrix[3, :3].reshape((3,) + (1,) * (position.ndim - 1))

    return matrix.T @ position


def transform_by_matrix_to_vector4(position: ARRAY_LIKE, matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Transforms 2 or 3 element position(s) by a 4x4 matrix into homogeneous 4 element vector(s).

    The missing components of the position are taken as z = 0 (for 2 element positions) and w = 1.

    :param position: The 2 or 3 element position(s) to transform
    :param matrix: The 4x4 transformation matrix
    :return: The transformed 4 element vector(s)
    """

    position = _check_vector_array_and_shape(position, length=(2, 3))
    matrix = _check_matrix_array_and_shape(matrix, rows=4, columns=4, single=True)

    padding = [np.zeros_like(position[:1])] * (3 - position.shape[0]) + [np.ones_like(position[:1])]

    homogeneous = np.concatenate([position] + padding, axis=0)

    return matrix.T @ homogeneous


def transform_normal(normal: ARRAY_LIKE, matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Transforms direction vector(s) by a matrix, ignoring the translation.

    2 element normals accept a 3x2 or 4x4 matrix and 3 element normals accept a 4x4 matrix.  Only the upper left block
    of the matrix is used.

    :param normal: The direction vector(s) to transform
    :param matrix: The transformation matrix
    :return: The transformed direction vector(s)
    """

    normal = _check_vector_array_and_shape(normal, length=(2, 3))
    size = normal.shape[0]

    if size == 2:
        matrix = _check_matrix_array_and_shape(matrix, rows=(3, 4), columns=(2, 4), single=True)

        if matrix.shape[-2:] not in ((3, 2), (4, 4)):
            raise ValueError('2 element normals must be transformed by a 3x2 or a 4x4 matrix')

    else:
        matrix = _check_matrix_array_and_shape(matrix, rows=4, columns=4, single=True)

    return matrix[:size, :size].T @ normal
