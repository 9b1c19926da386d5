"""
This package contains the vectorized numerical routines underlying the quatvec value types.

Everything here works on plain numpy arrays with the components of each vector or quaternion down the first axis, so
that many vectors or quaternions can be processed in a single call by stacking them as columns.  Quaternions are stored
with the vector part first, ``[x, y, z, w]``.  Nothing here depends on the value type modules, which are built on top
of these routines.
"""

import quatvec.core.vector_math
import quatvec.core.quaternion_math
import quatvec.core.conversions
import quatvec.core.transforms

from quatvec.core.quaternion_math import (SLERP_EPSILON, quaternion_length, quaternion_length_squared, quaternion_dot,
                                          quaternion_normalize, quaternion_conjugate, quaternion_inverse,
                                          quaternion_negate, quaternion_add, quaternion_subtract, quaternion_scale,
                                          quaternion_multiplication, quaternion_concatenate, quaternion_divide,
                                          interpolation_fraction, lerp, slerp)

from quatvec.core.conversions import (axis_angle_to_quaternion, yaw_pitch_roll_to_quaternion, rotmat_branch,
                                      rotmat_to_quaternion, quaternion_to_matrix, quaternion_to_rotmat,
                                      quaternion_to_axis_angle, quaternion_to_yaw_pitch_roll, quaternion_to_rotvec,
                                      rotvec_to_quaternion)

from quatvec.core.transforms import (transform, transform_to_vector4, transform_by_matrix,
                                     transform_by_matrix_to_vector4, transform_normal)

__all__ = ['SLERP_EPSILON', 'quaternion_length', 'quaternion_length_squared', 'quaternion_dot',
           'quaternion_normalize', 'quaternion_conjugate', 'quaternion_inverse', 'quaternion_negate',
           'quaternion_add', 'quaternion_subtract', 'quaternion_scale', 'quaternion_multiplication',
           'quaternion_concatenate', 'quaternion_divide', 'interpolation_fraction', 'lerp', 'slerp',
           'axis_angle_to_quaternion', 'yaw_pitch_roll_to_quaternion', 'rotmat_branch', 'rotmat_to_quaternion',
           'quaternion_to_matrix', 'quaternion_to_rotmat', 'quaternion_to_axis_angle', 'quaternion_to_yaw_pitch_roll',
           'quaternion_to_rotvec', 'rotvec_to_quaternion',
           'transform', 'transform_to_vector4', 'transform_by_matrix', 'transform_by_matrix_to_vector4',
           'transform_normal']
