r"""
quatvec provides double precision vector and quaternion value types for rotating and transforming points.

The value types are thin immutable wrappers around the vectorized numpy routines in :mod:`quatvec.core`.  The routines
can also be used directly to process many vectors or quaternions at once by stacking them as columns.

The following conventions are used throughout:

.. _representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A 4 element rotation quaternion stored vector part first,
                   :math:`\mathbf{q}=\left[\begin{array}{c} q_x \\ q_y \\ q_z \\ q_s\end{array}\right]=
                   \left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
                   \text{cos}(\frac{\theta}{2})\end{array}\right]`
                   where :math:`\hat{\mathbf{x}}` is the unit rotation axis and :math:`\theta` the rotation angle.  The
                   quaternions :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent the same rotation but compare
                   unequal.
rotation vector    A 3 element vector :math:`\mathbf{v}=\theta\hat{\mathbf{x}}`.
rotation matrix    A :math:`4\times 4` (or the upper left :math:`3\times 3`) matrix in the row vector layout, so that a
                   row vector is transformed as :math:`\mathbf{v}\mathbf{M}` and translations live in the last row.
yaw pitch roll     Angles in radians about the y, x, and z axes respectively.  The rotation is the roll, followed by
                   the pitch, followed by the yaw.
=================  =====================================================================================================

The hamiltonian product ``a * b`` is the rotation ``b`` followed by ``a``, while ``a.concatenate(b)`` is ``a`` followed
by ``b``.

Numeric edge cases never raise: dividing by zero or normalizing a zero length vector or quaternion produces ``inf`` or
``nan`` values.  Only malformed inputs (wrong shapes, wrong operand types, bad destinations for
:meth:`~.Vector2.copy_to`) raise.
"""

import quatvec.core
import quatvec.vector
import quatvec.quaternion
import quatvec.angle
import quatvec.geometry
import quatvec.interpolation
import quatvec.utilities

from quatvec.vector import Vector2, Vector3, Vector4
from quatvec.quaternion import Quaternion
from quatvec.angle import Angle
from quatvec.geometry import Point, Size, Rectangle, rotate_points
from quatvec.interpolation import OrientationInterpolator, OrientationInterpolatorOptions

__all__ = ['Vector2', 'Vector3', 'Vector4', 'Quaternion', 'Angle', 'Point', 'Size', 'Rectangle', 'rotate_points',
           'OrientationInterpolator', 'OrientationInterpolatorOptions']
