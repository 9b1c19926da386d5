r"""
Componentwise vector algebra for 2, 3, and 4 element vectors.

Every routine here works on numpy arrays (or array like objects) with the vector components down the first axis.
Multiple vectors can therefore be processed at once by stacking them as columns of a :math:`n\times m` array, in the
same way that the quaternion routines in :mod:`.quaternion_math` accept multiple quaternions.

None of these routines raise for degenerate numeric input.  Division by zero, normalizing the zero vector, and
similar operations follow IEEE floating point semantics and produce ``inf`` or ``nan`` values which the caller is
responsible for guarding against.  Only malformed shapes raise a :exc:`ValueError`.
"""

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY, SCALAR_OR_ARRAY, F_SCALAR_OR_ARRAY

from quatvec.core._helpers import _check_vector_array_and_shape, _check_matching_vectors


__all__ = ['add', 'subtract', 'multiply', 'divide', 'negate',
           'dot', 'length', 'length_squared', 'distance', 'distance_squared',
           'normalize', 'cross', 'lerp', 'reflect', 'clamp',
           'component_min', 'component_max', 'component_abs', 'square_root']


def _operand(vector: DOUBLE_ARRAY, other: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    """
    Interpret the right hand operand of a componentwise operation as either a scalar or a vector matching `vector`.
    """

    if np.ndim(other) == 0:
        return np.asarray(other, dtype=np.float64)

    return _check_matching_vectors(vector, other)[1]


def add(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Adds two vectors component by component.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: The componentwise sum
    """

    first, second = _check_matching_vectors(vector_1, vector_2)

    return first + second


def subtract(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Subtracts the second vector from the first component by component.

    :param vector_1: The vector(s) to subtract from
    :param vector_2: The vector(s) to subtract
    :return: The componentwise difference
    """

    first, second = _check_matching_vectors(vector_1, vector_2)

    return first - second


def multiply(vector: ARRAY_LIKE, other: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    """
    Multiplies a vector either component by component with another vector or by a scalar.

    :param vector: The vector(s) to scale
    :param other: Either a scalar or a vector with the same number of components as `vector`
    :return: The product
    """

    vector = _check_vector_array_and_shape(vector)

    return vector * _operand(vector, other)


def divide(vector: ARRAY_LIKE, other: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    """
    Divides a vector either component by component by another vector or by a scalar.

    Dividing by a zero component (or a zero scalar) produces ``inf`` or ``nan`` in the corresponding components rather
    than raising.

    :param vector: The dividend vector(s)
    :param other: Either a scalar or a vector with the same number of components as `vector`
    :return: The quotient
    """

    vector = _check_vector_array_and_shape(vector)
    divisor = _operand(vector, other)

    with np.errstate(divide='ignore', invalid='ignore'):
        return vector / divisor


def negate(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Flips the sign of every component of the vector(s).

    :param vector: The vector(s) to negate
    :return: The negated vector(s)
    """

    return -_check_vector_array_and_shape(vector)


def dot(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    r"""
    Computes the dot product :math:`\mathbf{a}^T\mathbf{b}` of two vectors.

    When stacks of vectors are provided the dot product is computed column by column and a 1D array is returned.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: The dot product(s)
    """

    first, second = _check_matching_vectors(vector_1, vector_2)

    return (first * second).sum(axis=0)


def length_squared(vector: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the squared length of the vector(s).

    This avoids the square root so it should be preferred when only comparing lengths.

    :param vector: The vector(s) to measure
    :return: The squared length(s)
    """

    vector = _check_vector_array_and_shape(vector)

    return (vector * vector).sum(axis=0)


def length(vector: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the Euclidean length of the vector(s).

    :param vector: The vector(s) to measure
    :return: The length(s)
    """

    return np.sqrt(length_squared(vector))


def distance_squared(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the squared Euclidean distance between two points.

    :param vector_1: The first point(s)
    :param vector_2: The second point(s)
    :return: The squared distance(s)
    """

    difference = subtract(vector_1, vector_2)

    return (difference * difference).sum(axis=0)


def distance(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the Euclidean distance between two points.

    :param vector_1: The first point(s)
    :param vector_2: The second point(s)
    :return: The distance(s)
    """

    return np.sqrt(distance_squared(vector_1, vector_2))


def normalize(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Scales the vector(s) to unit length, :math:`\hat{\mathbf{v}}=\mathbf{v}/\left\|\mathbf{v}\right\|`.

    The zero vector has no direction, so normalizing it returns ``nan`` in every component.  Callers which cannot
    tolerate the ``nan`` values should check :func:`length_squared` first.

    :param vector: The vector(s) to normalize
    :return: The unit vector(s)
    """

    vector = _check_vector_array_and_shape(vector)

    with np.errstate(divide='ignore', invalid='ignore'):
        return vector / np.sqrt((vector * vector).sum(axis=0))


def cross(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Computes the right handed cross product :math:`\mathbf{a}\times\mathbf{b}` of two 3 element vectors.

    The result is the zero vector when the inputs are parallel or anti-parallel.

    :param vector_1: The first 3 element vector(s)
    :param vector_2: The second 3 element vector(s)
    :return: The cross product(s)
    :raises ValueError: if either input does not have 3 components
    """

    a, b = _check_matching_vectors(vector_1, vector_2, length=3)

    return np.array([a[1] * b[2] - a[2] * b[1],
                     a[2] * b[0] - a[0] * b[2],
                     a[0] * b[1] - a[1] * b[0]])


def lerp(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE, amount: SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    r"""
    Linearly interpolates between two vectors, :math:`\mathbf{a}+(\mathbf{b}-\mathbf{a})t`.

    `amount` is not clamped, so values outside of :math:`[0, 1]` extrapolate along the line through the two vectors.

    :param vector_1: The starting vector(s) (returned for ``amount=0``)
    :param vector_2: The ending vector(s) (returned for ``amount=1``)
    :param amount: The interpolation parameter
    :return: The interpolated vector(s)
    """

    first, second = _check_matching_vectors(vector_1, vector_2)

    return first + (second - first) * np.asarray(amount, dtype=np.float64)


def reflect(vector: ARRAY_LIKE, normal: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Reflects a vector off of a surface with the given normal, :math:`\mathbf{v}-2(\mathbf{v}^T\mathbf{n})\mathbf{n}`.

    The normal is assumed to be unit length.  This is not verified.

    :param vector: The incident vector(s)
    :param normal: The surface normal(s)
    :return: The reflected vector(s)
    """

    vector, normal = _check_matching_vectors(vector, normal)

    return vector - 2 * (vector * normal).sum(axis=0) * normal


def clamp(vector: ARRAY_LIKE, minimum: ARRAY_LIKE, maximum: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Restricts each component of a vector to lie between the corresponding components of `minimum` and `maximum`.

    The comparison against `maximum` is made first and the comparison against `minimum` second.  This order matters
    when a component of `minimum` is larger than the matching component of `maximum`: the result is then the
    `minimum` component, matching HLSL shader semantics.

    :param vector: The vector(s) to clamp
    :param minimum: The lower bound for each component
    :param maximum: The upper bound for each component
    :return: The clamped vector(s)
    """

    vector, minimum = _check_matching_vectors(vector, minimum)
    maximum = _check_matching_vectors(vector, maximum)[1]

    result = np.where(vector > maximum, maximum, vector)

    return np.where(result < minimum, minimum, result)


def component_min(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the componentwise minimum of two vectors.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: A vector containing the smaller of each pair of components
    """

    first, second = _check_matching_vectors(vector_1, vector_2)

    return np.where(first < second, first, second)


def component_max(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the componentwise maximum of two vectors.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: A vector containing the larger of each pair of components
    """

    first, second = _check_matching_vectors(vector_1, vector_2)

    return np.where(first > second, first, second)


def component_abs(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the absolute value of each component.
    """

    return np.abs(_check_vector_array_and_shape(vector))


def square_root(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the square root of each component.  Negative components produce ``nan``.
    """

    vector = _check_vector_array_and_shape(vector)

    with np.errstate(invalid='ignore'):
        return np.sqrt(vector)
