import copy

import numpy as np

from quatvec._typing import ARRAY_LIKE, DOUBLE_ARRAY


VECTOR_LENGTHS = (2, 3, 4)
"""
The vector dimensions understood by the core routines
"""


def _check_array_and_shape(input: ARRAY_LIKE,
                           return_copy: bool = False,
                           first_axis_length: int | tuple[int, ...] | None = None,
                           second_last_axis_length: int | tuple[int, ...] | None = None,
                           last_axis_length: int | tuple[int, ...] | None = None) -> DOUBLE_ARRAY:
    in_shape = np.shape(input)

    if not in_shape:
        raise ValueError('The input must be shaped')

    if first_axis_length is not None and in_shape[0] not in np.atleast_1d(first_axis_length):
        raise ValueError(f'The length of the first axis must be {first_axis_length}')

    if second_last_axis_length is not None:
        if len(in_shape) < 2 or in_shape[-2] not in np.atleast_1d(second_last_axis_length):
            raise ValueError(f'The length of the second to last axis must be {second_last_axis_length}')

    if last_axis_length is not None and in_shape[-1] not in np.atleast_1d(last_axis_length):
        raise ValueError(f'The length of the last axis must be {last_axis_length}')

    if return_copy:
        input = copy.deepcopy(input)

    # ensure the value is an array and break mutability
    return np.asanyarray(input, dtype=np.float64)


def _check_quaternion_array_and_shape(quaternion: ARRAY_LIKE, return_copy: bool = False) -> DOUBLE_ARRAY:
    return _check_array_and_shape(quaternion, return_copy, first_axis_length=4)


def _check_vector_array_and_shape(vector: ARRAY_LIKE, return_copy: bool = False,
                                  length: int | tuple[int, ...] = VECTOR_LENGTHS) -> DOUBLE_ARRAY:
    return _check_array_and_shape(vector, return_copy, first_axis_length=length)


def _check_matrix_array_and_shape(matrix: ARRAY_LIKE, return_copy: bool = False,
                                  rows: int | tuple[int, ...] = (3, 4),
                                  columns: int | tuple[int, ...] = (3, 4),
                                  single: bool = False) -> DOUBLE_ARRAY:
    if single and np.ndim(matrix) != 2:
        raise ValueError(f'A single matrix is required. Got an array with shape {np.shape(matrix)}')

    return _check_array_and_shape(matrix, return_copy, second_last_axis_length=rows, last_axis_length=columns)


def _check_matching_vectors(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE,
                            length: int | tuple[int, ...] = VECTOR_LENGTHS) -> tuple[DOUBLE_ARRAY, DOUBLE_ARRAY]:
    first = _check_vector_array_and_shape(vector_1, length=length)
    second = _check_vector_array_and_shape(vector_2, length=length)

    if first.shape[0] != second.shape[0]:
        raise ValueError(f'The vectors must have the same number of components. '
                         f'Got {first.shape[0]} and {second.shape[0]}')

    return first, second
