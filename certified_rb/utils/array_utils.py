#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 12 09:41:27 2026

Utilities to save, load and validate the dense arrays handled during the Online stage.
"""
import os

import numpy as np
from scipy.sparse import issparse
import scipy.sparse.linalg

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.path.normpath('../log.cfg'))
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def save_array(_array, _file_name):
    """Utility method, which saves a numpy array in the binary '.npy' format, so that the stored values are
    bit-identical to the ones in memory. Failures are logged and raised as ValueError.

    :param _array: array to be saved
    :type _array: numpy.ndarray
    :param _file_name: path of the '.npy' file
    :type _file_name: str
    """

    assert os.path.splitext(_file_name)[1] == '.npy', f"Arrays are stored as '.npy' files, not as {_file_name}"

    try:
        np.save(_file_name, np.asarray(_array))
    except (OSError, IOError, FileNotFoundError) as e:
        logger.error(f"Error {e}: impossible to save the array at {_file_name}")
        raise ValueError(f"Impossible to save the array at {_file_name}.")

    return


def load_array(_file_name, _shape=None, _dtype=None):
    """Utility method, which loads a numpy array from a '.npy' file and checks that its shape and its scalar type
    match the expected ones. Any failure is logged and raised as a ValueError.

    :param _file_name: path to the '.npy' file
    :type _file_name: str
    :param _shape: expected shape of the array. If None, no check is performed. Defaults to None
    :type _shape: tuple(int) or NoneType
    :param _dtype: expected scalar type of the array. If None, no check is performed. Defaults to None
    :type _dtype: numpy.dtype or type or NoneType
    :return: the loaded array
    :rtype: numpy.ndarray
    """

    try:
        array = np.load(_file_name, allow_pickle=False)
    except (IOError, OSError, FileNotFoundError) as e:
        logger.error(f"Error {e}: impossible to load the array from {_file_name}")
        raise ValueError(f"Impossible to load the array at {_file_name}.")

    if _shape is not None and array.shape != tuple(_shape):
        logger.error(f"The array stored at {_file_name} has shape {array.shape}, while {tuple(_shape)} is expected")
        raise ValueError(f"Dimension mismatch for the array at {_file_name}.")

    if _dtype is not None and array.dtype != np.dtype(_dtype):
        logger.error(f"The array stored at {_file_name} has type {array.dtype}, while {np.dtype(_dtype)} "
                     f"is expected")
        raise ValueError(f"Scalar type mismatch for the array at {_file_name}.")

    return array


def checked_copy(_array, _shape, _dtype, _name="array"):
    """Utility method, which returns a copy of '_array' with the scalar type '_dtype', after having asserted that its
    shape equals '_shape'. It is used by the setters of the containers that are allocated by the
    'resize_data_structures' methods, so that the allocated dimensions can never be changed by an assignment.

    :param _array: array to be copied
    :type _array: numpy.ndarray or list
    :param _shape: expected shape
    :type _shape: tuple(int)
    :param _dtype: scalar type of the copy
    :type _dtype: numpy.dtype or type
    :param _name: name of the array, used in the assertion message. Defaults to 'array'
    :type _name: str
    :return: validated copy of the input array
    :rtype: numpy.ndarray
    """

    array = np.array(_array, dtype=_dtype)
    assert array.shape == tuple(_shape), \
        f"Invalid shape {array.shape} for {_name}: the allocated shape is {tuple(_shape)}"

    return array


def mydot(vec1, vec2, norm_matrix=None):
    """Inner product (vec1, vec2)_X = vec1^H X vec2, with X = 'norm_matrix' (the identity if None). The first argument
    is conjugated, so that complex-valued vectors are handled as well.
    """

    if norm_matrix is not None:
        return np.vdot(vec1, norm_matrix.dot(vec2))
    return np.vdot(vec1, vec2)


def mynorm(vec, norm_matrix=None):
    """Norm induced by 'norm_matrix', see :func:`~array_utils.mydot`
    """
    return np.sqrt(np.abs(mydot(vec, vec, norm_matrix)))


def solve_sparse_system(mat, vec):
    """
    Solve a sparse linear system with a direct method (scipy.sparse.linalg.spsolve). Dense right-hand sides made of
    several columns are solved at once.
    """

    assert issparse(mat) and mat.ndim == 2 and vec.ndim in {1, 2}

    sol = scipy.sparse.linalg.spsolve(mat.tocsc(), vec)

    return sol.toarray() if issparse(sol) else sol


__all__ = [
    "save_array",
    "load_array",
    "checked_copy",
    "mydot",
    "mynorm",
    "solve_sparse_system"
]
