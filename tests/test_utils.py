#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os

import numpy as np
import pytest
import scipy.sparse

import certified_rb.utils.array_utils as arr_utils
import certified_rb.utils.general_utils as gen_utils


def test_npy_arrays_are_bit_identical(tmp_path):
    rng = np.random.default_rng(1)
    array = rng.standard_normal((3, 4)) + 1j * rng.standard_normal((3, 4))
    file_name = os.path.join(tmp_path, "array.npy")

    arr_utils.save_array(array, file_name)
    loaded = arr_utils.load_array(file_name, _shape=(3, 4), _dtype=np.complex128)

    assert loaded.dtype == np.complex128
    assert np.array_equal(loaded, array)


def test_load_array_checks(tmp_path):
    file_name = os.path.join(tmp_path, "array.npy")
    arr_utils.save_array(np.zeros((2, 2)), file_name)

    with pytest.raises(ValueError):
        arr_utils.load_array(file_name, _shape=(3, 2))
    with pytest.raises(ValueError):
        arr_utils.load_array(file_name, _dtype=np.complex128)
    with pytest.raises(ValueError):
        arr_utils.load_array(os.path.join(tmp_path, "missing.npy"))


def test_checked_copy():
    source = [[1, 2], [3, 4]]
    copy = arr_utils.checked_copy(source, (2, 2), np.float64)

    assert copy.dtype == np.float64
    with pytest.raises(AssertionError):
        arr_utils.checked_copy(source, (4,), np.float64)


def test_arrays_are_stored_as_npy_files(tmp_path):
    with pytest.raises(AssertionError):
        arr_utils.save_array(np.zeros(2), os.path.join(tmp_path, "array.txt"))


def test_norms_and_sparse_solve():
    X = scipy.sparse.diags([2.0, 3.0, 4.0]).tocsc()
    vec = np.array([1.0, 1.0, 2.0])

    assert arr_utils.mydot(vec, vec, X) == pytest.approx(21.0)
    assert arr_utils.mynorm(vec) == pytest.approx(np.sqrt(6.0))
    assert np.allclose(arr_utils.solve_sparse_system(X, vec), [0.5, 1.0 / 3.0, 0.5])
    assert np.allclose(arr_utils.solve_sparse_system(X, np.eye(3)), np.diag([0.5, 1.0 / 3.0, 0.25]))


def test_representors_to_h5(tmp_path):
    file_name = os.path.join(tmp_path, "representors.h5")
    arena = [[np.arange(3.0), None], [None, np.ones(3)]]

    gen_utils.write_representors_to_h5(file_name, {'Aq': arena})
    loaded = gen_utils.read_representors_from_h5(file_name, 'Aq', 2, 2)

    assert np.array_equal(loaded[0][0], arena[0][0])
    assert loaded[0][1] is None and loaded[1][0] is None
    assert np.array_equal(loaded[1][1], arena[1][1])


def test_create_dir(tmp_path):
    directory = os.path.join(tmp_path, "a", "b")
    gen_utils.create_dir(directory)
    gen_utils.create_dir(directory)
    assert os.path.isdir(directory)
