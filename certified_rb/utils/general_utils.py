#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 12 10:02:51 2026

General purpose utilities: directory handling and HDF5 storage of the Riesz representors.
"""

import os
import numpy as np
import h5py


def create_dir(name):
    """Create the directory 'name' and its missing parents; existing directories are left untouched
    """
    os.makedirs(name, exist_ok=True)
    return


def write_representors_to_h5(hdf5_file, representors):
    """Write the Riesz representors to an HDF5 file. 'representors' is a dictionary mapping a group name (e.g.
    'Fq', 'Aq', 'Mq') to a list of lists of truth-space vectors; each vector is stored as the dataset
    '{group}.{q:03d}.{i:05d}/Values'. Entries equal to None are not stored.

    :param hdf5_file: path to the HDF5 file. It is overwritten if already existing
    :type hdf5_file: str
    :param representors: dictionary of the representors to be stored
    :type representors: dict
    """

    field_name = lambda _group, _q, _i: f"{_group}.{_q:03d}.{_i:05d}/Values"

    with h5py.File(hdf5_file, "w") as hdf5:
        for group, arena in representors.items():
            for q, vectors in enumerate(arena):
                for i, vec in enumerate(vectors):
                    if vec is not None:
                        hdf5.create_dataset(field_name(group, q, i), data=np.asarray(vec))

    return


def read_representors_from_h5(hdf5_file, group, n_terms, n_vectors):
    """Read the Riesz representors of a given group from an HDF5 file written by 'write_representors_to_h5'.
    Missing datasets are returned as None.

    :param hdf5_file: path to the HDF5 file
    :type hdf5_file: str
    :param group: name of the group of representors (e.g. 'Aq', 'Mq')
    :type group: str
    :param n_terms: number of affine terms of the group
    :type n_terms: int
    :param n_vectors: number of representors per affine term
    :type n_vectors: int
    :return: list of 'n_terms' lists, each of 'n_vectors' truth-space vectors (or None)
    :rtype: list[list[numpy.ndarray or NoneType]]
    """

    field_name = lambda _q, _i: f"{group}.{_q:03d}.{_i:05d}/Values"

    with h5py.File(hdf5_file, "r") as hdf5:
        arena = [[hdf5[field_name(q, i)][:] if field_name(q, i) in hdf5 else None
                  for i in range(n_vectors)]
                 for q in range(n_terms)]

    return arena


__all__ = [
    "create_dir",
    "write_representors_to_h5",
    "read_representors_from_h5"
]
