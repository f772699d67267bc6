#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import pytest

from certified_rb.rb_library.affine_decomposition.theta_expansion import AffineDecomposition, ThetaExpansion


def test_affine_decomposition_counts():
    ad = AffineDecomposition(_qa=2, _qf=1, _qm=3, _ql=[2, 1])

    assert (ad.qa, ad.qf, ad.qm) == (2, 1, 3)
    assert ad.ql == [2, 1]
    assert ad.n_outputs == 2
    assert ad.as_dict() == {'Qa': 2, 'Qf': 1, 'Qm': 3, 'Ql': [2, 1]}


def test_affine_decomposition_defaults_and_negative_counts():
    ad = AffineDecomposition()
    assert (ad.qa, ad.qf, ad.qm, ad.n_outputs) == (0, 0, 0, 0)

    with pytest.raises(AssertionError):
        ad.set_Q(-1, 1)


def test_default_theta_functions_raise():
    expansion = ThetaExpansion(AffineDecomposition(_qa=1, _qf=1, _qm=1, _ql=[1]))

    with pytest.raises(Exception):
        expansion.get_theta_a(np.zeros(1), 0)
    with pytest.raises(Exception):
        expansion.get_full_theta_m(np.zeros(1))
    with pytest.raises(Exception):
        expansion.get_full_theta_l(np.zeros(1), 0)


def test_full_theta_evaluations():
    expansion = ThetaExpansion(AffineDecomposition(_qa=2, _qf=1, _qm=1, _ql=[3]),
                               _theta_a=lambda mu, q: mu[q],
                               _theta_f=lambda mu, q: 2.0 * mu[0],
                               _theta_m=lambda mu, q: 1.0,
                               _theta_l=lambda mu, n, q: float(q))
    mu = np.array([3.0, 4.0])

    assert np.array_equal(expansion.get_full_theta_a(mu), [3.0, 4.0])
    assert np.array_equal(expansion.get_full_theta_f(mu), [6.0])
    assert np.array_equal(expansion.get_full_theta_m(mu), [1.0])
    assert np.array_equal(expansion.get_full_theta_l(mu, 0), [0.0, 1.0, 2.0])
    assert expansion.get_full_theta_a(mu, _dtype=np.complex128).dtype == np.complex128

    with pytest.raises(AssertionError):
        expansion.get_full_theta_l(mu, 1)
