#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import pytest

from certified_rb.rb_library.rb_evaluation.transient_rb_evaluation import TransientRbEvaluation
from certified_rb.rb_library.temporal_discretization import TemporalDiscretization

from conftest import make_theta_expansion


ARRAYS = ['RB_L2_matrix', 'RB_M_q_vector', 'initial_L2_error_all_N', 'Fq_Mq_representor_norms',
          'Mq_Mq_representor_norms', 'Aq_Mq_representor_norms']
STATIONARY_ARRAYS = ['RB_Aq_vector', 'RB_Fq_vector', 'Fq_representor_norms', 'Fq_Aq_representor_norms',
                     'Aq_Aq_representor_norms']


def assert_equivalent(_evaluation, _fresh):
    assert _evaluation.N_max == _fresh.N_max
    for name in ARRAYS:
        array, fresh_array = getattr(_evaluation, name), getattr(_fresh, name)
        assert array.shape == fresh_array.shape and array.dtype == fresh_array.dtype, name
        assert np.array_equal(array, fresh_array), name
    for name in STATIONARY_ARRAYS:
        assert np.array_equal(getattr(_evaluation.rb_evaluation, name), getattr(_fresh.rb_evaluation, name)), name
    assert [ic.shape for ic in _evaluation.RB_initial_condition_all_N] == \
        [ic.shape for ic in _fresh.RB_initial_condition_all_N]
    assert _evaluation.M_q_representor == _fresh.M_q_representor
    assert _evaluation.rb_evaluation.Aq_representor == _fresh.rb_evaluation.Aq_representor
    assert _evaluation.temporal_discretization.as_dict() == _fresh.temporal_discretization.as_dict()
    assert _evaluation.RB_outputs_all_k.shape == _fresh.RB_outputs_all_k.shape


def test_clear_then_resize_equals_fresh(transient_evaluation):
    transient_evaluation.rb_solve(3)

    transient_evaluation.clear()
    transient_evaluation.resize_data_structures(4)

    assert_equivalent(transient_evaluation, TransientRbEvaluation(make_theta_expansion(), _n_max=4))
    assert not transient_evaluation.parameter_handler.is_assigned
    with pytest.raises(AssertionError):
        transient_evaluation.rb_solve(2)


def test_clear_resets_time_discretization(transient_evaluation):
    transient_evaluation.clear()

    assert transient_evaluation.N_max == 0
    assert transient_evaluation.temporal_discretization.as_dict() == TemporalDiscretization().as_dict()


def test_clear_drops_parameter_bounds(transient_evaluation):
    transient_evaluation.parameter_handler.assign_parameters_bounds([0.0, 0.0, 0.0], [5.0, 5.0, 5.0])
    transient_evaluation.clear()

    assert transient_evaluation.parameter_handler.num_parameters == 0
    assert transient_evaluation.parameter_handler.param_max.shape == (0,)
    assert not transient_evaluation.parameter_handler.is_assigned

    transient_evaluation.set_parameters([7.0, 1.0, 1.0])
    assert np.array_equal(transient_evaluation.get_parameters(), [7.0, 1.0, 1.0])


def test_resize_is_idempotent(transient_evaluation):
    transient_evaluation.resize_data_structures(3)
    transient_evaluation.resize_data_structures(3)

    assert_equivalent(transient_evaluation, TransientRbEvaluation(make_theta_expansion(), _n_max=3))


def test_resize_rejects_negative_dimension(transient_evaluation):
    with pytest.raises(AssertionError):
        transient_evaluation.resize_data_structures(-1)


def test_resize_invalidates_cached_residual_terms(transient_evaluation, param):
    transient_evaluation.cache_online_residual_terms(3)
    assert transient_evaluation.cached_residual_terms.is_valid_for(3, param)

    transient_evaluation.resize_data_structures(4)
    assert not transient_evaluation.cached_residual_terms.is_valid_for(3, param)


def test_clear_riesz_representors_keeps_inner_products(transient_evaluation):
    norms = np.copy(transient_evaluation.Mq_Mq_representor_norms)
    stationary_norms = np.copy(transient_evaluation.rb_evaluation.Aq_Aq_representor_norms)
    bound = transient_evaluation.rb_solve(3)

    transient_evaluation.clear_riesz_representors()

    assert all(vec is None for vectors in transient_evaluation.M_q_representor for vec in vectors)
    assert all(vec is None for vectors in transient_evaluation.rb_evaluation.Aq_representor for vec in vectors)
    assert len(transient_evaluation.M_q_representor) == transient_evaluation.qm
    assert np.array_equal(transient_evaluation.Mq_Mq_representor_norms, norms)
    assert np.array_equal(transient_evaluation.rb_evaluation.Aq_Aq_representor_norms, stationary_norms)
    assert transient_evaluation.rb_solve(3) == bound


def test_set_rb_initial_condition(transient_evaluation):
    transient_evaluation.set_rb_initial_condition(2, [1.0, -1.0])

    assert np.array_equal(transient_evaluation.RB_initial_condition_all_N[1], [1.0, -1.0])
    with pytest.raises(AssertionError):
        transient_evaluation.set_rb_initial_condition(2, [1.0, -1.0, 0.0])
    with pytest.raises(AssertionError):
        transient_evaluation.initial_L2_error_all_N = -np.ones(4)
