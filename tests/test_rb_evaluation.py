#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import pytest
import scipy.linalg

from certified_rb.rb_library.rb_evaluation.rb_evaluation import RbEvaluation, RbEvaluationInterface, \
    factorize_reduced_matrix

from conftest import fill_stationary_data, make_theta_expansion


def truth_stationary_solution(_problem, _param):
    A = sum(_param[q] * Aq for q, Aq in enumerate(_problem['A']))
    return np.linalg.solve(A, _param[2] * _problem['F'][0])


def test_interface_methods_are_abstract():
    interface = RbEvaluationInterface()
    with pytest.raises(NotImplementedError):
        interface.rb_solve(1)
    with pytest.raises(NotImplementedError):
        interface.residual_scaling_numer(1.0)


def test_rb_solve_matches_galerkin_projection(stationary_evaluation, random_problem, param):
    N = 3
    V = random_problem['V'][:, :N]
    A = sum(param[q] * Aq for q, Aq in enumerate(random_problem['A']))
    expected = np.linalg.solve(V.T.dot(A).dot(V), V.T.dot(param[2] * random_problem['F'][0]))

    stationary_evaluation.rb_solve(N)

    assert np.allclose(stationary_evaluation.RB_solution, expected)
    assert np.allclose(stationary_evaluation.RB_outputs, [random_problem['L'][0].dot(V.dot(expected))])


def test_error_bound_is_residual_over_stability_constant(stationary_evaluation, random_problem, param):
    N = 2
    error_bound = stationary_evaluation.rb_solve(N)

    V = random_problem['V'][:, :N]
    A = sum(param[q] * Aq for q, Aq in enumerate(random_problem['A']))
    residual = param[2] * random_problem['F'][0] - A.dot(V.dot(stationary_evaluation.RB_solution))

    assert error_bound == pytest.approx(np.linalg.norm(residual))
    assert stationary_evaluation.compute_residual_dual_norm(N) == pytest.approx(np.linalg.norm(residual))


def test_bounds_are_rigorous(stationary_evaluation, random_problem, param):
    truth = truth_stationary_solution(random_problem, param)

    for N in range(1, stationary_evaluation.N_max + 1):
        error_bound = stationary_evaluation.rb_solve(N)
        error = truth - random_problem['V'][:, :N].dot(stationary_evaluation.RB_solution)
        output_error = np.abs(random_problem['L'][0].dot(truth) - stationary_evaluation.RB_outputs[0])

        assert np.linalg.norm(error) <= error_bound * (1.0 + 1e-10)
        assert output_error <= stationary_evaluation.RB_output_error_bounds[0] * (1.0 + 1e-10)


def test_stability_lower_bound_is_injected(random_problem, param):
    evaluation = RbEvaluation(make_theta_expansion(), _n_max=4, _stability_lower_bound=lambda _param: 4.0)
    fill_stationary_data(evaluation, random_problem)
    evaluation.set_parameters(param)

    reference = RbEvaluation(make_theta_expansion(), _n_max=4)
    fill_stationary_data(reference, random_problem)
    reference.set_parameters(param)

    assert evaluation.rb_solve(2) == pytest.approx(reference.rb_solve(2) / 4.0)


def test_disabled_error_bounds(stationary_evaluation):
    stationary_evaluation.evaluate_RB_error_bound = False

    assert stationary_evaluation.rb_solve(3) == 0.0
    assert np.all(stationary_evaluation.RB_output_error_bounds == 0.0)


def test_invalid_basis_dimension(stationary_evaluation):
    with pytest.raises(AssertionError):
        stationary_evaluation.rb_solve(0)
    with pytest.raises(AssertionError):
        stationary_evaluation.rb_solve(stationary_evaluation.N_max + 1)


def test_missing_parameter(random_problem):
    evaluation = RbEvaluation(make_theta_expansion(), _n_max=4)
    fill_stationary_data(evaluation, random_problem)

    with pytest.raises(AssertionError):
        evaluation.rb_solve(2)


def test_singular_reduced_matrix(stationary_evaluation):
    stationary_evaluation.RB_Aq_vector = np.zeros((2, 4, 4))

    with pytest.raises(scipy.linalg.LinAlgError):
        stationary_evaluation.rb_solve(2)


def test_factorization_of_non_finite_matrix():
    with pytest.raises(scipy.linalg.LinAlgError):
        factorize_reduced_matrix(np.array([[1.0, np.nan], [0.0, 1.0]]))


def test_setters_reject_wrong_shapes(stationary_evaluation):
    with pytest.raises(AssertionError):
        stationary_evaluation.RB_Aq_vector = np.zeros((2, 3, 3))
    with pytest.raises(AssertionError):
        stationary_evaluation.Fq_Aq_representor_norms = np.zeros((1, 2, 5))
    with pytest.raises(AssertionError):
        stationary_evaluation.set_Aq_representor(2, 0, np.zeros(12))


def test_unsupported_scalar_type():
    with pytest.raises(AssertionError):
        RbEvaluation(make_theta_expansion(), _scalar_type=np.float32)
