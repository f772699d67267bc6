#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Small synthetic truth problems, with the identity as inner product matrix, and the Offline quantities built from
them. The Riesz representors are then the right-hand sides themselves:
    F_q -> F_q,    A_q zeta_i -> -A_q zeta_i,    M_q zeta_i -> M_q zeta_i
"""

import numpy as np
import pytest

from certified_rb.rb_library.affine_decomposition.theta_expansion import AffineDecomposition, ThetaExpansion
from certified_rb.rb_library.rb_evaluation.rb_evaluation import RbEvaluation
from certified_rb.rb_library.rb_evaluation.transient_rb_evaluation import TransientRbEvaluation


def theta_a(_param, _q):
    return _param[_q]


def theta_f(_param, _q):
    return _param[2]


def theta_m(_param, _q):
    return 1.0


def theta_l(_param, _n, _q):
    return 1.0


def make_theta_expansion(_qa=2, _ql=None):
    return ThetaExpansion(AffineDecomposition(_qa=_qa, _qf=1, _qm=1, _ql=[1] if _ql is None else _ql),
                          _theta_a=theta_a, _theta_f=theta_f, _theta_m=theta_m, _theta_l=theta_l)


def random_spd(_rng, _n, _shift):
    B = _rng.standard_normal((_n, _n))
    return B.dot(B.T) / _n + _shift * np.eye(_n)


def build_random_problem(_Nh=12, _N_max=4, _identity_mass=False, _seed=0):
    """Random problem with two SPD stiffness components, one mass component, one forcing term and one output,
    together with an orthonormal basis of dimension '_N_max'
    """

    rng = np.random.default_rng(_seed)
    problem = {'A': [random_spd(rng, _Nh, 1.0), random_spd(rng, _Nh, 0.5)],
               'M': [np.eye(_Nh) if _identity_mass else random_spd(rng, _Nh, 1.0)],
               'F': [rng.standard_normal(_Nh)],
               'L': [rng.standard_normal(_Nh)],
               'u0': rng.standard_normal(_Nh)}
    problem['V'], _ = np.linalg.qr(rng.standard_normal((_Nh, _N_max)))
    return problem


def build_diagonal_problem(_Nh=10, _N_max=5, _seed=0):
    """Problem with diagonal stiffness components, identity mass and the canonical basis, for which the reduced
    solution coincides with the first components of the truth solution
    """

    rng = np.random.default_rng(_seed)
    diag = np.arange(1.0, _Nh + 1.0)
    return {'A': [np.diag(diag), np.diag(0.5 * diag)],
            'M': [np.eye(_Nh)],
            'F': [rng.standard_normal(_Nh)],
            'L': [rng.standard_normal(_Nh)],
            'u0': rng.standard_normal(_Nh),
            'V': np.eye(_Nh)[:, :_N_max]}


def fill_stationary_data(_rb_evaluation, _problem):
    V = _problem['V']
    Z_F = list(_problem['F'])
    Z_A = [-A.dot(V) for A in _problem['A']]
    Z_L = list(_problem['L'])

    _rb_evaluation.RB_Aq_vector = np.array([V.T.dot(A).dot(V) for A in _problem['A']])
    _rb_evaluation.RB_Fq_vector = np.array([V.T.dot(f) for f in _problem['F']])
    _rb_evaluation.RB_output_vectors = [np.array([V.T.dot(l) for l in _problem['L']])]
    _rb_evaluation.Fq_representor_norms = np.array([[np.dot(z1, z2) for z2 in Z_F] for z1 in Z_F])
    _rb_evaluation.Fq_Aq_representor_norms = np.array([[z1.dot(z2) for z2 in Z_A] for z1 in Z_F])
    _rb_evaluation.Aq_Aq_representor_norms = np.array([[z1.T.dot(z2) for z2 in Z_A] for z1 in Z_A])
    _rb_evaluation.output_dual_innerprods = [np.array([[np.dot(z1, z2) for z2 in Z_L] for z1 in Z_L])]

    for q, Z in enumerate(Z_A):
        for i in range(V.shape[1]):
            _rb_evaluation.set_Aq_representor(q, i, Z[:, i])

    return


def fill_transient_data(_evaluation, _problem):
    """Assign to '_evaluation' all the Offline quantities of '_problem'
    """

    fill_stationary_data(_evaluation.rb_evaluation, _problem)

    V = _problem['V']
    M = _problem['M'][0]
    u0 = _problem['u0']
    Z_F = list(_problem['F'])
    Z_A = [-A.dot(V) for A in _problem['A']]
    Z_M = [Mq.dot(V) for Mq in _problem['M']]

    _evaluation.RB_M_q_vector = np.array([V.T.dot(Mq).dot(V) for Mq in _problem['M']])
    _evaluation.RB_L2_matrix = V.T.dot(M).dot(V)
    _evaluation.Fq_Mq_representor_norms = np.array([[z1.dot(z2) for z2 in Z_M] for z1 in Z_F])
    _evaluation.Mq_Mq_representor_norms = np.array([[z1.T.dot(z2) for z2 in Z_M] for z1 in Z_M])
    _evaluation.Aq_Mq_representor_norms = np.array([[z1.T.dot(z2) for z2 in Z_M] for z1 in Z_A])

    initial_conditions, initial_errors = [], np.zeros(V.shape[1])
    for N in range(1, V.shape[1] + 1):
        V_N = V[:, :N]
        ic = np.linalg.solve(V_N.T.dot(M).dot(V_N), V_N.T.dot(M).dot(u0))
        initial_conditions.append(ic)
        e0 = u0 - V_N.dot(ic)
        initial_errors[N - 1] = np.sqrt(e0.dot(M).dot(e0))
    _evaluation.RB_initial_condition_all_N = initial_conditions
    _evaluation.initial_L2_error_all_N = initial_errors

    for q, Z in enumerate(Z_M):
        for i in range(V.shape[1]):
            _evaluation.set_M_q_representor(q, i, Z[:, i])

    return


def truth_residual(_problem, _param, _u_new, _u_old, _dt, _euler_theta, _forcing_weight=1.0):
    """Residual of a time step of the reduced solution, assembled with the truth operators
    """

    V = _problem['V']
    N = _u_new.shape[0]
    A = sum(_param[q] * Aq for q, Aq in enumerate(_problem['A']))
    M = _problem['M'][0]
    f = _param[2] * _problem['F'][0]

    u_theta = _euler_theta * _u_new + (1.0 - _euler_theta) * _u_old
    return (_forcing_weight * f - A.dot(V[:, :N].dot(u_theta)) -
            M.dot(V[:, :N].dot(_u_new - _u_old)) / _dt)


def truth_time_march(_problem, _param, _dt, _euler_theta, _n_time_steps):
    A = sum(_param[q] * Aq for q, Aq in enumerate(_problem['A']))
    M = _problem['M'][0]
    f = _param[2] * _problem['F'][0]

    solutions = [np.copy(_problem['u0'])]
    for _ in range(_n_time_steps):
        rhs = (M / _dt - (1.0 - _euler_theta) * A).dot(solutions[-1]) + f
        solutions.append(np.linalg.solve(M / _dt + _euler_theta * A, rhs))
    return solutions


@pytest.fixture
def param():
    return np.array([1.0, 2.0, 0.5])


@pytest.fixture
def random_problem():
    return build_random_problem()


@pytest.fixture
def transient_evaluation(random_problem, param):
    evaluation = TransientRbEvaluation(make_theta_expansion(), _n_max=random_problem['V'].shape[1])
    fill_transient_data(evaluation, random_problem)
    evaluation.temporal_discretization.configure({'delta_t': 0.05, 'number_of_time_instances': 8, 'theta': 0.5})
    evaluation.set_parameters(param)
    return evaluation


@pytest.fixture
def stationary_evaluation(random_problem, param):
    evaluation = RbEvaluation(make_theta_expansion(), _n_max=random_problem['V'].shape[1])
    fill_stationary_data(evaluation, random_problem)
    evaluation.set_parameters(param)
    return evaluation
