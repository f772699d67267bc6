#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Wed Oct 14 10:48:31 2026

Online evaluation of a certified Reduced Basis approximation for unsteady, affinely parametrized LTI problems,
discretized in time by the theta-method.
"""

import os
import json
import numpy as np

import certified_rb.utils.array_utils as arr_utils
import certified_rb.utils.general_utils as gen_utils
from certified_rb.rb_library.temporal_discretization import TemporalDiscretization
from certified_rb.rb_library.residual_terms import OnlineResidualTerms, contract_transient_residual_terms, \
    evaluate_residual_norm_sq, residual_dual_norm
from certified_rb.rb_library.rb_evaluation.rb_evaluation import RbEvaluationInterface, RbEvaluation, \
    factorize_reduced_matrix, solve_factorized_system

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.path.normpath('../../log.cfg'))
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def default_residual_scaling_numer(_alpha_LB, _temporal_discretization):
    """Default factor multiplying the squared residual dual norm of each time step in the error bound, equal to
    the time step size

    :param _alpha_LB: lower bound of the stability constant
    :type _alpha_LB: float
    :param _temporal_discretization: time discretization of the problem
    :type _temporal_discretization: TemporalDiscretization
    :return: scaling factor
    :rtype: float
    """
    return _temporal_discretization.get_delta_t()


class TransientRbEvaluation(RbEvaluationInterface):
    """Class which performs the Online stage of the certified Reduced Basis method for unsteady LTI problems. The
    steady quantities (reduced stiffness and forcing components, outputs, their representor inner products, the
    current parameter and the current reduced solution) are handled by a composed
    :class:`~rb_evaluation.RbEvaluation`; on top of them the class stores the reduced mass components, the reduced
    initial conditions and the representor inner products involving the mass matrix, and it marches in time the
    reduced solution, certifying it at each time step.

    At the k-th time step the reduced problem reads

        (M / dt + theta A) u^k = (M / dt - (1 - theta) A) u^{k-1} + g_k f

    where g_k is the theta-weighted control, and the error bound is

        Delta^k = sqrt( (e_0^2 + sum_{j<=k} numer(alpha_LB) eps_j^2) / denom(alpha_LB) )

    with e_0 the L2 error of the reduced initial condition and eps_j the dual norm of the residual at step j.
    """

    def __init__(self, _theta_expansion, _n_max=0, _scalar_type=np.float64, _stability_lower_bound=None,
                 _residual_scaling_numer=None):
        """Initialization of the TransientRbEvaluation class

        :param _theta_expansion: affine expansion of the operators, including the mass matrix
        :type _theta_expansion: ThetaExpansion
        :param _n_max: maximal dimension of the reduced basis. Defaults to 0
        :type _n_max: int
        :param _scalar_type: scalar type of all the stored quantities, either numpy.float64 or numpy.complex128.
            Defaults to numpy.float64
        :type _scalar_type: type
        :param _stability_lower_bound: function mapping a parameter value to a lower bound of the stability constant.
            If None, the lower bound is equal to 1. Defaults to None
        :type _stability_lower_bound: function or NoneType
        :param _residual_scaling_numer: function with signature (alpha_LB, temporal_discretization) -> float, which
            returns the factor multiplying the squared residual dual norms in the error bound. If None,
            :func:`~transient_rb_evaluation.default_residual_scaling_numer` is used. Defaults to None
        :type _residual_scaling_numer: function or NoneType
        """

        self.M_rb_evaluation = RbEvaluation(_theta_expansion, _n_max=0, _scalar_type=_scalar_type,
                                            _stability_lower_bound=_stability_lower_bound)
        self.M_temporal_discretization = TemporalDiscretization()
        self.M_residual_scaling_numer = _residual_scaling_numer if _residual_scaling_numer is not None \
            else default_residual_scaling_numer

        self.M_RB_L2_matrix = np.zeros(0)
        self.M_RB_M_q_vector = np.zeros(0)
        self.M_RB_initial_condition_all_N = []
        self.M_initial_L2_error_all_N = np.zeros(0)

        self.M_Fq_Mq_representor_norms = np.zeros(0)
        self.M_Mq_Mq_representor_norms = np.zeros(0)
        self.M_Aq_Mq_representor_norms = np.zeros(0)

        self.M_M_q_representor = []

        self.M_cached_residual_terms = OnlineResidualTerms()

        self.M_old_RB_solution = np.zeros(0)
        self.M_RB_temporal_solution_data = []
        self.M_RB_outputs_all_k = np.zeros((0, 0))
        self.M_RB_output_error_bounds_all_k = np.zeros((0, 0))
        self.M_error_bound_all_k = np.zeros(0)
        self.M_residual_dual_norm_all_k = np.zeros(0)

        self.resize_data_structures(_n_max)

        return

    @property
    def rb_evaluation(self):
        return self.M_rb_evaluation

    @property
    def temporal_discretization(self):
        return self.M_temporal_discretization

    @property
    def theta_expansion(self):
        return self.M_rb_evaluation.theta_expansion

    @property
    def parameter_handler(self):
        return self.M_rb_evaluation.parameter_handler

    @property
    def scalar_type(self):
        return self.M_rb_evaluation.scalar_type

    @property
    def N_max(self):
        return self.M_rb_evaluation.N_max

    @property
    def qa(self):
        return self.M_rb_evaluation.qa

    @property
    def qf(self):
        return self.M_rb_evaluation.qf

    @property
    def qm(self):
        return self.theta_expansion.qm

    @property
    def n_outputs(self):
        return self.M_rb_evaluation.n_outputs

    @property
    def evaluate_RB_error_bound(self):
        return self.M_rb_evaluation.evaluate_RB_error_bound

    @evaluate_RB_error_bound.setter
    def evaluate_RB_error_bound(self, _evaluate_RB_error_bound):
        self.M_rb_evaluation.evaluate_RB_error_bound = _evaluate_RB_error_bound
        return

    def set_parameters(self, _param):
        self.M_rb_evaluation.set_parameters(_param)
        return

    def get_parameters(self):
        return self.M_rb_evaluation.get_parameters()

    def evaluate_theta_m(self):
        return self.theta_expansion.get_full_theta_m(self.get_parameters(), _dtype=self.scalar_type)

    def resize_data_structures(self, _N_max):
        """Method which (re)allocates all the containers indexed by the basis functions to the dimension '_N_max',
        filling them with zeros, both for the steady and for the unsteady quantities. The raw Riesz representors
        are reset to None and the cached residual terms are invalidated. The method is idempotent.

        :param _N_max: maximal dimension of the reduced basis
        :type _N_max: int
        """

        self.M_rb_evaluation.resize_data_structures(_N_max)

        N_max = self.N_max
        qa, qf, qm = self.qa, self.qf, self.qm
        dtype = self.scalar_type

        self.M_RB_L2_matrix = np.zeros((N_max, N_max), dtype=dtype)
        self.M_RB_M_q_vector = np.zeros((qm, N_max, N_max), dtype=dtype)
        self.M_RB_initial_condition_all_N = [np.zeros(N, dtype=dtype) for N in range(1, N_max + 1)]
        self.M_initial_L2_error_all_N = np.zeros(N_max)

        self.M_Fq_Mq_representor_norms = np.zeros((qf, qm, N_max), dtype=dtype)
        self.M_Mq_Mq_representor_norms = np.zeros((qm, qm, N_max, N_max), dtype=dtype)
        self.M_Aq_Mq_representor_norms = np.zeros((qa, qm, N_max, N_max), dtype=dtype)

        self.M_M_q_representor = [[None] * N_max for _ in range(qm)]

        self.M_cached_residual_terms = OnlineResidualTerms(_dtype=dtype)

        self.__reset_temporal_solution_data()

        return

    def __reset_temporal_solution_data(self):
        n_levels = self.M_temporal_discretization.get_n_time_steps() + 1
        dtype = self.scalar_type

        self.M_old_RB_solution = np.zeros(0, dtype=dtype)
        self.M_RB_temporal_solution_data = []
        self.M_RB_outputs_all_k = np.zeros((self.n_outputs, n_levels), dtype=dtype)
        self.M_RB_output_error_bounds_all_k = np.zeros((self.n_outputs, n_levels))
        self.M_error_bound_all_k = np.zeros(n_levels)
        self.M_residual_dual_norm_all_k = np.zeros(n_levels)

        return

    def clear(self):
        """Method which resets the evaluation to the state of a freshly constructed one: the steady data and
        the parameter bounds are cleared, the time discretization is reset to its default values and all the
        containers are emptied. The affine expansion, the injected strategies and the scalar type are kept.
        """

        self.M_rb_evaluation.clear()
        self.M_temporal_discretization.clear()
        self.resize_data_structures(0)

        logger.debug("Transient RB evaluation cleared")

        return

    def clear_riesz_representors(self):
        """Method which frees the raw Riesz representors of the mass and of the stiffness matrices. Their inner
        products are kept.
        """

        self.M_rb_evaluation.clear_riesz_representors()
        self.M_M_q_representor = [[None] * self.N_max for _ in range(self.qm)]
        return

    def residual_scaling_numer(self, _alpha_LB):
        """Method which returns the factor multiplying the squared residual dual norm of each time step in the error
        bound, as given by the injected strategy

        :param _alpha_LB: lower bound of the stability constant
        :type _alpha_LB: float
        :return: scaling factor
        :rtype: float
        """
        return self.M_residual_scaling_numer(_alpha_LB, self.M_temporal_discretization)

    def residual_scaling_denom(self, _alpha_LB):
        return self.M_rb_evaluation.residual_scaling_denom(_alpha_LB)

    def build_rb_mass_matrix(self, _N, _theta_m=None):
        """Method which assembles the reduced mass matrix of dimension '_N' as linear combination of its affine
        components

        :param _N: dimension of the reduced basis
        :type _N: int
        :param _theta_m: theta coefficients of the mass matrix. If None, they are evaluated at the current parameter.
            Defaults to None
        :type _theta_m: numpy.ndarray or NoneType
        :return: reduced mass matrix
        :rtype: numpy.ndarray
        """

        theta_m = _theta_m if _theta_m is not None else self.evaluate_theta_m()
        return np.einsum('q,qij->ij', theta_m, self.M_RB_M_q_vector[:, :_N, :_N])

    def cache_online_residual_terms(self, _N):
        """Method which contracts the representor inner products with the theta coefficients of the current
        parameter, for a reduced basis of dimension '_N'. The cached terms stay valid as long as the parameter is
        not changed.

        :param _N: dimension of the reduced basis
        :type _N: int
        """

        self.M_rb_evaluation.check_basis_dimension(_N)

        self.M_cached_residual_terms = self.__contract_residual_terms(_N)

        return

    def __contract_residual_terms(self, _N):
        rb_evaluation = self.M_rb_evaluation
        return contract_transient_residual_terms(_N, rb_evaluation.evaluate_theta_a(),
                                                 rb_evaluation.evaluate_theta_f(), self.evaluate_theta_m(),
                                                 rb_evaluation.Fq_representor_norms,
                                                 rb_evaluation.Fq_Aq_representor_norms,
                                                 rb_evaluation.Aq_Aq_representor_norms,
                                                 self.M_Fq_Mq_representor_norms,
                                                 self.M_Mq_Mq_representor_norms,
                                                 self.M_Aq_Mq_representor_norms,
                                                 _param=self.get_parameters())

    def __evaluate_residual_dual_norm(self, _terms, _N):
        """Dual norm of the residual of the current time step, for the current and the old reduced solutions
        """

        u_new = self.M_rb_evaluation.RB_solution
        u_old = self.M_old_RB_solution
        assert u_new.shape[0] == _N and u_old.shape[0] == _N, \
            f"The current and old reduced solutions must have dimension {_N}"

        time_step = self.M_temporal_discretization.get_time_step()
        assert time_step >= 1, "The residual can be evaluated only at a time step k >= 1"

        euler_theta = self.M_temporal_discretization.get_euler_theta()
        delta_t = self.M_temporal_discretization.get_delta_t()

        u_theta = euler_theta * u_new + (1.0 - euler_theta) * u_old
        mass_coeffs = -(u_new - u_old) / delta_t
        forcing_weight = self.M_temporal_discretization.get_blended_control(time_step)

        return residual_dual_norm(evaluate_residual_norm_sq(_terms, u_theta, mass_coeffs, forcing_weight))

    def compute_residual_dual_norm(self, _N):
        """Method which computes the dual norm of the residual of the current time step, using the cached residual
        terms. These are required to have been computed, by
        :func:`~transient_rb_evaluation.TransientRbEvaluation.cache_online_residual_terms`, for the same basis
        dimension and the same parameter.

        :param _N: dimension of the reduced basis
        :type _N: int
        :return: dual norm of the residual
        :rtype: float
        """

        assert self.M_cached_residual_terms.is_valid_for(_N, self.get_parameters()), \
            f"The cached residual terms have not been computed for N = {_N} and the current parameter"

        return self.__evaluate_residual_dual_norm(self.M_cached_residual_terms, _N)

    def uncached_compute_residual_dual_norm(self, _N):
        """Method which computes the dual norm of the residual of the current time step, contracting the
        representor inner products with the theta coefficients of the current parameter at each call. It can be
        used when the parameter changes during the time march.

        :param _N: dimension of the reduced basis
        :type _N: int
        :return: dual norm of the residual
        :rtype: float
        """

        self.M_rb_evaluation.check_basis_dimension(_N)

        return self.__evaluate_residual_dual_norm(self.__contract_residual_terms(_N), _N)

    def rb_solve(self, _N, _cache_residual_terms=True):
        """Method which marches in time the reduced problem of dimension '_N' at the current parameter, by the
        theta-method. At each time level the reduced solution, the outputs and, if enabled, the error bounds on the
        solution and on the outputs are stored.

        :param _N: dimension of the reduced basis. It must lie in [1, N_max]
        :type _N: int
        :param _cache_residual_terms: if True, the residual terms are contracted once before the time march; if
            False, they are contracted at each time step. Defaults to True
        :type _cache_residual_terms: bool
        :return: error bound at the final time step, or 0 if the error bounds are disabled
        :rtype: float
        """

        rb_evaluation = self.M_rb_evaluation
        temporal_discretization = self.M_temporal_discretization

        rb_evaluation.check_basis_dimension(_N)

        n_time_steps = temporal_discretization.get_n_time_steps()
        delta_t = temporal_discretization.get_delta_t()
        euler_theta = temporal_discretization.get_euler_theta()

        assert n_time_steps == 0 or delta_t > 0, "The time step size must be set before marching in time"

        logger.debug(f"Solving the unsteady RB problem with N = {_N} for the parameter {self.get_parameters()}: "
                     f"{n_time_steps} time steps, dt = {delta_t}, theta = {euler_theta}")

        rb_stiffness = rb_evaluation.build_rb_stiffness_matrix(_N)
        rb_rhs = rb_evaluation.build_rb_rhs_vector(_N)

        if n_time_steps > 0:
            rb_mass = self.build_rb_mass_matrix(_N)
            lhs_lu = factorize_reduced_matrix(rb_mass / delta_t + euler_theta * rb_stiffness)
            rhs_matrix = rb_mass / delta_t - (1.0 - euler_theta) * rb_stiffness

        self.__reset_temporal_solution_data()

        temporal_discretization.set_time_step(0)
        rb_evaluation.RB_solution = self.M_RB_initial_condition_all_N[_N - 1]
        self.M_old_RB_solution = np.copy(rb_evaluation.RB_solution)
        self.M_RB_temporal_solution_data.append(np.copy(rb_evaluation.RB_solution))
        self.M_RB_outputs_all_k[:, 0] = rb_evaluation.compute_rb_outputs(_N, rb_evaluation.RB_solution)

        evaluate_bound = rb_evaluation.evaluate_RB_error_bound

        if evaluate_bound:
            alpha_LB = rb_evaluation.get_stability_lower_bound()
            output_dual_norms = np.array([rb_evaluation.eval_output_dual_norm(n) for n in range(self.n_outputs)])

            if _cache_residual_terms:
                self.cache_online_residual_terms(_N)

            error_bound_sum = self.M_initial_L2_error_all_N[_N - 1] ** 2
            self.M_error_bound_all_k[0] = np.sqrt(error_bound_sum)
            self.M_RB_output_error_bounds_all_k[:, 0] = self.M_error_bound_all_k[0] * output_dual_norms

        for k in range(1, n_time_steps + 1):
            temporal_discretization.set_time_step(k)

            self.M_old_RB_solution = np.copy(rb_evaluation.RB_solution)
            rhs = rhs_matrix.dot(self.M_old_RB_solution) + temporal_discretization.get_blended_control(k) * rb_rhs
            rb_evaluation.RB_solution = solve_factorized_system(lhs_lu, rhs)

            self.M_RB_temporal_solution_data.append(np.copy(rb_evaluation.RB_solution))
            self.M_RB_outputs_all_k[:, k] = rb_evaluation.compute_rb_outputs(_N, rb_evaluation.RB_solution)

            if evaluate_bound:
                if _cache_residual_terms:
                    epsilon_N = self.compute_residual_dual_norm(_N)
                else:
                    epsilon_N = self.uncached_compute_residual_dual_norm(_N)

                self.M_residual_dual_norm_all_k[k] = epsilon_N
                error_bound_sum += self.residual_scaling_numer(alpha_LB) * epsilon_N ** 2
                self.M_error_bound_all_k[k] = np.sqrt(error_bound_sum / self.residual_scaling_denom(alpha_LB))
                self.M_RB_output_error_bounds_all_k[:, k] = self.M_error_bound_all_k[k] * output_dual_norms

        if not evaluate_bound:
            return 0.0

        logger.debug(f"Error bound at the final time step: {self.M_error_bound_all_k[n_time_steps]:.4e}")

        return self.M_error_bound_all_k[n_time_steps]

    def compute_rb_L2_norms_all_k(self):
        """Method which computes the reduced L2 norm of the reduced solution at each stored time level of the last
        time march, using the reduced L2 matrix

        :return: L2 norms of the reduced solutions
        :rtype: numpy.ndarray
        """

        norms = np.zeros(len(self.M_RB_temporal_solution_data))
        for k, u in enumerate(self.M_RB_temporal_solution_data):
            N = u.shape[0]
            norms[k] = np.sqrt(np.abs(np.real(np.vdot(u, self.M_RB_L2_matrix[:N, :N].dot(u)))))

        return norms

    def set_rb_initial_condition(self, _N, _initial_condition):
        """Setter method for the reduced initial condition of the basis dimension '_N'

        :param _N: dimension of the reduced basis
        :type _N: int
        :param _initial_condition: coefficients of the projection of the initial condition onto the first '_N'
            basis functions
        :type _initial_condition: numpy.ndarray
        """

        self.M_rb_evaluation.check_basis_dimension(_N)
        self.M_RB_initial_condition_all_N[_N - 1] = arr_utils.checked_copy(_initial_condition, (_N,),
                                                                           self.scalar_type,
                                                                           _name=f"RB initial condition (N = {_N})")
        return

    @property
    def RB_solution(self):
        return self.M_rb_evaluation.RB_solution

    @RB_solution.setter
    def RB_solution(self, _RB_solution):
        self.M_rb_evaluation.RB_solution = _RB_solution
        return

    @property
    def old_RB_solution(self):
        return self.M_old_RB_solution

    @old_RB_solution.setter
    def old_RB_solution(self, _old_RB_solution):
        old_RB_solution = np.array(_old_RB_solution, dtype=self.scalar_type)
        assert old_RB_solution.ndim == 1 and old_RB_solution.shape[0] <= self.N_max, \
            f"Invalid old reduced solution of shape {old_RB_solution.shape}"
        self.M_old_RB_solution = old_RB_solution
        return

    @property
    def RB_temporal_solution_data(self):
        return self.M_RB_temporal_solution_data

    @property
    def RB_outputs_all_k(self):
        return self.M_RB_outputs_all_k

    @property
    def RB_output_error_bounds_all_k(self):
        return self.M_RB_output_error_bounds_all_k

    @property
    def error_bound_all_k(self):
        return self.M_error_bound_all_k

    @property
    def residual_dual_norm_all_k(self):
        return self.M_residual_dual_norm_all_k

    @property
    def cached_residual_terms(self):
        return self.M_cached_residual_terms

    @property
    def RB_L2_matrix(self):
        return self.M_RB_L2_matrix

    @RB_L2_matrix.setter
    def RB_L2_matrix(self, _RB_L2_matrix):
        self.M_RB_L2_matrix = arr_utils.checked_copy(_RB_L2_matrix, (self.N_max, self.N_max), self.scalar_type,
                                                     _name="RB_L2_matrix")
        return

    @property
    def RB_M_q_vector(self):
        return self.M_RB_M_q_vector

    @RB_M_q_vector.setter
    def RB_M_q_vector(self, _RB_M_q_vector):
        self.M_RB_M_q_vector = arr_utils.checked_copy(_RB_M_q_vector, (self.qm, self.N_max, self.N_max),
                                                      self.scalar_type, _name="RB_M_q_vector")
        return

    @property
    def RB_initial_condition_all_N(self):
        return self.M_RB_initial_condition_all_N

    @RB_initial_condition_all_N.setter
    def RB_initial_condition_all_N(self, _RB_initial_condition_all_N):
        assert len(_RB_initial_condition_all_N) == self.N_max, \
            f"{self.N_max} reduced initial conditions are expected, while {len(_RB_initial_condition_all_N)} " \
            f"were passed"
        self.M_RB_initial_condition_all_N = [arr_utils.checked_copy(ic, (N + 1,), self.scalar_type,
                                                                    _name=f"RB initial condition (N = {N + 1})")
                                             for N, ic in enumerate(_RB_initial_condition_all_N)]
        return

    @property
    def initial_L2_error_all_N(self):
        return self.M_initial_L2_error_all_N

    @initial_L2_error_all_N.setter
    def initial_L2_error_all_N(self, _initial_L2_error_all_N):
        initial_L2_error_all_N = arr_utils.checked_copy(_initial_L2_error_all_N, (self.N_max,), np.float64,
                                                        _name="initial_L2_error_all_N")
        assert np.all(initial_L2_error_all_N >= 0), "The L2 errors of the initial condition cannot be negative"
        self.M_initial_L2_error_all_N = initial_L2_error_all_N
        return

    @property
    def Fq_Mq_representor_norms(self):
        return self.M_Fq_Mq_representor_norms

    @Fq_Mq_representor_norms.setter
    def Fq_Mq_representor_norms(self, _Fq_Mq_representor_norms):
        self.M_Fq_Mq_representor_norms = arr_utils.checked_copy(_Fq_Mq_representor_norms,
                                                                (self.qf, self.qm, self.N_max),
                                                                self.scalar_type, _name="Fq_Mq_representor_norms")
        return

    @property
    def Mq_Mq_representor_norms(self):
        return self.M_Mq_Mq_representor_norms

    @Mq_Mq_representor_norms.setter
    def Mq_Mq_representor_norms(self, _Mq_Mq_representor_norms):
        self.M_Mq_Mq_representor_norms = arr_utils.checked_copy(_Mq_Mq_representor_norms,
                                                                (self.qm, self.qm, self.N_max, self.N_max),
                                                                self.scalar_type, _name="Mq_Mq_representor_norms")
        return

    @property
    def Aq_Mq_representor_norms(self):
        return self.M_Aq_Mq_representor_norms

    @Aq_Mq_representor_norms.setter
    def Aq_Mq_representor_norms(self, _Aq_Mq_representor_norms):
        self.M_Aq_Mq_representor_norms = arr_utils.checked_copy(_Aq_Mq_representor_norms,
                                                                (self.qa, self.qm, self.N_max, self.N_max),
                                                                self.scalar_type, _name="Aq_Mq_representor_norms")
        return

    @property
    def M_q_representor(self):
        return self.M_M_q_representor

    def set_M_q_representor(self, _q, _i, _representor):
        """Setter method for the raw Riesz representor of the mass component '_q' and of the basis function '_i'

        :param _q: index of the affine component
        :type _q: int
        :param _i: index of the basis function
        :type _i: int
        :param _representor: truth-space vector, or None to free the entry
        :type _representor: numpy.ndarray or NoneType
        """
        assert 0 <= _q < self.qm and 0 <= _i < self.N_max, f"Invalid representor index ({_q}, {_i})"
        self.M_M_q_representor[_q][_i] = None if _representor is None \
            else np.array(_representor, dtype=self.scalar_type)
        return

    def dimensions_tag(self):
        return {'N_max': self.N_max, 'Qa': self.qa, 'Qf': self.qf, 'Qm': self.qm, 'dtype': self.scalar_type.name}

    def __transient_arrays(self):
        return {'RB_L2_matrix': self.M_RB_L2_matrix,
                'RB_M_q_vector': self.M_RB_M_q_vector,
                'RB_initial_condition_all_N': self.__pack_initial_conditions(self.M_RB_initial_condition_all_N),
                'initial_L2_error_all_N': self.M_initial_L2_error_all_N,
                'Fq_Mq_representor_norms': self.M_Fq_Mq_representor_norms,
                'Mq_Mq_representor_norms': self.M_Mq_Mq_representor_norms,
                'Aq_Mq_representor_norms': self.M_Aq_Mq_representor_norms}

    def __pack_initial_conditions(self, _initial_conditions):
        packed = np.zeros((self.N_max, self.N_max), dtype=self.scalar_type)
        for N, ic in enumerate(_initial_conditions):
            packed[N, :N + 1] = ic
        return packed

    @staticmethod
    def __unpack_initial_conditions(_packed):
        return [np.copy(_packed[N, :N + 1]) for N in range(_packed.shape[0])]

    def write_offline_data_to_files(self, _directory_name="offline_data", _write_representors=False):
        """Method which writes the offline data to the directory '_directory_name': the steady data, via
        :func:`~rb_evaluation.RbEvaluation.write_offline_data_to_files`, the unsteady data, one '.npy' file per
        quantity tagged by the file 'transient_dimensions.json', and the time discretization, stored in
        'temporal_discretization.json' and 'control.npy'. The reduced initial conditions are stored as a lower
        triangular N_max x N_max array, whose row N-1 holds the initial condition of the basis dimension N.

        :param _directory_name: path to the directory. Defaults to 'offline_data'
        :type _directory_name: str
        :param _write_representors: True to store the raw Riesz representors as well. Defaults to False
        :type _write_representors: bool
        """

        self.M_rb_evaluation.write_offline_data_to_files(_directory_name, _write_representors=_write_representors)

        try:
            with open(os.path.join(_directory_name, 'transient_dimensions.json'), 'w') as fp:
                json.dump(self.dimensions_tag(), fp)
            with open(os.path.join(_directory_name, 'temporal_discretization.json'), 'w') as fp:
                json.dump(self.M_temporal_discretization.as_dict(), fp)
        except (IOError, OSError, FileNotFoundError) as e:
            logger.error(f"Error {e}: impossible to write the dimensions of the unsteady offline data")
            raise ValueError(f"Impossible to write the offline data to {_directory_name}")

        for name, array in self.__transient_arrays().items():
            arr_utils.save_array(array, os.path.join(_directory_name, f"{name}.npy"))
        arr_utils.save_array(self.M_temporal_discretization.get_control_sequence(),
                             os.path.join(_directory_name, 'control.npy'))

        if _write_representors:
            try:
                gen_utils.write_representors_to_h5(os.path.join(_directory_name, 'Mq_riesz_representors.h5'),
                                                   {'Mq': self.M_M_q_representor})
            except (IOError, OSError) as e:
                logger.error(f"Error {e}: impossible to write the Riesz representors")
                raise ValueError(f"Impossible to write the Riesz representors to {_directory_name}")

        logger.info(f"Offline data of the transient RB evaluation written to {_directory_name}")

        return

    def read_offline_data_from_files(self, _directory_name="offline_data", _read_representors=False):
        """Method which reads the offline data written by
        :func:`~transient_rb_evaluation.TransientRbEvaluation.write_offline_data_to_files`. The stored dimensions
        must match the current N_max, the affine counts and the scalar type. All the data are loaded and validated
        before being assigned: in case of failure a ValueError is raised and the evaluation is left unchanged.

        :param _directory_name: path to the directory. Defaults to 'offline_data'
        :type _directory_name: str
        :param _read_representors: True to read the raw Riesz representors as well. Defaults to False
        :type _read_representors: bool
        """

        steady_data = self.M_rb_evaluation.load_offline_data(_directory_name, _read_representors=_read_representors)
        transient_data = self.__load_transient_data(_directory_name, _read_representors=_read_representors)

        self.M_rb_evaluation.commit_offline_data(steady_data)

        self.M_RB_L2_matrix = transient_data['RB_L2_matrix']
        self.M_RB_M_q_vector = transient_data['RB_M_q_vector']
        self.M_RB_initial_condition_all_N = self.__unpack_initial_conditions(
            transient_data['RB_initial_condition_all_N'])
        self.M_initial_L2_error_all_N = transient_data['initial_L2_error_all_N']
        self.M_Fq_Mq_representor_norms = transient_data['Fq_Mq_representor_norms']
        self.M_Mq_Mq_representor_norms = transient_data['Mq_Mq_representor_norms']
        self.M_Aq_Mq_representor_norms = transient_data['Aq_Mq_representor_norms']
        self.M_temporal_discretization.copy_from(transient_data['temporal_discretization'])
        if 'M_q_representor' in transient_data.keys():
            self.M_M_q_representor = transient_data['M_q_representor']

        self.M_cached_residual_terms = OnlineResidualTerms(_dtype=self.scalar_type)
        self.__reset_temporal_solution_data()

        logger.info(f"Offline data of the transient RB evaluation read from {_directory_name}")

        return

    def __load_transient_data(self, _directory_name, _read_representors=False):
        """Loading and validation of the unsteady offline data, without modifying the evaluation
        """

        try:
            with open(os.path.join(_directory_name, 'transient_dimensions.json'), 'r') as fp:
                dimensions = json.load(fp)
            with open(os.path.join(_directory_name, 'temporal_discretization.json'), 'r') as fp:
                time_specifics = json.load(fp)
        except (IOError, OSError, FileNotFoundError, json.JSONDecodeError) as e:
            logger.error(f"Error {e}: impossible to load the dimensions of the unsteady offline data")
            raise ValueError(f"Missing or invalid unsteady offline data in {_directory_name}")

        if dimensions != self.dimensions_tag():
            logger.error(f"The dimensions of the unsteady offline data {dimensions} do not match the ones of the "
                         f"evaluation {self.dimensions_tag()}")
            raise ValueError(f"Dimension mismatch for the offline data in {_directory_name}")

        transient_data = dict()
        for name, array in self.__transient_arrays().items():
            transient_data[name] = arr_utils.load_array(os.path.join(_directory_name, f"{name}.npy"),
                                                        _shape=array.shape, _dtype=array.dtype)

        if not np.all(transient_data['initial_L2_error_all_N'] >= 0):
            logger.error("The stored initial L2 errors must be non-negative")
            raise ValueError(f"Invalid initial L2 errors in {_directory_name}")

        temporal_discretization = TemporalDiscretization()
        try:
            temporal_discretization.set_n_time_steps(time_specifics['n_time_steps'])
            if time_specifics['delta_t'] > 0:
                temporal_discretization.set_delta_t(time_specifics['delta_t'])
            temporal_discretization.set_euler_theta(time_specifics['euler_theta'])
            temporal_discretization.set_control(
                arr_utils.load_array(os.path.join(_directory_name, 'control.npy'), _dtype=np.float64))
            temporal_discretization.set_time_step(time_specifics['time_step'])
        except (AssertionError, KeyError) as e:
            logger.error(f"Error {e}: invalid time discretization in the offline data")
            raise ValueError(f"Invalid time discretization in {_directory_name}")
        transient_data['temporal_discretization'] = temporal_discretization

        if _read_representors:
            transient_data['M_q_representor'] = self.M_rb_evaluation.load_representors(
                os.path.join(_directory_name, 'Mq_riesz_representors.h5'), 'Mq', self.qm)

        return transient_data

    def print_rb_online_summary(self):
        """Printing method, which logs the main features of the evaluation, including the time discretization
        """

        self.M_rb_evaluation.print_rb_online_summary()

        logger.info(f"\n------------- TIME DISCRETIZATION -------------\n"
                    f"Number of affine decomposition matrices M {self.qm}\n"
                    f"Time step size: {self.M_temporal_discretization.get_delta_t()}\n"
                    f"Theta: {self.M_temporal_discretization.get_euler_theta()}\n"
                    f"Number of time steps: {self.M_temporal_discretization.get_n_time_steps()}")

        return


__all__ = [
    "default_residual_scaling_numer",
    "TransientRbEvaluation"
]
