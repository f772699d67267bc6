#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Oct 15 09:34:50 2026

Unsteady heat equation on the rod (0,1), made of two materials with conductivities mu_0 on (0, 1/2) and mu_1 on
(1/2, 1), heated by a uniform source of intensity mu_2, with homogeneous Dirichlet boundary conditions:

    du/dt - d/dx (k_mu(x) du/dx) = mu_2,    u(0) = sin(pi x)

The output of interest is the integral of the temperature over the rod.
"""

import os
import numpy as np
import scipy.linalg
import scipy.sparse
import scipy.sparse.linalg

import certified_rb
import certified_rb.utils.array_utils as arr_utils
from certified_rb.pde_problem.parameter_handler import ParameterHandler
from certified_rb.rb_library.affine_decomposition.theta_expansion import AffineDecomposition, ThetaExpansion

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(certified_rb.__file__)), 'log.cfg')
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def heat_rod_theta_a(_param, _q):
    """Theta functions of the stiffness matrix: the conductivity of the q-th material
    """
    try:
        assert _q in {0, 1}
    except AssertionError:
        raise ValueError(f"The heat rod problem has 2 parameter-dependent functions associated to the stiffness "
                         f"matrix operator. Index {_q} is not a valid index")
    return _param[_q]


def heat_rod_theta_f(_param, _q):
    try:
        assert _q == 0
    except AssertionError:
        raise ValueError(f"The heat rod problem has 1 parameter-dependent function associated to the right-hand "
                         f"side vector. Index {_q} is not a valid index")
    return _param[2]


def heat_rod_theta_m(_param, _q):
    return 1.0


def heat_rod_theta_l(_param, _n, _q):
    return 1.0


def heat_rod_stability_lower_bound(_param):
    """Lower bound of the coercivity constant with respect to the H1_0 seminorm, i.e. the smallest conductivity
    """
    return min(_param[0], _param[1])


class HeatRodProblem:
    """Class which assembles the finite element operators of the heat rod problem and solves it in time by the
    theta-method. The operators are affinely decomposed as A = mu_0 A_0 + mu_1 A_1, f = mu_2 f_0, with a
    parameter-independent mass matrix M. The inner product matrix X is the H1_0 seminorm one, i.e. A_0 + A_1.
    """

    def __init__(self, _n_nodes, _param_min, _param_max):
        """Initialization of the HeatRodProblem class

        :param _n_nodes: number of interior nodes
        :type _n_nodes: int
        :param _param_min: lower bounds of the parameters
        :type _param_min: list or numpy.ndarray
        :param _param_max: upper bounds of the parameters
        :type _param_max: list or numpy.ndarray
        """

        self.M_n_nodes = _n_nodes
        self.M_nodes = np.linspace(0.0, 1.0, _n_nodes + 2)[1:-1]

        self.M_parameter_handler = ParameterHandler()
        self.M_parameter_handler.assign_parameters_bounds(_param_min, _param_max)

        self.M_theta_expansion = ThetaExpansion(AffineDecomposition(_qa=2, _qf=1, _qm=1, _ql=[1]),
                                                _theta_a=heat_rod_theta_a, _theta_f=heat_rod_theta_f,
                                                _theta_m=heat_rod_theta_m, _theta_l=heat_rod_theta_l)

        self.M_Aq = []
        self.M_Fq = []
        self.M_Mq = []
        self.M_Lq = []
        self.M_X = None

        self.assemble_affine_components()

        return

    @property
    def parameter_handler(self):
        return self.M_parameter_handler

    @property
    def theta_expansion(self):
        return self.M_theta_expansion

    @property
    def Nh(self):
        return self.M_n_nodes

    @property
    def X(self):
        return self.M_X

    @property
    def mass(self):
        return self.M_Mq[0]

    def assemble_affine_components(self):
        """Method which assembles the affine components of the P1 finite element operators on a uniform mesh
        """

        n = self.M_n_nodes
        h = 1.0 / (n + 1)

        rows, cols = [[], []], [[], []]
        vals = [[], []]
        mass_rows, mass_cols, mass_vals = [], [], []
        rhs = np.zeros(n)

        local_stiffness = np.array([[1.0, -1.0], [-1.0, 1.0]]) / h
        local_mass = np.array([[2.0, 1.0], [1.0, 2.0]]) * h / 6.0

        for elem in range(n + 1):
            material = 0 if (elem + 0.5) * h < 0.5 else 1
            dofs = [elem - 1, elem]
            for i_loc, i_dof in enumerate(dofs):
                if not 0 <= i_dof < n:
                    continue
                rhs[i_dof] += h / 2.0
                for j_loc, j_dof in enumerate(dofs):
                    if not 0 <= j_dof < n:
                        continue
                    rows[material].append(i_dof)
                    cols[material].append(j_dof)
                    vals[material].append(local_stiffness[i_loc, j_loc])
                    mass_rows.append(i_dof)
                    mass_cols.append(j_dof)
                    mass_vals.append(local_mass[i_loc, j_loc])

        self.M_Aq = [scipy.sparse.coo_matrix((vals[q], (rows[q], cols[q])), shape=(n, n)).tocsc() for q in range(2)]
        self.M_Mq = [scipy.sparse.coo_matrix((mass_vals, (mass_rows, mass_cols)), shape=(n, n)).tocsc()]
        self.M_Fq = [rhs]
        self.M_Lq = [np.copy(rhs)]
        self.M_X = (self.M_Aq[0] + self.M_Aq[1]).tocsc()

        return

    def get_initial_condition(self):
        return np.sin(np.pi * self.M_nodes)

    def assemble_fom_matrix(self, _param):
        theta_a = self.M_theta_expansion.get_full_theta_a(_param)
        return (theta_a[0] * self.M_Aq[0] + theta_a[1] * self.M_Aq[1]).tocsc()

    def assemble_fom_rhs(self, _param):
        return self.M_theta_expansion.get_full_theta_f(_param)[0] * self.M_Fq[0]

    def compute_output(self, _u):
        return np.dot(self.M_Lq[0], _u)

    def solve_fom_problem(self, _param, _temporal_discretization):
        """Method which solves the full-order problem by the theta-method, with the same time discretization that
        is used in the Online stage

        :param _param: value of the parameter
        :type _param: numpy.ndarray
        :param _temporal_discretization: time discretization
        :type _temporal_discretization: TemporalDiscretization
        :return: full-order solutions at all the time levels, stored by columns
        :rtype: numpy.ndarray
        """

        dt = _temporal_discretization.get_delta_t()
        theta = _temporal_discretization.get_euler_theta()
        n_time_steps = _temporal_discretization.get_n_time_steps()

        A = self.assemble_fom_matrix(_param)
        f = self.assemble_fom_rhs(_param)
        M = self.mass

        lhs = scipy.sparse.linalg.splu((M / dt + theta * A).tocsc())
        rhs_matrix = (M / dt - (1.0 - theta) * A).tocsc()

        solutions = np.zeros((self.M_n_nodes, n_time_steps + 1))
        solutions[:, 0] = self.get_initial_condition()
        for k in range(1, n_time_steps + 1):
            rhs = rhs_matrix.dot(solutions[:, k - 1]) + _temporal_discretization.get_blended_control(k) * f
            solutions[:, k] = lhs.solve(rhs)

        return solutions

    def compute_pod_basis(self, _snapshots, _N_max):
        """Method which computes a basis of dimension '_N_max', orthonormal with respect to the X inner product, by
        the Proper Orthogonal Decomposition of the snapshots

        :param _snapshots: snapshots matrix, stored by columns
        :type _snapshots: numpy.ndarray
        :param _N_max: dimension of the basis
        :type _N_max: int
        :return: basis matrix, stored by columns
        :rtype: numpy.ndarray
        """

        upper_factor = scipy.linalg.cholesky(self.M_X.toarray(), lower=False)
        U, s, _ = np.linalg.svd(upper_factor.dot(_snapshots), full_matrices=False)

        total_energy = np.dot(s, s)
        logger.info(f"Relative energy retained by {_N_max} POD modes: {np.dot(s[:_N_max], s[:_N_max]) / total_energy:.8f}")

        return scipy.linalg.solve_triangular(upper_factor, U[:, :_N_max], lower=False)

    def build_offline_data(self, _transient_rb_evaluation, _n_snapshots, _N_max, seed=0):
        """Method which performs the Offline stage: it computes the snapshots for randomly generated parameters,
        the POD basis, the reduced affine components, the reduced initial conditions and the inner products of the
        Riesz representors, and it assigns all of them to the given transient RB evaluation.

        :param _transient_rb_evaluation: evaluation to be filled, whose time discretization is used for snapshots
        :type _transient_rb_evaluation: TransientRbEvaluation
        :param _n_snapshots: number of parameter values used to compute the snapshots
        :type _n_snapshots: int
        :param _N_max: dimension of the reduced basis
        :type _N_max: int
        :param seed: seed for the generation of the parameters. Defaults to 0
        :type seed: int
        """

        evaluation = _transient_rb_evaluation
        temporal_discretization = evaluation.temporal_discretization

        snapshots = []
        for iS in range(_n_snapshots):
            param = self.M_parameter_handler.generate_parameter(seed=seed + iS)
            logger.debug(f"Computing the snapshots for the parameter {iS}: {param}")
            snapshots.append(self.solve_fom_problem(param, temporal_discretization))
        snapshots = np.hstack(snapshots)

        V = self.compute_pod_basis(snapshots, _N_max)

        evaluation.resize_data_structures(_N_max)
        rb_evaluation = evaluation.rb_evaluation

        rb_evaluation.RB_Aq_vector = np.array([V.T.dot(A.dot(V)) for A in self.M_Aq])
        rb_evaluation.RB_Fq_vector = np.array([V.T.dot(f) for f in self.M_Fq])
        rb_evaluation.RB_output_vectors = [np.array([V.T.dot(l) for l in self.M_Lq])]
        evaluation.RB_M_q_vector = np.array([V.T.dot(M.dot(V)) for M in self.M_Mq])
        evaluation.RB_L2_matrix = V.T.dot(self.mass.dot(V))

        u0 = self.get_initial_condition()
        initial_conditions, initial_errors = [], np.zeros(_N_max)
        for N in range(1, _N_max + 1):
            V_N = V[:, :N]
            ic = scipy.linalg.solve(V_N.T.dot(self.mass.dot(V_N)), V_N.T.dot(self.mass.dot(u0)))
            initial_conditions.append(ic)
            initial_errors[N - 1] = arr_utils.mynorm(u0 - V_N.dot(ic), self.mass)
        evaluation.RB_initial_condition_all_N = initial_conditions
        evaluation.initial_L2_error_all_N = initial_errors

        Z_F = [arr_utils.solve_sparse_system(self.M_X, f) for f in self.M_Fq]
        Z_A = [arr_utils.solve_sparse_system(self.M_X, -A.dot(V)) for A in self.M_Aq]
        Z_M = [arr_utils.solve_sparse_system(self.M_X, M.dot(V)) for M in self.M_Mq]
        Z_L = [arr_utils.solve_sparse_system(self.M_X, l) for l in self.M_Lq]

        X = self.M_X
        rb_evaluation.Fq_representor_norms = np.array([[arr_utils.mydot(z1, z2, X) for z2 in Z_F] for z1 in Z_F])
        rb_evaluation.Fq_Aq_representor_norms = np.array([[z1.dot(X.dot(z2)) for z2 in Z_A] for z1 in Z_F])
        rb_evaluation.Aq_Aq_representor_norms = np.array([[z1.T.dot(X.dot(z2)) for z2 in Z_A] for z1 in Z_A])
        rb_evaluation.output_dual_innerprods = [np.array([[arr_utils.mydot(z1, z2, X) for z2 in Z_L]
                                                          for z1 in Z_L])]
        evaluation.Fq_Mq_representor_norms = np.array([[z1.dot(X.dot(z2)) for z2 in Z_M] for z1 in Z_F])
        evaluation.Mq_Mq_representor_norms = np.array([[z1.T.dot(X.dot(z2)) for z2 in Z_M] for z1 in Z_M])
        evaluation.Aq_Mq_representor_norms = np.array([[z1.T.dot(X.dot(z2)) for z2 in Z_M] for z1 in Z_A])

        for q, Z in enumerate(Z_A):
            for i in range(_N_max):
                rb_evaluation.set_Aq_representor(q, i, Z[:, i])
        for q, Z in enumerate(Z_M):
            for i in range(_N_max):
                evaluation.set_M_q_representor(q, i, Z[:, i])

        logger.info(f"Offline stage completed: {_n_snapshots} snapshot trajectories, N_max = {_N_max}")

        return V


__all__ = [
    "heat_rod_theta_a",
    "heat_rod_theta_f",
    "heat_rod_theta_m",
    "heat_rod_theta_l",
    "heat_rod_stability_lower_bound",
    "HeatRodProblem"
]
