#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Oct 13 15:27:09 2026

Online evaluation of a certified Reduced Basis approximation for steady, affinely parametrized problems.
"""

import os
import json
import warnings
import numpy as np
import scipy.linalg

import certified_rb.utils.array_utils as arr_utils
import certified_rb.utils.general_utils as gen_utils
from certified_rb.pde_problem.parameter_handler import ParameterHandler
from certified_rb.rb_library.residual_terms import contract_stationary_residual_terms, \
    evaluate_residual_norm_sq, residual_dual_norm

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.path.normpath('../../log.cfg'))
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def default_stability_lower_bound(_param):
    """Default lower bound of the stability (coercivity) constant, equal to 1 for any parameter value

    :param _param: value of the parameter
    :type _param: numpy.ndarray
    :return: lower bound of the stability constant
    :rtype: float
    """
    return 1.0


def factorize_reduced_matrix(_matrix):
    """Function which computes the LU factorization of a dense reduced matrix. Singular matrices and matrices with
    non-finite entries are a numerical failure: it is logged and a scipy.linalg.LinAlgError is raised.

    :param _matrix: dense reduced matrix
    :type _matrix: numpy.ndarray
    :return: LU factorization, as returned by scipy.linalg.lu_factor
    :rtype: tuple(numpy.ndarray, numpy.ndarray)
    """

    with warnings.catch_warnings():
        warnings.filterwarnings('error', category=scipy.linalg.LinAlgWarning)
        try:
            lu_and_piv = scipy.linalg.lu_factor(_matrix)
        except (scipy.linalg.LinAlgWarning, ValueError) as e:
            logger.critical(f"Impossible to factorize the reduced matrix: {e}")
            raise scipy.linalg.LinAlgError("Singular or invalid reduced matrix")

    if np.any(np.diag(lu_and_piv[0]) == 0):
        logger.critical("The reduced matrix is singular")
        raise scipy.linalg.LinAlgError("Singular reduced matrix")

    return lu_and_piv


def solve_factorized_system(_lu_and_piv, _rhs):
    """Function which solves a dense reduced system, given the LU factorization of its matrix. A solution with
    non-finite entries is a numerical failure: it is logged and a scipy.linalg.LinAlgError is raised.

    :param _lu_and_piv: LU factorization of the reduced matrix
    :type _lu_and_piv: tuple(numpy.ndarray, numpy.ndarray)
    :param _rhs: right-hand side vector
    :type _rhs: numpy.ndarray
    :return: solution of the reduced system
    :rtype: numpy.ndarray
    """

    sol = scipy.linalg.lu_solve(_lu_and_piv, _rhs)

    if not np.all(np.isfinite(sol)):
        logger.critical("The solution of the reduced system has non-finite entries")
        raise scipy.linalg.LinAlgError("Non-finite reduced solution")

    return sol


class RbEvaluationInterface:
    """Capabilities shared by the steady and the unsteady Online evaluations. Each method has to be implemented by
    the derived class; the ones implemented here just raise a NotImplementedError.
    """

    def clear(self):
        raise NotImplementedError("The method 'clear' must be implemented in the derived class")

    def resize_data_structures(self, _N_max):
        raise NotImplementedError("The method 'resize_data_structures' must be implemented in the derived class")

    def rb_solve(self, _N):
        raise NotImplementedError("The method 'rb_solve' must be implemented in the derived class")

    def residual_scaling_numer(self, _alpha_LB):
        raise NotImplementedError("The method 'residual_scaling_numer' must be implemented in the derived class")

    def clear_riesz_representors(self):
        raise NotImplementedError("The method 'clear_riesz_representors' must be implemented in the derived class")


class RbEvaluation(RbEvaluationInterface):
    """Class which performs the Online stage of the certified Reduced Basis method for steady problems: given the
    reduced affine components and the inner products of the Riesz representors computed in the Offline stage, it
    solves the reduced problem for a new parameter value and certifies it through a residual-based error bound.

    All the containers indexed by the basis functions are allocated with dimension N_max by
    :func:`~rb_evaluation.RbEvaluation.resize_data_structures`; a solve can then be performed with any basis
    dimension N in [1, N_max].
    """

    def __init__(self, _theta_expansion, _n_max=0, _scalar_type=np.float64, _stability_lower_bound=None):
        """Initialization of the RbEvaluation class

        :param _theta_expansion: affine expansion of the operators
        :type _theta_expansion: ThetaExpansion
        :param _n_max: maximal dimension of the reduced basis. Defaults to 0
        :type _n_max: int
        :param _scalar_type: scalar type of all the stored quantities, either numpy.float64 or numpy.complex128.
            Defaults to numpy.float64
        :type _scalar_type: type
        :param _stability_lower_bound: function mapping a parameter value to a lower bound of the stability constant.
            If None, :func:`~rb_evaluation.default_stability_lower_bound` is used. Defaults to None
        :type _stability_lower_bound: function or NoneType
        """

        assert np.dtype(_scalar_type) in {np.dtype(np.float64), np.dtype(np.complex128)}, \
            f"Unsupported scalar type {_scalar_type}"

        self.M_theta_expansion = _theta_expansion
        self.M_scalar_type = np.dtype(_scalar_type)
        self.M_stability_lower_bound = _stability_lower_bound if _stability_lower_bound is not None \
            else default_stability_lower_bound
        self.M_parameter_handler = ParameterHandler()
        self.M_evaluate_RB_error_bound = True

        self.M_N_max = 0

        self.M_RB_Aq_vector = np.zeros(0)
        self.M_RB_Fq_vector = np.zeros(0)
        self.M_RB_output_vectors = []

        self.M_Fq_representor_norms = np.zeros(0)
        self.M_Fq_Aq_representor_norms = np.zeros(0)
        self.M_Aq_Aq_representor_norms = np.zeros(0)
        self.M_output_dual_innerprods = []

        self.M_Aq_representor = []

        self.M_RB_solution = np.zeros(0)
        self.M_RB_outputs = np.zeros(0)
        self.M_RB_output_error_bounds = np.zeros(0)

        self.resize_data_structures(_n_max)

        return

    @property
    def theta_expansion(self):
        return self.M_theta_expansion

    @property
    def parameter_handler(self):
        return self.M_parameter_handler

    @property
    def scalar_type(self):
        return self.M_scalar_type

    @property
    def N_max(self):
        return self.M_N_max

    @property
    def qa(self):
        return self.M_theta_expansion.qa

    @property
    def qf(self):
        return self.M_theta_expansion.qf

    @property
    def ql(self):
        return self.M_theta_expansion.ql

    @property
    def n_outputs(self):
        return self.M_theta_expansion.n_outputs

    @property
    def evaluate_RB_error_bound(self):
        return self.M_evaluate_RB_error_bound

    @evaluate_RB_error_bound.setter
    def evaluate_RB_error_bound(self, _evaluate_RB_error_bound):
        self.M_evaluate_RB_error_bound = bool(_evaluate_RB_error_bound)
        return

    def resize_data_structures(self, _N_max):
        """Method which (re)allocates all the containers indexed by the basis functions to the dimension '_N_max',
        filling them with zeros. The raw Riesz representors are reset to None. The method can be called before any
        basis function exists and is idempotent.

        :param _N_max: maximal dimension of the reduced basis
        :type _N_max: int
        """

        assert _N_max >= 0, f"The maximal dimension of the reduced basis cannot be negative, while {_N_max} was passed"

        N_max = int(_N_max)
        qa, qf = self.qa, self.qf
        dtype = self.M_scalar_type

        self.M_N_max = N_max

        self.M_RB_Aq_vector = np.zeros((qa, N_max, N_max), dtype=dtype)
        self.M_RB_Fq_vector = np.zeros((qf, N_max), dtype=dtype)
        self.M_RB_output_vectors = [np.zeros((ql, N_max), dtype=dtype) for ql in self.ql]

        self.M_Fq_representor_norms = np.zeros((qf, qf), dtype=dtype)
        self.M_Fq_Aq_representor_norms = np.zeros((qf, qa, N_max), dtype=dtype)
        self.M_Aq_Aq_representor_norms = np.zeros((qa, qa, N_max, N_max), dtype=dtype)
        self.M_output_dual_innerprods = [np.zeros((ql, ql), dtype=dtype) for ql in self.ql]

        self.M_Aq_representor = [[None] * N_max for _ in range(qa)]

        self.M_RB_solution = np.zeros(0, dtype=dtype)
        self.M_RB_outputs = np.zeros(self.n_outputs, dtype=dtype)
        self.M_RB_output_error_bounds = np.zeros(self.n_outputs)

        logger.info(f"Data structures of the RB evaluation resized to N_max = {N_max}")

        return

    def clear(self):
        """Method which resets the RB evaluation to the state of a freshly constructed one, i.e. with no allocated
        basis function, no assigned parameter and no parameter bounds. The affine expansion, the stability lower
        bound and the scalar type are kept.
        """

        self.M_parameter_handler = ParameterHandler()
        self.resize_data_structures(0)

        logger.debug("RB evaluation cleared")

        return

    def clear_riesz_representors(self):
        """Method which frees the raw Riesz representors of the stiffness matrix. Their inner products are kept.
        """

        self.M_Aq_representor = [[None] * self.M_N_max for _ in range(self.qa)]
        return

    def set_parameters(self, _param):
        """Setter method for the current parameter value

        :param _param: value of the parameter
        :type _param: numpy.ndarray or list
        """
        self.M_parameter_handler.assign_parameters(_param)
        return

    def get_parameters(self):
        """Getter method for the current parameter value. It asserts that a parameter has been assigned

        :return: current parameter value
        :rtype: numpy.ndarray
        """
        assert self.M_parameter_handler.is_assigned, "No parameter has been assigned to the RB evaluation"
        return self.M_parameter_handler.param

    def evaluate_theta_a(self):
        return self.M_theta_expansion.get_full_theta_a(self.get_parameters(), _dtype=self.M_scalar_type)

    def evaluate_theta_f(self):
        return self.M_theta_expansion.get_full_theta_f(self.get_parameters(), _dtype=self.M_scalar_type)

    def evaluate_theta_l(self, _n):
        return self.M_theta_expansion.get_full_theta_l(self.get_parameters(), _n, _dtype=self.M_scalar_type)

    def check_basis_dimension(self, _N):
        """Method which asserts that '_N' is a valid dimension of the reduced basis, i.e. that it lies in [1, N_max]

        :param _N: dimension of the reduced basis
        :type _N: int
        """
        assert 1 <= _N <= self.M_N_max, \
            f"Invalid dimension of the reduced basis {_N}: it must lie in [1, {self.M_N_max}]"
        return

    def build_rb_stiffness_matrix(self, _N, _theta_a=None):
        """Method which assembles the reduced stiffness matrix of dimension '_N' as linear combination of its affine
        components

        :param _N: dimension of the reduced basis
        :type _N: int
        :param _theta_a: theta coefficients of the stiffness matrix. If None, they are evaluated at the current
            parameter. Defaults to None
        :type _theta_a: numpy.ndarray or NoneType
        :return: reduced stiffness matrix
        :rtype: numpy.ndarray
        """

        theta_a = _theta_a if _theta_a is not None else self.evaluate_theta_a()
        return np.einsum('q,qij->ij', theta_a, self.M_RB_Aq_vector[:, :_N, :_N])

    def build_rb_rhs_vector(self, _N, _theta_f=None):
        """Method which assembles the reduced right-hand side vector of dimension '_N' as linear combination of its
        affine components

        :param _N: dimension of the reduced basis
        :type _N: int
        :param _theta_f: theta coefficients of the right-hand side vector. If None, they are evaluated at the current
            parameter. Defaults to None
        :type _theta_f: numpy.ndarray or NoneType
        :return: reduced right-hand side vector
        :rtype: numpy.ndarray
        """

        theta_f = _theta_f if _theta_f is not None else self.evaluate_theta_f()
        return np.einsum('q,qi->i', theta_f, self.M_RB_Fq_vector[:, :_N])

    def compute_rb_outputs(self, _N, _u):
        """Method which evaluates the outputs of interest on a reduced solution of dimension '_N'

        :param _N: dimension of the reduced basis
        :type _N: int
        :param _u: reduced solution
        :type _u: numpy.ndarray
        :return: values of the outputs
        :rtype: numpy.ndarray
        """

        outputs = np.zeros(self.n_outputs, dtype=self.M_scalar_type)
        for n in range(self.n_outputs):
            theta_l = self.evaluate_theta_l(n)
            outputs[n] = np.dot(np.einsum('q,qi->i', theta_l, self.M_RB_output_vectors[n][:, :_N]), _u)

        return outputs

    def eval_output_dual_norm(self, _n):
        """Method which evaluates the dual norm of the output functional of index '_n' at the current parameter

        :param _n: index of the output
        :type _n: int
        :return: dual norm of the output functional
        :rtype: float
        """

        theta_l = self.evaluate_theta_l(_n)
        output_norm_sq = np.real(np.einsum('p,pq,q->', np.conj(theta_l), self.M_output_dual_innerprods[_n], theta_l))
        return np.sqrt(np.abs(output_norm_sq))

    def get_stability_lower_bound(self):
        """Method which evaluates the lower bound of the stability constant at the current parameter

        :return: lower bound of the stability constant
        :rtype: float
        """

        alpha_LB = float(self.M_stability_lower_bound(self.get_parameters()))
        assert alpha_LB > 0, f"The lower bound of the stability constant must be positive, while it is {alpha_LB}"
        return alpha_LB

    def residual_scaling_numer(self, _alpha_LB):
        return 1.0

    def residual_scaling_denom(self, _alpha_LB):
        """Method which returns the factor dividing the residual dual norm in the error bound

        :param _alpha_LB: lower bound of the stability constant
        :type _alpha_LB: float
        :return: scaling factor
        :rtype: float
        """
        return _alpha_LB

    def compute_residual_dual_norm(self, _N):
        """Method which computes the dual norm of the residual of the current reduced solution of dimension '_N',
        contracting the representor inner products with the theta coefficients of the current parameter

        :param _N: dimension of the reduced basis
        :type _N: int
        :return: dual norm of the residual
        :rtype: float
        """

        self.check_basis_dimension(_N)
        assert self.M_RB_solution.shape[0] == _N, \
            f"The current reduced solution has dimension {self.M_RB_solution.shape[0]}, while {_N} is expected"

        terms = contract_stationary_residual_terms(_N, self.evaluate_theta_a(), self.evaluate_theta_f(),
                                                   self.M_Fq_representor_norms, self.M_Fq_Aq_representor_norms,
                                                   self.M_Aq_Aq_representor_norms)

        return residual_dual_norm(evaluate_residual_norm_sq(terms, self.M_RB_solution))

    def rb_solve(self, _N):
        """Method which solves the reduced problem of dimension '_N' at the current parameter, evaluates the outputs
        and, if enabled, the error bounds on the solution and on the outputs

        :param _N: dimension of the reduced basis. It must lie in [1, N_max]
        :type _N: int
        :return: error bound on the reduced solution, or 0 if the error bounds are disabled
        :rtype: float
        """

        self.check_basis_dimension(_N)

        logger.debug(f"Solving the steady RB problem with N = {_N} for the parameter {self.get_parameters()}")

        rb_matrix = self.build_rb_stiffness_matrix(_N)
        rb_rhs = self.build_rb_rhs_vector(_N)

        self.M_RB_solution = solve_factorized_system(factorize_reduced_matrix(rb_matrix), rb_rhs)
        self.M_RB_outputs = self.compute_rb_outputs(_N, self.M_RB_solution)

        if not self.M_evaluate_RB_error_bound:
            self.M_RB_output_error_bounds = np.zeros(self.n_outputs)
            return 0.0

        alpha_LB = self.get_stability_lower_bound()
        epsilon_N = self.compute_residual_dual_norm(_N)
        error_bound = self.residual_scaling_numer(alpha_LB) * epsilon_N / self.residual_scaling_denom(alpha_LB)

        self.M_RB_output_error_bounds = np.array([error_bound * self.eval_output_dual_norm(n)
                                                  for n in range(self.n_outputs)])

        return error_bound

    @property
    def RB_solution(self):
        return self.M_RB_solution

    @RB_solution.setter
    def RB_solution(self, _RB_solution):
        """Setter method for the current reduced solution, whose dimension must lie in [0, N_max]

        :param _RB_solution: reduced solution
        :type _RB_solution: numpy.ndarray
        """
        RB_solution = np.array(_RB_solution, dtype=self.M_scalar_type)
        assert RB_solution.ndim == 1 and RB_solution.shape[0] <= self.M_N_max, \
            f"Invalid reduced solution of shape {RB_solution.shape}"
        self.M_RB_solution = RB_solution
        return

    @property
    def RB_outputs(self):
        return self.M_RB_outputs

    @property
    def RB_output_error_bounds(self):
        return self.M_RB_output_error_bounds

    @property
    def RB_Aq_vector(self):
        return self.M_RB_Aq_vector

    @RB_Aq_vector.setter
    def RB_Aq_vector(self, _RB_Aq_vector):
        self.M_RB_Aq_vector = arr_utils.checked_copy(_RB_Aq_vector, (self.qa, self.M_N_max, self.M_N_max),
                                                     self.M_scalar_type, _name="RB_Aq_vector")
        return

    @property
    def RB_Fq_vector(self):
        return self.M_RB_Fq_vector

    @RB_Fq_vector.setter
    def RB_Fq_vector(self, _RB_Fq_vector):
        self.M_RB_Fq_vector = arr_utils.checked_copy(_RB_Fq_vector, (self.qf, self.M_N_max),
                                                     self.M_scalar_type, _name="RB_Fq_vector")
        return

    @property
    def RB_output_vectors(self):
        return self.M_RB_output_vectors

    @RB_output_vectors.setter
    def RB_output_vectors(self, _RB_output_vectors):
        assert len(_RB_output_vectors) == self.n_outputs, \
            f"{self.n_outputs} output vectors are expected, while {len(_RB_output_vectors)} were passed"
        self.M_RB_output_vectors = [arr_utils.checked_copy(vec, (self.ql[n], self.M_N_max), self.M_scalar_type,
                                                           _name=f"RB_output_vectors[{n}]")
                                    for n, vec in enumerate(_RB_output_vectors)]
        return

    @property
    def Fq_representor_norms(self):
        return self.M_Fq_representor_norms

    @Fq_representor_norms.setter
    def Fq_representor_norms(self, _Fq_representor_norms):
        self.M_Fq_representor_norms = arr_utils.checked_copy(_Fq_representor_norms, (self.qf, self.qf),
                                                             self.M_scalar_type, _name="Fq_representor_norms")
        return

    @property
    def Fq_Aq_representor_norms(self):
        return self.M_Fq_Aq_representor_norms

    @Fq_Aq_representor_norms.setter
    def Fq_Aq_representor_norms(self, _Fq_Aq_representor_norms):
        self.M_Fq_Aq_representor_norms = arr_utils.checked_copy(_Fq_Aq_representor_norms,
                                                                (self.qf, self.qa, self.M_N_max),
                                                                self.M_scalar_type, _name="Fq_Aq_representor_norms")
        return

    @property
    def Aq_Aq_representor_norms(self):
        return self.M_Aq_Aq_representor_norms

    @Aq_Aq_representor_norms.setter
    def Aq_Aq_representor_norms(self, _Aq_Aq_representor_norms):
        self.M_Aq_Aq_representor_norms = arr_utils.checked_copy(_Aq_Aq_representor_norms,
                                                                (self.qa, self.qa, self.M_N_max, self.M_N_max),
                                                                self.M_scalar_type, _name="Aq_Aq_representor_norms")
        return

    @property
    def output_dual_innerprods(self):
        return self.M_output_dual_innerprods

    @output_dual_innerprods.setter
    def output_dual_innerprods(self, _output_dual_innerprods):
        assert len(_output_dual_innerprods) == self.n_outputs, \
            f"{self.n_outputs} output inner products are expected, while {len(_output_dual_innerprods)} were passed"
        self.M_output_dual_innerprods = [arr_utils.checked_copy(mat, (self.ql[n], self.ql[n]), self.M_scalar_type,
                                                                _name=f"output_dual_innerprods[{n}]")
                                         for n, mat in enumerate(_output_dual_innerprods)]
        return

    @property
    def Aq_representor(self):
        return self.M_Aq_representor

    def set_Aq_representor(self, _q, _i, _representor):
        """Setter method for the raw Riesz representor of the stiffness component '_q' and of the basis function '_i'

        :param _q: index of the affine component
        :type _q: int
        :param _i: index of the basis function
        :type _i: int
        :param _representor: truth-space vector, or None to free the entry
        :type _representor: numpy.ndarray or NoneType
        """
        assert 0 <= _q < self.qa and 0 <= _i < self.M_N_max, f"Invalid representor index ({_q}, {_i})"
        self.M_Aq_representor[_q][_i] = None if _representor is None \
            else np.array(_representor, dtype=self.M_scalar_type)
        return

    def dimensions_tag(self):
        """Method which returns the dimensions that characterize the offline data of the RB evaluation

        :return: dictionary of the dimensions
        :rtype: dict
        """
        return {'N_max': self.M_N_max, 'Qa': self.qa, 'Qf': self.qf, 'Ql': list(self.ql),
                'n_outputs': self.n_outputs, 'dtype': self.M_scalar_type.name}

    def write_offline_data_to_files(self, _directory_name="offline_data", _write_representors=False):
        """Method which writes the offline data of the RB evaluation to the directory '_directory_name', one '.npy'
        file per quantity, together with the file 'dimensions.json' that tags the stored dimensions. If
        '_write_representors' is True, the available raw Riesz representors are stored as well, in the HDF5 file
        'Aq_riesz_representors.h5'.

        :param _directory_name: path to the directory. Defaults to 'offline_data'
        :type _directory_name: str
        :param _write_representors: True to store the raw Riesz representors. Defaults to False
        :type _write_representors: bool
        """

        gen_utils.create_dir(_directory_name)

        try:
            with open(os.path.join(_directory_name, 'dimensions.json'), 'w') as fp:
                json.dump(self.dimensions_tag(), fp)
        except (IOError, OSError, FileNotFoundError) as e:
            logger.error(f"Error {e}: impossible to write the dimensions of the offline data")
            raise ValueError(f"Impossible to write the offline data to {_directory_name}")

        for name, array in self.__stationary_arrays().items():
            arr_utils.save_array(array, os.path.join(_directory_name, f"{name}.npy"))

        if _write_representors:
            try:
                gen_utils.write_representors_to_h5(os.path.join(_directory_name, 'Aq_riesz_representors.h5'),
                                                   {'Aq': self.M_Aq_representor})
            except (IOError, OSError) as e:
                logger.error(f"Error {e}: impossible to write the Riesz representors")
                raise ValueError(f"Impossible to write the Riesz representors to {_directory_name}")

        logger.info(f"Offline data of the RB evaluation written to {_directory_name}")

        return

    def read_offline_data_from_files(self, _directory_name="offline_data", _read_representors=False):
        """Method which reads the offline data of the RB evaluation from the directory '_directory_name'. The
        dimensions stored on file must match the current N_max, the affine counts and the scalar type. Either the
        whole data are read or, in case of failure, the RB evaluation is left unchanged and a ValueError is raised.

        :param _directory_name: path to the directory. Defaults to 'offline_data'
        :type _directory_name: str
        :param _read_representors: True to read the raw Riesz representors as well. Defaults to False
        :type _read_representors: bool
        """

        offline_data = self.load_offline_data(_directory_name, _read_representors=_read_representors)
        self.commit_offline_data(offline_data)

        logger.info(f"Offline data of the RB evaluation read from {_directory_name}")

        return

    def load_offline_data(self, _directory_name, _read_representors=False):
        """Method which loads and validates the offline data stored in '_directory_name', without modifying the RB
        evaluation. Failures are logged and raised as ValueError.

        :param _directory_name: path to the directory
        :type _directory_name: str
        :param _read_representors: True to read the raw Riesz representors as well. Defaults to False
        :type _read_representors: bool
        :return: dictionary of the loaded offline data
        :rtype: dict
        """

        if not os.path.isdir(_directory_name):
            logger.error(f"The directory {_directory_name} of the offline data does not exist")
            raise ValueError(f"Missing offline data directory {_directory_name}")

        try:
            with open(os.path.join(_directory_name, 'dimensions.json'), 'r') as fp:
                dimensions = json.load(fp)
        except (IOError, OSError, FileNotFoundError, json.JSONDecodeError) as e:
            logger.error(f"Error {e}: impossible to load the dimensions of the offline data")
            raise ValueError(f"Missing or invalid dimensions file in {_directory_name}")

        if dimensions != self.dimensions_tag():
            logger.error(f"The dimensions of the offline data {dimensions} do not match the ones of the RB "
                         f"evaluation {self.dimensions_tag()}")
            raise ValueError(f"Dimension mismatch for the offline data in {_directory_name}")

        offline_data = dict()
        for name, array in self.__stationary_arrays().items():
            offline_data[name] = arr_utils.load_array(os.path.join(_directory_name, f"{name}.npy"),
                                                      _shape=array.shape, _dtype=self.M_scalar_type)

        if _read_representors:
            offline_data['Aq_representor'] = self.load_representors(
                os.path.join(_directory_name, 'Aq_riesz_representors.h5'), 'Aq', self.qa)

        return offline_data

    def commit_offline_data(self, _offline_data):
        """Method which assigns offline data, previously loaded and validated by
        :func:`~rb_evaluation.RbEvaluation.load_offline_data`, to the RB evaluation

        :param _offline_data: dictionary of the offline data
        :type _offline_data: dict
        """

        self.M_RB_Aq_vector = _offline_data['RB_Aq_vector']
        self.M_RB_Fq_vector = _offline_data['RB_Fq_vector']
        self.M_Fq_representor_norms = _offline_data['Fq_representor_norms']
        self.M_Fq_Aq_representor_norms = _offline_data['Fq_Aq_representor_norms']
        self.M_Aq_Aq_representor_norms = _offline_data['Aq_Aq_representor_norms']
        self.M_RB_output_vectors = [_offline_data[f"RB_output_vectors_{n}"] for n in range(self.n_outputs)]
        self.M_output_dual_innerprods = [_offline_data[f"output_dual_innerprods_{n}"]
                                         for n in range(self.n_outputs)]

        if 'Aq_representor' in _offline_data.keys():
            self.M_Aq_representor = _offline_data['Aq_representor']

        return

    def __stationary_arrays(self):
        arrays = {'RB_Aq_vector': self.M_RB_Aq_vector,
                  'RB_Fq_vector': self.M_RB_Fq_vector,
                  'Fq_representor_norms': self.M_Fq_representor_norms,
                  'Fq_Aq_representor_norms': self.M_Fq_Aq_representor_norms,
                  'Aq_Aq_representor_norms': self.M_Aq_Aq_representor_norms}
        for n in range(self.n_outputs):
            arrays[f"RB_output_vectors_{n}"] = self.M_RB_output_vectors[n]
            arrays[f"output_dual_innerprods_{n}"] = self.M_output_dual_innerprods[n]
        return arrays

    def load_representors(self, _file_name, _group, _n_terms):
        """Method which loads a group of raw Riesz representors from an HDF5 file, without modifying the RB
        evaluation. Failures are logged and raised as ValueError.

        :param _file_name: path to the HDF5 file
        :type _file_name: str
        :param _group: name of the group of representors
        :type _group: str
        :param _n_terms: number of affine components of the group
        :type _n_terms: int
        :return: arena of the representors, made of '_n_terms' lists of N_max vectors (or None)
        :rtype: list[list[numpy.ndarray or NoneType]]
        """

        try:
            arena = gen_utils.read_representors_from_h5(_file_name, _group, _n_terms, self.M_N_max)
        except (IOError, OSError, KeyError) as e:
            logger.error(f"Error {e}: impossible to load the Riesz representors from {_file_name}")
            raise ValueError(f"Impossible to load the Riesz representors from {_file_name}")

        return [[None if vec is None else vec.astype(self.M_scalar_type) for vec in vectors] for vectors in arena]

    def print_rb_online_summary(self):
        """Printing method, which logs the main features of the RB evaluation
        """

        logger.info(f"\n------------- RB ONLINE SUMMARY -------------\n"
                    f"Maximal dimension of the reduced basis: {self.M_N_max}\n"
                    f"Scalar type: {self.M_scalar_type.name}\n"
                    f"Evaluation of the error bounds: {self.M_evaluate_RB_error_bound}\n"
                    f"Current parameter: "
                    f"{self.M_parameter_handler.param if self.M_parameter_handler.is_assigned else 'not assigned'}")

        self.M_theta_expansion.affine_decomposition.print_ad_summary()

        return


__all__ = [
    "default_stability_lower_bound",
    "factorize_reduced_matrix",
    "solve_factorized_system",
    "RbEvaluationInterface",
    "RbEvaluation"
]
