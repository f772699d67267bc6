#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Oct 13 09:12:44 2026

Contraction of the representor inner products with the theta coefficients of a given parameter, and evaluation
of the dual norm of the reduced residual as a quadratic form of the reduced solution.

Sign conventions of the Riesz representors, as computed in the Offline stage (X is the inner product matrix):
    * F_q representor:                 X z = F_q
    * A_q representor of the i-th basis function:  X z = - A_q zeta_i
    * M_q representor of the i-th basis function:  X z = M_q zeta_i

so that the representor of the residual of a time step reads

    g * sum_q theta_f^q F_q  +  sum_q theta_a^q sum_i u_i A_{q,i}  +  sum_q theta_m^q sum_i c_i M_{q,i}

with u the theta-weighted reduced solution, c = -(u^k - u^{k-1}) / dt and g the blended control.
"""

import numpy as np
import os

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.path.normpath('../log.cfg'))
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


class OnlineResidualTerms:
    """Class which stores the residual terms of a reduced basis of dimension N, contracted with the theta
    coefficients of a fixed parameter. Since the problem is LTI, the terms are valid for a whole time march.

    :var self.Fq_term: forcing-forcing term (scalar)
    :var self.Fq_Aq_vector: forcing-stiffness term (N-vector)
    :var self.Aq_Aq_matrix: stiffness-stiffness term (N x N)
    :var self.Fq_Mq_vector: forcing-mass term (N-vector), empty in the steady case
    :var self.Mq_Mq_matrix: mass-mass term (N x N), empty in the steady case
    :var self.Aq_Mq_matrix: stiffness-mass term (N x N), empty in the steady case
    """

    def __init__(self, _N=0, _param=None, _dtype=np.float64):

        self.N = _N
        self.param = None if _param is None else np.copy(_param)

        self.Fq_term = 0.0
        self.Fq_Aq_vector = np.zeros(_N, dtype=_dtype)
        self.Aq_Aq_matrix = np.zeros((_N, _N), dtype=_dtype)
        self.Fq_Mq_vector = np.zeros(0, dtype=_dtype)
        self.Mq_Mq_matrix = np.zeros((0, 0), dtype=_dtype)
        self.Aq_Mq_matrix = np.zeros((0, 0), dtype=_dtype)

        return

    @property
    def is_transient(self):
        return self.Mq_Mq_matrix.shape == (self.N, self.N) and self.N > 0

    def is_valid_for(self, _N, _param):
        """Method which checks whether the terms have been contracted for the basis dimension '_N' and the
        parameter '_param'

        :param _N: dimension of the reduced basis
        :type _N: int
        :param _param: value of the parameter
        :type _param: numpy.ndarray
        :return: True if the terms can be used for the given dimension and parameter, False otherwise
        :rtype: bool
        """
        return (self.N == _N and self.param is not None and _param is not None and
                np.array_equal(self.param, _param))


def contract_stationary_residual_terms(_N, _theta_a, _theta_f,
                                       _Fq_representor_norms, _Fq_Aq_representor_norms, _Aq_Aq_representor_norms,
                                       _param=None):
    """Function which contracts the representor inner products of the forcing and stiffness terms with the theta
    coefficients, restricting them to the first '_N' basis functions. The cost is O(Q^2 N^2).

    :param _N: dimension of the reduced basis
    :type _N: int
    :param _theta_a: theta coefficients of the stiffness matrix
    :type _theta_a: numpy.ndarray
    :param _theta_f: theta coefficients of the right-hand side vector
    :type _theta_f: numpy.ndarray
    :param _Fq_representor_norms: inner products of the forcing representors, shape (Qf, Qf)
    :type _Fq_representor_norms: numpy.ndarray
    :param _Fq_Aq_representor_norms: inner products of forcing and stiffness representors, shape (Qf, Qa, Nmax)
    :type _Fq_Aq_representor_norms: numpy.ndarray
    :param _Aq_Aq_representor_norms: inner products of the stiffness representors, shape (Qa, Qa, Nmax, Nmax)
    :type _Aq_Aq_representor_norms: numpy.ndarray
    :param _param: parameter used to evaluate the theta coefficients, stored to tag the terms. Defaults to None
    :type _param: numpy.ndarray or NoneType
    :return: the contracted residual terms
    :rtype: OnlineResidualTerms
    """

    dtype = np.result_type(_Fq_Aq_representor_norms, _theta_a, _theta_f)
    terms = OnlineResidualTerms(_N, _param, _dtype=dtype)

    conj_theta_f = np.conj(_theta_f)
    conj_theta_a = np.conj(_theta_a)

    terms.Fq_term = np.real(np.einsum('p,pq,q->', conj_theta_f, _Fq_representor_norms, _theta_f))
    terms.Fq_Aq_vector = 2.0 * np.einsum('p,q,pqi->i', conj_theta_f, _theta_a,
                                         _Fq_Aq_representor_norms[:, :, :_N])
    terms.Aq_Aq_matrix = np.einsum('p,q,pqij->ij', conj_theta_a, _theta_a,
                                   _Aq_Aq_representor_norms[:, :, :_N, :_N])

    return terms


def contract_transient_residual_terms(_N, _theta_a, _theta_f, _theta_m,
                                      _Fq_representor_norms, _Fq_Aq_representor_norms, _Aq_Aq_representor_norms,
                                      _Fq_Mq_representor_norms, _Mq_Mq_representor_norms, _Aq_Mq_representor_norms,
                                      _param=None):
    """Function which contracts all the representor inner products of a time step residual with the theta
    coefficients, restricting them to the first '_N' basis functions. On top of the steady terms, the mass terms
    are computed as

        Fq_Mq_vector[i] = 2 sum_{p,q} conj(theta_f^p) theta_m^q  Fq_Mq[p,q,i]
        Mq_Mq_matrix[i,j] = sum_{p,q} conj(theta_m^p) theta_m^q  Mq_Mq[p,q,i,j]
        Aq_Mq_matrix[i,j] = 2 sum_{p,q} conj(theta_a^p) theta_m^q  Aq_Mq[p,q,i,j]

    The stored inner products follow <x, y> = x^H X y, conjugated in the first argument, e.g.
    Fq_Mq[p,q,i] = <z_F^p, z_M^{q,i}> and Aq_Mq[p,q,i,j] = <z_A^{p,i}, z_M^{q,j}>. No index symmetry of Aq_Mq is
    exploited.

    :return: the contracted residual terms
    :rtype: OnlineResidualTerms
    """

    terms = contract_stationary_residual_terms(_N, _theta_a, _theta_f,
                                               _Fq_representor_norms, _Fq_Aq_representor_norms,
                                               _Aq_Aq_representor_norms, _param=_param)

    conj_theta_f = np.conj(_theta_f)
    conj_theta_a = np.conj(_theta_a)
    conj_theta_m = np.conj(_theta_m)

    terms.Fq_Mq_vector = 2.0 * np.einsum('p,q,pqi->i', conj_theta_f, _theta_m,
                                         _Fq_Mq_representor_norms[:, :, :_N])
    terms.Mq_Mq_matrix = np.einsum('p,q,pqij->ij', conj_theta_m, _theta_m,
                                   _Mq_Mq_representor_norms[:, :, :_N, :_N])
    terms.Aq_Mq_matrix = 2.0 * np.einsum('p,q,pqij->ij', conj_theta_a, _theta_m,
                                         _Aq_Mq_representor_norms[:, :, :_N, :_N])

    return terms


def evaluate_residual_norm_sq(_terms, _u, _mass_coeffs=None, _forcing_weight=1.0):
    """Function which evaluates the squared dual norm of the residual as a quadratic form of the reduced solution.
    The cost is O(N^2).

    :param _terms: contracted residual terms
    :type _terms: OnlineResidualTerms
    :param _u: reduced solution (theta-weighted in the unsteady case)
    :type _u: numpy.ndarray
    :param _mass_coeffs: coefficients multiplying the mass representors, i.e. -(u^k - u^{k-1}) / dt. If None, the
        steady residual is evaluated. Defaults to None
    :type _mass_coeffs: numpy.ndarray or NoneType
    :param _forcing_weight: scalar weight of the forcing term (the blended control). Defaults to 1
    :type _forcing_weight: float
    :return: squared dual norm of the residual. It can be slightly negative because of round-off errors
    :rtype: float
    """

    g = _forcing_weight
    u = _u

    residual_norm_sq = (np.abs(g) ** 2 * _terms.Fq_term +
                        np.real(np.conj(g) * np.dot(u, _terms.Fq_Aq_vector)) +
                        np.real(np.vdot(u, _terms.Aq_Aq_matrix.dot(u))))

    if _mass_coeffs is not None:
        c = _mass_coeffs
        residual_norm_sq += (np.real(np.conj(g) * np.dot(c, _terms.Fq_Mq_vector)) +
                             np.real(np.vdot(c, _terms.Mq_Mq_matrix.dot(c))) +
                             np.real(np.vdot(u, _terms.Aq_Mq_matrix.dot(c))))

    return float(residual_norm_sq)


def residual_dual_norm(_residual_norm_sq):
    """Function which returns the square root of the squared dual norm of the residual. Negative values, that
    may arise from round-off errors, are replaced by their absolute value and a warning is logged.

    :param _residual_norm_sq: squared dual norm of the residual
    :type _residual_norm_sq: float
    :return: dual norm of the residual
    :rtype: float
    """

    if _residual_norm_sq < 0.0:
        logger.warning(f"Negative squared residual dual norm {_residual_norm_sq:.3e}, "
                       f"most likely due to round-off errors. Its absolute value is taken")

    return np.sqrt(np.abs(_residual_norm_sq))


__all__ = [
    "OnlineResidualTerms",
    "contract_stationary_residual_terms",
    "contract_transient_residual_terms",
    "evaluate_residual_norm_sq",
    "residual_dual_norm"
]
