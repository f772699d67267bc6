#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 12 11:20:37 2026

Affine parameter expansion of the operators of a parametrized LTI problem.
"""

import numpy as np
import os

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.path.normpath('../../log.cfg'))
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def default_theta_function(_param, _q):
    """Default theta function, used to initialize the affine expansion. Since the affine expansion is
    problem-dependent, the function just raises an Exception, inviting the user to provide proper functions.

    :param _param: value of the parameter
    :type _param: numpy.ndarray
    :param _q: index of the affine component
    :type _q: int
    """

    raise Exception("You are using the default theta function, please provide specific ones for your problem!")


def default_output_theta_function(_param, _n, _q):
    """Default theta function for the outputs of interest. It just raises an Exception, as
    :func:`~theta_expansion.default_theta_function` does.
    """

    raise Exception("You are using the default output theta function, please provide specific ones for your "
                    "problem!")


class AffineDecomposition:
    """Class which defines the number of affine components of the operators of an unsteady LTI problem

    :var self.M_qa: number of affine components of the stiffness matrix
    :var self.M_qf: number of affine components of the right-hand side vector
    :var self.M_qm: number of affine components of the mass matrix
    :var self.M_ql: number of affine components of each output functional
    """

    def __init__(self, _qa=None, _qf=None, _qm=None, _ql=None):
        """AffineDecomposition class initialization. Counts passed as None are set to 0 (or to an empty list, for
        the output functionals)

        :param _qa: number of affine components for the stiffness matrix
        :type _qa: int or NoneType
        :param _qf: number of affine components for the right-hand side vector
        :type _qf: int or NoneType
        :param _qm: number of affine components for the mass matrix
        :type _qm: int or NoneType
        :param _ql: number of affine components of each output functional
        :type _ql: list[int] or NoneType
        """

        self.M_qa = 0
        self.M_qf = 0
        self.M_qm = 0
        self.M_ql = []
        self.set_Q(_qa if _qa is not None else 0,
                   _qf if _qf is not None else 0,
                   _qm if _qm is not None else 0,
                   _ql if _ql is not None else [])
        return

    @property
    def qa(self):
        return self.M_qa

    @property
    def qf(self):
        return self.M_qf

    @property
    def qm(self):
        return self.M_qm

    @property
    def ql(self):
        """Getter method, which returns the number of affine components of each output functional

        :return: number of affine components of each output functional
        :rtype: list[int]
        """
        return list(self.M_ql)

    @property
    def n_outputs(self):
        return len(self.M_ql)

    def set_Q(self, _qa, _qf, _qm=0, _ql=None):
        """Setter method, which allows to set the number of affine components of the operators

        :param _qa: number of affine components for the stiffness matrix
        :type _qa: int
        :param _qf: number of affine components for the right-hand side vector
        :type _qf: int
        :param _qm: number of affine components for the mass matrix. Defaults to 0
        :type _qm: int
        :param _ql: number of affine components of each output functional. Defaults to None (no outputs)
        :type _ql: list[int] or NoneType
        """

        ql = list(_ql) if _ql is not None else []
        assert min([_qa, _qf, _qm] + ql) >= 0, "The number of affine components cannot be negative"

        self.M_qa = int(_qa)
        self.M_qf = int(_qf)
        self.M_qm = int(_qm)
        self.M_ql = [int(q) for q in ql]
        return

    def as_dict(self):
        """Method which returns the affine counts as a dictionary, used to tag the offline data on file

        :return: dictionary of the affine counts
        :rtype: dict
        """
        return {'Qa': self.M_qa, 'Qf': self.M_qf, 'Qm': self.M_qm, 'Ql': list(self.M_ql)}

    def print_ad_summary(self):
        """Method to log the main features of the AffineDecomposition class instance
        """
        logger.info(f"\n------------- AD SUMMARY -------------\n"
                    f"Number of affine decomposition matrices A {self.M_qa}\n"
                    f"Number of affine decomposition vectors  f {self.M_qf}\n"
                    f"Number of affine decomposition matrices M {self.M_qm}\n"
                    f"Number of affine decomposition outputs  l {self.M_ql}")
        return


class ThetaExpansion:
    """Class which maps a parameter value to the coefficients of the affine expansion of the operators. The theta
    functions are injected callables; the class never inspects how the parameter is mapped to the coefficients.
    """

    def __init__(self, _affine_decomposition, _theta_a=None, _theta_f=None, _theta_m=None, _theta_l=None):
        """Initialization of the ThetaExpansion class

        :param _affine_decomposition: number of affine components of the operators
        :type _affine_decomposition: AffineDecomposition
        :param _theta_a: theta function of the stiffness matrix, with signature (param, q) -> scalar
        :type _theta_a: function or NoneType
        :param _theta_f: theta function of the right-hand side vector, with signature (param, q) -> scalar
        :type _theta_f: function or NoneType
        :param _theta_m: theta function of the mass matrix, with signature (param, q) -> scalar
        :type _theta_m: function or NoneType
        :param _theta_l: theta function of the outputs, with signature (param, n, q) -> scalar
        :type _theta_l: function or NoneType
        """

        self.M_affine_decomposition = _affine_decomposition

        self.M_theta_a = _theta_a if _theta_a is not None else default_theta_function
        self.M_theta_f = _theta_f if _theta_f is not None else default_theta_function
        self.M_theta_m = _theta_m if _theta_m is not None else default_theta_function
        self.M_theta_l = _theta_l if _theta_l is not None else default_output_theta_function

        return

    @property
    def affine_decomposition(self):
        return self.M_affine_decomposition

    @property
    def qa(self):
        return self.M_affine_decomposition.qa

    @property
    def qf(self):
        return self.M_affine_decomposition.qf

    @property
    def qm(self):
        return self.M_affine_decomposition.qm

    @property
    def ql(self):
        return self.M_affine_decomposition.ql

    @property
    def n_outputs(self):
        return self.M_affine_decomposition.n_outputs

    def get_theta_a(self, _param, _q):
        """Getter method, which evaluates the theta function of the stiffness matrix

        :param _param: value of the parameter
        :type _param: numpy.ndarray
        :param _q: index of the affine component
        :type _q: int
        :return: value of the theta function
        :rtype: float or complex
        """
        return self.M_theta_a(_param, _q)

    def get_theta_f(self, _param, _q):
        return self.M_theta_f(_param, _q)

    def get_theta_m(self, _param, _q):
        return self.M_theta_m(_param, _q)

    def get_theta_l(self, _param, _n, _q):
        return self.M_theta_l(_param, _n, _q)

    def get_full_theta_a(self, _param, _dtype=np.float64):
        """Getter method, which evaluates all the theta functions of the stiffness matrix

        :param _param: value of the parameter
        :type _param: numpy.ndarray
        :param _dtype: scalar type of the returned array. Defaults to numpy.float64
        :type _dtype: type
        :return: values of the theta functions
        :rtype: numpy.ndarray
        """
        return np.array([self.get_theta_a(_param, q) for q in range(self.qa)], dtype=_dtype)

    def get_full_theta_f(self, _param, _dtype=np.float64):
        return np.array([self.get_theta_f(_param, q) for q in range(self.qf)], dtype=_dtype)

    def get_full_theta_m(self, _param, _dtype=np.float64):
        return np.array([self.get_theta_m(_param, q) for q in range(self.qm)], dtype=_dtype)

    def get_full_theta_l(self, _param, _n, _dtype=np.float64):
        """Getter method, which evaluates all the theta functions of the output of index '_n'

        :param _param: value of the parameter
        :type _param: numpy.ndarray
        :param _n: index of the output
        :type _n: int
        :param _dtype: scalar type of the returned array. Defaults to numpy.float64
        :type _dtype: type
        :return: values of the theta functions
        :rtype: numpy.ndarray
        """
        assert 0 <= _n < self.n_outputs, f"Invalid output index {_n}"
        return np.array([self.get_theta_l(_param, _n, q) for q in range(self.ql[_n])], dtype=_dtype)


__all__ = [
    "default_theta_function",
    "default_output_theta_function",
    "AffineDecomposition",
    "ThetaExpansion"
]
