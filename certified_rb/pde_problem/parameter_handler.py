#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 12 10:15:08 2026

Handling of the parameter vector that drives the affine expansion of an online query.
"""

import numpy as np
import os

import logging.config
log_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.path.normpath('../log.cfg'))
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


class ParameterHandler:
    """Class to handle the parameters of a parametrized LTI problem: their bounding box, the current value and the
    random sampling of new values, used to generate the online queries.
    """

    def __init__(self):
        """Empty handler: no bounds and no assigned parameter
        """

        self.M_param_min = np.zeros(0)
        self.M_param_max = np.zeros(0)
        self.M_param = np.zeros(0)
        self.M_num_parameters = 0
        self.M_param_assigned = False

        return

    def assign_parameters_bounds(self, _param_min, _param_max):
        """Method to assign the bounding values (min and max) to the parameters involved in the problem. The current
        parameter is reset to the lower bound and flagged as not assigned.

        :param _param_min: minimum values of the parameters
        :type _param_min: numpy.ndarray or list
        :param _param_max: maximum values of the parameters
        :type _param_max: numpy.ndarray or list
        """

        param_min = np.array(_param_min, dtype=float).flatten()
        param_max = np.array(_param_max, dtype=float).flatten()

        assert param_min.shape == param_max.shape, \
            "The lower and upper parameter bounds must have the same number of entries"
        assert np.all(param_min <= param_max), \
            "The lower parameter bounds cannot exceed the upper ones"

        self.M_param_min = param_min
        self.M_param_max = param_max
        self.M_param = np.copy(param_min)
        self.M_num_parameters = param_min.shape[0]
        self.M_param_assigned = False

        return

    def assign_parameters(self, _param):
        """Method to assign the parameter value, provided that the input has the right shape. If bounds are
        available, the value is required to lie inside them.

        :param _param: value of the parameter
        :type _param: numpy.ndarray or list
        """

        param = np.array(_param, dtype=float).flatten()

        if self.M_num_parameters == 0:
            self.M_num_parameters = param.shape[0]
            self.M_param_min = np.full(param.shape, -np.inf)
            self.M_param_max = np.full(param.shape, np.inf)

        assert self.M_num_parameters == param.shape[0], \
            f"The parameter must have {self.M_num_parameters} entries, while {param.shape[0]} were passed"

        if np.any(param < self.M_param_min) or np.any(param > self.M_param_max):
            logger.critical(f"The parameter {param} lies outside the bounds "
                            f"[{self.M_param_min}, {self.M_param_max}]")
            raise ValueError("Parameter out of bounds")

        self.M_param = param
        self.M_param_assigned = True

        return

    def rescale_parameters(self, _param):
        """Map a point of the unit box onto the parameter bounding box

        :param _param: point of [0,1]^P
        :type _param: numpy.ndarray
        :return: corresponding parameter value
        :rtype: numpy.ndarray
        """
        return self.M_param_min + np.asarray(_param) * self.param_range

    def normalize_parameters(self, _param):
        """Inverse of :func:`~parameter_handler.ParameterHandler.rescale_parameters`
        """
        return (np.asarray(_param) - self.M_param_min) / self.param_range

    def print_parameters(self):
        logger.info(f"Number of parameters: {self.M_num_parameters}; current value: {self.M_param}")
        return

    def generate_parameter(self, prob=None, seed=42):
        """Method which draws a parameter inside the bounding box and assigns it as current parameter. Each
        normalized component is sampled uniformly in [0,1] or, if 'prob' is given, from the equispaced levels
        {0, 1/n, ..., (n-1)/n} with the weights 'prob'. The same seed always gives the same parameter.

        :param prob: weights of the sampling levels. If None, uniform sampling is used. Defaults to None
        :type prob: list or tuple or numpy.ndarray or NoneType
        :param seed: seed of the random generator. Defaults to 42
        :type seed: int
        :return: the generated parameter
        :rtype: numpy.ndarray
        """

        assert self.M_num_parameters > 0, "Parameter bounds must be assigned before generating a parameter"
        assert np.all(np.isfinite(self.M_param_min)) and np.all(np.isfinite(self.M_param_max)), \
            "Parameters can be generated only within finite bounds"

        rng = np.random.default_rng(seed)

        if prob is None:
            normalized_param = rng.uniform(0.0, 1.0, size=self.M_num_parameters)
        else:
            weights = np.asarray(prob, dtype=float)
            if weights.ndim != 1:
                logger.critical("The sampling weights must be a one-dimensional sequence")
                raise TypeError("Invalid sampling weights")
            n_levels = weights.shape[0]
            normalized_param = rng.choice(n_levels, size=self.M_num_parameters, p=weights) / n_levels

        self.M_param = self.rescale_parameters(normalized_param)
        self.M_param_assigned = True

        return self.M_param

    @property
    def param(self):
        return self.M_param

    @property
    def is_assigned(self):
        """Getter method, to check whether a parameter value has been assigned

        :return: True if a parameter has been assigned or generated, False otherwise
        :rtype: bool
        """
        return self.M_param_assigned

    @property
    def num_parameters(self):
        """Number of components of the parameter, fixed by the bounds or by the first assigned value
        """
        return self.M_num_parameters

    @property
    def param_min(self):
        return self.M_param_min

    @property
    def param_max(self):
        return self.M_param_max

    @property
    def param_range(self):
        return self.M_param_max - self.M_param_min


__all__ = [
    "ParameterHandler"
]
