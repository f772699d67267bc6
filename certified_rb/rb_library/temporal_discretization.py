#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Oct 12 14:03:12 2026

Parameters of the generalized Euler (theta-method) time marching scheme.
"""

import numpy as np
import os

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.path.normpath('../log.cfg'))
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


class TemporalDiscretization:
    """Class which stores the parameters of the theta-method: the time step size, the value of theta (0 gives
    Forward Euler, 0.5 Crank-Nicolson, 1 Backward Euler), the current time step and the total number of time steps.
    It also stores the control sequence, i.e. a scalar multiplier of the forcing term at each time level.

    All the setters check their preconditions through assertions; an invalid value is a caller error.
    """

    def __init__(self):
        """Initialization of the TemporalDiscretization class with default values
        """

        self.M_delta_t = 0.0
        self.M_euler_theta = 0.0
        self.M_current_time_step = 0
        self.M_n_time_steps = 0
        self.M_control = np.ones(1)

        return

    def clear(self):
        """Method to reset the time discretization to its default values
        """

        self.M_delta_t = 0.0
        self.M_euler_theta = 0.0
        self.M_current_time_step = 0
        self.M_n_time_steps = 0
        self.M_control = np.ones(1)

        return

    def get_delta_t(self):
        return self.M_delta_t

    def set_delta_t(self, _delta_t):
        """Setter method for the time step size

        :param _delta_t: time step size. It must be strictly positive
        :type _delta_t: float
        """
        assert _delta_t > 0, f"The time step size must be positive, while {_delta_t} was passed"
        self.M_delta_t = float(_delta_t)
        return

    def get_euler_theta(self):
        return self.M_euler_theta

    def set_euler_theta(self, _euler_theta):
        """Setter method for the parameter of the theta-method

        :param _euler_theta: value of theta. It must lie in [0,1]
        :type _euler_theta: float
        """
        assert 0.0 <= _euler_theta <= 1.0, f"The value of theta must lie in [0,1], while {_euler_theta} was passed"
        self.M_euler_theta = float(_euler_theta)
        return

    def get_time_step(self):
        return self.M_current_time_step

    def set_time_step(self, _k):
        """Setter method for the current time step

        :param _k: index of the current time step. It must lie in [0, n_time_steps]
        :type _k: int
        """
        assert 0 <= _k <= self.M_n_time_steps, \
            f"The time step {_k} exceeds the range [0, {self.M_n_time_steps}]"
        self.M_current_time_step = int(_k)
        return

    def get_n_time_steps(self):
        return self.M_n_time_steps

    def set_n_time_steps(self, _n_time_steps):
        """Setter method for the number of time steps. The control sequence is reset to ones, with one entry per time
        level, and the current time step is clamped to the new range.

        :param _n_time_steps: number of time steps
        :type _n_time_steps: int
        """
        assert _n_time_steps >= 0, f"The number of time steps cannot be negative, while {_n_time_steps} was passed"
        self.M_n_time_steps = int(_n_time_steps)
        self.M_control = np.ones(self.M_n_time_steps + 1)
        self.M_current_time_step = min(self.M_current_time_step, self.M_n_time_steps)
        return

    def get_control(self, _k):
        """Getter method for the value of the control at the time level '_k'

        :param _k: index of the time level
        :type _k: int
        :return: value of the control
        :rtype: float
        """
        assert 0 <= _k <= self.M_n_time_steps, f"Invalid time level {_k}"
        return self.M_control[_k]

    def set_control(self, _control):
        """Setter method for the control sequence, which must have one entry per time level

        :param _control: values of the control at the time levels 0, ..., n_time_steps
        :type _control: numpy.ndarray or list
        """
        control = np.array(_control, dtype=float).flatten()
        assert control.shape[0] == self.M_n_time_steps + 1, \
            f"The control must have {self.M_n_time_steps + 1} entries, while {control.shape[0]} were passed"
        self.M_control = control
        return

    def get_blended_control(self, _k):
        """Getter method for the theta-weighted value of the control over the time step ending at level '_k', i.e.
        theta * g_k + (1 - theta) * g_{k-1}

        :param _k: index of the time level at the end of the step. It must lie in [1, n_time_steps]
        :type _k: int
        :return: blended value of the control
        :rtype: float
        """
        assert 1 <= _k <= self.M_n_time_steps, f"Invalid time step {_k}"
        return self.M_euler_theta * self.M_control[_k] + (1.0 - self.M_euler_theta) * self.M_control[_k - 1]

    def get_control_sequence(self):
        return np.copy(self.M_control)

    @property
    def delta_t(self):
        return self.get_delta_t()

    @property
    def euler_theta(self):
        return self.get_euler_theta()

    @property
    def time_step(self):
        return self.get_time_step()

    @property
    def n_time_steps(self):
        return self.get_n_time_steps()

    @property
    def final_time(self):
        return self.M_delta_t * self.M_n_time_steps

    def time_levels(self):
        """Method which returns the times of the time levels, i.e. k * delta_t for k = 0, ..., n_time_steps

        :return: times of the time levels
        :rtype: numpy.ndarray
        """
        return self.M_delta_t * np.arange(self.M_n_time_steps + 1)

    def configure(self, _time_specifics):
        """Method to configure the time discretization from a dictionary. The dictionary must contain the field
        'number_of_time_instances' (number of time steps) and either 'delta_t' or 'final_time'; the field 'theta'
        is optional.

        :param _time_specifics: dictionary of the time specifics
        :type _time_specifics: dict
        """

        if 'number_of_time_instances' not in _time_specifics.keys():
            logger.critical("The field 'number_of_time_instances' is missing from the time specifics")
            raise ValueError("Invalid time specifics")

        n_time_steps = int(_time_specifics['number_of_time_instances'])

        if 'delta_t' in _time_specifics.keys():
            delta_t = _time_specifics['delta_t']
        elif 'final_time' in _time_specifics.keys():
            assert n_time_steps > 0, "A positive number of time steps is needed to deduce the time step size"
            delta_t = _time_specifics['final_time'] / n_time_steps
        else:
            logger.critical("Either the field 'delta_t' or 'final_time' must be present in the time specifics")
            raise ValueError("Invalid time specifics")

        self.set_n_time_steps(n_time_steps)
        self.set_delta_t(delta_t)
        if 'theta' in _time_specifics.keys():
            self.set_euler_theta(_time_specifics['theta'])
        self.set_time_step(0)

        logger.debug(f"Time discretization configured: dt = {self.M_delta_t}, theta = {self.M_euler_theta}, "
                     f"{self.M_n_time_steps} time steps")

        return

    def as_dict(self):
        """Method which returns the scalar time specifics as a dictionary

        :return: dictionary with fields 'delta_t', 'euler_theta', 'time_step', 'n_time_steps'
        :rtype: dict
        """
        return {'delta_t': self.M_delta_t,
                'euler_theta': self.M_euler_theta,
                'time_step': self.M_current_time_step,
                'n_time_steps': self.M_n_time_steps}

    def copy_from(self, _other):
        """Method which overwrites the time specifics and the control with the ones of another time discretization.
        The object itself is kept, so that references to it stay valid.

        :param _other: time discretization to copy from
        :type _other: TemporalDiscretization
        """

        self.M_delta_t = _other.M_delta_t
        self.M_euler_theta = _other.M_euler_theta
        self.M_n_time_steps = _other.M_n_time_steps
        self.M_current_time_step = _other.M_current_time_step
        self.M_control = np.copy(_other.M_control)

        return


__all__ = [
    "TemporalDiscretization"
]
