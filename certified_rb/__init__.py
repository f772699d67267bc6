#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *certified_rb* module contains the implementation of the Online stage of the certified Reduced Basis method for
parametrized Linear Time-Invariant (LTI) problems, either steady or discretized in time by the theta-method. Given the
quantities computed in the Offline stage (reduced affine components, reduced initial conditions and inner products of
the Riesz representors of the residual), it allows to solve the reduced problem for a new parameter value and to
certify the reduced solution at each time step via a residual-based a posteriori error bound, without touching the
full-order discretization. The offline quantities cross the Offline/Online boundary through a directory of files.
The tasks are handled by different classes, organized into the submodules linked hereafter.
"""
