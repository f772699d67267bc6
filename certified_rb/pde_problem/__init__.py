#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *PDE_Problem* submodule contains the *ParameterHandler* class, which is responsible for the handling of the
characteristic parameters of the problem at hand: it stores their bounds and the current value, it checks that the
assigned values lie within the bounds, it normalizes/rescales the parameter values and it generates new random
parameter values, which are used as online queries.
"""
