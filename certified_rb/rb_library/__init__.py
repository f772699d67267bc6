#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *RB_Library* submodule is the core submodule of *certified_rb*. It contains:

    * the *AffineDecomposition* and *ThetaExpansion* classes, which store the number of affine components of the
      operators (stiffness matrix, right-hand side vector, mass matrix and output functionals) and map a parameter
      value to the coefficients of the affine expansion, via user-provided theta functions;
    * the *TemporalDiscretization* class, a value object storing the parameters of the theta-method (time step size,
      theta, current time step, number of time steps) and the control sequence multiplying the forcing term;
    * the residual terms functions, which contract the inner products of the Riesz representors with the theta
      coefficients of a given parameter and evaluate the dual norm of the residual as a quadratic form of the reduced
      solution;
    * the *RbEvaluation* classes: *RbEvaluation* handles steady problems, while *TransientRbEvaluation* composes it
      with a *TemporalDiscretization* to march in time the reduced solution of unsteady LTI problems, caching the
      residual terms for the whole time march and accumulating the error bound at each time step. Both the classes
      read and write their offline data from/to a directory of files.
"""
