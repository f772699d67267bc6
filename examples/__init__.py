#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *examples* module is devoted to the testing of the methods implemented in *certified_rb* on some test cases,
as the name suggests; each submodule refers to a specific toy problem. Specifically, we considered the *heat rod*
test case: an unsteady heat equation on a rod made of two materials, whose conductivities and heat source
intensity are the parameters.
"""
