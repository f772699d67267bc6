#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *affine_decomposition* submodule handles the affine parameter expansion of the problem operators.
"""
