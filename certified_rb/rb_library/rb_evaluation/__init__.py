#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *rb_evaluation* submodule contains the steady and the unsteady Online evaluations of the certified Reduced Basis
method.
"""
