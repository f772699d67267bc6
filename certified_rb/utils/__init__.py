#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *utils* submodule contains utility functions to save/load arrays and Riesz representors and to handle directories.
"""
