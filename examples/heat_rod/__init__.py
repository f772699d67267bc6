#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The *heat_rod* submodule contains the unsteady heat equation on a rod made of two materials, with parametrized
conductivities and source intensity, discretized by P1 finite elements. It features the definition of the problem,
a small Offline stage (POD basis and Riesz representors) writing the offline data to files and an Online driver that
reads them and certifies the reduced solutions of randomly generated queries.
"""
