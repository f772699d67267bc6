#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Oct 15 11:40:56 2026

Online stage of the heat rod problem: it reads the offline data and certifies the reduced solutions of randomly
generated queries, comparing them with the full-order ones.
Run from the root of the repository as 'python -m examples.heat_rod.main_online', after the Offline stage.
"""

import os
import time
import numpy as np

import certified_rb
from certified_rb.rb_library.rb_evaluation.transient_rb_evaluation import TransientRbEvaluation

import examples.heat_rod.heat_rod_problem as hrp
import examples.heat_rod.config as config

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(certified_rb.__file__)), 'log.cfg')
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def execute(_offline_data_directory=None, _n_queries=None):
    """Read the offline data and solve '_n_queries' online queries for each of the basis dimensions set in the
    configuration file.

    :return: dictionary mapping each basis dimension to the list of the triplets (final error bound, final output
        error, final output error bound)
    :rtype: dict
    """

    offline_data_directory = _offline_data_directory if _offline_data_directory is not None \
        else config.offline_data_directory
    n_queries = _n_queries if _n_queries is not None else config.n_online_queries

    my_problem = hrp.HeatRodProblem(config.n_nodes, config.param_min, config.param_max)

    my_evaluation = TransientRbEvaluation(my_problem.theta_expansion, _n_max=config.N_max,
                                          _stability_lower_bound=hrp.heat_rod_stability_lower_bound)
    my_evaluation.read_offline_data_from_files(offline_data_directory)
    my_evaluation.print_rb_online_summary()

    results = {N: [] for N in config.N_online}

    for iQ in range(n_queries):
        param = my_problem.parameter_handler.generate_parameter(seed=config.online_seed + iQ)
        my_problem.parameter_handler.print_parameters()
        my_evaluation.set_parameters(param)

        fom_solutions = my_problem.solve_fom_problem(param, my_evaluation.temporal_discretization)

        for N in config.N_online:
            start = time.time()
            error_bound = my_evaluation.rb_solve(N)
            elapsed_time = time.time() - start

            final_output = my_evaluation.RB_outputs_all_k[0, -1]
            fom_output = my_problem.compute_output(fom_solutions[:, -1])

            logger.info(f"Query {iQ}, N = {N}: error bound {error_bound:.4e}, "
                        f"output {np.real(final_output):.6f} (FOM {fom_output:.6f}, "
                        f"bound {my_evaluation.RB_output_error_bounds_all_k[0, -1]:.4e}), "
                        f"reduced L2 norm {my_evaluation.compute_rb_L2_norms_all_k()[-1]:.4e}, "
                        f"online time {elapsed_time:.4e} s")

            results[N].append((error_bound, np.abs(fom_output - np.real(final_output)),
                               my_evaluation.RB_output_error_bounds_all_k[0, -1]))

    return results


if __name__ == "__main__":
    execute()
