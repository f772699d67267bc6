#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Oct 15 11:02:17 2026

Offline stage of the heat rod problem: it computes the reduced quantities and writes them to files.
Run from the root of the repository as 'python -m examples.heat_rod.main_offline'.
"""

import os

import certified_rb
from certified_rb.rb_library.rb_evaluation.transient_rb_evaluation import TransientRbEvaluation

import examples.heat_rod.heat_rod_problem as hrp
import examples.heat_rod.config as config

import logging.config

log_file_path = os.path.join(os.path.dirname(os.path.abspath(certified_rb.__file__)), 'log.cfg')
logging.config.fileConfig(log_file_path, disable_existing_loggers=False)
logger = logging.getLogger(__name__)


def execute(_offline_data_directory=None):
    """Run the Offline stage and write the offline data to '_offline_data_directory' (defaults to the directory
    set in the configuration file)
    """

    offline_data_directory = _offline_data_directory if _offline_data_directory is not None \
        else config.offline_data_directory

    my_problem = hrp.HeatRodProblem(config.n_nodes, config.param_min, config.param_max)

    my_evaluation = TransientRbEvaluation(my_problem.theta_expansion,
                                          _stability_lower_bound=hrp.heat_rod_stability_lower_bound)
    my_evaluation.temporal_discretization.configure(config.time_specifics)

    my_problem.build_offline_data(my_evaluation, config.n_snapshots, config.N_max, seed=config.offline_seed)

    my_evaluation.write_offline_data_to_files(offline_data_directory,
                                              _write_representors=config.write_representors)

    my_evaluation.print_rb_online_summary()

    return


if __name__ == "__main__":
    execute()
