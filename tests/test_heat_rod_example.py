#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os

import numpy as np
import pytest

import examples.heat_rod.config as config
import examples.heat_rod.heat_rod_problem as hrp
import examples.heat_rod.main_offline as main_offline
import examples.heat_rod.main_online as main_online
from certified_rb.rb_library.rb_evaluation.transient_rb_evaluation import TransientRbEvaluation


@pytest.fixture(scope="module")
def offline_data_directory(tmp_path_factory):
    directory = os.path.join(tmp_path_factory.mktemp("heat_rod"), "offline_data")
    main_offline.execute(directory)
    return directory


def test_offline_files_are_written(offline_data_directory):
    for file_name in ['dimensions.json', 'transient_dimensions.json', 'temporal_discretization.json',
                      'control.npy', 'RB_Aq_vector.npy', 'Aq_Mq_representor_norms.npy',
                      'Aq_riesz_representors.h5', 'Mq_riesz_representors.h5']:
        assert os.path.isfile(os.path.join(offline_data_directory, file_name)), file_name


def test_online_queries(offline_data_directory):
    results = main_online.execute(offline_data_directory, _n_queries=2)

    assert sorted(results.keys()) == sorted(config.N_online)
    for N, query_results in results.items():
        assert len(query_results) == 2
        for error_bound, output_error, output_error_bound in query_results:
            assert np.isfinite(error_bound) and error_bound >= 0.0
            assert np.isfinite(output_error_bound) and output_error_bound >= 0.0
            assert np.isfinite(output_error)


def test_reduced_output_is_accurate(offline_data_directory):
    problem = hrp.HeatRodProblem(config.n_nodes, config.param_min, config.param_max)
    evaluation = TransientRbEvaluation(problem.theta_expansion, _n_max=config.N_max,
                                       _stability_lower_bound=hrp.heat_rod_stability_lower_bound)
    evaluation.read_offline_data_from_files(offline_data_directory, _read_representors=True)

    param = problem.parameter_handler.generate_parameter(seed=config.online_seed)
    evaluation.set_parameters(param)
    fom_output = problem.compute_output(problem.solve_fom_problem(param, evaluation.temporal_discretization)[:, -1])

    evaluation.rb_solve(config.N_max)

    assert np.abs(evaluation.RB_outputs_all_k[0, -1] - fom_output) <= 0.1 * np.abs(fom_output)
    assert evaluation.M_q_representor[0][0].shape == (config.n_nodes,)
