#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import numpy as np
import pytest

from certified_rb.rb_library.temporal_discretization import TemporalDiscretization


def test_default_values():
    td = TemporalDiscretization()

    assert td.get_delta_t() == 0.0
    assert td.get_euler_theta() == 0.0
    assert td.get_time_step() == 0
    assert td.get_n_time_steps() == 0
    assert np.array_equal(td.get_control_sequence(), np.ones(1))


@pytest.mark.parametrize("euler_theta", [0.0, 0.5, 1.0])
def test_valid_euler_theta(euler_theta):
    td = TemporalDiscretization()
    td.set_euler_theta(euler_theta)
    assert td.get_euler_theta() == euler_theta


@pytest.mark.parametrize("euler_theta", [-0.1, 1.1])
def test_invalid_euler_theta(euler_theta):
    td = TemporalDiscretization()
    with pytest.raises(AssertionError):
        td.set_euler_theta(euler_theta)


def test_time_step_beyond_number_of_steps():
    td = TemporalDiscretization()
    td.set_n_time_steps(10)
    td.set_time_step(10)
    assert td.get_time_step() == 10

    with pytest.raises(AssertionError):
        td.set_time_step(11)
    with pytest.raises(AssertionError):
        td.set_time_step(-1)


@pytest.mark.parametrize("delta_t", [0.0, -0.1])
def test_non_positive_delta_t(delta_t):
    td = TemporalDiscretization()
    with pytest.raises(AssertionError):
        td.set_delta_t(delta_t)


def test_reducing_the_number_of_steps_clamps_the_current_step():
    td = TemporalDiscretization()
    td.set_n_time_steps(10)
    td.set_time_step(8)
    td.set_n_time_steps(5)

    assert td.get_time_step() == 5
    assert td.get_control_sequence().shape == (6,)

    with pytest.raises(AssertionError):
        td.set_n_time_steps(-1)


def test_blended_control():
    td = TemporalDiscretization()
    td.set_n_time_steps(3)
    td.set_euler_theta(0.25)
    td.set_control([1.0, 2.0, 4.0, 8.0])

    assert td.get_blended_control(1) == pytest.approx(0.25 * 2.0 + 0.75 * 1.0)
    assert td.get_blended_control(3) == pytest.approx(0.25 * 8.0 + 0.75 * 4.0)
    assert td.get_control(2) == 4.0

    with pytest.raises(AssertionError):
        td.get_blended_control(0)
    with pytest.raises(AssertionError):
        td.set_control([1.0, 2.0])


def test_configure_from_final_time():
    td = TemporalDiscretization()
    td.configure({'final_time': 1.0, 'number_of_time_instances': 20, 'theta': 0.5})

    assert td.get_delta_t() == pytest.approx(0.05)
    assert td.get_n_time_steps() == 20
    assert td.get_euler_theta() == 0.5
    assert td.final_time == pytest.approx(1.0)
    assert np.allclose(td.time_levels(), np.linspace(0.0, 1.0, 21))


def test_configure_from_delta_t_keeps_theta():
    td = TemporalDiscretization()
    td.set_euler_theta(1.0)
    td.configure({'delta_t': 0.1, 'number_of_time_instances': 10})

    assert td.get_delta_t() == 0.1
    assert td.get_euler_theta() == 1.0
    assert td.get_time_step() == 0


def test_configure_with_missing_fields():
    td = TemporalDiscretization()

    with pytest.raises(ValueError):
        td.configure({'final_time': 1.0})
    with pytest.raises(ValueError):
        td.configure({'number_of_time_instances': 10})


def test_clear():
    td = TemporalDiscretization()
    td.configure({'delta_t': 0.1, 'number_of_time_instances': 10, 'theta': 1.0})
    td.set_time_step(4)
    td.clear()

    assert td.as_dict() == TemporalDiscretization().as_dict()
    assert np.array_equal(td.get_control_sequence(), np.ones(1))


def test_copy_from_keeps_the_object():
    source = TemporalDiscretization()
    source.configure({'delta_t': 0.1, 'number_of_time_instances': 4, 'theta': 1.0})
    source.set_control([1.0, 2.0, 3.0, 4.0, 5.0])
    source.set_time_step(2)

    td = TemporalDiscretization()
    reference = td
    td.copy_from(source)

    assert td is reference
    assert td.as_dict() == source.as_dict()
    assert np.array_equal(td.get_control_sequence(), source.get_control_sequence())

    source.set_control(np.zeros(5))
    assert td.get_control(4) == 5.0
