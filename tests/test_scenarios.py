import numpy as np
import pandas as pd
import pytest

from rwhsim.forcing import read_forcing
from rwhsim.read_data import read_parameters, read_capacities
from rwhsim.scenario_manager import Scenario, ScenarioManager
from rwhsim.utils import load_config


def test_scenario_modifies_params(sydney_params):
    scenario = Scenario(name='crowded', description='', demand_factor=2.0, roof_area_factor=0.5)
    params = scenario.modify_params(sydney_params)

    assert params.demand == pytest.approx(0.079)
    assert params.roof_area == 25.0
    assert params.runoff_coefficient == sydney_params.runoff_coefficient
    assert sydney_params.roof_area == 50.0

def test_scenario_modifies_forcing_copy():
    forcing = pd.Series([0.0, 10.0, 4.0], name='precipitation')
    scenario = Scenario(name='dry', description='', precipitation_factor=0.5)

    modified = scenario.modify_forcing(forcing)
    assert list(modified) == [0.0, 5.0, 2.0]
    assert list(forcing) == [0.0, 10.0, 4.0]

def test_update_from_dict_ignores_unknown_keys():
    scenario = Scenario(name='wet', description='')
    scenario.update_from_dict({'precipitation_factor': 1.2, 'unknown': 3})
    assert scenario.precipitation_factor == 1.2
    assert not hasattr(scenario, 'unknown')

def test_manager_from_config(config_dir):
    manager = ScenarioManager.from_config(load_config(config_dir, base_config="scenarios.yaml"))

    assert list(manager.scenarios) == ['default', 'dry']
    assert manager.get_scenario('dry').precipitation_factor == 0.5
    assert manager.get_scenario('default').precipitation_factor == 1.0
    assert manager.get_scenario('missing') is None

def test_run_scenarios(config_dir):
    config = load_config(config_dir)
    capacities, selected = read_capacities(config)
    manager = ScenarioManager.from_config(load_config(config_dir, base_config="scenarios.yaml"))

    results = manager.run_scenarios(read_parameters(config), read_forcing(config),
                                    capacities, selected, n_jobs=1)

    assert set(results) == {'default', 'dry'}
    default = results['default']['reliability']
    dry = results['dry']['reliability']
    assert 'validation' not in results['default']
    assert (dry['temporal_reliability'].to_numpy() <= default['temporal_reliability'].to_numpy()).all()
    assert (dry['volumetric_reliability'].to_numpy()
            <= default['volumetric_reliability'].to_numpy() + 1e-12).all()
    np.testing.assert_allclose(dry.index, default.index)
