import textwrap

import numpy as np
import pandas as pd
import pytest

from rwhsim.errors import ConfigurationError, DataError
from rwhsim.forcing import read_forcing
from rwhsim.postprocess import write_tables
from rwhsim.read_data import read_parameters, read_capacities
from rwhsim.summary import write_summary
from rwhsim.utils import load_config, save_results, load_results, is_notebook
from rwhsim.utils.load_files import _deep_merge
from rwhsim.water_balance import run_water_balance

# ---- Helpers ----
def _write_config(tmp_path, body):
    (tmp_path / "config.yaml").write_text(textwrap.dedent(body))
    return load_config(tmp_path)

def _rain_config(tmp_path, content, forcing="header: false"):
    (tmp_path / "rain.csv").write_text(content)
    return _write_config(tmp_path, f"""\
        default:
          input_directory: {tmp_path}
          files:
            rainfall: rain.csv
          forcing:
            {forcing}
        """)

@pytest.fixture
def results(config_dir):
    config = load_config(config_dir)
    capacities, selected = read_capacities(config)
    return run_water_balance(read_forcing(config), read_parameters(config), capacities, selected)

# ---- Configuration ----
def test_read_parameters_converts_demand(config_dir):
    params = read_parameters(load_config(config_dir))
    assert params.roof_area == 50.0
    assert params.runoff_coefficient == 0.85
    assert params.first_flush == 0.75
    assert params.filter_loss == 0.1
    assert params.demand == pytest.approx(0.0395)

def test_read_capacities(config_dir):
    capacities, selected = read_capacities(load_config(config_dir))
    np.testing.assert_allclose(capacities, [0.25, 0.5, 0.75, 1.0, 1.25, 1.5, 1.75, 2.0])
    assert selected == [0.5, 1.0]

def test_environment_overrides_default(config_dir):
    capacities, _ = read_capacities(load_config(config_dir, env="small"))
    np.testing.assert_allclose(capacities, [0.25, 0.5])

def test_unknown_environment(config_dir):
    with pytest.raises(ConfigurationError, match="sydny"):
        load_config(config_dir, env="sydny")

def test_config_without_mapping(tmp_path):
    (tmp_path / "config.yaml").write_text("")
    with pytest.raises(ConfigurationError):
        load_config(tmp_path)

def test_deep_merge_keeps_defaults():
    default = {"capacity": {"start": 0.25, "end": 35}, "files": {"rainfall": "a.csv"}}
    merged = _deep_merge(default, {"capacity": {"end": 0.5}})
    assert merged == {"capacity": {"start": 0.25, "end": 0.5}, "files": {"rainfall": "a.csv"}}
    assert default["capacity"]["end"] == 35

def test_not_in_notebook():
    assert is_notebook() is False

def test_missing_parameter(tmp_path):
    config = _write_config(tmp_path, """\
        default:
          parameters:
            roof_area: 50
            runoff_coefficient: 0.85
            first_flush: 0.75
            filter_loss: 0.1
        """)
    with pytest.raises(ConfigurationError):
        read_parameters(config)

@pytest.mark.parametrize("name, value", [
    ("demand", 0), ("roof_area", -5), ("runoff_coefficient", 1.5), ("first_flush", -1),
    ("filter_loss", 1.2),
])
def test_invalid_parameter(tmp_path, name, value):
    parameters = {"roof_area": 50, "runoff_coefficient": 0.85, "first_flush": 0.75,
                  "filter_loss": 0.1, "demand": 0.0395}
    parameters[name] = value
    lines = "\n".join(f"    {k}: {v}" for k, v in parameters.items())
    config = _write_config(tmp_path, "default:\n  parameters:\n" + lines + "\n")
    with pytest.raises(ConfigurationError):
        read_parameters(config)

def test_empty_capacity_range(tmp_path):
    config = _write_config(tmp_path, """\
        default:
          capacity:
            start: 2.0
            end: 1.0
            step: 0.5
        """)
    with pytest.raises(ConfigurationError):
        read_capacities(config)

def test_unknown_volume_unit(tmp_path):
    config = _write_config(tmp_path, """\
        default:
          capacity:
            unit: gallon
            start: 1.0
            end: 2.0
            step: 0.5
        """)
    with pytest.raises(ConfigurationError):
        read_capacities(config)

# ---- Forcing ----
def test_read_forcing_headerless(config_dir):
    rainfall = read_forcing(load_config(config_dir))
    assert len(rainfall) == 100
    assert rainfall.index[0] == 1
    assert rainfall.iloc[2] == 12.5
    assert rainfall.attrs['dataset'] == 'rain.csv'

def test_read_forcing_with_dates(tmp_path):
    config = _rain_config(tmp_path, "Date,P\n2001-01-01,0\n2001-01-02,4.5\n",
                          forcing="{header: true, column: P, date_column: Date}")
    rainfall = read_forcing(config)
    assert list(rainfall) == [0.0, 4.5]
    assert rainfall.index[1] == pd.Timestamp("2001-01-02")

@pytest.mark.parametrize("content", ["1.0\nabc\n2.0\n", "1.0\n-2.0\n", "1.0\ninf\n2.0\n", ""])
def test_read_forcing_invalid(tmp_path, content):
    config = _rain_config(tmp_path, content)
    with pytest.raises(DataError):
        read_forcing(config)

def test_read_forcing_missing_file(tmp_path):
    config = _write_config(tmp_path, f"""\
        default:
          input_directory: {tmp_path}
          files:
            rainfall: missing.csv
        """)
    with pytest.raises(FileNotFoundError):
        read_forcing(config)

# ---- Outputs ----
def test_tables_round_trip(results, tmp_path):
    write_tables(results, tmp_path)

    reliability = pd.read_csv(tmp_path / "reliability_results.csv", index_col=0,
                              float_precision='round_trip')
    expected = results['reliability']
    assert np.array_equal(reliability.index.to_numpy(), expected.index.to_numpy())
    assert np.array_equal(reliability.to_numpy(), expected.to_numpy())

    overflow = pd.read_csv(tmp_path / "overflow_results.csv", index_col=0,
                           float_precision='round_trip')
    assert "overflow_volume_max [m³]" in overflow.columns
    assert np.array_equal(overflow["overflow_volume_max [m³]"].to_numpy(),
                          results['overflow']['overflow_volume_max'].pint.magnitude.to_numpy())

    daily = pd.read_csv(tmp_path / "daily_results.csv", index_col=[0, 1])
    assert len(daily) == 200
    assert "stored [m³]" in daily.columns

def test_write_summary(results, tmp_path):
    output_file = tmp_path / "summary.txt"
    write_summary(results, output_file, "rain.csv")
    text = output_file.read_text(encoding="utf8")
    assert "rain.csv" in text
    assert "Longest dry period" in text
    assert "Storage capacity 0.250 m³" in text
    assert "Daily Trace (capacity 0.500 m³)" in text

def test_save_and_load_results(results, tmp_path):
    results_file = tmp_path / "simulation_results.h5"
    save_results(results, results_file)
    loaded = load_results(results_file)

    assert set(loaded) == {'rainfall', 'daily', 'reliability', 'supply', 'overflow'}
    assert np.array_equal(loaded['reliability'].to_numpy(), results['reliability'].to_numpy())
    assert loaded['reliability'].attrs['drought_max'] == results['reliability'].attrs['drought_max']
    assert str(loaded['daily']['stored'].pint.units) == 'meter ** 3'
    np.testing.assert_array_equal(loaded['daily']['stored'].pint.magnitude.to_numpy(),
                                  results['daily']['stored'].pint.magnitude.to_numpy())

def test_load_missing_results(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_results(tmp_path / "missing.h5")
