import os
import sys
import textwrap

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from rwhsim.data_structures import PhysicalParameters, DailyRecord

@pytest.fixture
def simple_params():
    """10 mm of rain nets exactly 0.5 m³; demand 0.04 m³/day"""
    return PhysicalParameters(
        roof_area=50.0,
        runoff_coefficient=1.0,
        first_flush=0.0,
        filter_loss=0.0,
        demand=0.04,
    )

@pytest.fixture
def sydney_params():
    return PhysicalParameters(
        roof_area=50.0,
        runoff_coefficient=0.85,
        first_flush=0.75,
        filter_loss=0.1,
        demand=0.0395,
    )

@pytest.fixture
def rainfall():
    """Three years of synthetic daily rainfall: dry spells and storm bursts."""
    rng = np.random.default_rng(42)
    wet = rng.random(3 * 365) < 0.3
    depth = rng.exponential(8.0, 3 * 365)
    series = np.where(wet, depth, 0.0)
    series[100:160] = 0.0
    series[99] = series[160] = 5.0
    return series

@pytest.fixture
def config_dir(tmp_path):
    """Configuration directory with a headerless rainfall file."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    values = [0, 0, 12.5, 3.0, 0, 0, 0, 25.0, 0.2, 0] * 10
    (data_dir / "rain.csv").write_text("\n".join(str(v) for v in values) + "\n")

    config = textwrap.dedent(f"""\
        default:
          input_directory: {data_dir}
          output:
            directory: {tmp_path / 'results'}
          files:
            rainfall: rain.csv
          forcing:
            header: false
            column: 0
            date_column: null
          parameters:
            roof_area: 50
            runoff_coefficient: 0.85
            first_flush: 0.75
            filter_loss: 0.1
            demand: 39.5
            demand_unit: L
          capacity:
            unit: m3
            start: 0.25
            end: 2.0
            step: 0.25
            selected: [0.5, 1]

        small:
          capacity:
            end: 0.5
        """)
    (tmp_path / "config.yaml").write_text(config)

    scenarios = textwrap.dedent("""\
        scenarios:
          enabled: true
          active_scenarios: [default, dry]
          dry:
            description: 50% less precipitation
            precipitation_factor: 0.5
        """)
    (tmp_path / "scenarios.yaml").write_text(scenarios)
    return tmp_path

def make_record(day, served, demand=0.04, overflow=0.0, inflow=0.0, stored=0.0, capacity=1.0):
    return DailyRecord(
        day=day,
        capacity=capacity,
        inflow=inflow,
        served=served,
        stored=stored,
        overflow=overflow,
        demand_met=served == demand,
        demand_failed=served == 0,
    )

@pytest.fixture
def record_factory():
    return make_record
