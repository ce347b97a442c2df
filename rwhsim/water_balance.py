"""
Rain Tank Water Balance Module

This module runs the daily rain tank water balance over a range of storage
capacities and collects reliability, supply and overflow statistics.

The simulation process includes:
1. Validation of the rainfall series and of the capacities
2. Longest dry period of the rainfall series (once per dataset)
3. Time-stepping through the rainfall series for each capacity, carrying the
   storage from one day to the next
4. Aggregating the daily results into one summary per capacity
5. Converting the summaries and selected daily traces to DataFrames
"""

from typing import Dict, List, Optional, Sequence
from dataclasses import asdict, fields
import logging

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from tqdm.auto import tqdm

from rwhsim.components import water_balance_step, longest_drought
from rwhsim.data_structures import PhysicalParameters, CapacityResult, CapacitySummary, DailyRecord
from rwhsim.diagnostics import DiagnosticTracker, check_day
from rwhsim.errors import ConfigurationError, DataError
from rwhsim.streaks import StreakAggregator
from rwhsim.utils import is_notebook

logger = logging.getLogger(__name__)

RANGE_TOLERANCE = 1e-9

RELIABILITY_COLUMNS = ['capacity', 'days_total', 'drought_max', 'temporal_reliability',
                       'volumetric_reliability', 'overflow_fraction', 'failure_fraction']
SUPPLY_COLUMNS = ['capacity', 'failed_max', 'failed_average', 'unmet_max',
                  'unmet_average', 'met_max', 'met_average']
OVERFLOW_COLUMNS = ['capacity', 'overflow_days_max', 'overflow_days_average',
                    'overflow_volume_max', 'overflow_volume_average']

VOLUME_UNIT = 'meter^3'


def capacity_range(start: float, end: float, step: float) -> np.ndarray:
    """
    Capacities start + k * step for k = 0, 1, ... up to and including end.

    Raises:
        ConfigurationError: if the range is empty, not finite or not strictly positive
    """
    if not np.isfinite([start, end, step]).all():
        raise ConfigurationError(f"Capacity range must be finite: start={start}, end={end}, step={step}")
    if step <= 0:
        raise ConfigurationError(f"Capacity step must be positive, got {step}")
    if start <= 0:
        raise ConfigurationError(f"Capacities must be positive, got start={start}")

    count = int(np.floor((end - start) / step * (1 + RANGE_TOLERANCE) + RANGE_TOLERANCE)) + 1
    if count <= 0:
        raise ConfigurationError(f"Empty capacity range: start={start}, end={end}, step={step}")

    return start + np.arange(count) * step

def validate_rainfall(rainfall: Sequence[float]) -> np.ndarray:
    """Return the rainfall series as a float array, rejecting unusable data."""
    values = np.asarray(rainfall, dtype=float)
    if values.size == 0:
        raise DataError("Rainfall series is empty")
    if not np.isfinite(values).all():
        raise DataError(f"Rainfall series has {int((~np.isfinite(values)).sum())} missing or infinite values")
    if (values < 0).any():
        raise DataError(f"Rainfall series has {int((values < 0).sum())} negative values")
    return values

def validate_capacities(capacities: Sequence[float]) -> List[float]:
    capacities = [float(c) for c in capacities]
    if not capacities:
        raise ConfigurationError("No capacities to simulate")
    invalid = [c for c in capacities if not c > 0]
    if invalid:
        raise ConfigurationError(f"Capacities must be positive, got {invalid}")
    return capacities

def is_selected(capacity: float, selected: Optional[Sequence[float]]) -> bool:
    """True if the capacity matches one of the selected capacities."""
    if not selected:
        return False
    return bool(np.isclose(capacity, np.asarray(selected, dtype=float)).any())

def simulate_capacity(rainfall: np.ndarray, params: PhysicalParameters, capacity: float,
                      drought_max: int, keep_daily: bool = False,
                      check: bool = False) -> CapacityResult:
    """
    Run the daily water balance for a single tank capacity.

    The tank starts empty. Each day's end storage is the next day's initial storage.

    Args:
        rainfall: Daily precipitation [mm]
        params: Catchment and demand constants
        capacity: Storage capacity [m³]
        drought_max: Longest dry period of the rainfall series [days]
        keep_daily: Keep the daily records
        check: Check every day against the physical constraints

    Returns:
        CapacityResult with the summary, the daily records if kept and the
        diagnostic violations if checked
    """
    aggregator = StreakAggregator(capacity, params.demand, drought_max)
    daily = [] if keep_daily else None
    issues = []

    previous = 0.0
    for day, precipitation in enumerate(rainfall, start=1):
        record = water_balance_step(previous, float(precipitation), params, capacity, day)
        aggregator.add(record)

        if check:
            issues.extend(check_day(record, previous, params.demand))
        if keep_daily:
            daily.append(record)

        previous = record.stored

    summary = aggregator.finalize()
    logger.debug("capacity=%.3f temporal=%.3f volumetric=%.3f overflow=%.3f",
                 capacity, summary.temporal_reliability,
                 summary.volumetric_reliability, summary.overflow_fraction)

    return CapacityResult(summary=summary, daily=daily, issues=issues)

def run_capacity_sweep(rainfall: Sequence[float], params: PhysicalParameters,
                       capacities: Sequence[float], selected: Optional[Sequence[float]] = None,
                       check: bool = False, n_jobs: int = 1,
                       progress: bool = False) -> List[CapacityResult]:
    """
    Simulate every capacity independently, in parallel.

    Args:
        rainfall: Daily precipitation [mm]
        params: Catchment and demand constants
        capacities: Storage capacities [m³]
        selected: Capacities for which the daily records are kept
        check: Enable diagnostic checks
        n_jobs: Number of parallel jobs
        progress: Show a progress bar

    Returns:
        One CapacityResult per capacity, in the order of ``capacities``
    """
    values = validate_rainfall(rainfall)
    capacities = validate_capacities(capacities)

    drought_max = longest_drought(values)
    logger.info("Simulating %d capacities over %d days (longest dry period: %d days)",
                len(capacities), len(values), drought_max)

    backend = 'threading' if is_notebook() else 'loky'
    results = Parallel(n_jobs=n_jobs, backend=backend, verbose=0, return_as="generator")(
        delayed(simulate_capacity)(values, params, capacity, drought_max,
                                   keep_daily=is_selected(capacity, selected), check=check)
        for capacity in capacities
    )

    return list(tqdm(results, total=len(capacities), desc="Capacity sweep", disable=not progress))

def run_water_balance(rainfall: pd.Series | Sequence[float], params: PhysicalParameters,
                      capacities: Sequence[float], selected: Optional[Sequence[float]] = None,
                      tracker: Optional[DiagnosticTracker] = None, n_jobs: int = 1,
                      progress: bool = False) -> Dict[str, pd.DataFrame]:
    """
    Run the capacity sweep and collect the results as DataFrames.

    Args:
        rainfall: Daily precipitation [mm]
        params: Catchment and demand constants
        capacities: Storage capacities [m³]
        selected: Capacities for which the daily records are kept
        tracker: Diagnostic tracker, enables the daily checks
        n_jobs: Number of parallel jobs
        progress: Show a progress bar

    Returns:
        Dict containing:
            - rainfall: Precipitation series
            - daily: Daily records of the selected capacities
            - reliability, supply, overflow: One row per capacity
            - validation: Diagnostic violations (only with a tracker)
    """
    check = tracker is not None
    results = run_capacity_sweep(rainfall, params, capacities, selected,
                                 check=check, n_jobs=n_jobs, progress=progress)
    df_results = results_to_dataframes(results, rainfall)

    if check:
        tracker.track_diagnostic_results(results)
        df_results['validation'] = tracker.get_results()

    return df_results

def results_to_dataframes(results: List[CapacityResult],
                          rainfall: pd.Series | Sequence[float]) -> Dict[str, pd.DataFrame]:
    """Convert capacity results to DataFrames with pint units."""

    dataframe_results = {}

    if not isinstance(rainfall, pd.Series):
        rainfall = pd.Series(np.asarray(rainfall, dtype=float),
                             index=pd.RangeIndex(1, len(rainfall) + 1, name='day'))
    forcing_df = rainfall.rename('precipitation').to_frame()
    forcing_df['precipitation'] = forcing_df['precipitation'].astype("pint[millimeter]")
    dataframe_results['rainfall'] = forcing_df

    daily_columns = [f.name for f in fields(DailyRecord)]
    daily_rows = [asdict(record) for result in results if result.daily for record in result.daily]
    df_daily = pd.DataFrame(daily_rows, columns=daily_columns)
    df_daily = df_daily.astype({'day': int, 'demand_met': bool, 'demand_failed': bool})
    if isinstance(rainfall.index, pd.DatetimeIndex) and not df_daily.empty:
        df_daily.insert(1, 'date', rainfall.index.to_numpy()[df_daily['day'].to_numpy() - 1])
    df_daily = df_daily.set_index(['capacity', 'day'])
    for col in ['inflow', 'served', 'stored', 'overflow']:
        df_daily[col] = df_daily[col].astype(f"pint[{VOLUME_UNIT}]")
    dataframe_results['daily'] = df_daily

    summaries = pd.DataFrame([asdict(result.summary) for result in results],
                             columns=[f.name for f in fields(CapacitySummary)])
    drought_max = int(summaries['drought_max'].iloc[0]) if not summaries.empty else 0

    for name, columns in [('reliability', RELIABILITY_COLUMNS),
                          ('supply', SUPPLY_COLUMNS),
                          ('overflow', OVERFLOW_COLUMNS)]:
        df = summaries[columns].set_index('capacity')
        df.index = df.index.astype(float)
        df.attrs['drought_max'] = drought_max
        dataframe_results[name] = df

    for col in ['overflow_volume_max', 'overflow_volume_average']:
        dataframe_results['overflow'][col] = dataframe_results['overflow'][col].astype(f"pint[{VOLUME_UNIT}]")

    return dataframe_results
