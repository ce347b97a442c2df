from typing import List, Tuple
import numpy as np
from dynaconf import Dynaconf

from rwhsim.data_structures import PhysicalParameters
from rwhsim.errors import ConfigurationError
from rwhsim.utils import BaseUnit
from rwhsim.water_balance import capacity_range

def _to_cubic_meters(value: float, unit: str) -> float:
    try:
        return BaseUnit.convert(float(value), unit, BaseUnit.CUBIC_METER)
    except ValueError as exc:
        raise ConfigurationError(f"Unsupported volume unit '{unit}'") from exc

def _section(config: Dynaconf, name: str):
    section = config.get(name)
    if section is None:
        raise ConfigurationError(f"Missing '{name}' section in configuration")
    return section

def read_parameters(config: Dynaconf) -> PhysicalParameters:
    """
    Read the physical constants of the catchment and the household.

    Args:
        config (Dynaconf): Configuration object with a 'parameters' section
            roof_area: Roof area per capita [m²]
            runoff_coefficient: Runoff coefficient [-]
            first_flush: First flush diversion [mm]
            filter_loss: Filter loss fraction [-]
            demand: Daily demand per capita, in demand_unit (default: m3)

    Returns:
        PhysicalParameters
    """
    parameters = _section(config, 'parameters')
    try:
        return PhysicalParameters(
            roof_area=float(parameters['roof_area']),
            runoff_coefficient=float(parameters['runoff_coefficient']),
            first_flush=float(parameters['first_flush']),
            filter_loss=float(parameters['filter_loss']),
            demand=_to_cubic_meters(parameters['demand'], parameters.get('demand_unit', 'm3'))
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing parameter {exc}") from exc

def read_capacities(config: Dynaconf) -> Tuple[np.ndarray, List[float]]:
    """
    Read the capacity sweep range and the capacities selected for daily output.

    Returns:
        Tuple of the swept capacities [m³] and the selected capacities [m³]
    """
    capacity = _section(config, 'capacity')
    unit = capacity.get('unit', 'm3')
    try:
        start = _to_cubic_meters(capacity['start'], unit)
        end = _to_cubic_meters(capacity['end'], unit)
        step = _to_cubic_meters(capacity['step'], unit)
    except KeyError as exc:
        raise ConfigurationError(f"Missing capacity setting {exc}") from exc

    selected = [_to_cubic_meters(c, unit) for c in (capacity.get('selected') or [])]

    return capacity_range(start, end, step), selected
