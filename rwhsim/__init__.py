# rwhsim/__init__.py

# Import main components
from .data_structures import PhysicalParameters, DailyRecord, CapacitySummary, CapacityResult
from .components import water_balance_step, longest_drought
from .streaks import RunLengthTracker, StreakAggregator
from .water_balance import run_water_balance, run_capacity_sweep, capacity_range
from .errors import ConfigurationError, DataError

# Import subpackages
from . import components
from . import diagnostics

# Define version
__version__ = "0.1.0"

# Define all importable names
__all__ = [
    "PhysicalParameters",
    "DailyRecord",
    "CapacitySummary",
    "CapacityResult",
    "water_balance_step",
    "longest_drought",
    "RunLengthTracker",
    "StreakAggregator",
    "run_water_balance",
    "run_capacity_sweep",
    "capacity_range",
    "ConfigurationError",
    "DataError"
]

# Package metadata
__description__ = "Rainwater harvesting tank sizing model"
