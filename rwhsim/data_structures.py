from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rwhsim.errors import ConfigurationError


@dataclass(frozen=True)
class PhysicalParameters:
    """
    Catchment and household constants, fixed for a whole run.

    All quantities are per capita.
    """
    roof_area: float = field(metadata={'unit': 'm^2'})
    runoff_coefficient: float = field(metadata={'unit': '-'})
    first_flush: float = field(metadata={'unit': 'mm'})
    filter_loss: float = field(metadata={'unit': '-'})
    demand: float = field(metadata={'unit': 'm^3/d'})

    def __post_init__(self):
        if self.roof_area <= 0:
            raise ConfigurationError(f"Roof area must be positive, got {self.roof_area}")
        if self.demand <= 0:
            raise ConfigurationError(f"Daily demand must be positive, got {self.demand}")
        if not 0 <= self.runoff_coefficient <= 1:
            raise ConfigurationError(f"Runoff coefficient must lie in [0, 1], got {self.runoff_coefficient}")
        if not 0 <= self.filter_loss <= 1:
            raise ConfigurationError(f"Filter loss must lie in [0, 1], got {self.filter_loss}")
        if self.first_flush < 0:
            raise ConfigurationError(f"First flush depth cannot be negative, got {self.first_flush}")


@dataclass(frozen=True)
class DailyRecord:
    """Rain tank state at the end of one simulated day"""
    day: int
    capacity: float = field(metadata={'unit': 'm^3'})
    inflow: float = field(metadata={'unit': 'm^3'})
    served: float = field(metadata={'unit': 'm^3'})
    stored: float = field(metadata={'unit': 'm^3'})
    overflow: float = field(metadata={'unit': 'm^3'})
    demand_met: bool
    demand_failed: bool


@dataclass(frozen=True)
class CapacitySummary:
    """Reliability, supply and overflow statistics of one tank capacity"""
    capacity: float = field(metadata={'unit': 'm^3'})
    days_total: int
    drought_max: int

    # Reliability
    temporal_reliability: float
    volumetric_reliability: float
    overflow_fraction: float
    failure_fraction: float

    # Supply streaks [days]
    failed_max: int
    failed_average: float
    unmet_max: int
    unmet_average: float
    met_max: int
    met_average: float

    # Overflow events
    overflow_days_max: int
    overflow_days_average: float
    overflow_volume_max: float = field(metadata={'unit': 'm^3'})
    overflow_volume_average: float = field(metadata={'unit': 'm^3'})


@dataclass
class CapacityResult:
    """Output of a single capacity simulation"""
    summary: CapacitySummary
    daily: Optional[List[DailyRecord]] = None
    issues: List[Dict[str, Any]] = field(default_factory=list)
