"""
Streak Aggregator Module

Accumulates run-length statistics over the ordered daily records of one tank
capacity and reduces them to a CapacitySummary.

Tracked runs:
    - failed: no water served at all
    - unmet: demand not fully met (includes failed days)
    - met: demand fully met
    - overflow: water lost through overflow, with event volumes
"""
from dataclasses import dataclass
from typing import Callable, Optional

from rwhsim.data_structures import DailyRecord, CapacitySummary
from rwhsim.errors import DataError


def _is_failed(record: DailyRecord) -> bool:
    return record.demand_failed

def _is_unmet(record: DailyRecord) -> bool:
    return not record.demand_met

def _is_met(record: DailyRecord) -> bool:
    return record.demand_met

def _is_overflowing(record: DailyRecord) -> bool:
    return record.overflow > 0

def _overflow_volume(record: DailyRecord) -> float:
    return record.overflow


@dataclass
class RunLengthTracker:
    """
    Run-length statistics for days satisfying a predicate.

    With a magnitude accessor the tracker also sums a per-day quantity over each
    run. The maximum is compared against the running sum every day, so it holds
    the largest partial sum reached within any single run.
    """
    predicate: Callable[[DailyRecord], bool]
    magnitude: Optional[Callable[[DailyRecord], float]] = None

    current: int = 0
    longest: int = 0
    events: int = 0
    days: int = 0

    running_magnitude: float = 0.0
    max_magnitude: float = 0.0
    total_magnitude: float = 0.0

    def update(self, record: DailyRecord) -> None:
        if not self.predicate(record):
            self.current = 0
            self.running_magnitude = 0.0
            return

        if self.current == 0:
            self.events += 1
        self.current += 1
        self.days += 1
        self.longest = max(self.longest, self.current)

        if self.magnitude is not None:
            value = self.magnitude(record)
            self.running_magnitude += value
            self.total_magnitude += value
            self.max_magnitude = max(self.max_magnitude, self.running_magnitude)

    @property
    def average_length(self) -> float:
        """Mean run length [days], 0 without any run"""
        return self.days / self.events if self.events > 0 else 0.0

    @property
    def average_magnitude(self) -> float:
        """Mean summed magnitude per run, 0 without any run"""
        return self.total_magnitude / self.events if self.events > 0 else 0.0


class StreakAggregator:
    """Consumes the daily records of one capacity, in day order."""

    def __init__(self, capacity: float, demand: float, drought_max: int):
        self.capacity = capacity
        self.demand = demand
        self.drought_max = drought_max

        self.failed = RunLengthTracker(_is_failed)
        self.unmet = RunLengthTracker(_is_unmet)
        self.met = RunLengthTracker(_is_met)
        self.overflow = RunLengthTracker(_is_overflowing, magnitude=_overflow_volume)

        self.days = 0
        self.total_inflow = 0.0
        self.total_served = 0.0
        self.total_overflow = 0.0

    def add(self, record: DailyRecord) -> None:
        self.days += 1
        self.total_inflow += record.inflow
        self.total_served += record.served
        self.total_overflow += record.overflow

        for tracker in (self.failed, self.unmet, self.met, self.overflow):
            tracker.update(record)

    def finalize(self) -> CapacitySummary:
        """
        Reduce the accumulated statistics.

        Raises:
            DataError: if no day was added
        """
        if self.days == 0:
            raise DataError(f"No daily records for capacity {self.capacity}")

        overflow_fraction = (self.total_overflow / self.total_inflow
                             if self.total_inflow > 0 else 0.0)

        return CapacitySummary(
            capacity=self.capacity,
            days_total=self.days,
            drought_max=self.drought_max,
            temporal_reliability=self.met.days / self.days,
            volumetric_reliability=self.total_served / (self.demand * self.days),
            overflow_fraction=overflow_fraction,
            failure_fraction=self.failed.days / self.days,
            failed_max=self.failed.longest,
            failed_average=self.failed.average_length,
            unmet_max=self.unmet.longest,
            unmet_average=self.unmet.average_length,
            met_max=self.met.longest,
            met_average=self.met.average_length,
            overflow_days_max=self.overflow.longest,
            overflow_days_average=self.overflow.average_length,
            overflow_volume_max=self.overflow.max_magnitude,
            overflow_volume_average=self.overflow.average_magnitude
        )
