"""
Diagnostic and checking functionality for the rain tank model.

This module provides checking capabilities for the daily water balance:
- Day-level checks (storage bounds, served demand, mass balance)
- Collection of violations across all simulated capacities
- Analysis and reporting functions
"""
from typing import Any, Dict, Iterable, List
from pathlib import Path
import pandas as pd

from rwhsim.data_structures import DailyRecord, CapacityResult

ZERO_THRESHOLD = 1e-10

ISSUE_COLUMNS = ['capacity', 'day', 'issue_type', 'description', 'value', 'limit']


def check_day(record: DailyRecord, previous: float, demand: float) -> List[Dict[str, Any]]:
    """
    Check one simulated day against the physical constraints of the tank.

    Args:
        record: Result of the daily balance step
        previous: Storage at the end of the previous day [m³]
        demand: Daily demand [m³]

    Returns:
        List of violations, empty when the day is consistent:
        - negative_storage: storage below zero
        - exceeds_capacity: storage above the tank capacity
        - exceeds_demand: more water served than demanded
        - balance: previous + inflow - served - overflow - stored differs from zero
    """
    issues = []

    def _issue(issue_type: str, description: str, value: float, limit: float) -> None:
        issues.append({
            'capacity': record.capacity,
            'day': record.day,
            'issue_type': issue_type,
            'description': description,
            'value': value,
            'limit': limit
        })

    if record.stored < -ZERO_THRESHOLD:
        _issue('negative_storage', "Storage below zero", record.stored, 0.0)

    if record.stored > record.capacity + ZERO_THRESHOLD:
        _issue('exceeds_capacity', "Storage above tank capacity", record.stored, record.capacity)

    if record.served > demand + ZERO_THRESHOLD:
        _issue('exceeds_demand', "Served volume above demand", record.served, demand)

    balance = previous + record.inflow - record.served - record.overflow - record.stored
    total_magnitude = previous + record.inflow
    if abs(balance) > ZERO_THRESHOLD * max(1.0, total_magnitude):
        _issue('balance', "Water balance not closed", balance, 0.0)

    return issues


class DiagnosticTracker:

    def __init__(self):
        """Initialize empty diagnostic history."""
        self.history = []

    def track_diagnostic_results(self, results: Iterable[CapacityResult]) -> None:
        """Store the violations found while simulating each capacity."""
        for result in results:
            self.history.extend(result.issues)

    def get_results(self) -> pd.DataFrame:
        """Get the complete diagnostic history as a DataFrame."""
        return pd.DataFrame(self.history, columns=ISSUE_COLUMNS)

    def generate_report(self, output_dir: Path) -> None:
        """
        Generate CSV reports of diagnostic results.

        Args:
            output_dir: Directory to save the reports
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        df = self.get_results()
        if df.empty:
            return

        df['magnitude'] = df['value'].astype(float).abs()
        summary = df.groupby('issue_type').agg(
            count=('day', 'size'),
            capacities=('capacity', 'nunique'),
            max_magnitude=('magnitude', 'max')
        )
        summary.to_csv(output_dir / 'violations_summary.csv')
        df.drop(columns='magnitude').to_csv(output_dir / 'violations.csv', index=False)
