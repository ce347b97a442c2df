from pathlib import Path
from typing import Dict, Optional
import pandas as pd

def write_summary(results: Dict[str, pd.DataFrame], output_file: Path,
                  dataset: Optional[str] = None, n_capacities: int = 3, n_days: int = 5) -> None:
    """
    Write a text summary of the capacity sweep.

    Args:
        results (Dict[str, pd.DataFrame]): Result DataFrames from run_water_balance
        output_file (Path): Path to save the summary file
        dataset (str): Name of the precipitation dataset
        n_capacities (int): Number of capacities detailed
        n_days (int): Number of days shown from the first daily trace

    Returns:
        None
    """
    reliability = results['reliability']
    supply = results['supply']
    overflow = results['overflow']
    daily = results.get('daily', pd.DataFrame())

    with open(output_file, 'w', encoding="utf8") as f:
        f.write("=" * 50 + "\n\n")
        f.write("Rain Tank Sizing Summary\n")
        f.write("=" * 50 + "\n\n")

        if dataset:
            f.write(f"{'Dataset':22s}: {dataset}\n")
        f.write(f"{'Number of days':22s}: {int(reliability['days_total'].iloc[0])}\n")
        f.write(f"{'Longest dry period':22s}: {reliability.attrs.get('drought_max', 0)} days\n")
        f.write(f"{'Capacities simulated':22s}: {len(reliability)} "
                f"({reliability.index.min():.3f} to {reliability.index.max():.3f} m³)\n")

        if not daily.empty:
            capacity = daily.index.get_level_values('capacity')[0]
            trace = daily.xs(capacity, level='capacity').head(n_days)
            f.write(f"\nDaily Trace (capacity {capacity:.3f} m³)\n")
            f.write("-" * 25 + "\n")
            for day, row in trace.iterrows():
                f.write(f"Day {day}: served = {row['served']:.3f~P}, "
                        f"overflow = {row['overflow']:.3f~P}, "
                        f"stored = {row['stored']:.3f~P}\n")

        for capacity in reliability.index[:n_capacities]:
            rel = reliability.loc[capacity]
            sup = supply.loc[capacity]
            ovf = overflow.loc[capacity]

            f.write(f"\nStorage capacity {capacity:.3f} m³\n")
            f.write("-" * 25 + "\n")
            f.write(f"{'Temporal reliability':22s}: {rel['temporal_reliability']:.3f}\n")
            f.write(f"{'Volumetric reliability':22s}: {rel['volumetric_reliability']:.3f}\n")
            f.write(f"{'Overflow fraction':22s}: {rel['overflow_fraction']:.3f}\n")
            f.write(f"{'Total failure fraction':22s}: {rel['failure_fraction']:.3f}\n")
            f.write(f"{'Days failed':22s}: max {int(sup['failed_max'])}, "
                    f"average {sup['failed_average']:.2f}\n")
            f.write(f"{'Days unmet':22s}: max {int(sup['unmet_max'])}, "
                    f"average {sup['unmet_average']:.2f}\n")
            f.write(f"{'Days met':22s}: max {int(sup['met_max'])}, "
                    f"average {sup['met_average']:.2f}\n")
            f.write(f"{'Overflow days':22s}: max {int(ovf['overflow_days_max'])}, "
                    f"average {ovf['overflow_days_average']:.3f}\n")
            f.write(f"{'Overflow volume':22s}: max {ovf['overflow_volume_max']:.3f~P}, "
                    f"average {ovf['overflow_volume_average']:.3f~P}\n")
