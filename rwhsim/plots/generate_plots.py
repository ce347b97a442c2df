from typing import Dict
from pathlib import Path
import pandas as pd

import matplotlib.pyplot as plt
import seaborn as sns

def _set_style() -> None:
    custom_params = {"axes.spines.bottom": False, "axes.spines.top": False,
                     "axes.spines.right": False, "axes.spines.left": False}
    sns.set_theme(context='notebook', style='ticks', palette='colorblind',
                  font='serif', font_scale=0.8, rc=custom_params)

    color_palette = [
        "#4e79a7", "#f28e2b", "#e15759",
        "#9c755f", "#59a14f", "#edc948",
        "#b07aa1", "#ff9da7", "#76b7b2",
        "#bab0ac"
    ]
    sns.set_palette(color_palette)

def _save(fig, base_filename: Path) -> None:
    plt.savefig(f"{base_filename}.png", format='png', dpi=300, bbox_inches='tight')
    plt.savefig(f"{base_filename}.pdf", format='pdf', dpi=300, bbox_inches='tight')
    plt.close(fig)

def generate_plots(results: Dict[str, pd.DataFrame], output_dir: Path) -> None:
    """
    Plot reliability, supply and overflow statistics against the storage capacity,
    and the daily storage of the selected capacities.

    Args:
        results (Dict[str, pd.DataFrame]): Result DataFrames from run_water_balance
        output_dir (Path): Directory to save the output figures

    Returns:
        None (saves PNG and PDF files for each plot)
    """
    _set_style()

    lw = 0.7

    fig_width_cm = 18
    fig_height_cm = 12
    fig_width_inch = fig_width_cm / 2.54
    fig_height_inch = fig_height_cm / 2.54

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    reliability = results['reliability']
    supply = results['supply']
    capacity = reliability.index

    # Reliability curves
    fig, ax1 = plt.subplots(figsize=(fig_width_inch, fig_height_inch))
    ax1.plot(capacity, reliability['temporal_reliability'], color='C0', linewidth=lw,
             label='Temporal reliability')
    ax1.plot(capacity, reliability['volumetric_reliability'], color='C1', linewidth=lw,
             label='Volumetric reliability')
    ax1.plot(capacity, reliability['failure_fraction'], color='C2', linestyle='--', linewidth=lw,
             label='Total failure')
    ax1.set_xlabel(r"Storage capacity [$\mathrm{m}^3$/capita]")
    ax1.set_ylabel("Fraction [-]")
    ax1.set_ylim(0, 1)

    ax2 = ax1.twinx()
    ax2.plot(capacity, reliability['overflow_fraction'], color='C4', linewidth=lw,
             label='Overflow fraction')
    ax2.set_ylabel("Overflow fraction [-]")

    plt.tight_layout()

    lines, labels = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax2.legend(lines + lines2, labels + labels2, loc='upper center',
               bbox_to_anchor=(0.5, 1.15), ncol=4, frameon=False)
    _save(fig, output_dir / 'reliability')

    # Supply streaks
    fig, ax1 = plt.subplots(figsize=(fig_width_inch, fig_height_inch))
    for i, streak in enumerate(['failed', 'unmet', 'met']):
        ax1.plot(capacity, supply[f'{streak}_max'], color=f'C{i}', linewidth=lw,
                 label=f'{streak.capitalize()} (max)')
        ax1.plot(capacity, supply[f'{streak}_average'], color=f'C{i}', linestyle='--',
                 linewidth=lw, label=f'{streak.capitalize()} (average)')
    ax1.set_xlabel(r"Storage capacity [$\mathrm{m}^3$/capita]")
    ax1.set_ylabel("Consecutive days [d]")
    ax1.set_yscale('symlog')

    plt.tight_layout()
    ax1.legend(loc='upper center', bbox_to_anchor=(0.5, 1.15), ncol=3, frameon=False)
    _save(fig, output_dir / 'supply')

    # Daily storage of the selected capacities
    daily = results.get('daily')
    if daily is None or daily.empty:
        return

    rainfall = results['rainfall']['precipitation'].pint.magnitude
    for selected in daily.index.get_level_values('capacity').unique():
        trace = daily.xs(selected, level='capacity')
        index = trace['date'] if 'date' in trace.columns else trace.index

        fig, ax1 = plt.subplots(figsize=(fig_width_inch, fig_height_inch))
        ax1.set_xlabel("Time" if 'date' in trace.columns else "Day")
        ax1.fill_between(index, 0, rainfall.to_numpy(), facecolor='C0', alpha=0.5,
                         linewidth=0.1, label='Precipitation')
        ax1.set_ylabel("Precipitation [mm/day]")
        ax1.invert_yaxis()

        ax2 = ax1.twinx()
        ax2.plot(index, trace['stored'].pint.magnitude, color='C1', linewidth=lw, label='Storage')
        ax2.plot(index, trace['overflow'].pint.magnitude, color='C2', linewidth=lw, label='Overflow')
        ax2.axhline(selected, color='C3', linestyle='--', linewidth=lw, label='Capacity')
        ax2.set_ylabel(r"Volume [$\mathrm{m}^3$/capita]")

        plt.tight_layout()

        lines, labels = ax1.get_legend_handles_labels()
        lines2, labels2 = ax2.get_legend_handles_labels()
        ax2.legend(lines + lines2, labels + labels2, loc='upper center',
                   bbox_to_anchor=(0.5, 1.15), ncol=4, frameon=False)
        _save(fig, output_dir / f'storage_{selected:.2f}')
