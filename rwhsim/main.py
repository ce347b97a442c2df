from typing import Dict, Optional
from pathlib import Path
import argparse
import logging
import pandas as pd

from rwhsim.read_data import read_parameters, read_capacities
from rwhsim.forcing import read_forcing
from rwhsim.scenario_manager import ScenarioManager
from rwhsim.water_balance import run_water_balance
from rwhsim.summary import write_summary
from rwhsim.utils import load_config, save_results
from rwhsim.diagnostics import DiagnosticTracker, alert
from rwhsim.postprocess import write_tables
from rwhsim.plots import generate_plots

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s',
                    datefmt='%H:%M:%S')
logger = logging.getLogger(__name__)

def main() -> None:
    parser = argparse.ArgumentParser(description="Run Rain Tank Sizing Model")
    parser.add_argument("--config", required=True, help="Path to the configuration files")
    parser.add_argument("--env", default="default", help="Environment to use within the config file")
    parser.add_argument("--plot", action="store_true", help="Generate plots")
    parser.add_argument("--check", action="store_true", help="Check water balance")
    parser.add_argument("--scenarios", action="store_true", help="Run multiple scenarios")
    parser.add_argument("--save", action="store_true", help="Save results")
    parser.add_argument("--n-jobs", type=int, default=-1, help="Number of parallel jobs")
    args = parser.parse_args()

    logger.info("Rain Tank Sizing Model")

    if args.check and not args.scenarios:
        logger.info("Diagnostic checks enabled")
        tracker = DiagnosticTracker()
    else:
        if args.check:
            logger.warning("Diagnostic checks not available when running scenarios")
            args.check = False
        tracker = None

    # Load base config and data
    base_config = load_config(args.config, args.env, "config.yaml")
    params = read_parameters(base_config)
    capacities, selected = read_capacities(base_config)
    rainfall = read_forcing(base_config)
    dataset = rainfall.attrs.get('dataset')
    logger.info("Number of days: %d", len(rainfall))
    logger.info("Capacities: %d from %.3f to %.3f m³", len(capacities), capacities[0], capacities[-1])

    out_base = Path(base_config.output.directory)

    if args.scenarios:
        scenario_config = load_config(args.config, args.env, "scenarios.yaml")
        scenario_manager = ScenarioManager.from_config(scenario_config)

        all_results = scenario_manager.run_scenarios(
            base_params=params,
            base_forcing=rainfall,
            capacities=capacities,
            selected=selected,
            n_jobs=args.n_jobs,
            progress=True
        )

        for case_name, results in all_results.items():
            process_outputs(results, None, out_base / case_name, dataset, args)

    else:
        results = run_water_balance(rainfall, params, capacities, selected,
                                    tracker=tracker, n_jobs=args.n_jobs, progress=True)
        process_outputs(results, tracker, out_base / args.env, dataset, args)

    logger.info("Simulation completed")


def process_outputs(results: Dict[str, pd.DataFrame], tracker: Optional[DiagnosticTracker],
                    output_dir: Path, dataset: Optional[str], args) -> None:
    """Process and save outputs based on arguments"""

    output_dir.mkdir(parents=True, exist_ok=True)

    write_tables(results, output_dir)
    logger.info("Result tables saved to %s", output_dir)

    # Generate plots
    if args.plot:
        plot_dir = output_dir / 'figures'
        generate_plots(results, plot_dir)
        logger.info("Plots saved to %s", plot_dir)

    # Check results
    if args.check:
        check_dir = output_dir / 'diagnostic'
        tracker.generate_report(check_dir)
        alert(tracker)
        logger.info("Diagnostic reports saved to %s", check_dir)

    if args.save:
        save_dir = output_dir / 'simulation_results.h5'
        save_results(results, save_dir)
        logger.info("Results saved to %s", save_dir)

    summary_dir = output_dir / 'summary.txt'
    write_summary(results, summary_dir, dataset)

if __name__ == "__main__":
    main()
