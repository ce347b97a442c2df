import argparse
from pathlib import Path
from rwhsim.utils import load_results, load_config
from rwhsim.plots.generate_plots import generate_plots

def plot_all():
    parser = argparse.ArgumentParser(description="Generate plots from simulation results")
    parser.add_argument("--config", required=True, help="Path to the configuration files")
    parser.add_argument("--env", default="default", help="Environment to use within the config file")
    parser.add_argument("--results", required=True, help="Path to the simulation results file")
    args = parser.parse_args()

    config = load_config(args.config, args.env)
    results = load_results(args.results)

    plot_dir = Path(config.output.directory) / args.env / 'figures'
    generate_plots(results, plot_dir)

    print(f'All visualization outputs saved in {plot_dir}')
