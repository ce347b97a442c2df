# rwhsim/plots/__init__.py

from .generate_plots import generate_plots
from .plot_all import plot_all

__all__ = [
    "generate_plots",
    "plot_all"
]
