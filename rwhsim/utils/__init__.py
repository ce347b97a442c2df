# rwhsim/utils/__init__.py

from .load_files import load_config, load_results, save_results
from .units import BaseUnit, ureg
from .misc import is_notebook

__all__ = [
    "load_config",
    "load_results",
    "save_results",
    "BaseUnit",
    "ureg",
    "is_notebook"
]
