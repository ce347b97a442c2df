# rwhsim/components/__init__.py

from .raintank import water_balance_step
from .drought import longest_drought

__all__ = [
    "water_balance_step",
    "longest_drought"
]
