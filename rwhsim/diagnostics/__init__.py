# rwhsim/diagnostics/__init__.py

from .diagnostics import DiagnosticTracker, check_day, ZERO_THRESHOLD
from .alert import alert

__all__ = [
    "DiagnosticTracker",
    "check_day",
    "alert"
]
