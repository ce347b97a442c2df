"""Errors raised before or during a capacity sweep."""


class ConfigurationError(ValueError):
    """Invalid physical parameters, capacity range or configuration file."""


class DataError(ValueError):
    """Rainfall series unusable for a simulation (empty, negative or non-numeric)."""
