from typing import Dict
from pathlib import Path
import pandas as pd
import pint_pandas
from dynaconf import Dynaconf
import yaml

from rwhsim.errors import ConfigurationError

def save_results(results: Dict[str, pd.DataFrame], results_file: Path) -> None:
    """
    Save result DataFrames to an HDF5 store, keeping pint units as storer attributes.

    Args:
        results: Dictionary of result DataFrames
        results_file: Path of the HDF5 file
    """
    results_file = Path(results_file)
    results_file.parent.mkdir(parents=True, exist_ok=True)

    with pd.HDFStore(results_file, mode='w') as store:
        for key, df in results.items():
            if df.empty:
                continue
            units_dict = {col: str(df[col].pint.units) for col in df.columns
                          if isinstance(df[col].dtype, pint_pandas.PintType)}

            # Convert Pint DataFrame to a regular Pandas DataFrame
            df_regular = df.copy()
            for col in units_dict:
                df_regular[col] = df[col].pint.magnitude

            store.put(key, df_regular, format='table', data_columns=True)
            storer = store.get_storer(key)
            storer.attrs.units = units_dict
            storer.attrs.frame_attrs = dict(df.attrs)

def load_results(results_file: Path) -> Dict[str, pd.DataFrame]:
    results_file = Path(results_file)
    if not results_file.is_file():
        raise FileNotFoundError(f"Results file not found: {results_file}")

    results = {}
    with pd.HDFStore(results_file, mode='r') as store:
        for key in store.keys():
            df = store.select(key)
            attrs = store.get_storer(key).attrs
            for col, unit in getattr(attrs, 'units', {}).items():
                df[col] = df[col].astype(f"pint[{unit}]")
            df.attrs.update(getattr(attrs, 'frame_attrs', {}))
            results[key.strip('/')] = df
    return results

def load_config(config_path: str | Path, env: str = "default", base_config: str = "config.yaml") -> Dynaconf:
    """
    Load configuration from YAML file with optional environment selection.

    Files with a 'default' section hold one section per dataset environment,
    deep-merged over 'default'. Files without it (e.g. scenarios.yaml) are
    loaded as they are.

    Args:
        config_path: Path to configuration directory
        env: Environment name in the YAML file
        base_config: Name of base config file

    Returns:
        Dynaconf: Configuration object with loaded settings

    Raises:
        ConfigurationError: if the file is not a mapping or the environment is unknown
    """
    config_file = Path(config_path) / base_config

    with open(config_file, 'r', encoding='utf-8') as f:
        yaml_config = yaml.safe_load(f)

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"Configuration file {config_file} does not hold a mapping")

    if "default" in yaml_config:
        if env not in yaml_config:
            raise ConfigurationError(f"Environment '{env}' not found in {config_file}, "
                                     f"available: {sorted(yaml_config)}")
        yaml_config = _deep_merge(yaml_config["default"] or {}, yaml_config[env] or {})

    return Dynaconf(settings_files=False, env=env, **yaml_config)

def _deep_merge(base: dict, update: dict) -> dict:
    """Nested dictionaries merge key by key; any other value in update wins."""
    merged = dict(base)
    for key, value in update.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
