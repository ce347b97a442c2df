import os
import logging
import numpy as np
import pandas as pd
from dynaconf import Dynaconf

from rwhsim.errors import DataError

logger = logging.getLogger(__name__)

def read_forcing(config: Dynaconf) -> pd.Series:
    """
    Read the daily precipitation series.

    Both single-column files without header (one value per line) and delimited
    files with a header and an optional date column are supported.

    Args:
        config (Dynaconf): Configuration object containing file paths and settings
            forcing.header: File has a header line (default: False)
            forcing.column: Precipitation column name or position (default: 0)
            forcing.date_column: Column with dates (default: none)
            forcing.delimiter: Field delimiter (default: ',')

    Returns:
        pd.Series: Daily precipitation [mm], indexed by date or by day number (1..N)

    Raises:
        DataError: if the file holds no values, non-numeric values or negative values
    """
    input_dir = config.input_directory
    files = config.files
    settings = config.get('forcing') or {}

    header = settings.get('header', False)
    column = settings.get('column', 0)
    date_column = settings.get('date_column')
    delimiter = settings.get('delimiter', ',')

    rainfall_file = os.path.join(input_dir, files.rainfall)
    try:
        data = pd.read_csv(rainfall_file, header=0 if header else None, sep=delimiter,
                           skipinitialspace=True)
    except pd.errors.EmptyDataError as exc:
        raise DataError(f"Rainfall file is empty: {rainfall_file}") from exc

    if data.empty:
        raise DataError(f"Rainfall file is empty: {rainfall_file}")

    raw = data.iloc[:, column] if isinstance(column, int) else data[column]
    precipitation = pd.to_numeric(raw, errors='coerce')

    invalid = precipitation.isna()
    if invalid.any():
        rows = (invalid[invalid].index + 1).tolist()
        raise DataError(f"Non-numeric precipitation in {rainfall_file} at rows {rows[:10]}")
    infinite = np.isinf(precipitation)
    if infinite.any():
        rows = (infinite[infinite].index + 1).tolist()
        raise DataError(f"Infinite precipitation in {rainfall_file} at rows {rows[:10]}")
    negative = precipitation < 0
    if negative.any():
        rows = (negative[negative].index + 1).tolist()
        raise DataError(f"Negative precipitation in {rainfall_file} at rows {rows[:10]}")

    if date_column is not None:
        precipitation.index = pd.DatetimeIndex(pd.to_datetime(data[date_column], errors='coerce'),
                                               name='date')
        if precipitation.index.hasnans:
            raise DataError(f"Invalid dates in column '{date_column}' of {rainfall_file}")
    else:
        precipitation.index = pd.RangeIndex(1, len(precipitation) + 1, name='day')

    precipitation = precipitation.astype(float).rename('precipitation')
    precipitation.attrs['dataset'] = files.rainfall

    logger.info("Read %d days of precipitation from %s", len(precipitation), rainfall_file)
    return precipitation
