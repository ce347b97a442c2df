from pathlib import Path
from typing import Dict
import pandas as pd
import pint_pandas

TABLE_FILES = {
    'daily': 'daily_results.csv',
    'reliability': 'reliability_results.csv',
    'supply': 'supply_results.csv',
    'overflow': 'overflow_results.csv'
}

def strip_units(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace pint columns by their magnitudes, appending the unit to the column name.

    e.g. 'stored' [pint[meter^3]] -> 'stored [m³]' [float64]
    """
    df_regular = df.copy()
    renamed = {}
    for col in df.columns:
        if isinstance(df[col].dtype, pint_pandas.PintType):
            df_regular[col] = df[col].pint.magnitude
            renamed[col] = f"{col} [{df[col].pint.units:~P}]"
    return df_regular.rename(columns=renamed)

def write_tables(results: Dict[str, pd.DataFrame], output_dir: Path) -> None:
    """
    Write daily, reliability, supply and overflow tables as comma separated files.

    Floats are written at full precision so the tables read back without loss.

    Args:
        results: Result DataFrames from run_water_balance
        output_dir: Directory to save the tables
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for key, filename in TABLE_FILES.items():
        if key not in results:
            continue
        strip_units(results[key]).to_csv(output_dir / filename)
