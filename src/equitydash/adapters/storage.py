from pathlib import Path
from typing import Any, Iterable

import pandas as pd


def points_to_df(points: Iterable[Any]) -> pd.DataFrame:
    """Projection points (anything with to_dict) or plain dict rows -> DataFrame."""
    rows = [p.to_dict() if hasattr(p, "to_dict") else dict(p) for p in points]
    return pd.DataFrame(rows)


def write_df(df: pd.DataFrame, path: str):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    if path.endswith(".parquet"):
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)
