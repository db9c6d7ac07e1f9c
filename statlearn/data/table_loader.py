# statlearn/data/table_loader.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from statlearn import logs
from statlearn.utils.errors import DataValidationError


class TableLoadEngine:
    """
    TableLoadEngine (FINAL)

    Responsibility:
    - read one delimited text file with a header row
    - fail fast: missing file -> FileNotFoundError,
      empty / unparseable / missing columns -> DataValidationError
    - no retry: inputs are static local files
    """

    def __init__(self, sep: str = ","):
        self.sep = sep

    def load(
            self,
            path: str | Path,
            *,
            required_columns: Optional[Iterable[str]] = None,
    ) -> pd.DataFrame:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Input table not found: {path}")

        try:
            df = pd.read_csv(path, sep=self.sep)
        except pd.errors.EmptyDataError as e:
            raise DataValidationError(f"{path.name}: file is empty") from e
        except pd.errors.ParserError as e:
            raise DataValidationError(f"{path.name}: cannot parse table: {e}") from e

        if df.empty:
            raise DataValidationError(f"{path.name}: table has a header but no rows")

        # an unnamed leading column is a written-out row index
        first = str(df.columns[0])
        if first == "" or first.startswith("Unnamed: 0"):
            df = df.drop(columns=df.columns[0])

        if required_columns is not None:
            missing = [c for c in required_columns if c not in df.columns]
            if missing:
                raise DataValidationError(
                    f"{path.name}: missing required column(s): {', '.join(missing)}"
                )

        logs.info(f"[TableLoad] {path.name} rows={len(df)} cols={df.shape[1]}")
        return df


def apply_labels(
        df: pd.DataFrame, labels: Mapping[str, Mapping[str, str]]
) -> pd.DataFrame:
    """
    Replace coded factor values with labels, e.g. race 1/2/3 -> white/black/other.

    Codes are matched on their string form, so 1, 1.0 and "1" all map.
    Every present value must have a label.
    """
    out = df.copy()
    for column, mapping in labels.items():
        if column not in out.columns:
            raise DataValidationError(f"label column '{column}' not found")

        keys: Dict[str, str] = {str(k): str(v) for k, v in mapping.items()}
        coded = out[column].map(_code_key)

        unknown = sorted(set(coded.dropna()) - set(keys))
        if unknown:
            raise DataValidationError(
                f"column '{column}' has values without a label: {', '.join(unknown)}"
            )
        out[column] = coded.map(keys)
    return out


def _code_key(value) -> Optional[str]:
    if pd.isna(value):
        return None
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


def sample_rows(df: pd.DataFrame, n: Optional[int], seed: int) -> pd.DataFrame:
    """
    Fixed-size sample without replacement from an explicit seed.
    n=None or n >= len(df) keeps every row (original order).
    """
    if n is None or n >= len(df):
        return df.reset_index(drop=True)
    if n < 1:
        raise DataValidationError(f"sample size must be >= 1, got {n}")

    rng = np.random.default_rng(seed)
    idx = np.sort(rng.choice(len(df), size=n, replace=False))
    return df.iloc[idx].reset_index(drop=True)


def select_numeric(
        df: pd.DataFrame, columns: Iterable[str], *, drop_na: bool = True
) -> pd.DataFrame:
    """
    Column selector for clustering: numeric columns by name.
    inf -> NaN, then incomplete rows dropped when drop_na.
    """
    columns = list(columns)
    if not columns:
        raise DataValidationError("no feature columns selected")

    for c in columns:
        if c not in df.columns:
            raise DataValidationError(f"column '{c}' not found")
        if not pd.api.types.is_numeric_dtype(df[c]) or pd.api.types.is_bool_dtype(df[c]):
            raise DataValidationError(f"column '{c}' is not numeric")

    X = df[columns].astype(float).replace([np.inf, -np.inf], np.nan)
    if drop_na:
        X = X.loc[X.notna().all(axis=1)]
    return X
