# statlearn/data/encoder.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from statlearn.utils.errors import DataValidationError

INDICATOR_SEP = "_"


@dataclass(frozen=True)
class EncodedDesign:
    """
    Output of encode_categoricals.

    levels[column] lists every level of a categorical column as its original
    value, reference level first; the reference has no indicator column.
    Indicator columns are named after the string form of the level.
    """

    frame: pd.DataFrame
    levels: Dict[str, List[Any]] = field(default_factory=dict)

    @property
    def feature_names(self) -> List[str]:
        return [str(c) for c in self.frame.columns]

    def reference(self, column: str) -> Any:
        return self.levels[column][0]


def indicator_name(column: str, level: Any) -> str:
    return f"{column}{INDICATOR_SEP}{level}"


def _plain(value):
    # numpy scalars -> python scalars, so levels serialize as their values
    return value.item() if isinstance(value, np.generic) else value


def encode_categoricals(
        df: pd.DataFrame,
        columns: Iterable[str],
        *,
        reference: Optional[Dict[str, Any]] = None,
) -> EncodedDesign:
    """
    Expand categorical columns into 0/1 indicator columns.

    - levels are the distinct values of the column, sorted by string form
    - the reference level (matched by string form; default: first sorted
      level) is dropped
    - indicators replace the source column in place, keeping column order
    - every remaining column must be numeric

    Pure: the input frame is not modified.
    """
    columns = list(columns)
    reference = dict(reference or {})

    for c in columns:
        if c not in df.columns:
            raise DataValidationError(f"categorical column '{c}' not found")
        if df[c].isna().any():
            raise DataValidationError(f"categorical column '{c}' has missing values")

    levels: Dict[str, List[Any]] = {}
    pieces: List[pd.DataFrame] = []

    for c in df.columns:
        if c not in columns:
            pieces.append(df[[c]])
            continue

        values = df[c]
        found = sorted((_plain(v) for v in values.unique()), key=str)
        keys = [str(v) for v in found]
        if len(set(keys)) != len(keys):
            raise DataValidationError(
                f"categorical column '{c}' has distinct values with the same name"
            )

        ref_key = str(reference[c]) if c in reference else keys[0]
        if ref_key not in keys:
            raise DataValidationError(
                f"reference level '{ref_key}' not present in column '{c}'"
            )

        ref = found[keys.index(ref_key)]
        ordered = [ref] + [lv for lv, key in zip(found, keys) if key != ref_key]
        levels[c] = ordered

        names = values.astype(str)
        indicators = {
            indicator_name(c, lv): (names == str(lv)).astype(np.int64)
            for lv in ordered[1:]
        }
        pieces.append(pd.DataFrame(indicators, index=df.index))

    frame = pd.concat(pieces, axis=1)

    for c in frame.columns:
        s = frame[c]
        if not pd.api.types.is_numeric_dtype(s) or pd.api.types.is_bool_dtype(s):
            raise DataValidationError(
                f"column '{c}' is not numeric; declare it as categorical"
            )

    unmatched = set(reference) - set(columns)
    if unmatched:
        raise DataValidationError(
            f"reference given for non-categorical column(s): {', '.join(sorted(unmatched))}"
        )

    return EncodedDesign(frame=frame.astype(float), levels=levels)


def decode_indicators(
        frame: pd.DataFrame, column: str, levels: List[Any]
) -> pd.Series:
    """
    Rebuild a categorical column from its indicator columns.

    A row with no indicator set is the reference level (levels[0]);
    more than one set indicator is inconsistent. Returns the original
    level values, so encode -> decode restores numeric codes as numbers.
    """
    names = [indicator_name(column, lv) for lv in levels[1:]]
    missing = [n for n in names if n not in frame.columns]
    if missing:
        raise DataValidationError(
            f"indicator column(s) missing for '{column}': {', '.join(missing)}"
        )

    block = frame[names].to_numpy(dtype=float) if names else np.zeros((len(frame), 0))
    if not np.isin(block, (0.0, 1.0)).all():
        raise DataValidationError(f"indicators of '{column}' are not 0/1")

    hits = block.sum(axis=1)
    if (hits > 1).any():
        raise DataValidationError(f"indicators of '{column}' have several levels set")

    codes = np.where(hits == 0, 0, block.argmax(axis=1) + 1) if names else np.zeros(len(frame), dtype=int)
    return pd.Series(np.asarray(levels, dtype=object)[codes], index=frame.index, name=column)
