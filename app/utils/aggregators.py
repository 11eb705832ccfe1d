"""
Data aggregation utility functions.
"""
import pandas as pd
from typing import Dict, List, Optional


def percentage(part: float, whole: float) -> float:
    """
    Calculate part as a percentage of whole.

    Args:
        part: Numerator
        whole: Denominator

    Returns:
        part / whole * 100, unrounded, or 0 when whole is 0
    """
    if not whole:
        return 0
    return part / whole * 100


def count_by(df: pd.DataFrame, column: str, order: Optional[List[str]] = None) -> Dict[str, int]:
    """
    Count rows per distinct value of a column.

    Only observed values are returned; when an order is given, keys follow it
    and values outside it are appended at the end.
    """
    if df.empty:
        return {}

    counts = df[column].value_counts()
    observed = {str(k): int(v) for k, v in counts.items()}

    if order is None:
        return dict(sorted(observed.items()))

    result = {k: observed[k] for k in order if k in observed}
    for k in sorted(observed):
        if k not in result:
            result[k] = observed[k]
    return result


def zero_filled_counts(df: pd.DataFrame, column: str, buckets: List) -> Dict:
    """
    Count rows per bucket value, including buckets with no rows.

    Args:
        df: Input DataFrame
        column: Column holding the bucket value
        buckets: Every bucket to report, in output order

    Returns:
        Ordered mapping of bucket -> count
    """
    if df.empty:
        return {b: 0 for b in buckets}

    counts = df[column].value_counts().reindex(buckets, fill_value=0)
    return {b: int(counts[b]) for b in buckets}


def pivot_status_counts(
    df: pd.DataFrame,
    key_column: str,
    keys: List[str],
    statuses: List[str],
) -> pd.DataFrame:
    """
    Per-key, per-status counts, left-joined onto the full key list.

    Args:
        df: Input DataFrame with key_column and status columns
        key_column: Geography code column (province_code, lgu_code)
        keys: Every reference code, including those with no rows
        statuses: Status columns to produce

    Returns:
        DataFrame indexed by key with one column per status and a total column
    """
    if df.empty:
        table = pd.DataFrame(0, index=pd.Index(keys, name=key_column), columns=statuses)
    else:
        table = pd.crosstab(df[key_column], df["status"])
        table = table.reindex(index=keys, columns=statuses, fill_value=0)
        table.index.name = key_column

    table = table.fillna(0).astype(int)
    table["total"] = table[statuses].sum(axis=1)
    return table
