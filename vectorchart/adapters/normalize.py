from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from vectorchart.errors import ChartDataError
from vectorchart.series import SeriesData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_series(values: Any, *, name: str | None = None, class_name: str | None = None) -> SeriesData:
    """Coerce one series to a float64 array; ``None`` entries become gaps.

    A mapping with ``data`` (and optional ``name`` / ``class_name``) is
    accepted so callers can label series inline.
    """
    if isinstance(values, Mapping):
        if "data" not in values:
            raise ChartDataError("series mapping requires a `data` entry")
        name = values.get("name", name)
        class_name = values.get("class_name", class_name)
        values = values["data"]

    arr = _coerce_1d_numeric(values, label=name or "series")
    if arr.size == 0:
        raise ChartDataError("empty series")
    return SeriesData(values=arr, mask=np.isfinite(arr), name=name, class_name=class_name)


def normalize_labels(labels: Any, length: int) -> tuple[str, ...]:
    if labels is None:
        return tuple(str(i + 1) for i in range(length))
    if pd is not None and isinstance(labels, (pd.Series, pd.Index)):
        labels = labels.tolist()
    if isinstance(labels, (str, bytes)) or not isinstance(labels, Sequence):
        raise ChartDataError("labels must be a sequence")
    return tuple(str(label) for label in labels)


def _coerce_1d_numeric(values: Any, label: str) -> np.ndarray:
    if pd is not None and isinstance(values, (pd.Series, pd.Index)):
        values = values.to_numpy(dtype=np.float64, na_value=np.nan)

    if isinstance(values, np.ndarray):
        arr = values
    elif isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ChartDataError(f"{label} must be a 1-D sequence of numbers")
    else:
        arr = np.asarray([_coerce_scalar(v, label) for v in values], dtype=np.float64)

    if arr.ndim != 1:
        raise ChartDataError(f"{label} must be 1-D, got shape {arr.shape}")
    if arr.dtype.kind not in "biuf":
        raise ChartDataError(f"{label} must be numeric, got dtype {arr.dtype}")
    return arr.astype(np.float64, copy=False)


def _coerce_scalar(value: Any, label: str) -> float:
    if value is None:
        return float("nan")
    if isinstance(value, bool):
        raise ChartDataError(f"{label} contains a boolean value")
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    raise ChartDataError(f"{label} contains non-numeric value: {value!r}")
