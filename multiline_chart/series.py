from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
import math
from typing import Any

import numpy as np

from .labels import display_label

ROW_X_KEY = "x"
ROW_ID_KEY = "Id"
ROW_NAME_KEY = "Name"


@dataclass(frozen=True)
class Row:
    """One sample on the time axis; its position in the row list is its index."""

    x: Any
    values: Mapping[str, float | None] = field(default_factory=dict)
    record_id: str | None = None
    name: str | None = None

    def value(self, field_name: str) -> float | None:
        return self.values.get(field_name)


@dataclass(frozen=True)
class SeriesDefinition:
    field: str
    label: str
    values: tuple[float | None, ...]
    index: int

    def __post_init__(self) -> None:
        if not self.field.strip():
            raise ValueError("SeriesDefinition.field must be non-empty")
        if self.index < 0:
            raise ValueError("SeriesDefinition.index must be >= 0")


def coerce_metric(raw: Any) -> float | None:
    """Coerce one raw cell to a float; anything non-numeric becomes None."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        out = float(raw)
    elif isinstance(raw, (int, float)):
        out = float(raw)
    elif isinstance(raw, str):
        try:
            out = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(out):
        return None
    return out


def row_from_mapping(raw: Mapping[str, Any], fields: Sequence[str]) -> Row:
    record_id = raw.get(ROW_ID_KEY)
    name = raw.get(ROW_NAME_KEY)
    return Row(
        x=raw.get(ROW_X_KEY),
        values={f: coerce_metric(raw.get(f)) for f in fields},
        record_id=None if not record_id else str(record_id),
        name=None if name is None else str(name),
    )


def build_series(
    rows: Sequence[Row],
    fields: Sequence[str],
    labels: Mapping[str, str] | None = None,
) -> tuple[SeriesDefinition, ...]:
    """Build one series per field in declared order, aligned to row order."""

    return tuple(
        SeriesDefinition(
            field=f,
            label=display_label(f, labels),
            values=tuple(row.value(f) for row in rows),
            index=i,
        )
        for i, f in enumerate(fields)
    )


def series_matrix(series: Sequence[SeriesDefinition]) -> np.ndarray:
    """Stack series values into a ``(n_series, n_rows)`` float64 array, NaN for gaps."""

    if not series:
        return np.empty((0, 0), dtype=np.float64)
    n_rows = len(series[0].values)
    out = np.full((len(series), n_rows), np.nan, dtype=np.float64)
    for i, s in enumerate(series):
        if len(s.values) != n_rows:
            raise ValueError(f"series {s.field!r} has {len(s.values)} values, expected {n_rows}")
        for j, v in enumerate(s.values):
            if v is not None:
                out[i, j] = v
    return out
