from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

# Values closer than this are drawn at the same pixel and share one tooltip.
# The comparison is strict: a difference of exactly DEFAULT_EPSILON is apart.
DEFAULT_EPSILON = 1e-9


@dataclass(frozen=True)
class CoincidentPoint:
    series_index: int
    value: float


def resolve_coincident(
    matrix: np.ndarray,
    row_index: int,
    target: float,
    epsilon: float = DEFAULT_EPSILON,
) -> list[CoincidentPoint]:
    """Return every series whose value at ``row_index`` is within ``epsilon`` of ``target``.

    ``matrix`` is ``(n_series, n_rows)``; only column ``row_index`` is read.
    Results keep series declaration order. Missing (NaN) and infinite values
    never match.
    """

    if not epsilon > 0:
        raise ValueError("epsilon must be > 0")
    if matrix.ndim != 2 or matrix.shape[0] == 0:
        return []
    if row_index < 0 or row_index >= matrix.shape[1]:
        return []
    try:
        target_f = float(target)
    except (TypeError, ValueError):
        return []
    if not math.isfinite(target_f):
        return []

    column = matrix[:, row_index]
    finite = np.isfinite(column)
    hits = np.zeros(column.shape, dtype=bool)
    hits[finite] = np.abs(column[finite] - target_f) < epsilon
    return [CoincidentPoint(series_index=int(i), value=float(column[i])) for i in np.flatnonzero(hits)]
