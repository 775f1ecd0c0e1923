from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .series import Row, row_from_mapping


@dataclass(frozen=True)
class SeriesRequest:
    parent_id: str
    child_object_api_name: str
    date_field_api_name: str
    parent_lookup_path: str
    metric_field_api_names: tuple[str, ...]
    max_points: int | None = None
    date_filter: str | None = None

    def __post_init__(self) -> None:
        if not self.metric_field_api_names:
            raise ValueError("SeriesRequest.metric_field_api_names must be non-empty")
        if self.max_points is not None and self.max_points <= 0:
            raise ValueError("SeriesRequest.max_points must be > 0 when provided")


@dataclass(frozen=True)
class SeriesResponse:
    rows: tuple[Row, ...] = ()
    field_labels: Mapping[str, str] = field(default_factory=dict)
    object_label: str | None = None


class SeriesDataService(Protocol):
    async def get_series(self, request: SeriesRequest) -> SeriesResponse | Mapping[str, Any]:
        ...


def parse_series_response(payload: SeriesResponse | Mapping[str, Any], fields: Sequence[str]) -> SeriesResponse:
    """Normalize a raw service payload (camelCase or snake_case keys) into a SeriesResponse."""

    if isinstance(payload, SeriesResponse):
        return payload
    if not isinstance(payload, Mapping):
        raise ValueError(f"unsupported series payload type: {type(payload)!r}")
    raw_rows = payload.get("rows") or []
    if not isinstance(raw_rows, Sequence) or isinstance(raw_rows, (str, bytes)):
        raise ValueError("series payload `rows` must be a list")
    rows: list[Row] = []
    for i, raw in enumerate(raw_rows):
        if isinstance(raw, Row):
            rows.append(raw)
            continue
        if not isinstance(raw, Mapping):
            raise ValueError(f"series payload row {i} must be an object")
        rows.append(row_from_mapping(raw, fields))
    raw_labels = payload.get("fieldLabels", payload.get("field_labels")) or {}
    if not isinstance(raw_labels, Mapping):
        raise ValueError("series payload `fieldLabels` must be an object")
    object_label = payload.get("objectLabel", payload.get("object_label"))
    return SeriesResponse(
        rows=tuple(rows),
        field_labels={str(k): str(v) for k, v in raw_labels.items() if v is not None},
        object_label=None if object_label is None else str(object_label),
    )


class StaticSeriesService:
    """In-memory data service that serves one fixed payload.

    Honors ``max_points`` by truncating rows, and keeps every request it was
    asked for so callers can inspect what the chart fetched.
    """

    def __init__(self, payload: SeriesResponse | Mapping[str, Any]) -> None:
        self._payload = payload
        self.requests: list[SeriesRequest] = []

    async def get_series(self, request: SeriesRequest) -> SeriesResponse:
        self.requests.append(request)
        response = parse_series_response(self._payload, request.metric_field_api_names)
        if request.max_points is not None and len(response.rows) > request.max_points:
            response = SeriesResponse(
                rows=response.rows[: request.max_points],
                field_labels=response.field_labels,
                object_label=response.object_label,
            )
        return response
