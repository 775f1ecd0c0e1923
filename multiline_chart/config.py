from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
import tomllib
from typing import Any, Mapping

DEFAULT_TITLE = "Multi-Line Chart"
DEFAULT_MAX_POINTS = 200

REQUIRED_FIELDS: tuple[str, ...] = (
    "record_id",
    "fields_csv",
    "child_object_api_name",
    "date_field_api_name",
    "parent_lookup_path",
)


def parse_fields_csv(fields_csv: str | None) -> tuple[str, ...]:
    """Split a comma-separated field list, trimming blanks and keeping order."""

    if not fields_csv:
        return ()
    return tuple(part.strip() for part in fields_csv.split(",") if part.strip())


@dataclass(frozen=True)
class ChartConfig:
    """Host-supplied chart properties."""

    record_id: str | None = None
    fields_csv: str | None = None
    child_object_api_name: str | None = None
    date_field_api_name: str | None = None
    parent_lookup_path: str | None = None
    date_filter: str | None = None
    max_points: int | str | None = DEFAULT_MAX_POINTS
    title: str = DEFAULT_TITLE

    def missing_required(self) -> tuple[str, ...]:
        missing = [name for name in REQUIRED_FIELDS if not getattr(self, name)]
        if "fields_csv" not in missing and not self.metric_fields():
            missing.append("fields_csv")
        return tuple(missing)

    def metric_fields(self) -> tuple[str, ...]:
        return parse_fields_csv(self.fields_csv)

    def max_points_limit(self) -> int | None:
        if self.max_points is None or self.max_points == "":
            return None
        try:
            limit = int(str(self.max_points).strip())
        except ValueError:
            return None
        return limit if limit > 0 else None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ChartConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"unknown chart config keys: {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for name in ("record_id", "fields_csv", "child_object_api_name", "date_field_api_name", "parent_lookup_path", "date_filter"):
            values[name] = _coerce_optional_str(raw.get(name), name)
        if "title" in raw:
            title = _coerce_optional_str(raw["title"], "title")
            values["title"] = DEFAULT_TITLE if title is None else title
        if "max_points" in raw:
            max_points = raw["max_points"]
            if max_points is not None and (isinstance(max_points, bool) or not isinstance(max_points, (int, str))):
                raise ValueError("max_points must be an integer or string if provided")
            values["max_points"] = max_points
        return cls(**values)


def load_chart_config(path: str | Path) -> ChartConfig:
    """Load a ChartConfig from a TOML file, reading a ``[chart]`` table when present."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("chart", raw)
    if not isinstance(table, dict):
        raise ValueError("[chart] must be a table")
    return ChartConfig.from_mapping(table)


def _coerce_optional_str(value: object, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string if provided")
    return value
