"""Contracts between the chart and the third-party surface that draws it.

The surface owns canvas lifecycle, scaling and hit-testing. This package hands
it a :class:`ChartSpec` plus three synchronous hooks and only ever talks back
through :class:`RenderingSurface`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Protocol, runtime_checkable

from .style import StyleAssignment

LegendPosition = Literal["top", "bottom", "left", "right"]


@dataclass(frozen=True)
class DatasetSpec:
    label: str
    data: tuple[float | None, ...]
    color: str
    fill_tint: str
    dash: tuple[int, ...] = ()
    line_width: float = 2.0
    point_shape: str = "circle"
    point_radius: float = 3.0
    point_hover_radius: float = 5.0
    fill: bool = False
    tension: float = 0.2

    @classmethod
    def styled(cls, label: str, data: Sequence[float | None], style: StyleAssignment) -> "DatasetSpec":
        return cls(
            label=label,
            data=tuple(data),
            color=style.color,
            fill_tint=style.fill_tint,
            dash=style.dash,
            line_width=style.line_width,
            point_shape=style.point_shape,
            point_radius=style.point_radius,
            point_hover_radius=style.point_hover_radius,
        )


@dataclass(frozen=True)
class XAxisSpec:
    kind: str = "category"
    max_rotation: int = 0
    auto_skip: bool = True


@dataclass(frozen=True)
class YAxisSpec:
    begin_at_zero: bool = True


@dataclass(frozen=True)
class ChartSpec:
    title: str
    labels: tuple[Any, ...]
    datasets: tuple[DatasetSpec, ...]
    x_axis: XAxisSpec = field(default_factory=XAxisSpec)
    y_axis: YAxisSpec = field(default_factory=YAxisSpec)
    legend_position: LegendPosition = "bottom"
    tooltip_mode: str = "nearest"
    tooltip_intersect: bool = False
    # The surface's own tooltip is disabled; content comes from on_tooltip.
    external_tooltip: bool = True
    responsive: bool = False

    def __post_init__(self) -> None:
        for ds in self.datasets:
            if len(ds.data) != len(self.labels):
                raise ValueError(f"dataset {ds.label!r} length {len(ds.data)} != label count {len(self.labels)}")


@dataclass(frozen=True)
class PointerEvent:
    x: float
    y: float


@dataclass(frozen=True)
class ActivePoint:
    series_index: int
    row_index: int
    value: float | None = None


@dataclass(frozen=True)
class TooltipRequest:
    """What the surface reports each time its tooltip would change."""

    opacity: float
    points: tuple[ActivePoint, ...] = ()
    caret_x: float = 0.0
    caret_y: float = 0.0

    @property
    def active(self) -> bool:
        return self.opacity > 0 and bool(self.points)


@runtime_checkable
class TickLabelSource(Protocol):
    """Axis capability: map a tick value back to the label it stands for."""

    def label_for_value(self, value: Any) -> Any:
        ...


@dataclass(frozen=True)
class ChartHooks:
    format_x_tick: Callable[[Any, Any], str]
    on_click: Callable[[PointerEvent], bool]
    on_tooltip: Callable[[TooltipRequest], None]


class RenderingSurface(Protocol):
    def update(self) -> None:
        ...

    def destroy(self) -> None:
        ...

    def set_dataset_visibility(self, index: int, visible: bool) -> None:
        ...

    def is_dataset_visible(self, index: int) -> bool:
        ...

    def nearest_points(self, event: PointerEvent) -> Sequence[ActivePoint]:
        ...


class SurfaceFactory(Protocol):
    async def create(self, spec: ChartSpec, hooks: ChartHooks) -> RenderingSurface:
        ...


def tick_source_label(value: Any, axis: Any) -> Any:
    """Resolve a tick value through the axis when it supports it, else return it as-is."""

    if isinstance(axis, TickLabelSource):
        return axis.label_for_value(value)
    return value
