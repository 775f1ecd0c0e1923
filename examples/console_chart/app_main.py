"""Text-mode host for ChartOrchestrator.

Stands in for a browser canvas: datasets are printed as rows of numbers, the
tooltip overlay is printed on show/hide, and navigation requests are logged.
Pointer coordinates are interpreted as ``x=row index, y=value``.
"""

from __future__ import annotations

import asyncio
from typing import Callable, TextIO
import sys

from multiline_chart import (
    ActivePoint,
    ChartConfig,
    ChartOrchestrator,
    NavigationTarget,
    PointerEvent,
    StaticSeriesService,
    TooltipContent,
    TooltipRequest,
)

DEMO_PAYLOAD = {
    "rows": [
        {"x": "2024-01-01", "Id": "a0A000000000001", "Name": "Week 1", "Pipeline__c": 10, "Closed__c": 10},
        {"x": "2024-01-08", "Id": "a0A000000000002", "Name": "Week 2", "Pipeline__c": 14, "Closed__c": 11},
        {"x": "2024-01-15", "Name": "Week 3", "Pipeline__c": 12, "Closed__c": 12},
    ],
    "fieldLabels": {"Pipeline__c": "Open Pipeline"},
    "objectLabel": "Forecast Snapshot",
}


class ConsoleSurface:
    def __init__(self, spec, hooks, out: TextIO) -> None:
        self.spec = spec
        self.hooks = hooks
        self._out = out
        self._visible = [True] * len(spec.datasets)
        self.update()

    def update(self) -> None:
        ticks = [self.hooks.format_x_tick(label, None) for label in self.spec.labels]
        print(f"== {self.spec.title} ==", file=self._out)
        print("   " + " | ".join(ticks), file=self._out)
        for i, ds in enumerate(self.spec.datasets):
            if not self._visible[i]:
                continue
            values = " | ".join("-" if v is None else f"{v:g}" for v in ds.data)
            print(f"   {ds.label} [{ds.color}]: {values}", file=self._out)

    def destroy(self) -> None:
        print("chart destroyed", file=self._out)

    def set_dataset_visibility(self, index: int, visible: bool) -> None:
        self._visible[index] = visible

    def is_dataset_visible(self, index: int) -> bool:
        return self._visible[index]

    def nearest_points(self, event: PointerEvent) -> list[ActivePoint]:
        row = int(round(event.x))
        if not 0 <= row < len(self.spec.labels):
            return []
        best: ActivePoint | None = None
        for i, ds in enumerate(self.spec.datasets):
            value = ds.data[row]
            if value is None or not self._visible[i]:
                continue
            if best is None or abs(value - event.y) < abs((best.value or 0.0) - event.y):
                best = ActivePoint(series_index=i, row_index=row, value=value)
        return [] if best is None else [best]

    def hover(self, event: PointerEvent) -> None:
        points = tuple(self.nearest_points(event))
        self.hooks.on_tooltip(TooltipRequest(opacity=1.0 if points else 0.0, points=points, caret_x=event.x, caret_y=event.y))


class ConsoleSurfaceFactory:
    def __init__(self, out: TextIO) -> None:
        self._out = out
        self.surfaces: list[ConsoleSurface] = []

    async def create(self, spec, hooks) -> ConsoleSurface:
        surface = ConsoleSurface(spec, hooks, self._out)
        self.surfaces.append(surface)
        return surface


class ConsoleOverlay:
    def __init__(self, out: TextIO, on_enter: Callable[[], None], on_leave: Callable[[], None]) -> None:
        self._out = out
        self.on_enter = on_enter
        self.on_leave = on_leave

    def show(self, content: TooltipContent, x: float, y: float) -> None:
        print(f"tooltip @({x:g},{y:g}): " + " / ".join(content.lines()), file=self._out)

    def hide(self) -> None:
        print("tooltip hidden", file=self._out)

    def remove(self) -> None:
        print("tooltip removed", file=self._out)


class ConsoleContainer:
    def __init__(self, out: TextIO) -> None:
        self._out = out
        self.overlay: ConsoleOverlay | None = None

    def create_overlay(self, on_enter, on_leave) -> ConsoleOverlay:
        self.overlay = ConsoleOverlay(self._out, on_enter, on_leave)
        return self.overlay


class ConsoleNavigator:
    def __init__(self, out: TextIO) -> None:
        self._out = out
        self.targets: list[NavigationTarget] = []

    def navigate(self, target: NavigationTarget) -> None:
        self.targets.append(target)
        print(f"navigate -> {target.type}:{target.record_id}:{target.action_name}", file=self._out)


def create(out: TextIO | None = None) -> tuple[ChartOrchestrator, ConsoleSurfaceFactory, ConsoleContainer, ConsoleNavigator]:
    stream = out or sys.stdout
    factory = ConsoleSurfaceFactory(stream)
    container = ConsoleContainer(stream)
    navigator = ConsoleNavigator(stream)
    config = ChartConfig(
        title="Pipeline vs Closed",
        record_id="001000000000001",
        fields_csv="Pipeline__c, Closed__c",
        child_object_api_name="Forecast_Snapshot__c",
        date_field_api_name="Snapshot_Date__c",
        parent_lookup_path="Account__c",
    )
    chart = ChartOrchestrator(
        config,
        data_service=StaticSeriesService(DEMO_PAYLOAD),
        surface_factory=factory,
        overlay_container=container,
        navigator=navigator,
    )
    return chart, factory, container, navigator


async def run(out: TextIO | None = None) -> ChartOrchestrator:
    chart, factory, container, _ = create(out)
    await chart.initialize()
    surface = factory.surfaces[-1]
    surface.hover(PointerEvent(0.0, 10.0))
    surface.hover(PointerEvent(1.0, 14.0))
    assert container.overlay is not None
    container.overlay.on_enter()
    surface.hover(PointerEvent(5.0, 0.0))
    container.overlay.on_leave()
    chart.handle_click(PointerEvent(1.0, 11.0))
    chart.hide_all()
    chart.show_all()
    chart.teardown()
    return chart


if __name__ == "__main__":
    asyncio.run(run())
