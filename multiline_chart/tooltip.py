from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
import math
from typing import Callable, Literal, Protocol

import numpy as np

from .coincident import DEFAULT_EPSILON, resolve_coincident
from .labels import format_datetime, format_value
from .navigation import record_link
from .series import Row, SeriesDefinition
from .style import StyleAssignment
from .surface import TooltipRequest

LOGGER = logging.getLogger(__name__)

TooltipState = Literal["hidden", "visible", "pinned"]

# Long enough for the pointer to travel from a data point onto the overlay.
HIDE_DELAY_S = 0.3
ANCHOR_OFFSET_PX: tuple[float, float] = (12.0, 12.0)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


@dataclass(frozen=True)
class TooltipEntry:
    series_index: int
    color: str
    label: str
    value: str
    link: str | None = None


@dataclass(frozen=True)
class TooltipContent:
    title: str
    entries: tuple[TooltipEntry, ...]
    combined: bool = False

    def lines(self) -> list[str]:
        out = [self.title]
        for entry in self.entries:
            out.append(f"{entry.label}: {entry.value}")
        return out


class OverlayElement(Protocol):
    def show(self, content: TooltipContent, x: float, y: float) -> None:
        ...

    def hide(self) -> None:
        ...

    def remove(self) -> None:
        ...


class OverlayContainer(Protocol):
    def create_overlay(
        self,
        on_enter: Callable[[], None],
        on_leave: Callable[[], None],
    ) -> OverlayElement:
        ...


@dataclass(frozen=True, eq=False)
class ChartSnapshot:
    """Data behind one draw: rows, their series, styles, and the value matrix."""

    rows: tuple[Row, ...]
    series: tuple[SeriesDefinition, ...]
    styles: tuple[StyleAssignment, ...]
    matrix: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.styles) != len(self.series):
            raise ValueError("ChartSnapshot needs one style per series")
        if self.matrix.shape[0] != len(self.series):
            raise ValueError("ChartSnapshot matrix must have one row per series")


class TooltipOverlay:
    """Hover/pin/hide state machine for the combined tooltip.

    ``hidden`` -> ``visible`` on an active hover, ``visible`` -> ``hidden`` after
    ``hide_delay_s`` once hover ends, any state -> ``pinned`` while the pointer
    is over the overlay, ``pinned`` -> ``hidden`` as soon as it leaves. At most
    one hide timer is pending at any time.
    """

    def __init__(
        self,
        container: OverlayContainer,
        *,
        scheduler: Scheduler | None = None,
        hide_delay_s: float = HIDE_DELAY_S,
        offset: tuple[float, float] = ANCHOR_OFFSET_PX,
        epsilon: float = DEFAULT_EPSILON,
    ) -> None:
        if hide_delay_s < 0:
            raise ValueError("hide_delay_s must be >= 0")
        self._container = container
        self._scheduler = scheduler
        self._hide_delay_s = hide_delay_s
        self._offset = offset
        self._epsilon = epsilon
        self._state: TooltipState = "hidden"
        self._element: OverlayElement | None = None
        self._hide_timer: TimerHandle | None = None
        self._snapshot: ChartSnapshot | None = None
        self._content: TooltipContent | None = None
        self._position: tuple[float, float] | None = None

    @property
    def state(self) -> TooltipState:
        return self._state

    @property
    def pinned(self) -> bool:
        return self._state == "pinned"

    @property
    def content(self) -> TooltipContent | None:
        return self._content

    @property
    def position(self) -> tuple[float, float] | None:
        return self._position

    @property
    def hide_pending(self) -> bool:
        return self._hide_timer is not None

    def bind(self, snapshot: ChartSnapshot | None) -> None:
        self._snapshot = snapshot

    def handle_tooltip(self, request: TooltipRequest) -> TooltipState:
        if not request.active:
            if self._state == "visible":
                self._schedule_hide()
            return self._state

        content = self.build_content(request)
        if content is None:
            return self._state
        self._cancel_hide()
        element = self._ensure_element()
        x = request.caret_x + self._offset[0]
        y = request.caret_y + self._offset[1]
        self._content = content
        self._position = (x, y)
        element.show(content, x, y)
        if self._state != "pinned":
            self._transition("visible")
        return self._state

    def pointer_entered(self) -> TooltipState:
        self._cancel_hide()
        self._transition("pinned")
        return self._state

    def pointer_left(self) -> TooltipState:
        if self._state != "pinned":
            return self._state
        self._cancel_hide()
        self._hide_now()
        return self._state

    def hide(self) -> None:
        self._cancel_hide()
        self._hide_now()

    def teardown(self) -> None:
        self._cancel_hide()
        if self._element is not None:
            self._element.remove()
            self._element = None
        self._snapshot = None
        self._content = None
        self._position = None
        self._state = "hidden"

    def build_content(self, request: TooltipRequest) -> TooltipContent | None:
        snapshot = self._snapshot
        if snapshot is None or not request.points:
            return None
        hovered = request.points[0]
        if not 0 <= hovered.row_index < len(snapshot.rows):
            return None
        if not 0 <= hovered.series_index < len(snapshot.series):
            return None

        row = snapshot.rows[hovered.row_index]
        # The series' own cell is authoritative; the surface's reported value
        # only stands in when the cell is missing.
        cell = float(snapshot.matrix[hovered.series_index, hovered.row_index])
        value = cell if math.isfinite(cell) else hovered.value

        members: Sequence[int] = [hovered.series_index]
        if value is not None:
            resolved = resolve_coincident(snapshot.matrix, hovered.row_index, value, self._epsilon)
            if len(resolved) > 1:
                members = sorted({p.series_index for p in resolved} | {hovered.series_index})

        link = record_link(row.record_id)
        entries = tuple(
            TooltipEntry(
                series_index=i,
                color=snapshot.styles[i].color,
                label=snapshot.series[i].label,
                value=format_value(value if i == hovered.series_index else snapshot.series[i].values[hovered.row_index]),
                link=link,
            )
            for i in members
        )
        return TooltipContent(title=format_datetime(row.x), entries=entries, combined=len(entries) > 1)

    def _ensure_element(self) -> OverlayElement:
        if self._element is None:
            self._element = self._container.create_overlay(self.pointer_entered, self.pointer_left)
        return self._element

    def _schedule_hide(self) -> None:
        self._cancel_hide()
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._hide_timer = scheduler.call_later(self._hide_delay_s, self._on_hide_timer)

    def _cancel_hide(self) -> None:
        if self._hide_timer is not None:
            self._hide_timer.cancel()
            self._hide_timer = None

    def _on_hide_timer(self) -> None:
        self._hide_timer = None
        if self._state == "pinned":
            return
        self._hide_now()

    def _hide_now(self) -> None:
        if self._element is not None:
            self._element.hide()
        self._transition("hidden")

    def _transition(self, state: TooltipState) -> None:
        if state != self._state:
            LOGGER.debug("tooltip %s -> %s", self._state, state)
            self._state = state
