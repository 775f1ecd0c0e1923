from __future__ import annotations

import logging
from typing import Any

from .config import ChartConfig
from .data_service import SeriesDataService, SeriesRequest, SeriesResponse, parse_series_response
from .errors import ChartConfigurationError, DataFetchError, error_message
from .labels import format_date
from .navigation import Navigator, record_page_target
from .series import Row, SeriesDefinition, build_series, series_matrix
from .style import series_style
from .surface import (
    ChartHooks,
    ChartSpec,
    DatasetSpec,
    PointerEvent,
    RenderingSurface,
    SurfaceFactory,
    TooltipRequest,
    tick_source_label,
)
from .tooltip import ChartSnapshot, OverlayContainer, Scheduler, TooltipOverlay
from .visibility import VisibilityController

LOGGER = logging.getLogger(__name__)


class ChartOrchestrator:
    """Fetches rows, builds styled series and wires the interactive overlay.

    The host calls :meth:`initialize` once the chart container exists and
    :meth:`teardown` when it goes away; :meth:`draw` can be called again to
    refresh. Errors never escape; they are kept in :attr:`error`.
    """

    def __init__(
        self,
        config: ChartConfig,
        *,
        data_service: SeriesDataService,
        surface_factory: SurfaceFactory,
        overlay_container: OverlayContainer,
        navigator: Navigator,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.config = config
        self._data_service = data_service
        self._surface_factory = surface_factory
        self._navigator = navigator
        self._chart: RenderingSurface | None = None
        self._rows: tuple[Row, ...] = ()
        self._series: tuple[SeriesDefinition, ...] = ()
        self._object_label: str | None = None
        self._error: str | None = None
        self._initialized = False
        self._generation = 0
        self._tooltip = TooltipOverlay(overlay_container, scheduler=scheduler)
        self._visibility = VisibilityController(lambda: self._chart, lambda: len(self._series))

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def chart(self) -> RenderingSurface | None:
        return self._chart

    @property
    def rows(self) -> tuple[Row, ...]:
        return self._rows

    @property
    def series(self) -> tuple[SeriesDefinition, ...]:
        return self._series

    @property
    def object_label(self) -> str | None:
        return self._object_label

    @property
    def tooltip(self) -> TooltipOverlay:
        return self._tooltip

    async def initialize(self) -> None:
        if self._initialized:
            return
        self._initialized = True
        LOGGER.debug(
            "chart config: record_id=%s fields=%s child_object=%s date_field=%s parent_lookup=%s date_filter=%s max_points=%s",
            self.config.record_id,
            self.config.fields_csv,
            self.config.child_object_api_name,
            self.config.date_field_api_name,
            self.config.parent_lookup_path,
            self.config.date_filter,
            self.config.max_points,
        )
        await self.draw()

    async def draw(self) -> None:
        self._generation += 1
        generation = self._generation
        self._error = None
        try:
            request = self.build_request()
            response = await self._fetch(request)
            if generation != self._generation:
                LOGGER.debug("discarding superseded chart fetch")
                return
            fields = request.metric_field_api_names
            self._rows = response.rows
            self._object_label = response.object_label
            self._series = build_series(self._rows, fields, response.field_labels)
            styles = tuple(series_style(i) for i in range(len(self._series)))
            snapshot = ChartSnapshot(rows=self._rows, series=self._series, styles=styles, matrix=series_matrix(self._series))

            self._destroy_chart()
            spec = ChartSpec(
                title=self.config.title,
                labels=tuple(row.x for row in self._rows),
                datasets=tuple(DatasetSpec.styled(s.label, s.values, styles[i]) for i, s in enumerate(self._series)),
            )
            hooks = ChartHooks(
                format_x_tick=self.format_x_tick,
                on_click=self.handle_click,
                on_tooltip=self.handle_tooltip,
            )
            surface = await self._surface_factory.create(spec, hooks)
            if generation != self._generation:
                LOGGER.debug("destroying chart from superseded draw")
                surface.destroy()
                return
            self._destroy_chart()
            self._chart = surface
            self._tooltip.bind(snapshot)
            LOGGER.debug("chart drawn: %d rows, %d series", len(self._rows), len(self._series))
        except ChartConfigurationError as exc:
            LOGGER.warning("chart configuration incomplete: missing %s", ", ".join(exc.missing))
            self._fail(exc, generation)
        except Exception as exc:
            LOGGER.exception("Chart error: %s", exc)
            self._fail(exc, generation)

    def build_request(self) -> SeriesRequest:
        missing = self.config.missing_required()
        if missing:
            raise ChartConfigurationError(missing)
        return SeriesRequest(
            parent_id=str(self.config.record_id),
            child_object_api_name=str(self.config.child_object_api_name),
            date_field_api_name=str(self.config.date_field_api_name),
            parent_lookup_path=str(self.config.parent_lookup_path),
            metric_field_api_names=self.config.metric_fields(),
            max_points=self.config.max_points_limit(),
            date_filter=self.config.date_filter or None,
        )

    def format_x_tick(self, value: Any, axis: Any = None) -> str:
        return format_date(tick_source_label(value, axis))

    def handle_click(self, event: PointerEvent) -> bool:
        if self._chart is None:
            return False
        points = self._chart.nearest_points(event)
        if not points:
            return False
        row_index = points[0].row_index
        if not 0 <= row_index < len(self._rows):
            return False
        record_id = self._rows[row_index].record_id
        if not record_id:
            return False
        self._navigator.navigate(record_page_target(record_id))
        return True

    def handle_tooltip(self, request: TooltipRequest) -> None:
        self._tooltip.handle_tooltip(request)

    def hide_all(self) -> bool:
        return self._visibility.hide_all()

    def show_all(self) -> bool:
        return self._visibility.show_all()

    def teardown(self) -> None:
        # Invalidates any draw still awaiting its fetch or surface.
        self._generation += 1
        self._destroy_chart()
        self._tooltip.teardown()

    async def _fetch(self, request: SeriesRequest) -> SeriesResponse:
        LOGGER.debug("fetching series for %s: %s", request.parent_id, ", ".join(request.metric_field_api_names))
        try:
            payload = await self._data_service.get_series(request)
        except Exception as exc:
            raise DataFetchError(error_message(exc), cause=exc) from exc
        return parse_series_response(payload, request.metric_field_api_names)

    def _fail(self, exc: BaseException, generation: int) -> None:
        if generation != self._generation:
            LOGGER.debug("ignoring failure from superseded draw: %s", exc)
            return
        self._error = error_message(exc)
        self._destroy_chart()
        self._tooltip.bind(None)
        self._tooltip.hide()

    def _destroy_chart(self) -> None:
        if self._chart is not None:
            chart = self._chart
            self._chart = None
            chart.destroy()
