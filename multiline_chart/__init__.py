"""Interactive multi-series line chart: styles, combined tooltip, visibility, navigation."""

from multiline_chart.coincident import DEFAULT_EPSILON, CoincidentPoint, resolve_coincident
from multiline_chart.config import ChartConfig, load_chart_config, parse_fields_csv
from multiline_chart.data_service import (
    SeriesDataService,
    SeriesRequest,
    SeriesResponse,
    StaticSeriesService,
    parse_series_response,
)
from multiline_chart.errors import ChartConfigurationError, ChartError, DataFetchError, error_message
from multiline_chart.labels import display_label, format_date, format_datetime, format_value, humanize
from multiline_chart.navigation import NavigationTarget, Navigator, record_link, record_page_target
from multiline_chart.orchestrator import ChartOrchestrator
from multiline_chart.series import Row, SeriesDefinition, build_series, series_matrix
from multiline_chart.style import SERIES_COLORS, StyleAssignment, series_style
from multiline_chart.surface import (
    ActivePoint,
    ChartHooks,
    ChartSpec,
    DatasetSpec,
    PointerEvent,
    RenderingSurface,
    SurfaceFactory,
    TickLabelSource,
    TooltipRequest,
)
from multiline_chart.tooltip import (
    ChartSnapshot,
    OverlayContainer,
    OverlayElement,
    TooltipContent,
    TooltipEntry,
    TooltipOverlay,
    TooltipState,
)
from multiline_chart.visibility import VisibilityController

__all__ = [
    "ActivePoint",
    "ChartConfig",
    "ChartConfigurationError",
    "ChartError",
    "ChartHooks",
    "ChartOrchestrator",
    "ChartSnapshot",
    "ChartSpec",
    "CoincidentPoint",
    "DEFAULT_EPSILON",
    "DataFetchError",
    "DatasetSpec",
    "NavigationTarget",
    "Navigator",
    "OverlayContainer",
    "OverlayElement",
    "PointerEvent",
    "RenderingSurface",
    "Row",
    "SERIES_COLORS",
    "SeriesDataService",
    "SeriesDefinition",
    "SeriesRequest",
    "SeriesResponse",
    "StaticSeriesService",
    "StyleAssignment",
    "SurfaceFactory",
    "TickLabelSource",
    "TooltipContent",
    "TooltipEntry",
    "TooltipOverlay",
    "TooltipRequest",
    "TooltipState",
    "VisibilityController",
    "build_series",
    "display_label",
    "error_message",
    "format_date",
    "format_datetime",
    "format_value",
    "humanize",
    "load_chart_config",
    "parse_fields_csv",
    "parse_series_response",
    "record_link",
    "record_page_target",
    "resolve_coincident",
    "series_matrix",
    "series_style",
]
