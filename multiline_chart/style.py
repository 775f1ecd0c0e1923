from __future__ import annotations

from dataclasses import dataclass

# High-contrast palette; one cycle covers this many series with solid lines.
SERIES_COLORS: tuple[str, ...] = ("#3366CC", "#DC3912", "#FF9900", "#109618", "#990099", "#0099C6")
FILL_ALPHA_SUFFIX = "33"

# Tables consulted from the second cycle on.
DASH_PATTERNS: tuple[tuple[int, ...], ...] = ((6, 4), (2, 3), (10, 4, 2, 4), (4, 4, 1, 4))
POINT_SHAPES: tuple[str, ...] = ("triangle", "rect", "rectRot", "star", "crossRot")
BASE_POINT_SHAPE = "circle"

# Keyed by cycle parity.
LINE_WIDTHS: tuple[float, float] = (2.0, 3.0)
POINT_RADII: tuple[float, float] = (3.0, 4.0)
HOVER_RADIUS_BOOST = 2.0


@dataclass(frozen=True)
class StyleAssignment:
    color: str
    fill_tint: str
    dash: tuple[int, ...]
    line_width: float
    point_shape: str
    point_radius: float
    point_hover_radius: float

    @property
    def solid(self) -> bool:
        return not self.dash


def series_style(index: int) -> StyleAssignment:
    """Return the visual style for the series at ``index``.

    Colors repeat every ``len(SERIES_COLORS)`` series; each repeat (a cycle)
    adds a dash pattern, a point shape and an alternating width so series stay
    distinguishable without tracking any state.
    """

    if index < 0:
        raise ValueError("series index must be >= 0")
    palette_size = len(SERIES_COLORS)
    base = SERIES_COLORS[index % palette_size]
    cycle = index // palette_size
    parity = cycle % 2
    if cycle == 0:
        dash: tuple[int, ...] = ()
        shape = BASE_POINT_SHAPE
    else:
        dash = DASH_PATTERNS[(cycle - 1) % len(DASH_PATTERNS)]
        shape = POINT_SHAPES[(cycle - 1) % len(POINT_SHAPES)]
    radius = POINT_RADII[parity]
    return StyleAssignment(
        color=base,
        fill_tint=base + FILL_ALPHA_SUFFIX,
        dash=dash,
        line_width=LINE_WIDTHS[parity],
        point_shape=shape,
        point_radius=radius,
        point_hover_radius=radius + HOVER_RADIUS_BOOST,
    )
