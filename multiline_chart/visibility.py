from __future__ import annotations

import logging
from typing import Callable

from .surface import RenderingSurface

LOGGER = logging.getLogger(__name__)


class VisibilityController:
    """Bulk show/hide for every series on the live surface."""

    def __init__(
        self,
        surface_provider: Callable[[], RenderingSurface | None],
        series_count_provider: Callable[[], int],
    ) -> None:
        self._surface_provider = surface_provider
        self._series_count_provider = series_count_provider

    def hide_all(self) -> bool:
        return self._set_all(False)

    def show_all(self) -> bool:
        return self._set_all(True)

    def _set_all(self, visible: bool) -> bool:
        surface = self._surface_provider()
        if surface is None:
            LOGGER.debug("visibility toggle skipped: no chart instance")
            return False
        for i in range(self._series_count_provider()):
            surface.set_dataset_visibility(i, visible)
        surface.update()
        return True
