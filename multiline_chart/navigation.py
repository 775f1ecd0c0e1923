from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

RECORD_PAGE = "standard__recordPage"


@dataclass(frozen=True)
class NavigationTarget:
    record_id: str
    type: str = RECORD_PAGE
    action_name: str = "view"

    def __post_init__(self) -> None:
        if not self.record_id.strip():
            raise ValueError("NavigationTarget.record_id must be non-empty")


class Navigator(Protocol):
    def navigate(self, target: NavigationTarget) -> None:
        ...


def record_page_target(record_id: str) -> NavigationTarget:
    return NavigationTarget(record_id=record_id)


def record_link(record_id: str | None) -> str | None:
    if not record_id:
        return None
    return f"/lightning/r/{record_id}/view"
