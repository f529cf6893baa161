"""Registry of the docks declared by each perspective."""
from __future__ import annotations

from typing import Iterator

from uberfire.core.logging import get_logger
from uberfire.docks.dock import DockPosition, UberfireDock


class UberfireDocks:
    """Track docks per perspective and which edges are enabled."""

    def __init__(self) -> None:
        self._docks: list[UberfireDock] = []
        self._disabled: set[tuple[str, DockPosition]] = set()
        self._expanded: set[tuple[str, str]] = set()
        self.logger = get_logger(__name__)

    def add(self, *docks: UberfireDock) -> None:
        for dock in docks:
            if self._find(dock.associated_perspective, dock.identifier):
                self.logger.debug("Dock %s already registered for %s", dock.identifier, dock.associated_perspective)
                continue
            self._docks.append(dock)

    def remove(self, *docks: UberfireDock) -> None:
        for dock in docks:
            if dock in self._docks:
                self._docks.remove(dock)
            self._expanded.discard((dock.associated_perspective, dock.identifier))

    def docks_for(self, perspective: str) -> list[UberfireDock]:
        return [
            dock
            for dock in self._docks
            if dock.associated_perspective == perspective and self.is_enabled(dock.position, perspective)
        ]

    # Edges --------------------------------------------------------------
    def disable(self, position: DockPosition, perspective: str) -> None:
        self._disabled.add((perspective, position))

    def enable(self, position: DockPosition, perspective: str) -> None:
        self._disabled.discard((perspective, position))

    def is_enabled(self, position: DockPosition, perspective: str) -> bool:
        return (perspective, position) not in self._disabled

    # Expansion ----------------------------------------------------------
    def expand(self, dock: UberfireDock) -> None:
        self._expanded.add((dock.associated_perspective, dock.identifier))

    def collapse(self, dock: UberfireDock) -> None:
        self._expanded.discard((dock.associated_perspective, dock.identifier))

    def is_expanded(self, dock: UberfireDock) -> bool:
        return (dock.associated_perspective, dock.identifier) in self._expanded

    # Lookup -------------------------------------------------------------
    def is_screen_docked_in_perspective(self, perspective: str, screen: str) -> bool:
        return self.get_docked_screen_in_perspective(perspective, screen) is not None

    def get_docked_screen_in_perspective(self, perspective: str, screen: str) -> UberfireDock | None:
        for dock in self.docks_for(perspective):
            if dock.identifier == screen:
                return dock
        return None

    def _find(self, perspective: str, screen: str) -> UberfireDock | None:
        for dock in self._docks:
            if dock.associated_perspective == perspective and dock.identifier == screen:
                return dock
        return None

    def __iter__(self) -> Iterator[UberfireDock]:
        return iter(list(self._docks))
