"""Route workbench open/close events to the navigation history."""
from __future__ import annotations

from typing import Callable

from uberfire.core.logging import get_logger
from uberfire.docks.dock import UberfireDock
from uberfire.docks.registry import UberfireDocks
from uberfire.mvp.place_history import ActivityResourceType, PlaceHistoryHandler
from uberfire.mvp.place_request import PathPlaceRequest, PlaceRequest


class PlaceManagerHelper:
    """Takes the steps needed to track a place, whatever its type.

    ``current_perspective`` returns the identifier of the perspective on
    screen, or ``None`` before the first one is loaded.
    """

    def __init__(
        self,
        history: PlaceHistoryHandler,
        current_perspective: Callable[[], str | None],
        docks: UberfireDocks | None = None,
    ) -> None:
        self.history = history
        self.current_perspective = current_perspective
        self.docks = docks
        self.logger = get_logger(__name__)

    def on_open(self, activity_type: ActivityResourceType, place: PlaceRequest) -> None:
        self.history.register_open(activity_type, place)
        dock = self._dock_for(place)
        if dock is not None:
            self.history.register_open_dock(dock)

    def on_close(self, activity_type: ActivityResourceType, place: PlaceRequest) -> None:
        self.history.register_close(activity_type, place)
        dock = self._dock_for(place)
        if dock is not None:
            self.history.register_close_dock(dock)
        if isinstance(place, PathPlaceRequest):
            self.history.register_closed_editor(place)

    def flush(self) -> None:
        """Reset the bookmarkable token, e.g. on workbench reset or logout."""

        self.history.flush()

    def toggle_dock(self, dock_name: str) -> None:
        """Expand or collapse a dock given as position letter plus screen id, e.g. ``WExplorer``."""

        perspective = self.current_perspective()
        if self.docks is None or not perspective or len(dock_name) < 2:
            return
        dock = self.docks.get_docked_screen_in_perspective(perspective, dock_name[1:])
        if dock is None or dock.position.short_name != dock_name[0]:
            self.logger.debug("No dock %s in perspective %s", dock_name, perspective)
            return
        if self.docks.is_expanded(dock):
            self.docks.collapse(dock)
            self.history.register_close_dock(dock)
        else:
            self.docks.expand(dock)
            self.history.register_open_dock(dock)

    def _dock_for(self, place: PlaceRequest | None) -> UberfireDock | None:
        perspective = self.current_perspective()
        if self.docks is None or place is None or not perspective:
            return None
        return self.docks.get_docked_screen_in_perspective(perspective, place.identifier)
