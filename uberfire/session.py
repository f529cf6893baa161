"""Wiring for the navigation objects of one workbench session."""
from __future__ import annotations

from typing import Callable

from uberfire.core.config import ConfigManager
from uberfire.core.logging import configure_logging, get_logger
from uberfire.docks.registry import UberfireDocks
from uberfire.mvp.place_history import ActivityResourceType, Historian, PlaceHistoryHandler
from uberfire.mvp.place_manager_helper import PlaceManagerHelper
from uberfire.mvp.place_request import NOWHERE, PlaceRequest


class WorkbenchSession:
    """Owns the bookmarkable token, docks and helper for a single workbench.

    Each session keeps its own token; nothing is shared between sessions.
    """

    def __init__(self, config: ConfigManager | None = None, historian: Historian | None = None) -> None:
        self.config = config or ConfigManager()
        configure_logging(self.config.log_level())
        self.logger = get_logger(__name__)
        self.current_perspective: str | None = None
        self.docks = UberfireDocks()
        self.history = PlaceHistoryHandler(self.config, historian)
        self.places = PlaceManagerHelper(self.history, lambda: self.current_perspective, self.docks)
        self._unregister: Callable[[], None] | None = None

    @property
    def bookmarkable_url(self) -> str:
        return self.history.bookmarkable_url

    def start(self, go_to: Callable[[PlaceRequest], None], default_place: PlaceRequest = NOWHERE) -> None:
        self.history.flush()
        self._unregister = self.history.register(go_to, default_place)
        self.logger.debug("Navigation session started with default place %s", default_place.identifier)

    def open(self, activity_type: ActivityResourceType, place: PlaceRequest) -> None:
        if activity_type is ActivityResourceType.PERSPECTIVE:
            self.current_perspective = place.identifier
        self.places.on_open(activity_type, place)

    def close(self, activity_type: ActivityResourceType, place: PlaceRequest) -> None:
        self.places.on_close(activity_type, place)

    def stop(self) -> None:
        """Forget the token and detach from the historian (workbench reset or logout)."""

        if self._unregister is not None:
            self._unregister()
            self._unregister = None
        self.current_perspective = None
        self.places.flush()
