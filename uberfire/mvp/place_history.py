"""Keep the bookmarkable token of a workbench session in sync with opened places."""
from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol
from urllib.parse import unquote

from PySide6.QtCore import QObject, Signal

from uberfire.core.config import ConfigManager
from uberfire.core.logging import get_logger
from uberfire.docks.dock import UberfireDock
from uberfire.mvp import bookmarkable_url as urls
from uberfire.mvp.place_request import NOWHERE, DefaultPlaceRequest, PathPlaceRequest, PlaceRequest


class ActivityResourceType(Enum):
    PERSPECTIVE = "PERSPECTIVE"
    SCREEN = "SCREEN"
    EDITOR = "EDITOR"


class Historian(Protocol):
    """Access to the history stack behind the address bar."""

    def add_value_change_handler(self, handler: Callable[[str], None]) -> Callable[[], None]:
        ...

    def get_token(self) -> str:
        ...

    def new_item(self, token: str, issue_event: bool) -> None:
        ...


class InMemoryHistorian:
    """Historian backed by a plain list, used outside of a browser."""

    def __init__(self) -> None:
        self.tokens: list[str] = []
        self._handlers: list[Callable[[str], None]] = []

    def add_value_change_handler(self, handler: Callable[[str], None]) -> Callable[[], None]:
        self._handlers.append(handler)

        def remove() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return remove

    def get_token(self) -> str:
        return self.tokens[-1] if self.tokens else ""

    def new_item(self, token: str, issue_event: bool) -> None:
        if not self.tokens or self.tokens[-1] != token:
            self.tokens.append(token)
        if issue_event:
            for handler in list(self._handlers):
                handler(token)


class PlaceHistoryHandler(QObject):
    """Owns the navigation token of one workbench session.

    Every open/close event is folded into the token through
    :mod:`uberfire.mvp.bookmarkable_url` and pushed to the historian.
    """

    bookmarkChanged = Signal(str)

    def __init__(self, config: ConfigManager | None = None, historian: Historian | None = None) -> None:
        super().__init__()
        self.config = config or ConfigManager()
        self.historian: Historian = historian or InMemoryHistorian()
        self.logger = get_logger(__name__)
        self.default_place: PlaceRequest = NOWHERE
        self._bookmarkable_url = ""
        self._go_to: Callable[[PlaceRequest], None] | None = None
        self._remove_history_handler: Callable[[], None] | None = None

    @property
    def bookmarkable_url(self) -> str:
        return self._bookmarkable_url

    @property
    def max_size(self) -> int:
        return self.config.max_nav_url_size()

    def _update(self, token: str) -> None:
        if token != self._bookmarkable_url:
            self._bookmarkable_url = token
            self.bookmarkChanged.emit(token)

    # Registration -------------------------------------------------------
    def register(
        self, go_to: Callable[[PlaceRequest], None], default_place: PlaceRequest = NOWHERE
    ) -> Callable[[], None]:
        """Route history changes to ``go_to``; returns a callable that undoes the registration."""

        self._go_to = go_to
        self.default_place = default_place
        self._remove_history_handler = self.historian.add_value_change_handler(self.handle_history_token)

        def unregister() -> None:
            self.default_place = NOWHERE
            self._go_to = None
            if self._remove_history_handler:
                self._remove_history_handler()
                self._remove_history_handler = None

        return unregister

    def handle_current_history(self) -> None:
        self.handle_history_token(self.historian.get_token())

    def handle_history_token(self, token: str) -> None:
        if not token:
            place = self.default_place
        elif urls.get_perspective_from_url(unquote(token)) is None:
            self.logger.warning("Unrecognized history token: %s", token)
            place = self.default_place
        else:
            place = self.get_perspective_from_place(DefaultPlaceRequest(token))
        if self._go_to is None:
            self.logger.debug("No place manager registered, ignoring %s", place.full_identifier)
            return
        self._go_to(place)

    # Address bar --------------------------------------------------------
    def on_place_change(self, place: PlaceRequest) -> None:
        if place.update_location_bar_allowed and self.config.update_location_bar():
            self.historian.new_item(self.token_for_place(place), False)

    def token_for_place(self, place: PlaceRequest) -> str:
        if place == self.default_place:
            return ""
        return self._bookmarkable_url

    # Open/close events --------------------------------------------------
    def register_open(self, activity_type: ActivityResourceType, place: PlaceRequest) -> None:
        token = self._bookmarkable_url
        if activity_type is ActivityResourceType.PERSPECTIVE:
            token = urls.register_opened_perspective(token, place, self.max_size)
        elif activity_type is ActivityResourceType.SCREEN:
            token = urls.register_opened_screen(token, place, self.max_size)
        elif activity_type is ActivityResourceType.EDITOR:
            if isinstance(place, PathPlaceRequest):
                token = urls.register_opened_editor(token, place, self.max_size)
            else:
                token = urls.register_opened_screen(token, place, self.max_size)
        self._update(token)
        self.on_place_change(place)

    def register_close(self, activity_type: ActivityResourceType, place: PlaceRequest) -> None:
        closes_screen = activity_type is ActivityResourceType.SCREEN or (
            activity_type is ActivityResourceType.EDITOR and not isinstance(place, PathPlaceRequest)
        )
        if closes_screen:
            # the token may carry the screen with parameters the request no longer has
            entry = urls.find_screen_entry(self._bookmarkable_url, place.full_identifier)
            self._update(urls.register_closed_screen(self._bookmarkable_url, entry or place))
        self.on_place_change(place)

    def register_open_dock(self, dock: UberfireDock) -> None:
        self._update(urls.register_opened_dock(self._bookmarkable_url, dock, self.max_size))

    def register_close_dock(self, dock: UberfireDock) -> None:
        self._update(urls.register_closed_dock(self._bookmarkable_url, dock))

    def register_closed_editor(self, place: PlaceRequest) -> None:
        self._update(urls.register_closed_editor(self._bookmarkable_url, place))

    def flush(self) -> None:
        self._update("")

    # Queries ------------------------------------------------------------
    def get_perspective_from_place(self, place: PlaceRequest) -> PlaceRequest:
        """Return a request for the perspective named in ``place``, keeping its parameters."""

        url = unquote(place.identifier)
        if not urls.is_perspective_in_url(url):
            return place
        return DefaultPlaceRequest(urls.get_perspective_from_url(url) or "", dict(place.parameters))

    def get_closed_screens(self, place: PlaceRequest) -> list[str]:
        return urls.get_closed_screens_from_url(unquote(place.identifier))

    def get_opened_screens(self, place: PlaceRequest) -> list[str]:
        return urls.get_opened_screens_from_url(unquote(place.identifier))
