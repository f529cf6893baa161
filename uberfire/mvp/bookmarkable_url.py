"""Compose and query bookmarkable navigation tokens.

Every function takes the current token and returns a new one (or a view
over it); nothing here keeps state. Malformed tokens are matched on a best
effort basis and never raise.
"""
from __future__ import annotations

from uberfire.core.logging import get_logger
from uberfire.docks.dock import UberfireDock
from uberfire.mvp.bookmark_token import (
    CLOSED_PREFIX,
    DOCK_BEGIN_SEP,
    DOCK_CLOSE_SEP,
    DOCK_PREFIX,
    MAX_NAV_URL_SIZE,
    OTHER_SCREEN_SEP,
    PERSPECTIVE_SEP,
    SCREEN_SEP,
    BookmarkToken,
    ScreenEntry,
    bare_identifier,
    is_blank,
)
from uberfire.mvp.place_request import FILE_NAME_MARKER, PATH_URI_MARKER, PathPlaceRequest, PlaceRequest

__all__ = [
    "CLOSED_PREFIX",
    "DOCK_BEGIN_SEP",
    "DOCK_CLOSE_SEP",
    "DOCK_PREFIX",
    "MAX_NAV_URL_SIZE",
    "OTHER_SCREEN_SEP",
    "PERSPECTIVE_SEP",
    "SCREEN_SEP",
    "find_screen_entry",
    "get_closed_screens_from_url",
    "get_docked_screens_from_url",
    "get_opened_editors_from_url",
    "get_opened_screens_from_url",
    "get_perspective_from_url",
    "get_screens_from_url",
    "get_url_token",
    "is_perspective_in_url",
    "is_perspective_screen",
    "is_screen_closed",
    "is_valid_screen",
    "register_closed_dock",
    "register_closed_editor",
    "register_closed_screen",
    "register_opened_dock",
    "register_opened_editor",
    "register_opened_perspective",
    "register_opened_screen",
    "url_contains_extra_perspective_screen",
]

logger = get_logger(__name__)

_RESERVED = (
    SCREEN_SEP,
    OTHER_SCREEN_SEP,
    DOCK_BEGIN_SEP,
    DOCK_CLOSE_SEP,
    PERSPECTIVE_SEP,
    "&",
    "=",
    PATH_URI_MARKER,
)


def _identifier(place: PlaceRequest | str | None) -> str | None:
    if isinstance(place, PlaceRequest):
        return place.full_identifier
    return place


def _same_screen(entry: str, screen: str) -> bool:
    """Match an entry by its full identifier, or by screen id when ``screen`` has no parameters."""

    wanted = bare_identifier(screen)
    if bare_identifier(entry) == wanted:
        return True
    return "?" not in wanted and ScreenEntry.parse(entry).id == wanted


def _bounded(original: str, candidate: BookmarkToken | str, max_size: int) -> str:
    result = str(candidate)
    if not is_blank(result) and len(result) >= max_size:
        logger.debug("Dropping navigation update, token would reach %d characters", len(result))
        return original
    return result


# Screens ----------------------------------------------------------------
def register_opened_screen(
    bookmarkable_url: str,
    screen: PlaceRequest | str | None,
    max_size: int = MAX_NAV_URL_SIZE,
) -> str:
    """Add a screen to the token.

    A previously closed screen is reopened in place. Before the perspective is
    known the screen joins the perspective list, afterwards it goes after the
    ``$``. Updates that would reach ``max_size`` are ignored.
    """

    screen_id = _identifier(screen)
    if is_blank(screen_id):
        return bookmarkable_url
    state = BookmarkToken.parse(bookmarkable_url)

    if state.replace_entry(CLOSED_PREFIX + screen_id, screen_id):
        pass
    elif state.contains(screen_id):
        return bookmarkable_url
    elif state.perspective is None:
        state.screens.append(screen_id)
    elif state.other_screens is None:
        state.other_screens = [screen_id]
    else:
        state.other_screens.append(screen_id)
    return _bounded(bookmarkable_url, state, max_size)


def register_closed_screen(bookmarkable_url: str, screen: PlaceRequest | str | None) -> str:
    """Mark a perspective screen closed with ``~``; drop a screen found after the ``$``."""

    screen_id = _identifier(screen)
    if is_blank(screen_id) or is_blank(bookmarkable_url):
        return bookmarkable_url
    if screen_id.startswith(CLOSED_PREFIX):
        screen_id = screen_id[len(CLOSED_PREFIX):]
    state = BookmarkToken.parse(bookmarkable_url)

    if state.contains(CLOSED_PREFIX + screen_id):
        return bookmarkable_url
    if screen_id in state.screens:
        state.replace_entry(screen_id, CLOSED_PREFIX + screen_id)
    elif screen_id in (state.other_screens or []):
        state.remove_entries({screen_id})
        if not state.other_screens:
            state.other_screens = None
    else:
        return bookmarkable_url
    return str(state)


def is_perspective_screen(bookmarkable_url: str | None, screen: str | None) -> bool:
    """True when ``screen`` sits before the ``$``, or when there is no ``$`` at all."""

    if is_blank(bookmarkable_url) or is_blank(screen):
        return False
    state = BookmarkToken.parse(bookmarkable_url)
    if state.other_screens is None:
        return True
    if any(_same_screen(entry, screen) for entry in state.screens):
        return True
    wanted = ScreenEntry.parse(screen).id
    return any(dock.screen_id == wanted for dock in state.dock_entries())


def is_perspective_in_url(bookmarkable_url: str | None) -> bool:
    return not is_blank(bookmarkable_url) and PERSPECTIVE_SEP in bookmarkable_url


def url_contains_extra_perspective_screen(bookmarkable_url: str | None) -> bool:
    return bookmarkable_url is not None and OTHER_SCREEN_SEP in bookmarkable_url


def get_url_token(bookmarkable_url: str | None, screen: str) -> str:
    """Return the raw entry (markers and parameters included) that mentions ``screen``."""

    if is_blank(bookmarkable_url) or not screen:
        return screen
    found = find_screen_entry(bookmarkable_url, screen)
    if found is not None:
        return found
    state = BookmarkToken.parse(bookmarkable_url)
    for entry in state.screens + (state.docks or []) + (state.other_screens or []):
        if screen in entry:
            return entry
    return screen


def find_screen_entry(bookmarkable_url: str | None, screen: str | None) -> str | None:
    """Return the raw entry for ``screen``, markers and parameters included, or ``None``.

    A bare id also finds the parameterised entry of the same screen.
    """

    if is_blank(bookmarkable_url) or is_blank(screen):
        return None
    state = BookmarkToken.parse(bookmarkable_url)
    for entry in state.screens + (state.docks or []) + (state.other_screens or []):
        if _same_screen(entry, screen):
            return entry
    return None


def get_screens_from_url(bookmarkable_url: str | None) -> set[str]:
    """All screen entries, opened or closed, except the docked ones."""

    return {entry for entry in BookmarkToken.parse(bookmarkable_url).entries() if entry}


def get_docked_screens_from_url(bookmarkable_url: str | None) -> set[str]:
    return set(BookmarkToken.parse(bookmarkable_url).docks or [])


def get_opened_screens_from_url(bookmarkable_url: str | None) -> list[str]:
    entries = BookmarkToken.parse(bookmarkable_url).entries()
    return [entry for entry in entries if entry and not entry.startswith(CLOSED_PREFIX)]


def get_closed_screens_from_url(bookmarkable_url: str | None) -> list[str]:
    entries = BookmarkToken.parse(bookmarkable_url).entries()
    return [entry[len(CLOSED_PREFIX):] for entry in entries if entry.startswith(CLOSED_PREFIX)]


def is_screen_closed(bookmarkable_url: str | None, screen: str | None) -> bool:
    # docked screens are ignored
    if is_blank(bookmarkable_url) or not screen:
        return False
    entries = BookmarkToken.parse(bookmarkable_url).entries()
    return any(entry.startswith(CLOSED_PREFIX) and _same_screen(entry, screen) for entry in entries)


def is_valid_screen(screen: str | None) -> bool:
    """Reject ids that collide with the token grammar. Closed markers are allowed."""

    if is_blank(screen):
        return False
    return not any(reserved in screen for reserved in _RESERVED)


# Perspective ------------------------------------------------------------
def register_opened_perspective(
    bookmarkable_url: str,
    perspective: PlaceRequest | str | None,
    max_size: int = MAX_NAV_URL_SIZE,
) -> str:
    """Prefix the token with ``perspective|``; a token that already names one is kept."""

    perspective_id = _identifier(perspective)
    if is_blank(perspective_id):
        return bookmarkable_url
    state = BookmarkToken.parse(bookmarkable_url)
    if state.perspective is not None:
        logger.debug("Perspective %s already in navigation token, ignoring %s", state.perspective, perspective_id)
        return bookmarkable_url
    state.perspective = perspective_id
    return _bounded(bookmarkable_url, state, max_size)


def get_perspective_from_url(bookmarkable_url: str | None) -> str | None:
    if is_blank(bookmarkable_url):
        return None
    if is_perspective_in_url(bookmarkable_url):
        return bookmarkable_url[:bookmarkable_url.index(PERSPECTIVE_SEP)]
    if is_valid_screen(bookmarkable_url):
        # a token holding a single id names the perspective itself
        return bookmarkable_url
    return None


# Docks ------------------------------------------------------------------
def register_opened_dock(
    bookmarkable_url: str,
    dock: UberfireDock | None,
    max_size: int = MAX_NAV_URL_SIZE,
) -> str:
    if dock is None:
        return bookmarkable_url
    dock_id = dock.dock_id
    closed = DOCK_PREFIX + dock_id
    state = BookmarkToken.parse(bookmarkable_url)

    if state.docks is None:
        state.docks = [dock_id]
    elif closed in state.docks:
        state.docks = [dock_id if entry == closed else entry for entry in state.docks]
    elif dock_id in state.docks:
        return bookmarkable_url
    else:
        state.docks.append(dock_id)
    return _bounded(bookmarkable_url, state, max_size)


def register_closed_dock(bookmarkable_url: str, dock: UberfireDock | None) -> str:
    if is_blank(bookmarkable_url) or dock is None:
        return bookmarkable_url
    dock_id = dock.dock_id
    state = BookmarkToken.parse(bookmarkable_url)
    if state.docks is None or dock_id not in state.docks:
        return bookmarkable_url
    state.docks = [DOCK_PREFIX + entry if entry == dock_id else entry for entry in state.docks]
    return str(state)


# Editors ----------------------------------------------------------------
def register_opened_editor(
    bookmarkable_url: str,
    place: PlaceRequest | None,
    max_size: int = MAX_NAV_URL_SIZE,
) -> str:
    """Store an editor with its user parameters written as ``key==value``.

    The doubled ``=`` keeps the parameters apart from the reserved
    ``path_uri``/``file_name`` pairs when the editors are read back.
    """

    if not isinstance(place, PathPlaceRequest):
        return bookmarkable_url
    plain = place.full_identifier
    doubled = place.build_identifier("==")
    state = BookmarkToken.parse(bookmarkable_url)

    if plain != doubled and (state.contains(plain) or state.contains(CLOSED_PREFIX + plain)):
        state.replace_entry(plain, doubled)
        state.replace_entry(CLOSED_PREFIX + plain, doubled)
        return _bounded(bookmarkable_url, state, max_size)
    if state.contains(doubled):
        return bookmarkable_url
    return register_opened_screen(bookmarkable_url, doubled, max_size)


def register_closed_editor(bookmarkable_url: str, place: PlaceRequest | None) -> str:
    """Remove the editor entry; the ``$`` separator is left in place."""

    if not isinstance(place, PathPlaceRequest) or is_blank(bookmarkable_url):
        return bookmarkable_url
    forms = {place.full_identifier, place.build_identifier("==")}
    targets = forms | {CLOSED_PREFIX + form for form in forms}
    state = BookmarkToken.parse(bookmarkable_url)
    if not state.remove_entries(targets):
        return bookmarkable_url
    return str(state)


def _until_last_delimiter(fragment: str) -> str:
    comma = fragment.rfind(SCREEN_SEP)
    ampersand = fragment.rfind("&")
    if comma != -1 and ampersand != -1:
        return fragment[:max(comma, ampersand)]
    return fragment


def _collect_editor(fragment: str, editors: dict[str, dict[str, str]]) -> None:
    # fragment starts with the '=' that followed the path marker
    ampersand = fragment.find("&")
    uri = fragment[1:ampersand] if ampersand != -1 else fragment[1:].rstrip(SCREEN_SEP)
    arguments: dict[str, str] = {}
    for argument in fragment.split("&"):
        if "==" in argument:
            key, _, value = argument.partition("==")
            arguments[key] = value
        elif FILE_NAME_MARKER in argument:
            key, _, value = argument.partition("=")
            arguments[key] = value
    editors[uri] = arguments


def get_opened_editors_from_url(bookmarkable_url: str | None) -> dict[str, dict[str, str]]:
    """Map each editor URI in the token to its ``file_name`` and doubled parameters."""

    editors: dict[str, dict[str, str]] = {}
    if is_blank(bookmarkable_url):
        return editors
    for fragment in bookmarkable_url.split(PATH_URI_MARKER)[1:]:
        if "=" in fragment:
            _collect_editor(_until_last_delimiter(fragment), editors)
    return editors
