"""Structured form of the bookmarkable navigation token.

A token looks like::

    Widgets|PagedTableScreen,~PropertiesScreen[WSimpleDockScreen,!EOutline,]$Editor?path_uri=...

* before ``|`` is the perspective
* up to ``$`` is the CSV list of screens opened with the perspective
* between ``[`` and ``]`` are the docked screens, each terminated by a comma
* after ``$`` are the screens that do not belong to the perspective

``~`` marks a closed screen, ``!`` a closed dock. Entries are kept as raw
strings so that unknown markers survive a parse/serialize cycle.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from uberfire.docks.dock import DockPosition

PERSPECTIVE_SEP = "|"
SCREEN_SEP = ","
OTHER_SCREEN_SEP = "$"
CLOSED_PREFIX = "~"
DOCK_PREFIX = "!"
DOCK_BEGIN_SEP = "["
DOCK_CLOSE_SEP = "]"
MAX_NAV_URL_SIZE = 1900


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def bare_identifier(entry: str) -> str:
    """Strip the closed and dock markers from a raw entry."""

    if entry.startswith(CLOSED_PREFIX):
        entry = entry[len(CLOSED_PREFIX):]
    if entry.startswith(DOCK_PREFIX):
        entry = entry[len(DOCK_PREFIX):]
    return entry


def _split(section: str) -> list[str]:
    return section.split(SCREEN_SEP) if section else []


@dataclass
class ScreenEntry:
    id: str
    closed: bool = False
    docked: bool = False
    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: str) -> "ScreenEntry":
        closed = raw.startswith(CLOSED_PREFIX)
        body = raw[len(CLOSED_PREFIX):] if closed else raw
        docked = body.startswith(DOCK_PREFIX)
        if docked:
            body = body[len(DOCK_PREFIX):]
        identifier, _, query = body.partition("?")
        params: dict[str, str] = {}
        for pair in query.split("&") if query else []:
            if "==" in pair:
                key, _, value = pair.partition("==")
            else:
                key, _, value = pair.partition("=")
            params[key] = value
        return cls(identifier, closed, docked, params)


@dataclass
class DockEntry:
    position: DockPosition
    screen_id: str
    closed: bool = False

    @classmethod
    def parse(cls, raw: str) -> "DockEntry | None":
        closed = raw.startswith(DOCK_PREFIX)
        body = raw[len(DOCK_PREFIX):] if closed else raw
        if len(body) < 2:
            return None
        try:
            position = DockPosition.decode(body[0])
        except ValueError:
            return None
        return cls(position, body[1:], closed)


@dataclass
class BookmarkToken:
    """Parsed token. ``None`` sections are absent; ``[]`` means the separator is present but empty."""

    perspective: str | None = None
    screens: list[str] = field(default_factory=list)
    docks: list[str] | None = None
    other_screens: list[str] | None = None

    @classmethod
    def parse(cls, token: str | None) -> "BookmarkToken":
        if is_blank(token):
            return cls()
        perspective: str | None = None
        rest = token
        sep = token.find(PERSPECTIVE_SEP)
        if sep != -1:
            perspective = token[:sep]
            rest = token[sep + 1:]

        docks: list[str] | None = None
        begin = rest.find(DOCK_BEGIN_SEP)
        if begin != -1:
            end = rest.find(DOCK_CLOSE_SEP, begin)
            if end != -1:
                docks = [entry for entry in rest[begin + 1:end].split(SCREEN_SEP) if entry]
                rest = rest[:begin] + rest[end + 1:]

        others: list[str] | None = None
        sep = rest.find(OTHER_SCREEN_SEP)
        if sep != -1:
            others = _split(rest[sep + 1:])
            rest = rest[:sep]
        return cls(perspective, _split(rest), docks, others)

    def __str__(self) -> str:
        parts: list[str] = []
        if self.perspective is not None:
            parts.append(self.perspective + PERSPECTIVE_SEP)
        parts.append(SCREEN_SEP.join(self.screens))
        if self.docks is not None:
            parts.append(DOCK_BEGIN_SEP + "".join(dock + SCREEN_SEP for dock in self.docks) + DOCK_CLOSE_SEP)
        if self.other_screens is not None:
            parts.append(OTHER_SCREEN_SEP + SCREEN_SEP.join(self.other_screens))
        return "".join(parts)

    # Queries ------------------------------------------------------------
    def entries(self) -> list[str]:
        """Screen entries in token order: perspective screens, then other screens."""

        return list(self.screens) + list(self.other_screens or [])

    def contains(self, entry: str) -> bool:
        return entry in self.screens or entry in (self.other_screens or [])

    def dock_entries(self) -> list[DockEntry]:
        parsed = (DockEntry.parse(entry) for entry in self.docks or [])
        return [entry for entry in parsed if entry is not None]

    # Mutation -----------------------------------------------------------
    def replace_entry(self, old: str, new: str) -> bool:
        """Replace every screen entry equal to ``old``; return whether anything changed."""

        if not self.contains(old):
            return False
        self.screens = [new if entry == old else entry for entry in self.screens]
        if self.other_screens is not None:
            self.other_screens = [new if entry == old else entry for entry in self.other_screens]
        return True

    def remove_entries(self, targets: set[str]) -> bool:
        before = len(self.entries())
        self.screens = [entry for entry in self.screens if entry not in targets]
        if self.other_screens is not None:
            self.other_screens = [entry for entry in self.other_screens if entry not in targets]
        return len(self.entries()) != before
