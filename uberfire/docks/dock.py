"""Docked screens attached to an edge of a perspective."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from uberfire.mvp.place_request import PlaceRequest


class DockPosition(Enum):
    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"

    @property
    def short_name(self) -> str:
        return self.value

    @classmethod
    def decode(cls, short_name: str) -> "DockPosition":
        for position in cls:
            if position.value == short_name:
                return position
        raise ValueError(f"Unknown dock position: {short_name!r}")


@dataclass
class UberfireDock:
    """A screen docked to ``position`` inside ``associated_perspective``."""

    position: DockPosition
    place_request: PlaceRequest
    associated_perspective: str
    icon_type: str = ""
    label: str = ""
    size: float | None = None

    @property
    def identifier(self) -> str:
        return self.place_request.identifier

    @property
    def dock_id(self) -> str:
        """Position letter followed by the place's full identifier, e.g. ``WExplorer``."""

        return f"{self.position.short_name}{self.place_request.full_identifier}"
