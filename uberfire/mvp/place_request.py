"""Place requests: the identifiers the workbench navigates to."""
from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote

PATH_URI_MARKER = "path_uri"
FILE_NAME_MARKER = "file_name"
HAS_VERSION_SUPPORT_MARKER = "has_version_support"


@dataclass
class PlaceRequest:
    """A named place with optional ordered parameters."""

    identifier: str
    parameters: dict[str, str] = field(default_factory=dict)
    update_location_bar_allowed: bool = True

    @property
    def full_identifier(self) -> str:
        return self.build_identifier("=")

    def build_identifier(self, separator: str = "=") -> str:
        """Render ``identifier?k=v&...`` using ``separator`` between keys and values."""

        pairs = [f"{key}{separator}{value}" for key, value in self.parameters.items()]
        if not pairs:
            return self.identifier
        return f"{self.identifier}?{'&'.join(pairs)}"

    def add_parameter(self, name: str, value: str) -> "PlaceRequest":
        self.parameters[name] = value
        return self

    def get_parameter(self, name: str, default: str | None = None) -> str | None:
        return self.parameters.get(name, default)


class DefaultPlaceRequest(PlaceRequest):
    """Plain place request identified by name."""


NOWHERE = DefaultPlaceRequest("NOWHERE")


@dataclass(frozen=True)
class VfsPath:
    """A file reference: display name plus URI."""

    file_name: str
    uri: str
    has_version_support: bool = False


class PathPlaceRequest(PlaceRequest):
    """Place request for an editor bound to a file.

    The reserved path markers always use a single ``=``; only the user
    parameters are affected by ``build_identifier``'s separator.
    """

    def __init__(
        self,
        path: VfsPath,
        identifier: str = "",
        parameters: dict[str, str] | None = None,
        update_location_bar_allowed: bool = True,
    ) -> None:
        super().__init__(identifier or path.file_name, dict(parameters or {}), update_location_bar_allowed)
        self.path = path

    def build_identifier(self, separator: str = "=") -> str:
        reserved = [
            f"{PATH_URI_MARKER}={quote(self.path.uri, safe='')}",
            f"{FILE_NAME_MARKER}={self.path.file_name}",
            f"{HAS_VERSION_SUPPORT_MARKER}={str(self.path.has_version_support).lower()}",
        ]
        pairs = reserved + [f"{key}{separator}{value}" for key, value in self.parameters.items()]
        return f"{self.identifier}?{'&'.join(pairs)}"
