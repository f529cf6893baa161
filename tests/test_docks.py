from __future__ import annotations

import pytest

from uberfire.docks.dock import DockPosition
from uberfire.docks.registry import UberfireDocks


def test_dock_id_uses_position_letter(dock_factory) -> None:
    assert dock_factory("Explorer").dock_id == "WExplorer"
    assert dock_factory("Outline", position=DockPosition.EAST).dock_id == "EOutline"


def test_decode_position() -> None:
    assert DockPosition.decode("N") is DockPosition.NORTH
    assert DockPosition.SOUTH.short_name == "S"
    with pytest.raises(ValueError):
        DockPosition.decode("X")


def test_registry_lookup(dock_factory) -> None:
    docks = UberfireDocks()
    explorer = dock_factory("Explorer", "Authoring")
    docks.add(explorer, dock_factory("Explorer", "Authoring"), dock_factory("Outline", "Other"))

    assert len(list(docks)) == 2
    assert docks.get_docked_screen_in_perspective("Authoring", "Explorer") is explorer
    assert docks.is_screen_docked_in_perspective("Other", "Outline")
    assert not docks.is_screen_docked_in_perspective("Authoring", "Outline")

    docks.remove(explorer)
    assert docks.get_docked_screen_in_perspective("Authoring", "Explorer") is None


def test_disabled_edges_hide_docks(dock_factory) -> None:
    docks = UberfireDocks()
    docks.add(dock_factory("Explorer", "Authoring"))

    docks.disable(DockPosition.WEST, "Authoring")
    assert docks.docks_for("Authoring") == []
    docks.enable(DockPosition.WEST, "Authoring")
    assert docks.is_screen_docked_in_perspective("Authoring", "Explorer")


def test_expand_and_collapse(dock_factory) -> None:
    docks = UberfireDocks()
    dock = dock_factory("Explorer")
    docks.add(dock)

    docks.expand(dock)
    assert docks.is_expanded(dock)
    docks.collapse(dock)
    assert not docks.is_expanded(dock)
