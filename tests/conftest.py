"""Pytest configuration and shared fixtures."""
from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication

from uberfire.core.config import ConfigManager
from uberfire.docks.dock import DockPosition, UberfireDock
from uberfire.mvp.place_request import DefaultPlaceRequest


@pytest.fixture(scope="session")
def qt_app():
    """Provide a shared core application so signals have an event loop to belong to."""

    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def config(tmp_path: Path) -> ConfigManager:
    return ConfigManager(tmp_path / "settings.yaml")


def make_dock(name: str, perspective: str = "perspective", position: DockPosition = DockPosition.WEST) -> UberfireDock:
    return UberfireDock(position, DefaultPlaceRequest(name), perspective, icon_type="iconType")


@pytest.fixture
def dock_factory():
    return make_dock
