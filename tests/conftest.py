import logging

import pytest

from proj import PlateCarreeView, WebMercatorView


@pytest.fixture
def plate_view():
    # 10 px per degree: x = lon * 10 + 1800, y = -lat * 10 + 720
    return PlateCarreeView(width=3600, height=1440, lon_range=180, lat_range=72)


@pytest.fixture
def mercator_view():
    return WebMercatorView(center=(10.0, 25.0), zoom=3, width=1280, height=720)


@pytest.fixture
def unready_view():
    return PlateCarreeView(width=0, height=0)


@pytest.fixture
def root_logger():
    """Root logger whose handlers and level are put back after the test."""
    logger = logging.getLogger()
    handlers = logger.handlers[:]
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
