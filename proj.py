"""
Projection adapters between geodetic coordinates and overlay pixels.

A view stands in for the map widget: it knows where the map is centred,
how large the viewport is and how degrees turn into pixels. The grid and
arc builders receive a view explicitly.

A view whose viewport has no size yet (the widget has not been laid out)
is not ready: every projection method returns None and callers skip the
frame.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from coord import ARCSEC_PER_DEGREE
from rect import Rect

# ============================================================================
# CONFIGURATION
# ============================================================================

# World SVG canvas (plate carrée): ±180° over the width, ±72° over the height
SVG_WIDTH = 4170.0
SVG_HEIGHT = 1668.0
LON_RANGE = 180.0
LAT_RANGE = 72.0

# Web Mercator (EPSG:3857)
TILE_SIZE = 256
MIN_ZOOM = 3.0
MAX_ZOOM = 20.0
MERCATOR_MAX_LATITUDE = 85.0511287798
# The view may pan past 180° so the Pacific can be seen as a whole
MAX_LONGITUDE = 210.0
# The linear scale grows without bound towards the poles
MAX_LATITUDE = 83.0

DEFAULT_CENTER = (10.0, 25.0)
DEFAULT_ZOOM = 3.0

Pixel = Tuple[float, float]


def wrap_longitude(lon: float) -> float:
    """Bring a longitude past ±180° back into [-180, 180)."""
    if -180.0 <= lon <= 180.0:
        return lon
    return (lon + 180.0) % 360.0 - 180.0


def _check_size(width: float, height: float) -> None:
    for name, value in (("width", width), ("height", height)):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Viewport {name} must be a non-negative number, got {value!r}")


class MapView(ABC):
    """Geodetic <-> pixel conversion for one frame of the overlay."""

    def __init__(self, width: float, height: float):
        _check_size(width, height)
        self.width = float(width)
        self.height = float(height)

    @property
    def is_ready(self) -> bool:
        return self.width > 0 and self.height > 0

    @abstractmethod
    def _to_pixel(self, lon: float, lat: float) -> Pixel:
        ...

    @abstractmethod
    def _to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        ...

    def project_to_pixel(self, lon: float, lat: float) -> Optional[Pixel]:
        """Pixel of a longitude/latitude pair, or None before layout."""
        if not self.is_ready:
            return None
        return self._to_pixel(lon, lat)

    def pixel_to_geodetic(self, pixel: Sequence[float]) -> Optional[Tuple[float, float]]:
        """[lon, lat] under a pixel, longitude brought back into [-180, 180]."""
        if not self.is_ready:
            return None
        lon, lat = self._to_geodetic(pixel[0], pixel[1])
        return wrap_longitude(lon), lat

    def pixel_x_from_longitude(self, lon: float) -> Optional[float]:
        pixel = self.project_to_pixel(lon, 0.0)
        return None if pixel is None else pixel[0]

    def pixel_y_from_latitude(self, lat: float) -> Optional[float]:
        pixel = self.project_to_pixel(0.0, lat)
        return None if pixel is None else pixel[1]

    def pixels_per_degree_longitude(self) -> Optional[float]:
        """Pixels spanned by one degree of longitude at the current scale."""
        x0 = self.pixel_x_from_longitude(0.0)
        x1 = self.pixel_x_from_longitude(1.0)
        if x0 is None or x1 is None:
            return None
        return abs(x1 - x0)

    def world_pixel_width(self) -> Optional[float]:
        """Pixels spanned by 360° of longitude."""
        x0 = self.pixel_x_from_longitude(0.0)
        x180 = self.pixel_x_from_longitude(180.0)
        if x0 is None or x180 is None:
            return None
        return (x180 - x0) * 2.0

    def viewport_rect(self) -> Rect:
        """The visible pixel rectangle."""
        return Rect(0.0, self.height, self.width, 0.0)

    def extent_rect(self) -> Optional[Rect]:
        """
        The visible geographic extent in whole arc seconds.

        Longitudes are not wrapped: they lie on the same copy of the world
        as pixel_x_from_longitude, so a view centred at 200° spans about
        200° * 3600 and west < east always.
        """
        if not self.is_ready:
            return None
        west, south = self._to_geodetic(0.0, self.height)
        east, north = self._to_geodetic(self.width, 0.0)
        rect = Rect(west, north, east, south).scale(ARCSEC_PER_DEGREE)
        return rect.inflate_to_the_nearest_integers()


class PlateCarreeView(MapView):
    """
    Linear longitude/latitude canvas, such as the world SVG.

    lon_range and lat_range are the half spans shown across the width and
    the height; the equator/prime meridian crossing sits in the middle.
    """

    def __init__(self, width: float = SVG_WIDTH, height: float = SVG_HEIGHT,
                 lon_range: float = LON_RANGE, lat_range: float = LAT_RANGE):
        super().__init__(width, height)
        self.lon_range = lon_range
        self.lat_range = lat_range

    def _to_pixel(self, lon: float, lat: float) -> Pixel:
        x = lon * (self.width / 2 / self.lon_range) + self.width / 2
        y = -lat * (self.height / 2 / self.lat_range) + self.height / 2
        return x, y

    def _to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        lon = (x - self.width / 2) * (self.lon_range / (self.width / 2))
        lat = -(y - self.height / 2) * (self.lat_range / (self.height / 2))
        return lon, lat


class WebMercatorView(MapView):
    """
    Slippy-map view in the EPSG:3857 pixel space.

    Args:
        center: [lon, lat] of the viewport centre in degrees
        zoom: Zoom level, clamped to [MIN_ZOOM, MAX_ZOOM]
        width: Viewport width in pixels
        height: Viewport height in pixels
        tile_size: Tile edge in pixels; the world is tile_size * 2**zoom wide
    """

    def __init__(self, center: Sequence[float] = DEFAULT_CENTER, zoom: float = DEFAULT_ZOOM,
                 width: float = 0.0, height: float = 0.0, tile_size: int = TILE_SIZE):
        super().__init__(width, height)
        if not all(math.isfinite(v) for v in (center[0], center[1], zoom)):
            raise ValueError(f"Invalid view centre/zoom: {center!r}, {zoom!r}")
        self.zoom = min(max(zoom, MIN_ZOOM), MAX_ZOOM)
        self.center = (
            min(max(center[0], -MAX_LONGITUDE), MAX_LONGITUDE),
            min(max(center[1], -MAX_LATITUDE), MAX_LATITUDE),
        )
        self.tile_size = tile_size
        self.world_size = tile_size * 2.0 ** self.zoom
        self._cx, self._cy = self._world_xy(*self.center)

    def _world_xy(self, lon: float, lat: float) -> Pixel:
        lat = min(max(lat, -MERCATOR_MAX_LATITUDE), MERCATOR_MAX_LATITUDE)
        x = (lon + 180.0) / 360.0 * self.world_size
        y = (1.0 - math.log(math.tan(math.pi / 4 + math.radians(lat) / 2)) / math.pi) / 2.0 * self.world_size
        return x, y

    def _to_pixel(self, lon: float, lat: float) -> Pixel:
        x, y = self._world_xy(lon, lat)
        return x - self._cx + self.width / 2, y - self._cy + self.height / 2

    def _to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        wx = x + self._cx - self.width / 2
        wy = y + self._cy - self.height / 2
        lon = wx / self.world_size * 360.0 - 180.0
        lat = math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * wy / self.world_size))))
        return lon, lat

    def __repr__(self) -> str:
        return (f"WebMercatorView(center={self.center}, zoom={self.zoom}, "
                f"size={self.width:g}x{self.height:g})")
