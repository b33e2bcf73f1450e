#!/usr/bin/env python3
"""
3D Globe Preview
Traces the coordinate grid and a measured great-circle arc on a sphere
using PyVista, optionally wrapped in an Earth texture.

The arc is interpolated with the same rotation as the map overlay, so the
globe shows the path the distance was measured along.
"""

import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pyvista as pv
import requests

from arcpath import SMOOTH_SEGMENTS, great_circle_points
from distance import distance_between, format_distance

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

SPHERE_RADIUS = 1.0
SPHERE_RESOLUTION = 400
# Lift lines slightly off the surface so the sphere does not hide them
LINE_LIFT = 1.002

TEXTURE_URL = "https://eoimages.gsfc.nasa.gov/images/imagerecords/73000/73909/world.topo.bathy.200412.3x5400x2700.jpg"
TEXTURE_PATH = Path("high_res_earth.jpg")
DOWNLOAD_TIMEOUT = 30  # seconds

WINDOW_SIZE = (1600, 1600)
SPHERE_COLOR = '#1a1a2e'
GRID_COLOR = 'gray'
EQUATOR_COLOR = 'red'
ARC_COLOR = 'yellow'


# ============================================================================
# COORDINATE TRANSFORMATIONS
# ============================================================================

def geographic_to_cartesian(geo_coords: np.ndarray, radius: float = SPHERE_RADIUS) -> np.ndarray:
    """
    Convert geographic coordinates to 3D Cartesian on sphere surface (vectorized).

    Z is up (north), X points at 0°N 0°E.

    Args:
        geo_coords: NumPy array of shape (N, 2) with [lon, lat] in degrees
        radius: Sphere radius

    Returns:
        NumPy array of shape (N, 3) with 3D points [x, y, z]
    """
    geo_coords = np.asarray(geo_coords, dtype=float).reshape(-1, 2)
    lon_rad = np.radians(geo_coords[:, 0])
    lat_rad = np.radians(geo_coords[:, 1])

    cos_lat = np.cos(lat_rad)
    x = radius * cos_lat * np.cos(lon_rad)
    y = radius * cos_lat * np.sin(lon_rad)
    z = radius * np.sin(lat_rad)

    return np.column_stack([x, y, z])


# ============================================================================
# 3D GEOMETRY GENERATION
# ============================================================================

def create_sphere(resolution: int = SPHERE_RESOLUTION) -> pv.PolyData:
    """Unit sphere mesh with texture coordinates for an equirectangular image."""
    sphere = pv.Sphere(
        radius=SPHERE_RADIUS,
        theta_resolution=resolution,
        phi_resolution=resolution
    )
    points = sphere.points
    u = 0.5 + np.arctan2(points[:, 1], points[:, 0]) / (2 * np.pi)
    v = 0.5 + np.arcsin(np.clip(points[:, 2] / SPHERE_RADIUS, -1.0, 1.0)) / np.pi
    sphere.active_texture_coordinates = np.column_stack([u, v])
    return sphere


def create_latitude_line(lat: float, num_points: int = 200) -> pv.PolyData:
    """
    A parallel: a circle of the right radius lifted to its height.

    Args:
        lat: Latitude in degrees
        num_points: Resolution of the circle
    """
    lat_rad = math.radians(lat)
    circle = pv.Circle(radius=LINE_LIFT * math.cos(lat_rad), resolution=num_points)
    return circle.translate((0, 0, LINE_LIFT * math.sin(lat_rad)))


def create_longitude_line(lon: float, num_points: int = 100) -> pv.PolyData:
    """A meridian from the north pole to the south pole."""
    lats = np.linspace(90.0, -90.0, num_points)
    coords = np.column_stack([np.full(num_points, lon), lats])
    return pv.lines_from_points(geographic_to_cartesian(coords, LINE_LIFT))


def create_grid_lines(step: int = 30) -> Tuple[List[pv.PolyData], List[pv.PolyData], pv.PolyData]:
    """
    Grid lines every step degrees.

    Returns:
        Tuple of (parallels list, meridians list, equator)
    """
    parallels = [create_latitude_line(lat) for lat in range(step, 90, step)]
    parallels += [create_latitude_line(-lat) for lat in range(step, 90, step)]
    meridians = [create_longitude_line(lon) for lon in range(-180, 180, step)]
    equator = create_latitude_line(0.0)
    return parallels, meridians, equator


def create_arc_line(from_: Sequence[float], to: Sequence[float],
                    segments: int = SMOOTH_SEGMENTS) -> pv.PolyData:
    """The great-circle arc between two [lon, lat] points as a polyline."""
    coords = np.array(great_circle_points(from_, to, segments))
    return pv.lines_from_points(geographic_to_cartesian(coords, LINE_LIFT))


# ============================================================================
# TEXTURE
# ============================================================================

def download_texture(url: str = TEXTURE_URL, save_path: Path = TEXTURE_PATH) -> Optional[Path]:
    """
    Fetch the Earth texture once and keep it on disk.

    Returns:
        Path of the cached image, or None if it could not be downloaded
    """
    save_path = Path(save_path)
    if save_path.exists():
        logger.info("Using cached texture: %s", save_path)
        return save_path

    logger.info("Downloading texture from %s", url)
    try:
        response = requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT)
        response.raise_for_status()
        with open(save_path, 'wb') as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
    except requests.RequestException as e:
        logger.warning("Texture download failed: %s", e)
        save_path.unlink(missing_ok=True)
        return None

    return save_path


# ============================================================================
# VISUALIZATION
# ============================================================================

def build_plotter(arc: Optional[Tuple[Sequence[float], Sequence[float]]] = None, step: int = 30,
                  texture: bool = True, off_screen: bool = False) -> pv.Plotter:
    """Plotter with the sphere, the grid and, if given, the arc."""
    plotter = pv.Plotter(window_size=WINDOW_SIZE, off_screen=off_screen)
    plotter.set_background('black')

    sphere = create_sphere()
    texture_path = download_texture() if texture else None
    if texture_path is not None:
        plotter.add_mesh(sphere, texture=pv.read_texture(str(texture_path)), smooth_shading=True, name='sphere')
    else:
        plotter.add_mesh(sphere, color=SPHERE_COLOR, smooth_shading=True, name='sphere')

    parallels, meridians, equator = create_grid_lines(step)
    plotter.add_mesh(equator, color=EQUATOR_COLOR, opacity=0.7, line_width=3, name='equator')
    for i, line in enumerate(parallels):
        plotter.add_mesh(line, color=GRID_COLOR, opacity=0.7, line_width=2, name=f'parallel_{i}')
    for i, line in enumerate(meridians):
        plotter.add_mesh(line, color=GRID_COLOR, opacity=0.7, line_width=2, name=f'meridian_{i}')

    if arc is not None:
        from_, to = arc
        plotter.add_mesh(create_arc_line(from_, to), color=ARC_COLOR, line_width=4,
                         render_lines_as_tubes=True, name='arc')
        plotter.add_points(geographic_to_cartesian(np.array([from_, to]), LINE_LIFT),
                           color=ARC_COLOR, point_size=12, render_points_as_spheres=True, name='ends')
        plotter.add_text(format_distance(distance_between(from_, to)), position='upper_left',
                         color=ARC_COLOR, name='distance')

    plotter.camera_position = [(3.0, 0, 0), (0, 0, 0), (0, 0, 1)]
    plotter.enable_terrain_style(mouse_wheel_zooms=True)
    return plotter


def show_globe(arc=None, step: int = 30, texture: bool = True) -> None:
    """Open the interactive globe window."""
    plotter = build_plotter(arc, step, texture)
    plotter.show(title="Great-circle Globe")
