"""
Great-circle arc between two geodetic points, as SVG paths for the overlay.

The arc is interpolated on the unit sphere by rotating the start vector
about the pole of the great circle, then projected point by point.
Two properties of a cylindrical world map need care:

    - The geodesic may cross the 180° meridian. In pixels this shows up as
      a jump of about a world width between neighbouring points; from that
      point on the rest of the arc is moved by a whole world width so the
      polyline stays continuous.
    - The map repeats horizontally, so the arc may have to be drawn again
      one world width to the left and/or right of the main copy.

The jump test is a heuristic tied to the current zoom: a step between two
neighbouring points longer than half a world width (or wrap_threshold) is
taken as a crossing. Arcs passing very close to a pole change longitude
quickly and need enough segments for the test to hold.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from coord import from_radians
from distance import lon_lat_to_vector
from rect import Rect
from shifthemi import shift_points, shifthemi
from vector import RotationMatrix, Vector
from vector2d import Vector2D

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

LABEL_OFFSET = 30.0     # pixels between the arc and the distance label
MIN_SEGMENTS = 2        # the arc must have a middle point for the label
LABEL_SEGMENTS = 2      # enough for endpoints and label geometry
SMOOTH_SEGMENTS = 100   # dense interpolation for drawing

# Squared length of begin x end below which the endpoints count as antipodes
ANTIPODAL_EPSILON = 1e-20

NORTH_POLE = Vector(0.0, 1.0, 0.0)
PRIME_MERIDIAN = Vector(1.0, 0.0, 0.0)

Pixel = Tuple[float, float]


@dataclass(frozen=True)
class ArcPathResult:
    """Everything the overlay needs to draw one measured arc."""
    from_pixel: Pixel
    to_pixel: Pixel
    points: Tuple[Pixel, ...]
    path: str
    bounds: Rect
    label_position: Pixel
    world_width: float
    visible: bool
    path_left: Optional[str] = None
    path_right: Optional[str] = None
    bounds_left: Optional[Rect] = None
    bounds_right: Optional[Rect] = None
    label_left: Optional[Pixel] = None
    label_right: Optional[Pixel] = None
    visible_left: bool = False
    visible_right: bool = False

    def copies(self) -> Iterator[Tuple[float, str, Pixel]]:
        """(x offset, path, label position) of every copy in view."""
        if self.visible:
            yield 0.0, self.path, self.label_position
        if self.visible_left:
            yield -self.world_width, self.path_left, self.label_left
        if self.visible_right:
            yield self.world_width, self.path_right, self.label_right


def make_path_from_points(points: Sequence[Pixel]) -> str:
    """
    Turn pixels into an SVG path string, M x yL x yL x y...

    A space before a minus sign is dropped, as SVG allows.
    """
    path = "".join(f"L{x + 0.0:.6f} {y + 0.0:.6f}" for x, y in points)
    return ("M" + path[1:]).replace(" -", "-")


def calculate_label_position(p0: Pixel, p1: Pixel, offset: float = LABEL_OFFSET) -> Pixel:
    """
    Anchor of the distance label next to the segment p0 -> p1.

    The label goes to the side of the segment facing up the screen, offset
    pixels away from p0. A zero-length segment puts it on p0.
    """
    origin = Vector2D.from_sequence(p0)
    position = Vector2D.from_sequence(p1).subtract(origin).normalize().rotate90ccw()
    if position.y > 0.0:
        position = position.negate()
    return position.with_length(offset).add(origin).to_tuple()


def _antipodal_axis(begin: Vector) -> Vector:
    # Every great circle joins antipodes; go over the north pole
    axis = begin.cross(NORTH_POLE)
    if axis.length2 < ANTIPODAL_EPSILON:
        axis = begin.cross(PRIME_MERIDIAN)
    return axis.normalize()


def great_circle_points(from_: Sequence[float], to: Sequence[float],
                        segments: int = LABEL_SEGMENTS) -> List[Tuple[float, float]]:
    """
    Interpolate the shortest arc between two [lon, lat] points.

    Args:
        from_: Start point in degrees
        to: End point in degrees
        segments: Number of equal steps along the arc

    Returns:
        segments + 1 [lon, lat] points in degrees, endpoints included
    """
    begin = lon_lat_to_vector(from_)
    end = lon_lat_to_vector(to)
    angle = begin.angle_between(end)
    axis = begin.cross(end)
    if axis.length2 < ANTIPODAL_EPSILON and angle > math.pi / 2:
        axis = _antipodal_axis(begin)
    else:
        axis = axis.normalize()
    step = angle / segments

    coordinates = []
    for i in range(segments + 1):
        spherical = begin.multiply(RotationMatrix(axis, step * i)).to_spherical()
        coordinates.append((from_radians(spherical.phi), from_radians(spherical.theta)))
    return coordinates


def fix_continuity(points: Sequence[Pixel], world_width: float,
                   threshold: Optional[float] = None) -> List[Pixel]:
    """
    Remove world-width jumps from a projected polyline.

    Each time the x step between neighbouring points exceeds the threshold
    (half a world width by default), every following point is moved by a
    world width against the jump.
    """
    if not points:
        return []
    if threshold is None:
        threshold = world_width / 2.0

    fixed = [tuple(points[0])]
    if world_width <= 0.0:
        return fixed + [tuple(p) for p in points[1:]]

    shift = 0.0
    for prev, cur in zip(points, points[1:]):
        jump = cur[0] - prev[0]
        if jump > threshold:
            shift -= world_width
        elif jump < -threshold:
            shift += world_width
        fixed.append((cur[0] + shift, cur[1]))
    return fixed


def make_svg_arc_path(view, from_: Sequence[float], to: Sequence[float],
                      segments: int = LABEL_SEGMENTS, map_rect: Optional[Rect] = None,
                      wrap_threshold: Optional[float] = None) -> Optional[ArcPathResult]:
    """
    Build the SVG paths and label anchor of the arc between two points.

    Args:
        view: Projection adapter (see proj.MapView)
        from_: [lon, lat] of the first point, degrees
        to: [lon, lat] of the last point, degrees
        segments: Interpolation steps, raised to MIN_SEGMENTS if lower
        map_rect: Visible pixel rectangle; the view's viewport by default
        wrap_threshold: X jump in pixels taken as a 180° crossing;
            half the world width by default

    Returns:
        ArcPathResult, or None when the view cannot project yet
    """
    if not view.is_ready:
        logger.debug("Projection not available, arc skipped")
        return None

    segments = max(int(segments), MIN_SEGMENTS)
    middle_segment = segments // 2

    coordinates = great_circle_points(from_, to, segments)
    world_width = view.world_pixel_width()
    raw = [view.project_to_pixel(lon, lat) for lon, lat in coordinates]
    points = fix_continuity(raw, world_width, wrap_threshold)
    if points[-1][0] != raw[-1][0]:
        logger.debug("Arc %s -> %s crosses the 180th meridian", from_, to)

    bounds = Rect.set_zero_size(*points[0])
    for x, y in points[1:]:
        bounds = bounds.extend(x, y)

    label_position = calculate_label_position(points[middle_segment], points[middle_segment + 1])
    path = make_path_from_points(points)

    if map_rect is None:
        map_rect = view.viewport_rect()

    result = dict(
        from_pixel=points[0],
        to_pixel=points[-1],
        points=tuple(points),
        path=path,
        bounds=bounds,
        label_position=label_position,
        world_width=world_width,
        visible=bounds.intersects(map_rect),
    )

    for side, sign in (("left", -1.0), ("right", 1.0)):
        offset = sign * world_width
        side_bounds = bounds.offset(offset, 0.0)
        if world_width > 0.0 and side_bounds.intersects(map_rect):
            label = shift_points([label_position], offset)[0]
            result.update({
                f"path_{side}": shifthemi(path, offset),
                f"bounds_{side}": side_bounds,
                f"label_{side}": (float(label[0]), float(label[1])),
                f"visible_{side}": True,
            })

    return ArcPathResult(**result)
