"""
Distance measurement tool.

The user places two points on the map and may then drag either of them.
The measurement turns the current endpoints into everything the overlay
draws: the distance text, the arc on every visible copy of the world,
the endpoint markers and the distance labels.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from arcpath import SMOOTH_SEGMENTS, ArcPathResult, make_svg_arc_path
from distance import distance_between, format_distance
from shifthemi import shift_points

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

# Labels are kept this far inside the viewport
LABEL_MARGIN_X = 30.0
LABEL_MARGIN_Y = 10.0

Pixel = Tuple[float, float]


class MeasurementState(Enum):
    NONE = 0              # measuring is off
    STARTED = 1           # on, no point placed yet
    FIRST_POINT_SET = 2
    LAST_POINT_SET = 3    # both points placed, distance shown


@dataclass
class Marker:
    position: Pixel
    first: bool


@dataclass
class MeasurementOverlay:
    distance: str
    arc: Optional[ArcPathResult]
    paths: List[str] = field(default_factory=list)
    markers: List[Marker] = field(default_factory=list)
    labels: List[Pixel] = field(default_factory=list)


def clamp_label(position: Pixel, width: float, height: float) -> Pixel:
    """Keep a label inside the viewport margins."""
    x = min(max(position[0], LABEL_MARGIN_X), width - LABEL_MARGIN_X)
    y = min(max(position[1], LABEL_MARGIN_Y), height - LABEL_MARGIN_Y)
    return x, y


class DistanceMeasurement:
    """Endpoints of the measurement and the state of the tool."""

    def __init__(self, from_: Sequence[float] = (0.0, 0.0), to: Sequence[float] = (0.0, 0.0),
                 state: MeasurementState = MeasurementState.NONE):
        self.from_ = tuple(from_)
        self.to = tuple(to)
        self.state = state

    @property
    def active(self) -> bool:
        return self.state is not MeasurementState.NONE

    def start(self) -> None:
        self.state = MeasurementState.STARTED

    def stop(self) -> None:
        self.state = MeasurementState.NONE

    def distance(self) -> float:
        """Distance between the endpoints in km."""
        return distance_between(self.from_, self.to)

    def place_point(self, view, pixel: Sequence[float]) -> bool:
        """
        Place the next point under a pixel.

        Returns False when nothing was placed: the tool is off or already
        has both points, or the view cannot convert pixels yet.
        """
        if self.state not in (MeasurementState.STARTED, MeasurementState.FIRST_POINT_SET):
            return False
        coord = view.pixel_to_geodetic(pixel)
        if coord is None:
            return False
        if self.state is MeasurementState.STARTED:
            self.from_ = self.to = coord
            self.state = MeasurementState.FIRST_POINT_SET
        else:
            self.to = coord
            self.state = MeasurementState.LAST_POINT_SET
        logger.debug("Measurement point placed at %s", coord)
        return True

    def move_point(self, view, pixel: Sequence[float], first: bool) -> bool:
        """Drag the first or the last point to a pixel."""
        if self.state in (MeasurementState.NONE, MeasurementState.STARTED):
            return False
        if not first and self.state is not MeasurementState.LAST_POINT_SET:
            return False
        coord = view.pixel_to_geodetic(pixel)
        if coord is None:
            return False
        if first:
            self.from_ = coord
        else:
            self.to = coord
        return True

    def overlay(self, view, use_miles: bool = False) -> Optional[MeasurementOverlay]:
        """
        What the overlay draws for the current endpoints.

        Returns None when there is nothing to draw yet or the view cannot
        project.
        """
        if self.state in (MeasurementState.NONE, MeasurementState.STARTED):
            return None
        arc = make_svg_arc_path(view, self.from_, self.to, SMOOTH_SEGMENTS)
        if arc is None:
            return None

        two_points = self.state is MeasurementState.LAST_POINT_SET
        result = MeasurementOverlay(distance=format_distance(self.distance(), use_miles), arc=arc)

        offsets = [0.0]
        if arc.visible_left:
            offsets.append(-arc.world_width)
        if arc.visible_right:
            offsets.append(arc.world_width)

        for offset in offsets:
            first, last = shift_points([arc.from_pixel, arc.to_pixel], offset).tolist()
            result.markers.append(Marker(tuple(first), True))
            if two_points:
                result.markers.append(Marker(tuple(last), False))

        if two_points:
            for _, path, label in arc.copies():
                result.paths.append(path)
                result.labels.append(clamp_label(label, view.width, view.height))
        return result
