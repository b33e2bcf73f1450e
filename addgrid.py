import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from coord import ARCSEC_PER_DEGREE, FULL_TURN, print_degrees
from rect import Rect

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

DEFAULT_STEP = 36000   # 10°

# (pixels per degree of longitude, step in arc seconds), densest first
STEP_TABLE = [
    (180000.0, 1),
    (90000.0, 2),
    (60000.0, 3),
    (45000.0, 4),
    (36000.0, 5),
    (18000.0, 10),
    (12000.0, 15),
    (9000.0, 20),
    (6000.0, 30),
    (3000.0, 60),      # 1'
    (1500.0, 120),     # 2'
    (1000.0, 180),     # 3'
    (750.0, 240),      # 4'
    (600.0, 300),      # 5'
    (500.0, 360),      # 6'
    (300.0, 600),      # 10'
    (200.0, 900),      # 15'
    (100.0, 1800),     # 30'
    (50.0, 3600),      # 1°
    (10.0, 18000),     # 5°
]

DEG_90 = 90 * ARCSEC_PER_DEGREE

# Latitudes of the major parallels in arc seconds
POLAR_CIRCLE = 239624   # 66° 33' 44"
TROPIC = 84374          # 23° 26' 14"
MAJOR_PARALLELS = [
    ("Arctic Circle", POLAR_CIRCLE),
    ("Tropic of Cancer", TROPIC),
    ("Tropic of Capricorn", -TROPIC),
    ("Antarctic Circle", -POLAR_CIRCLE),
]

GRID_STYLE = 'fill="none" opacity="0.5" stroke="#000000" stroke-width="0.5"'
MAJOR_STYLE = GRID_STYLE + ' stroke-dasharray="5"'


@dataclass(frozen=True)
class LineDef:
    """A meridian or a parallel: its label and pixel position across the axis."""
    label: str
    position: float


@dataclass
class GridLines:
    meridians: List[LineDef] = field(default_factory=list)
    parallels: List[LineDef] = field(default_factory=list)
    step: int = DEFAULT_STEP


def calculate_step(pixels_per_degree: Optional[float]) -> int:
    """
    Pick the spacing between neighbouring grid lines for a map scale.

    Args:
        pixels_per_degree: Pixels spanned by one degree of longitude, or None
            when the projection is not available yet

    Returns:
        Step in arc seconds, one of the values of STEP_TABLE or DEFAULT_STEP
    """
    if not pixels_per_degree:
        return DEFAULT_STEP
    for threshold, step in STEP_TABLE:
        if pixels_per_degree >= threshold:
            return step
    return DEFAULT_STEP


def calculate_view_step(view) -> int:
    """Step for the current scale of a view."""
    return calculate_step(view.pixels_per_degree_longitude())


def _multiples(start: float, stop: float, step: int) -> np.ndarray:
    values = np.arange(math.ceil(start), math.floor(stop) + 1, dtype=np.int64)
    return values[values % step == 0]


def build_lines_lists(view, rect: Rect, step: Optional[int] = None) -> Optional[GridLines]:
    """
    Build the lists of meridians and parallels visible in an extent.

    Args:
        view: Projection adapter (see proj.MapView)
        rect: Visible extent in whole arc seconds
        step: Grid spacing in arc seconds; picked from the view scale if None

    Returns:
        GridLines, or None when the view cannot project yet
    """
    if not view.is_ready:
        logger.debug("Projection not available, grid skipped")
        return None

    if step is None:
        step = calculate_view_step(view)

    left, right = rect.left, rect.right
    # the 180° meridian is in view
    if left > right:
        if left > DEG_90:
            left -= FULL_TURN
        if right < -DEG_90:
            right += FULL_TURN
        # views wider than half the world: take both copies
        if left > right:
            left -= FULL_TURN
            right += FULL_TURN

    grid = GridLines(step=step)
    for value in _multiples(left, right, step).tolist():
        grid.meridians.append(LineDef(
            print_degrees(value),
            view.pixel_x_from_longitude(value / ARCSEC_PER_DEGREE),
        ))
    for value in _multiples(rect.bottom, rect.top, step).tolist():
        grid.parallels.append(LineDef(
            print_degrees(value),
            view.pixel_y_from_latitude(value / ARCSEC_PER_DEGREE),
        ))

    logger.debug("Grid step %d\": %d meridians, %d parallels",
                 step, len(grid.meridians), len(grid.parallels))
    return grid


def major_parallels(view, rect: Rect) -> List[LineDef]:
    """The polar circles and tropics lying strictly inside the extent."""
    if not view.is_ready:
        return []
    return [
        LineDef(name, view.pixel_y_from_latitude(value / ARCSEC_PER_DEGREE))
        for name, value in MAJOR_PARALLELS
        if rect.contains_latitude(value)
    ]


def grid_to_svg(grid: GridLines, width: float, height: float,
                major: Optional[List[LineDef]] = None) -> str:
    """SVG <line> elements for a grid spanning a width x height overlay."""
    lines = []
    for m in grid.meridians:
        lines.append(f'<line x1="{m.position:.6f}" y1="0" x2="{m.position:.6f}" y2="{height:g}" {GRID_STYLE}/>\n')
    for p in grid.parallels:
        lines.append(f'<line x1="0" y1="{p.position:.6f}" x2="{width:g}" y2="{p.position:.6f}" {GRID_STYLE}/>\n')
    for p in major or []:
        lines.append(f'<line x1="0" y1="{p.position:.6f}" x2="{width:g}" y2="{p.position:.6f}" {MAJOR_STYLE}/>\n')
    return "".join(lines)


def addgrid(orig_s: str, grid: GridLines, width: float, height: float,
            major: Optional[List[LineDef]] = None) -> str:
    """Add latitude/longitude grid lines to an SVG string."""
    newline = grid_to_svg(grid, width, height, major)
    # Insert grid lines before closing SVG tag
    end = orig_s.rindex("</svg>")
    return orig_s[:end] + newline + orig_s[end:]
