import re
from typing import Sequence

import numpy as np

# An x/y pair of an SVG path: "12.5 -3" or, with the space collapsed, "12.5-3"
COORD_PAIR = re.compile(r'(-?[.\d]+) ?(-?[.\d]+)')


def shift_points(points: Sequence[Sequence[float]], pixdis: float) -> np.ndarray:
    """
    Shift pixel points horizontally, e.g. onto a neighbouring copy of the world.

    Args:
        points: Sequence of [x, y] pixels
        pixdis: Pixels to add to every x coordinate

    Returns:
        NumPy array of shape (N, 2) with the shifted points
    """
    shifted = np.array(points, dtype=float).reshape(-1, 2)
    shifted[:, 0] += pixdis
    return shifted


def shifthemi(orig_s: str, pixdis: float) -> str:
    """Shift the coordinates of an SVG path string horizontally by pixdis."""
    def shift_coords(match):
        x_coord = float(match.group(1)) + pixdis
        y_coord = match.group(2)
        sep = "" if y_coord.startswith("-") else " "
        return f"{x_coord:.6f}{sep}{y_coord}"

    return COORD_PAIR.sub(shift_coords, orig_s)
