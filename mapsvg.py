import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from xml.sax.saxutils import escape

import click

from addgrid import addgrid, build_lines_lists, major_parallels
from coord import format_coordinates
from distance import distance_between, format_distance
from logging_config import setup_logging, verbosity_to_level
from measurement import DistanceMeasurement, MeasurementState
from proj import DEFAULT_CENTER, DEFAULT_ZOOM, MAX_ZOOM, MIN_ZOOM, PlateCarreeView, WebMercatorView

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720

RULER_FONT = 'font-family="sans-serif" font-size="11" fill="#000000"'
ARC_STYLE = 'fill="none" stroke="#d01010" stroke-width="2" stroke-linecap="round"'
MARKER_RADIUS = 5
MARKER_STYLE = 'fill="#ffffff" stroke="#d01010" stroke-width="2"'
DISTANCE_FONT = 'font-family="sans-serif" font-size="13" font-weight="bold" text-anchor="middle" fill="#d01010"'


@dataclass
class OverlayOptions:
    use_miles: bool = False
    show_major_parallels: bool = True
    show_coordinates: bool = True
    format_coordinates: bool = False


def parse_lon_lat(text: str) -> Tuple[float, float]:
    """Parse "lon,lat" in degrees."""
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"Expected LON,LAT, got {text!r}")
    lon, lat = (float(p) for p in parts)
    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise ValueError(f"Coordinates must be finite, got {text!r}")
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Latitude out of range: {lat}")
    return lon, lat


def svg_header(width: float, height: float) -> str:
    return (f'<svg height="{height:g}" viewBox="0 0 {width:g} {height:g}" width="{width:g}" '
            f'xmlns="http://www.w3.org/2000/svg">\n')


def render_overlay(view, options: Optional[OverlayOptions] = None,
                   measurement: Optional[DistanceMeasurement] = None) -> Optional[str]:
    """
    Render the coordinate grid and the distance measurement as one SVG.

    Returns None when the view cannot project yet.
    """
    if options is None:
        options = OverlayOptions()
    if not view.is_ready:
        logger.debug("View not laid out, nothing rendered")
        return None

    extent = view.extent_rect()
    grid = build_lines_lists(view, extent)
    major = major_parallels(view, extent) if options.show_major_parallels else []
    svg = addgrid(svg_header(view.width, view.height) + "</svg>\n", grid, view.width, view.height, major)

    body = []
    for m in grid.meridians:
        body.append(f'<text x="{m.position:.6f}" y="12" text-anchor="middle" {RULER_FONT}>{escape(m.label)}</text>\n')
    for p in grid.parallels:
        body.append(f'<text x="4" y="{p.position:.6f}" {RULER_FONT}>{escape(p.label)}</text>\n')

    if measurement is not None:
        drawn = measurement.overlay(view, options.use_miles)
        if drawn is not None:
            for path in drawn.paths:
                body.append(f'<path d="{path}" {ARC_STYLE}/>\n')
            for marker in drawn.markers:
                x, y = marker.position
                body.append(f'<circle cx="{x:.6f}" cy="{y:.6f}" r="{MARKER_RADIUS}" {MARKER_STYLE}/>\n')
            for x, y in drawn.labels:
                body.append(f'<text x="{x:.6f}" y="{y:.6f}" {DISTANCE_FONT}>{escape(drawn.distance)}</text>\n')

    if options.show_coordinates:
        center = view.pixel_to_geodetic((view.width / 2, view.height / 2))
        readout = format_coordinates(center, options.format_coordinates)
        body.append(f'<text x="{view.width - 4:g}" y="{view.height - 4:g}" text-anchor="end" '
                    f'{RULER_FONT}>{escape(readout)}</text>\n')

    end = svg.rindex("</svg>")
    return svg[:end] + "".join(body) + svg[end:]


def _lon_lat_option(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_lon_lat(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _zoom_option(ctx, param, value):
    if not math.isfinite(value):
        raise click.BadParameter(f"Zoom must be a finite number, got {value}")
    return value


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (use -vv for debug output)")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write the log to a file")
def cli(verbose: int, log_file: Optional[str]) -> None:
    """Coordinate grid and great-circle distance overlay for world maps."""
    setup_logging(verbosity_to_level(verbose), log_file)


@cli.command()
@click.option("--center", callback=_lon_lat_option, default=",".join(str(v) for v in DEFAULT_CENTER),
              show_default=True, help="Map centre as LON,LAT")
@click.option("--zoom", type=float, callback=_zoom_option, default=DEFAULT_ZOOM, show_default=True,
              help=f"Zoom level, clamped to [{MIN_ZOOM:g}, {MAX_ZOOM:g}]")
@click.option("--width", type=click.IntRange(min=1), default=DEFAULT_WIDTH, show_default=True)
@click.option("--height", type=click.IntRange(min=1), default=DEFAULT_HEIGHT, show_default=True)
@click.option("--projection", type=click.Choice(["mercator", "plate-carree"]), default="mercator",
              show_default=True)
@click.option("--from", "from_", callback=_lon_lat_option, default=None, help="First measurement point LON,LAT")
@click.option("--to", callback=_lon_lat_option, default=None, help="Last measurement point LON,LAT")
@click.option("--miles", is_flag=True, help="Show the distance in miles")
@click.option("--major-parallels/--no-major-parallels", "show_major", default=True, show_default=True)
@click.option("--coordinates/--no-coordinates", default=True, show_default=True)
@click.option("--dms", is_flag=True, help="Centre readout in degrees, minutes and seconds")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default="overlay.svg", show_default=True)
def render(center, zoom, width, height, projection, from_, to, miles, show_major,
           coordinates, dms, output) -> None:
    """Write the overlay of one map view to an SVG file."""
    if projection == "mercator":
        view = WebMercatorView(center, zoom, width, height)
    else:
        view = PlateCarreeView(width, height)

    measurement = None
    if from_ is not None:
        state = MeasurementState.LAST_POINT_SET if to is not None else MeasurementState.FIRST_POINT_SET
        measurement = DistanceMeasurement(from_, to if to is not None else from_, state)
    elif to is not None:
        raise click.BadParameter("--to needs --from", param_hint="--to")

    options = OverlayOptions(
        use_miles=miles,
        show_major_parallels=show_major,
        show_coordinates=coordinates,
        format_coordinates=dms,
    )
    svg = render_overlay(view, options, measurement)

    Path(output).write_text(svg, encoding="utf-8")
    logger.info("Rendered %r", view)
    click.echo(f"Overlay saved to '{output}'")


@cli.command()
@click.argument("point_from", callback=_lon_lat_option)
@click.argument("point_to", callback=_lon_lat_option)
@click.option("--miles", is_flag=True, help="Show the distance in miles")
def distance(point_from, point_to, miles) -> None:
    """Great-circle distance between two LON,LAT points."""
    click.echo(format_distance(distance_between(point_from, point_to), miles))


@cli.command()
@click.option("--from", "from_", callback=_lon_lat_option, default=None, help="First arc point LON,LAT")
@click.option("--to", callback=_lon_lat_option, default=None, help="Last arc point LON,LAT")
@click.option("--step", type=click.IntRange(min=1, max=90), default=30, show_default=True,
              help="Grid spacing in degrees")
@click.option("--texture/--no-texture", default=True, show_default=True, help="Download the Earth texture")
def globe(from_, to, step, texture) -> None:
    """Show the grid and the measured arc on a 3D globe."""
    import globe as globe_view

    arc = (from_, to) if from_ is not None and to is not None else None
    globe_view.show_globe(arc=arc, step=step, texture=texture)


if __name__ == "__main__":
    cli()
