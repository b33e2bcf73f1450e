import math

# Arc seconds are the integer unit of the grid
ARCSEC_PER_DEGREE = 3600
HALF_TURN = 180 * ARCSEC_PER_DEGREE   # 648000
FULL_TURN = 2 * HALF_TURN             # 1296000


def to_radians(degrees):
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def from_radians(radians):
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


def print_degrees(value):
    """Format an arc-second value as a grid label, e.g. 5400 -> 1° 30'."""
    # [-180°, 180°), the sign is dropped below so -180° reads as 180°
    value = (value + HALF_TURN) % FULL_TURN - HALF_TURN

    # no sign on the labels
    value = abs(value)

    parts = [f"{int(value // ARCSEC_PER_DEGREE)}°"]

    value = value % ARCSEC_PER_DEGREE
    minutes = int(value // 60)
    if minutes != 0:
        parts.append(f"{minutes}'")

    seconds = value % 60
    if seconds != 0:
        parts.append(f'{_trim_number(seconds)}"')

    return " ".join(parts)


def _trim_number(value):
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def decompose(degrees):
    """Split non-negative degrees into whole degrees, whole minutes and seconds."""
    return (
        math.floor(degrees),
        math.floor(degrees * 60 % 60),
        degrees * 3600 % 60,
    )


def format_lon_lat(coord):
    """Format a [lon, lat] pair as D°M'S.s"E, D°M'S.s"N."""
    we = "W" if coord[0] < 0.0 else "E"
    ns = "S" if coord[1] < 0.0 else "N"
    lon_deg, lon_min, lon_sec = decompose(abs(coord[0]))
    lat_deg, lat_min, lat_sec = decompose(abs(coord[1]))
    return (
        f"{lon_deg}°{lon_min}'{lon_sec:.1f}\"{we}, "
        f"{lat_deg}°{lat_min}'{lat_sec:.1f}\"{ns}"
    )


def format_xy(coord, digits=6):
    """Plain decimal readout of a [lon, lat] pair."""
    return f"{coord[0]:.{digits}f}, {coord[1]:.{digits}f}"


def format_coordinates(coord, dms=False):
    """Mouse-position readout, either decimal or degrees/minutes/seconds."""
    return format_lon_lat(coord) if dms else format_xy(coord)
