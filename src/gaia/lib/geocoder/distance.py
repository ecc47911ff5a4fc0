"""Great-circle distance between coordinates."""

import math

from gaia.lib.geocoder.base import InvalidCoordinateError, ReverseGeocodeAddress
from gaia.lib.geocoder.coordinates import NormalizedCoordinate, format_key, prefixes_around

# Mean Earth radius (IUGG)
EARTH_RADIUS_METERS = 6_371_008.8


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in meters between two WGS84 points.

    Symmetric in its arguments and exactly zero for identical points.
    Does not validate coordinate ranges.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))


def address_distance_meters(coordinate: NormalizedCoordinate, address: ReverseGeocodeAddress) -> float:
    """Distance in meters from a query coordinate to an address's own position.

    Raises:
        InvalidCoordinateError: If the address has no latitude or longitude.
    """
    if address.latitude is None or address.longitude is None:
        msg = f"address {address.formatted_address or address.address_label!r} has no coordinates"
        raise InvalidCoordinateError(msg)
    return distance_meters(coordinate.latitude, coordinate.longitude, address.latitude, address.longitude)


def search_prefixes(
    coordinate: NormalizedCoordinate,
    radius_meters: float,
) -> tuple[list[str] | None, list[str] | None]:
    """Cell prefixes covering every key within ``radius_meters`` of a coordinate.

    The latitude band is the angular radius itself. The longitude band is
    the widest longitude difference a point inside the circle can have,
    taken at the band's most poleward latitude, and wraps across the
    antimeridian.

    Returns:
        ``(lat_prefixes, lon_prefixes)``. ``None`` for an axis means the
        band is too wide to enumerate and that axis should not be filtered.
    """
    angle = radius_meters / EARTH_RADIUS_METERS
    d_lat = math.degrees(angle)
    lat_prefixes = prefixes_around(coordinate.query_lat, d_lat)

    poleward = math.radians(abs(coordinate.latitude) + d_lat)
    if angle >= math.pi or poleward >= math.pi / 2:
        return lat_prefixes, None
    ratio = math.sin(angle / 2) / math.cos(poleward)
    if ratio >= 1:
        return lat_prefixes, None
    d_lon = math.degrees(2 * math.asin(ratio))

    lon = coordinate.longitude
    centers = [coordinate.query_lon]
    if lon - d_lon < -180:
        centers.append(format_key(lon + 360))
    if lon + d_lon > 180:
        centers.append(format_key(lon - 360))

    lon_prefixes: list[str] = []
    for center in centers:
        prefixes = prefixes_around(center, d_lon)
        if prefixes is None:
            return lat_prefixes, None
        lon_prefixes.extend(p for p in prefixes if p not in lon_prefixes)
    return lat_prefixes, lon_prefixes
