"""Great-circle helpers on a spherical Earth (R = 6371 km)."""

from __future__ import annotations

from math import asin, atan2, cos, degrees, radians, sin, sqrt

from flightabove.contracts.common import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates in kilometers.

    No validation: out-of-range inputs give a defined but meaningless value.
    """
    lat1, lon1, lat2, lon2 = map(radians, [a.latitude, a.longitude, b.latitude, b.longitude])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * asin(min(1.0, sqrt(h)))


def bearing_deg(a: Coordinate, b: Coordinate) -> float:
    """Initial great-circle bearing from ``a`` to ``b`` in [0, 360)."""
    lat1, lon1, lat2, lon2 = map(radians, [a.latitude, a.longitude, b.latitude, b.longitude])
    dlon = lon2 - lon1
    x = sin(dlon) * cos(lat2)
    y = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    return (degrees(atan2(x, y)) + 360.0) % 360.0


def destination_point(origin: Coordinate, bearing: float, dist_km: float) -> Coordinate:
    """Point reached travelling ``dist_km`` from ``origin`` on ``bearing`` degrees."""
    lat1 = radians(origin.latitude)
    lon1 = radians(origin.longitude)
    brg = radians(bearing)
    ang = dist_km / EARTH_RADIUS_KM

    sin_lat2 = sin(lat1) * cos(ang) + cos(lat1) * sin(ang) * cos(brg)
    lat2 = asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon1 + atan2(
        sin(brg) * sin(ang) * cos(lat1),
        cos(ang) - sin(lat1) * sin(lat2),
    )

    lon_deg = (degrees(lon2) + 540.0) % 360.0 - 180.0
    lat_deg = max(-90.0, min(90.0, degrees(lat2)))
    return Coordinate(latitude=lat_deg, longitude=lon_deg)


def bounding_box(center: Coordinate, radius_km: float) -> tuple[float, float, float, float]:
    """Rectangle enclosing a circle of ``radius_km`` around ``center``.

    Returns ``(north, south, west, east)`` in degrees. The longitude half-width
    is taken at the circle's widest point, which lies poleward of the centre.
    When the circle reaches a pole the box spans every longitude.
    """
    ang = radius_km / EARTH_RADIUS_KM
    dlat = degrees(ang)
    north = center.latitude + dlat
    south = center.latitude - dlat
    cos_lat = cos(radians(center.latitude))

    if north >= 90.0 or south <= -90.0 or sin(ang) >= cos_lat:
        west, east = -180.0, 180.0
    else:
        dlon = degrees(asin(sin(ang) / cos_lat))
        west = max(-180.0, center.longitude - dlon)
        east = min(180.0, center.longitude + dlon)
    return min(90.0, north), max(-90.0, south), west, east
