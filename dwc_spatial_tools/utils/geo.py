"""Defines constants and helper functions for common geographic operations"""

import logging
import math

from pyproj import Geod


logger = logging.getLogger(__name__)


GEODESIC_PYPROJ = Geod(ellps="WGS84")


def lon_deg_dist_m(lat):
    """Calculates the length in meters of one degree of longitude at a latitude

    Uses the radius of the parallel on the WGS84 ellipsoid, so the value
    falls from ~111.3 km at the equator to ~78.8 km at 45 degrees and to zero
    at the poles.
    """
    if abs(lat) > 90:
        raise ValueError(f"Invalid latitude: {lat}")
    phi = math.radians(lat)
    radius = GEODESIC_PYPROJ.a * math.cos(phi)
    radius /= math.sqrt(1 - GEODESIC_PYPROJ.es * math.sin(phi) ** 2)
    return max(radius * math.pi / 180, 0.0)


def is_valid_lat_lon(lat, lon):
    """Tests if a latitude/longitude pair falls in the valid range"""
    return -90 <= lat <= 90 and -180 <= lon <= 180
