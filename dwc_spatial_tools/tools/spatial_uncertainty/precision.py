"""Estimates positional error implied by the precision of coordinates

Decimal places at the equator and at 45 degrees (one last-digit step):
+ 0: 111.3   km    78.8   km
+ 1:  11.1   km     7.9   km
+ 2:   1.1   km     0.79  km
+ 3:   0.11  km     0.079 km

The error is measured along the parallel, so it shrinks toward the poles
with the length of a degree of longitude.
"""

import logging
from collections import namedtuple

from ...utils import last_digit_step, lon_deg_dist_m, rounded_dec_places


logger = logging.getLogger(__name__)


PrecisionEstimate = namedtuple("PrecisionEstimate", ["digits", "uncertainty_m"])
PrecisionEstimate.__doc__ = """Number of significant decimal places and implied error

Both fields are None if the precision could not be inferred.
"""

NO_ESTIMATE = PrecisionEstimate(None, None)


def infer_digits(lat, lon):
    """Infers the number of significant decimal places in a coordinate pair

    The coarser of the two coordinates controls the precision of the pair.

    Parameters
    ----------
    lat : float | str
        latitude, optionally in its verbatim form
    lon : float | str
        longitude, optionally in its verbatim form

    Returns
    -------
    int
        number of significant decimal places, or None if either coordinate
        is missing
    """
    if lat is None or lon is None:
        return None
    digits = min(rounded_dec_places(lon), rounded_dec_places(lat))
    return max(digits, 0)


def digits_to_meters(digits, lat, rel_err=1.0):
    """Converts decimal places to a positional error in meters

    Parameters
    ----------
    digits : int
        number of significant decimal places
    lat : float
        latitude in decimal degrees
    rel_err : float
        fraction of the last-digit step treated as error. The default of 1.0
        treats a coordinate reported to the degree as accurate to within one
        degree of longitude.

    Returns
    -------
    float
        positional error in meters at the given latitude
    """
    return rel_err * last_digit_step(digits) * lon_deg_dist_m(lat)


def estimate_precision(lat, lon, rel_err=1.0, verbatim_lat=None, verbatim_lon=None):
    """Estimates the precision of a coordinate pair

    Parameters
    ----------
    lat : float
        latitude in decimal degrees
    lon : float
        longitude in decimal degrees
    rel_err : float
        fraction of the last-digit step treated as error
    verbatim_lat : str
        latitude as originally given, used to count decimal places if given
    verbatim_lon : str
        longitude as originally given, used to count decimal places if given

    Returns
    -------
    PrecisionEstimate
        digits and uncertainty in meters. Both are None if either coordinate
        is missing. This means unknown, not zero error.
    """
    if lat is None or lon is None:
        return NO_ESTIMATE
    digits = infer_digits(
        verbatim_lat if verbatim_lat is not None else lat,
        verbatim_lon if verbatim_lon is not None else lon,
    )
    return PrecisionEstimate(digits, digits_to_meters(digits, lat, rel_err))


def estimate_record_precision(record, diagnostic, rel_err=1.0):
    """Records the precision of the coordinates on an occurrence record"""
    if not record.has_coords:
        estimate = NO_ESTIMATE
    else:
        estimate = estimate_precision(
            record.lat,
            record.lon,
            rel_err=rel_err,
            verbatim_lat=record.verbatim_lat,
            verbatim_lon=record.verbatim_lon,
        )
    diagnostic.coord_precision_digits = estimate.digits
    diagnostic.coord_precision_m = estimate.uncertainty_m
    return estimate
