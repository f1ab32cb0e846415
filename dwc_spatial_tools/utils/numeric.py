"""Defines helper functions for working with floats and ints"""

import math
import re
from decimal import Decimal, InvalidOperation

import numpy as np


MAX_DEC_PLACES = 10
MIN_REPEATS = 5


def is_finite(val):
    """Tests if a value is a finite real number"""
    try:
        return bool(np.isfinite(float(val)))
    except (TypeError, ValueError):
        return False


def to_dec_str(val):
    """Converts a number to a plain decimal string without an exponent

    Floats are converted using their shortest round-trip representation, so
    a value entered as 45.1 is read as "45.1" and not as the binary
    approximation. Strings are kept as given.
    """
    if isinstance(val, str):
        val = val.strip()
    else:
        val = repr(float(val))
    try:
        dec = Decimal(val)
    except InvalidOperation:
        raise ValueError(f"Cannot read decimal places from {repr(val)}")
    if not dec.is_finite():
        raise ValueError(f"Cannot read decimal places from {repr(val)}")
    return format(dec, "f")


def rounded_dec_places(val, max_dec_places=MAX_DEC_PLACES, min_repeats=MIN_REPEATS):
    """Infers the number of significant decimal places in a coordinate

    Values that were rounded or derived from fractions (for example, minutes
    converted to decimal degrees) tend to end with a repeated digit, often
    followed by a single rounding digit:

    + 30.30000000000001 was rounded to 1 place
    + 30.29999999999999 was rounded to 1 place
    + 45.3333333 is 45 deg 20 min and is treated as 1 place
    + 45.1666667 is 45 deg 10 min and is treated as 2 places

    Parameters
    ----------
    val : float | int | str
        a decimal number
    max_dec_places : int
        maximum number of places to return
    min_repeats : int
        the minimum length of a run of identical digits treated as a
        repeating tail

    Returns
    -------
    int
        number of significant decimal places
    """
    try:
        _, dec = to_dec_str(val).split(".")
    except ValueError:
        return 0
    dec = dec.rstrip("0")

    # Look for a repeating tail, ignoring a final rounding digit
    for tail in (dec, dec[:-1]):
        match = re.search(r"(\d)\1{%d,}$" % (min_repeats - 1), tail)
        if match is not None:
            start = match.start()
            if match.group(1) in "09":
                dec = dec[:start]
            else:
                dec = dec[: start + 1]
            break

    return min(len(dec), max_dec_places)


def last_digit_step(dec_places):
    """Returns the value of one unit in the last decimal place"""
    return math.pow(10, -dec_places)
