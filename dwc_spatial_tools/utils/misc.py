"""Defines miscellaneous helper functions"""

import logging
import math

import pandas as pd


logger = logging.getLogger(__name__)


def configure_log(name=None, level="DEBUG", stream=True):
    """Convenience function that configures a simple log"""
    if name is None:
        name = __name__
    fn = name if name.lower().endswith(".log") else "{}.log".format(name)
    handlers = [logging.FileHandler(fn, "w", encoding="utf-8")]
    if stream:
        handlers.append(logging.StreamHandler())
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
    )


def is_missing(val):
    """Tests if a value from a record table should be treated as absent"""
    if val is None or val is pd.NA or val is pd.NaT:
        return True
    if isinstance(val, str):
        return val == ""
    try:
        return math.isnan(val)
    except TypeError:
        return False


def coerce_bool(val, default=False):
    """Coerces a flag from a record table to a bool

    GBIF exports flags as the strings "true" and "false"
    """
    if is_missing(val):
        return default
    if isinstance(val, str):
        try:
            return {"true": True, "false": False, "1": True, "0": False}[
                val.strip().lower()
            ]
        except KeyError:
            raise ValueError(f"Cannot coerce {repr(val)} to bool")
    return bool(val)
