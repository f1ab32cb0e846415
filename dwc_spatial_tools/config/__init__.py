"""Defines global configuration for package"""

from .. import _ImportClock

with _ImportClock("config"):
    from .config import ALBERS_NORTH_AMERICA, CONFIG, SpatialConfig
