"""Defines classes for querying and measuring administrative boundaries"""

from ... import _ImportClock

with _ImportClock("geographic_operations"):
    from .boundaries import RECORD_CRS, AdminBoundaries
    from .engine import GeometryEngine
