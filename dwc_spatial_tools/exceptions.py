"""Defines the errors raised while setting up a spatial uncertainty run"""


class ConfigurationError(ValueError):
    """Raised when thresholds, fields, or boundary layers cannot be used"""


class GeometryEngineError(RuntimeError):
    """Raised when the geometry engine cannot reproject or measure a layer"""
