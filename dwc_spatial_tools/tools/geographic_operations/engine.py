"""Defines the geometry operations used to locate and measure records"""

import logging

import geopandas as gpd
import numpy as np
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError
from shapely.geometry import Point

from ...exceptions import GeometryEngineError


logger = logging.getLogger(__name__)


class GeometryEngine:
    """Wraps the geopandas, shapely, and pyproj calls used by the pipeline

    The engine exposes reproject, point_in_polygon, buffer_point, and
    polygon_area. Results are treated as exact. Failures that indicate a bad
    projection or boundary layer raise a GeometryEngineError.

    Parameters
    ----------
    quad_segs : int
        number of segments used to approximate a quarter circle when
        buffering points
    """

    def __init__(self, quad_segs=32):
        self.quad_segs = quad_segs

    def __repr__(self):
        return f"{self.__class__.__name__}(quad_segs={self.quad_segs})"

    @staticmethod
    def get_crs(crs):
        """Parses a CRS from a PROJ string, EPSG code, WKT, or CRS object"""
        try:
            return CRS.from_user_input(crs)
        except CRSError as exc:
            raise GeometryEngineError(f"Invalid projection: {crs!r}") from exc

    def get_equal_area_crs(self, crs):
        """Parses a CRS and checks that it is projected"""
        crs = self.get_crs(crs)
        if not crs.is_projected:
            raise GeometryEngineError(
                f"Equal-area projection must be a projected CRS ({crs.name} given)"
            )
        return crs

    def reproject(self, layer, crs):
        """Reprojects a boundary layer

        Parameters
        ----------
        layer : geopandas.GeoDataFrame
            boundary layer
        crs : Any
            target CRS

        Returns
        -------
        geopandas.GeoDataFrame
            copy of the layer in the target CRS
        """
        try:
            return layer.to_crs(crs)
        except (CRSError, ProjError, ValueError) as exc:
            raise GeometryEngineError(f"Could not reproject layer to {crs}") from exc

    @staticmethod
    def get_transformer(src_crs, dst_crs):
        """Builds a transformer that accepts and returns (lon, lat) order

        Transformers are built when a lookup structure is created and then
        only read, so one can be shared across records.
        """
        try:
            return Transformer.from_crs(src_crs, dst_crs, always_xy=True)
        except (CRSError, ProjError) as exc:
            raise GeometryEngineError(
                f"Could not transform from {src_crs} to {dst_crs}"
            ) from exc

    @staticmethod
    def transform_point(transformer, lon, lat):
        """Transforms a point using a prebuilt transformer

        Returns None if the point cannot be represented in the target CRS.
        """
        x, y = transformer.transform(lon, lat)
        if not (np.isfinite(x) and np.isfinite(y)):
            logger.warning(
                f"Could not transform ({lat}, {lon}) to {transformer.target_crs.name}"
            )
            return None
        return Point(x, y)

    def point_in_polygon(self, point, layer):
        """Finds the polygons in a layer that contain or touch a point

        Points on a shared boundary touch more than one polygon and are
        returned as multiple matches.

        Returns
        -------
        list of int
            positions of matching rows in the layer
        """
        return sorted(int(i) for i in layer.sindex.query(point, predicate="intersects"))

    def buffer_point(self, point, radius):
        """Buffers a point by a radius in the units of its CRS"""
        return point.buffer(radius, quad_segs=self.quad_segs)

    @staticmethod
    def polygon_area(geom):
        """Calculates the area of a polygon in the units of its CRS"""
        return geom.area

    @staticmethod
    def layer_areas(layer):
        """Calculates the area of each polygon in a layer"""
        if not isinstance(layer, gpd.GeoDataFrame):
            raise TypeError(f"layer must be a GeoDataFrame ({repr(type(layer))} given)")
        return layer.geometry.area
