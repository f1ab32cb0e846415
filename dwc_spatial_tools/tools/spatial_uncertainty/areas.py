"""Calculates equal-area sizes of administrative units and uncertainty circles"""

import logging

import numpy as np

from ..geographic_operations import GeometryEngine
from ...exceptions import GeometryEngineError
from ...utils import std_key


logger = logging.getLogger(__name__)


M2_PER_KM2 = 1000**2


class AreaResolver:
    """Looks up the areas of states, counties, and uncertainty buffers

    Both boundary layers are reprojected to the equal-area projection once
    when the resolver is created. Areas are cached by standardized name, so
    lookups for each record are simple dictionary reads.

    Parameters
    ----------
    boundaries : AdminBoundaries
        indexed state and county layers
    ea_proj : str | pyproj.CRS
        equal-area projection, for example an Albers PROJ string
    engine : GeometryEngine
        engine used to reproject, buffer, and measure geometries. Defaults
        to the engine used by boundaries.
    max_coord_uncer_m : float
        stated uncertainties larger than this are not buffered

    Raises
    ------
    GeometryEngineError
        if the projection is invalid or any polygon does not have a positive
        area after reprojection
    """

    def __init__(self, boundaries, ea_proj, engine=None, max_coord_uncer_m=5000000):
        if engine is None:
            engine = getattr(boundaries, "engine", None) or GeometryEngine()
        self.boundaries = boundaries
        self.engine = engine
        self.ea_crs = engine.get_equal_area_crs(ea_proj)
        self._to_ea = engine.get_transformer(boundaries.record_crs, self.ea_crs)
        self.max_coord_uncer_m = max_coord_uncer_m

        state_field = boundaries.state_field
        county_field = boundaries.county_field

        states = engine.reproject(boundaries.states, self.ea_crs)
        self._state_areas = {}
        for name, area in zip(states[state_field], self._areas(states, "state")):
            key = std_key(name)
            self._state_areas[key] = self._state_areas.get(key, 0) + area

        counties = engine.reproject(boundaries.counties, self.ea_crs)
        self._county_areas = {}
        for state, county, area in zip(
            counties[state_field],
            counties[county_field],
            self._areas(counties, "county"),
        ):
            key = (std_key(state), std_key(county))
            self._county_areas[key] = self._county_areas.get(key, 0) + area

        logger.debug(
            f"Calculated areas for {len(self._state_areas)} states and"
            f" {len(self._county_areas)} counties in {self.ea_crs.name}"
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(ea_crs={self.ea_crs.name!r})"

    def state_area(self, state):
        """Returns the area of a state in km2 or None if not found"""
        if state is None:
            return None
        return self._state_areas.get(std_key(state))

    def county_area(self, state, county):
        """Returns the area of a county in km2 or None if not found"""
        if state is None or county is None:
            return None
        return self._county_areas.get((std_key(state), std_key(county)))

    def can_buffer(self, coord_uncer_m):
        """Tests if a stated uncertainty is usable for buffering"""
        return (
            coord_uncer_m is not None
            and np.isfinite(coord_uncer_m)
            and 0 <= coord_uncer_m <= self.max_coord_uncer_m
        )

    def buffer_area(self, lat, lon, radius_m):
        """Calculates the area of a circle around a point in km2

        Parameters
        ----------
        lat : float
            latitude in decimal degrees
        lon : float
            longitude in decimal degrees
        radius_m : float
            radius of the circle in meters

        Returns
        -------
        float
            area of the buffered point in the equal-area projection, or None
            if the point could not be projected
        """
        point = self.engine.transform_point(self._to_ea, lon, lat)
        if point is None:
            return None
        buffered = self.engine.buffer_point(point, radius_m)
        return self.engine.polygon_area(buffered) / M2_PER_KM2

    def resolve(self, record, diagnostic):
        """Records areas of named units, derived units, and uncertainty

        Parameters
        ----------
        record : OccurrenceRecord
            the record
        diagnostic : Diagnostic
            diagnostic already populated by the precision estimator and the
            geographic matcher

        Returns
        -------
        Diagnostic
            the updated diagnostic
        """
        if diagnostic.state_in_geog:
            diagnostic.area_of_state_km2 = self.state_area(record.state_province)
        if diagnostic.state_county_matches:
            diagnostic.area_of_county_km2 = self.county_area(
                record.state_province, record.county
            )
        diagnostic.area_of_state_from_coords_km2 = self.state_area(
            diagnostic.state_from_coords
        )
        diagnostic.area_of_county_from_coords_km2 = self.county_area(
            diagnostic.state_of_county_from_coords, diagnostic.county_from_coords
        )

        if record.has_coords and self.can_buffer(record.coord_uncer_m):
            # Rounding only ever adds to the stated uncertainty
            augmented = record.coord_uncer_m + (diagnostic.coord_precision_m or 0)
            diagnostic.coord_uncer_augmented_m = augmented
            diagnostic.coord_uncer_area_km2 = self.buffer_area(
                record.lat, record.lon, augmented
            )
        elif record.has_coords and record.has_stated_uncer:
            logger.debug(
                f"Did not buffer {record.key}: stated uncertainty exceeds"
                f" {self.max_coord_uncer_m} m ({record.coord_uncer_m} m)"
            )

        return diagnostic

    def _areas(self, layer, kind):
        """Calculates areas in km2 and checks that each is positive"""
        areas = self.engine.layer_areas(layer) / M2_PER_KM2
        bad = ~(np.isfinite(areas) & (areas > 0))
        if bad.any():
            names = layer.loc[bad, self.boundaries.state_field].tolist()
            raise GeometryEngineError(
                f"The {kind} layer includes polygons without a positive area"
                f" after reprojection (states: {names})"
            )
        return areas.tolist()
