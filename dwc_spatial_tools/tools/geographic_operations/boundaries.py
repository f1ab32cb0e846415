"""Defines lookups for state and county boundary layers"""

import logging

import geopandas as gpd
from shapely.geometry import Point

from .engine import GeometryEngine
from ...exceptions import ConfigurationError
from ...utils import is_missing, std_key


logger = logging.getLogger(__name__)


# Records with coordinates are assumed to use WGS84 if the layers are projected
RECORD_CRS = "EPSG:4326"


class AdminBoundaries:
    """Indexes state and county boundary layers by name and location

    Built once before records are processed and never modified afterward,
    so the same instance can be shared by any number of classifications.

    Parameters
    ----------
    counties : geopandas.GeoDataFrame
        county polygons with fields for state and county names
    states : geopandas.GeoDataFrame
        state polygons with a field for state names
    state_field : str
        name of the field with state names in both layers
    county_field : str
        name of the field with county names in the county layer
    engine : GeometryEngine
        engine used to reproject and query the layers

    Attributes
    ----------
    states : geopandas.GeoDataFrame
        state layer with only the name and geometry columns
    counties : geopandas.GeoDataFrame
        county layer in the same CRS as the state layer
    crs : pyproj.CRS
        CRS of both layers
    """

    def __init__(
        self,
        counties,
        states,
        state_field="NAME_1",
        county_field="NAME_2",
        engine=None,
    ):
        if engine is None:
            engine = GeometryEngine()
        self.engine = engine
        self.state_field = state_field
        self.county_field = county_field

        self._validate_layer(states, "state", [state_field])
        self._validate_layer(counties, "county", [state_field, county_field])

        self.crs = states.crs
        if counties.crs != states.crs:
            logger.info(f"Reprojecting county layer to {self.crs.name}")
            counties = engine.reproject(counties, self.crs)

        # Records are read in the CRS of the layers if it is geographic
        self.record_crs = self.crs if self.crs.is_geographic else engine.get_crs(
            RECORD_CRS
        )
        self._to_layer = None
        if self.record_crs != self.crs:
            self._to_layer = engine.get_transformer(self.record_crs, self.crs)

        self.states = self._prepare(states, [state_field], "state")
        self.counties = self._prepare(counties, [state_field, county_field], "county")

        # Map standardized names to the names used in the layers
        self._states = {}
        for name in self.states[state_field]:
            self._states.setdefault(std_key(name), name)

        self._counties = {}
        self._county_names = set()
        for state, county in zip(
            self.counties[state_field], self.counties[county_field]
        ):
            counties_in_state = self._counties.setdefault(std_key(state), {})
            counties_in_state.setdefault(std_key(county), (state, county))
            self._county_names.add(std_key(county))

        orphans = sorted(
            {s for s, _ in self.county_keys() if std_key(s) not in self._states}
        )
        if orphans:
            logger.warning(
                f"County layer includes states not in the state layer: {orphans}"
            )

        # Build spatial indexes now so that lookups are read-only
        self.states.sindex
        self.counties.sindex

        logger.debug(
            f"Indexed {len(self._states)} states and"
            f" {sum(len(c) for c in self._counties.values())} counties"
        )

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(states={len(self._states)},"
            f" counties={len(self._county_names)}, crs={self.crs.name!r})"
        )

    def state_name(self, name):
        """Returns the name used in the state layer for a state name"""
        if name is None:
            return None
        return self._states.get(std_key(name))

    def has_state(self, name):
        """Tests if a state occurs in the state layer"""
        return self.state_name(name) is not None

    def has_county_name(self, name):
        """Tests if a county name occurs anywhere in the county layer"""
        if name is None:
            return False
        return std_key(name) in self._county_names

    def county_key(self, state, county):
        """Returns the (state, county) key used in the county layer"""
        if state is None or county is None:
            return None
        return self._counties.get(std_key(state), {}).get(std_key(county))

    def state_has_county(self, state, county):
        """Tests if a county occurs under the given state in the county layer"""
        return self.county_key(state, county) is not None

    def county_keys(self):
        """Returns the (state, county) keys of all counties in the county layer"""
        return [k for c in self._counties.values() for k in c.values()]

    def states_at(self, lat, lon):
        """Finds the names of the states that contain or touch a point"""
        point = self._to_point(lat, lon)
        if point is None:
            return []
        rows = self.engine.point_in_polygon(point, self.states)
        return self._distinct(self.states[self.state_field].iloc[i] for i in rows)

    def counties_at(self, lat, lon):
        """Finds the (state, county) keys of the counties that contain or touch a point"""
        point = self._to_point(lat, lon)
        if point is None:
            return []
        rows = self.engine.point_in_polygon(point, self.counties)
        return self._distinct(
            (
                self.counties[self.state_field].iloc[i],
                self.counties[self.county_field].iloc[i],
            )
            for i in rows
        )

    def _to_point(self, lat, lon):
        if self._to_layer is None:
            return Point(lon, lat)
        return self.engine.transform_point(self._to_layer, lon, lat)

    @staticmethod
    def _distinct(keys):
        """Removes duplicate names, ignoring case and preserving order"""
        distinct = {}
        for key in keys:
            std = tuple(std_key(k) for k in key) if isinstance(key, tuple) else std_key(key)
            distinct.setdefault(std, key)
        return list(distinct.values())

    @staticmethod
    def _validate_layer(layer, kind, fields):
        if not isinstance(layer, gpd.GeoDataFrame):
            raise ConfigurationError(
                f"The {kind} layer must be a GeoDataFrame ({repr(type(layer))} given)"
            )
        missing = [f for f in fields if f not in layer.columns]
        if missing:
            raise ConfigurationError(
                f"The {kind} layer is missing required fields: {missing}"
            )
        if layer.crs is None:
            raise ConfigurationError(f"The {kind} layer does not define a CRS")

    def _prepare(self, layer, fields, kind):
        """Limits a layer to the name fields and rows with usable names"""
        layer = layer[fields + [layer.geometry.name]].copy()
        if layer.geometry.name != "geometry":
            layer = layer.rename_geometry("geometry")
        for field in fields:
            layer[field] = [None if is_missing(v) else str(v) for v in layer[field]]
        missing = layer[fields].isna().any(axis=1)
        if missing.any():
            logger.warning(f"Ignored {missing.sum()} unnamed polygons in {kind} layer")
            layer = layer[~missing]
        return layer.reset_index(drop=True)
