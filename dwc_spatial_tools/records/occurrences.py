"""Defines an immutable container for a Darwin Core occurrence record"""

import logging

import pandas as pd

from ..exceptions import ConfigurationError
from ..utils import (
    coerce_bool,
    custom_eq,
    del_immutable,
    is_finite,
    is_missing,
    is_valid_lat_lon,
    mutable,
    repr_class,
    set_immutable,
)


logger = logging.getLogger(__name__)


REQUIRED_FIELDS = [
    "stateProvince",
    "county",
    "decimalLatitude",
    "decimalLongitude",
    "coordinateUncertaintyInMeters",
]
OPTIONAL_FIELDS = ["hasGeospatialIssues"]


class OccurrenceRecord:
    """Stores the location fields of an occurrence record used to assess it

    Values are coerced on creation and cannot be changed afterward. Data gaps
    are never errors: absent or invalid values are stored as None so that
    they can be routed through the classifier.

    Parameters
    ----------
    key : Any
        row label in the original record table
    state_province : str
        verbatim state or province name
    county : str
        verbatim county name
    lat : float
        decimal latitude
    lon : float
        decimal longitude
    coord_uncer_m : float
        stated coordinate uncertainty in meters
    has_geospatial_issues : bool
        whether the coordinates are independently known to be suspect
    """

    attributes = [
        "key",
        "state_province",
        "county",
        "lat",
        "lon",
        "coord_uncer_m",
        "has_geospatial_issues",
    ]

    def __init__(
        self,
        key=None,
        state_province=None,
        county=None,
        lat=None,
        lon=None,
        coord_uncer_m=None,
        has_geospatial_issues=False,
    ):
        with mutable(self):
            self.key = key
            self.state_province = self._parse_name(state_province)
            self.county = self._parse_name(county)
            # Original coordinates are kept so the number of decimal places
            # can be read from strings
            self.verbatim_lat = None if is_missing(lat) else lat
            self.verbatim_lon = None if is_missing(lon) else lon
            self.lat, self.lon = self._parse_coords(lat, lon)
            self.coord_uncer_m = self._parse_uncertainty(coord_uncer_m)
            self.has_geospatial_issues = self._parse_flag(has_geospatial_issues)

    def __setattr__(self, attr, val):
        set_immutable(self, attr, val)

    def __delattr__(self, attr):
        del_immutable(self, attr)

    def __repr__(self):
        return repr_class(self)

    def __eq__(self, other):
        return custom_eq(self, other)

    @property
    def has_state(self):
        return self.state_province is not None

    @property
    def has_county(self):
        return self.county is not None

    @property
    def has_coords(self):
        return self.lat is not None and self.lon is not None

    @property
    def has_stated_uncer(self):
        return self.coord_uncer_m is not None

    @classmethod
    def from_row(cls, key, row):
        """Creates a record from a Darwin Core row

        Parameters
        ----------
        key : Any
            row label
        row : dict | pandas.Series
            row from a Darwin Core table

        Returns
        -------
        OccurrenceRecord
            the parsed record
        """
        return cls(
            key=key,
            state_province=row.get("stateProvince"),
            county=row.get("county"),
            lat=row.get("decimalLatitude"),
            lon=row.get("decimalLongitude"),
            coord_uncer_m=row.get("coordinateUncertaintyInMeters"),
            has_geospatial_issues=row.get("hasGeospatialIssues"),
        )

    @staticmethod
    def _parse_name(val):
        if is_missing(val):
            return None
        return str(val)

    def _parse_coords(self, lat, lon):
        """Returns the coordinates if both are present and valid"""
        if is_missing(lat) and is_missing(lon):
            return None, None
        if is_missing(lat) or is_missing(lon):
            logger.warning(f"Ignored coordinates on {self.key}: only one given")
            return None, None
        try:
            lat, lon = float(lat), float(lon)
        except (TypeError, ValueError):
            logger.warning(
                f"Ignored coordinates on {self.key}: not numeric ({lat!r}, {lon!r})"
            )
            return None, None
        if not (is_finite(lat) and is_finite(lon) and is_valid_lat_lon(lat, lon)):
            logger.warning(
                f"Ignored coordinates on {self.key}: out of range ({lat}, {lon})"
            )
            return None, None
        return lat, lon

    def _parse_uncertainty(self, val):
        if is_missing(val):
            return None
        try:
            val = float(val)
        except (TypeError, ValueError):
            logger.warning(f"Ignored uncertainty on {self.key}: not numeric ({val!r})")
            return None
        if not is_finite(val) or val < 0:
            logger.warning(f"Ignored uncertainty on {self.key}: invalid value ({val})")
            return None
        return val

    def _parse_flag(self, val):
        try:
            return coerce_bool(val)
        except ValueError:
            # Unrecognized flags mean the coordinates cannot be trusted
            logger.warning(
                f"Treated unrecognized geospatial issue flag on {self.key} as"
                f" set ({val!r})"
            )
            return True


def check_fields(df):
    """Raises a ConfigurationError if the record table is invalid"""
    if not isinstance(df, pd.DataFrame):
        raise ConfigurationError(
            f"Records must be a pandas.DataFrame ({repr(type(df))} given)"
        )
    missing = [f for f in REQUIRED_FIELDS if f not in df.columns]
    if missing:
        raise ConfigurationError(f"Record table is missing required fields: {missing}")


def read_occurrences(df):
    """Reads occurrence records from a Darwin Core DataFrame

    Parameters
    ----------
    df : pandas.DataFrame
        table containing at least the fields in REQUIRED_FIELDS

    Returns
    -------
    list of OccurrenceRecord
        one record per row, in the same order as the table
    """
    check_fields(df)
    fields = REQUIRED_FIELDS + [f for f in OPTIONAL_FIELDS if f in df.columns]
    records = []
    for key, row in zip(df.index, df[fields].to_dict("records")):
        records.append(OccurrenceRecord.from_row(key, row))
    return records
