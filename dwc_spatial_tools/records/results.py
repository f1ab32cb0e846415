"""Defines containers for per-record diagnostics and classification results"""

import logging

from ..utils import custom_eq, del_immutable, mutable, repr_class, set_immutable


logger = logging.getLogger(__name__)


UNCER_TYPES = ["precise", "imprecise", "county", "state", "unusable"]

# Maps diagnostic attributes to output columns
DIAGNOSTIC_COLUMNS = {
    "coord_uncer_based_on": "coordUncerBasedOn",
    "state_in_geog": "stateInGeog",
    "county_in_geog": "countyInGeog",
    "state_county_matches": "stateCountyMatches",
    "state_from_coords": "stateFromCoords",
    "county_from_coords": "countyFromCoords",
    "state_of_county_from_coords": "stateOfCountyFromCoords",
    "num_states_at_coords": "numStatesAtCoords",
    "num_counties_at_coords": "numCountiesAtCoords",
    "coords_match_named": "coordsMatchNamed",
    "coord_precision_digits": "coordPrecision_digits",
    "coord_precision_m": "coordPrecision_m",
    "coord_uncer_augmented_m": "coordUncerAugmented_m",
    "coord_uncer_area_km2": "coordUncerArea_km2",
    "area_of_state_km2": "areaOfState_km2",
    "area_of_county_km2": "areaOfCounty_km2",
    "area_of_state_from_coords_km2": "areaOfStateFromCoords_km2",
    "area_of_county_from_coords_km2": "areaOfCountyFromCoords_km2",
}

RESULT_COLUMNS = {
    "uncer_type": "uncerType",
    "usable": "usable",
    "representative_area_km2": "representativeArea_km2",
}

COLUMNS = list(RESULT_COLUMNS.values()) + list(DIAGNOSTIC_COLUMNS.values())


class Diagnostic:
    """Accumulates what the pipeline learns about a single record

    Each stage fills in its own attributes. Attributes that a stage could not
    determine are left as None.
    """

    attributes = list(DIAGNOSTIC_COLUMNS)

    def __init__(self, **kwargs):
        for attr in self.attributes:
            setattr(self, attr, None)
        for key, val in kwargs.items():
            if key not in self.attributes:
                raise AttributeError(f"Invalid diagnostic attribute: {key}")
            setattr(self, key, val)

    def __repr__(self):
        return repr_class(self)

    def __eq__(self, other):
        return custom_eq(self, other)

    def to_dict(self):
        return {col: getattr(self, attr) for attr, col in DIAGNOSTIC_COLUMNS.items()}


class ClassificationResult:
    """Stores the final category, usability, and area for a record

    Parameters
    ----------
    key : Any
        row label of the classified record
    uncer_type : str
        one of precise, imprecise, county, state, or unusable
    usable : bool
        whether the record can be used at its assigned category
    representative_area_km2 : float
        area that best represents where the record was collected
    diagnostic : Diagnostic
        diagnostic information about the record
    """

    attributes = ["key", "uncer_type", "usable", "representative_area_km2"]

    def __init__(
        self,
        key,
        uncer_type,
        usable=False,
        representative_area_km2=None,
        diagnostic=None,
    ):
        if uncer_type not in UNCER_TYPES:
            raise ValueError(f"Invalid uncertainty type: {uncer_type}")
        if uncer_type == "unusable" and usable:
            raise ValueError("Unusable records cannot be usable")
        with mutable(self):
            self.key = key
            self.uncer_type = uncer_type
            self.usable = bool(usable)
            self.representative_area_km2 = representative_area_km2
            self.diagnostic = diagnostic if diagnostic is not None else Diagnostic()

    def __setattr__(self, attr, val):
        set_immutable(self, attr, val)

    def __delattr__(self, attr):
        del_immutable(self, attr)

    def __repr__(self):
        return repr_class(self)

    def __eq__(self, other):
        return custom_eq(self, other)

    def to_dict(self):
        """Returns the result and its diagnostics keyed to output columns"""
        row = {col: getattr(self, attr) for attr, col in RESULT_COLUMNS.items()}
        row.update(self.diagnostic.to_dict())
        return row
