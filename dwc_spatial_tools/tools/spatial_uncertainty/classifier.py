"""Assigns a spatial uncertainty category to each occurrence record

Records are classified using an ordered set of rules. The first rule that
applies wins:

1. Records without coordinates and without a state (or with a state or
   state/county pair that is not in the geography) are unusable.
2. Records with trusted coordinates and an augmented uncertainty at or below
   the precise threshold are precise.
3. Records whose coordinates are flagged with geospatial issues or disagree
   with the named state/county fall back to the smallest administrative unit
   that can be resolved (county, then state), or are unusable.
4. Records whose uncertainty circle is larger than their county are forced
   to the county.
5. Records whose uncertainty circle is larger than their state are forced to
   the state if the county could not be used.
6. Everything else with coordinates is imprecise.

Records without coordinates, or with coordinates but no usable stated
uncertainty, also fall back to the administrative unit.
"""

import logging
import math
from numbers import Real

from ...config import CONFIG
from ...exceptions import ConfigurationError
from ...records import ClassificationResult
from ...utils import (
    custom_eq,
    del_immutable,
    is_finite,
    mutable,
    repr_class,
    same_name,
    set_immutable,
)


logger = logging.getLogger(__name__)


PRECISE = "precise"
IMPRECISE = "imprecise"
COUNTY = "county"
STATE = "state"
UNUSABLE = "unusable"

# Ordered from finest to coarsest
COARSENESS = [PRECISE, IMPRECISE, COUNTY, STATE, UNUSABLE]

BASED_ON_STATED = "stated coordinate uncertainty"
BASED_ON_PRECISION = "coordinate precision"
BASED_ON_COUNTY = "county area"
BASED_ON_STATE = "state area"


class Thresholds:
    """Validated thresholds used to classify records

    Parameters
    ----------
    min_coord_uncer_for_precise_m : float
        records with an augmented uncertainty at or below this value can be
        precise
    max_precision_uncer_force_county_m : float
        records with an augmented uncertainty at or above this value are
        forced to their county if the county is smaller than the uncertainty
        circle
    max_precision_uncer_force_state_m : float
        same as the county value, but for states. Must be greater than the
        county value.
    max_area_km2 : float
        maximum representative area for a record to be usable. None or inf
        means no limit.
    max_coord_uncer_m : float
        stated uncertainties above this value are not buffered

    Raises
    ------
    ConfigurationError
        if any value is missing or invalid
    """

    attributes = [
        "min_coord_uncer_for_precise_m",
        "max_precision_uncer_force_county_m",
        "max_precision_uncer_force_state_m",
        "max_area_km2",
        "max_coord_uncer_m",
    ]

    def __init__(
        self,
        min_coord_uncer_for_precise_m,
        max_precision_uncer_force_county_m=100,
        max_precision_uncer_force_state_m=500,
        max_area_km2=None,
        max_coord_uncer_m=5000000,
    ):
        if min_coord_uncer_for_precise_m is None:
            raise ConfigurationError("min_coord_uncer_for_precise_m is required")

        vals = {
            "min_coord_uncer_for_precise_m": min_coord_uncer_for_precise_m,
            "max_precision_uncer_force_county_m": max_precision_uncer_force_county_m,
            "max_precision_uncer_force_state_m": max_precision_uncer_force_state_m,
            "max_coord_uncer_m": max_coord_uncer_m,
        }
        for key, val in vals.items():
            if isinstance(val, bool) or not isinstance(val, Real):
                raise ConfigurationError(f"{key} must be a number ({val!r} given)")
            if not is_finite(val) or val < 0:
                raise ConfigurationError(
                    f"{key} must be a non-negative number ({val!r} given)"
                )
            vals[key] = float(val)

        if (
            vals["max_precision_uncer_force_county_m"]
            >= vals["max_precision_uncer_force_state_m"]
        ):
            raise ConfigurationError(
                "max_precision_uncer_force_county_m must be less than"
                " max_precision_uncer_force_state_m"
                f" ({max_precision_uncer_force_county_m} >="
                f" {max_precision_uncer_force_state_m})"
            )

        if max_area_km2 is not None:
            try:
                max_area_km2 = float(max_area_km2)
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"max_area_km2 must be a number ({max_area_km2!r} given)"
                )
            if math.isnan(max_area_km2) or max_area_km2 < 0:
                raise ConfigurationError(
                    f"max_area_km2 must be a non-negative number ({max_area_km2!r} given)"
                )
            if math.isinf(max_area_km2):
                max_area_km2 = None

        with mutable(self):
            for key, val in vals.items():
                setattr(self, key, val)
            self.max_area_km2 = max_area_km2

    def __setattr__(self, attr, val):
        set_immutable(self, attr, val)

    def __delattr__(self, attr):
        del_immutable(self, attr)

    def __repr__(self):
        return repr_class(self)

    def __eq__(self, other):
        return custom_eq(self, other)

    @classmethod
    def from_config(cls, config=None, **kwargs):
        """Creates thresholds from keyword arguments, falling back to config

        Keyword arguments that are None are read from the configuration.
        """
        if config is None:
            config = CONFIG
        vals = {}
        for key in cls.attributes:
            val = kwargs.pop(key, None)
            vals[key] = config.get(key) if val is None else val
        if kwargs:
            raise ConfigurationError(f"Unrecognized thresholds: {list(kwargs)}")
        return cls(**vals)

    def within_max_area(self, area_km2):
        """Tests if an area is defined and does not exceed the maximum area"""
        if area_km2 is None:
            return False
        return self.max_area_km2 is None or area_km2 <= self.max_area_km2


class Classifier:
    """Applies the classification rules to records and their diagnostics

    Parameters
    ----------
    thresholds : Thresholds
        validated thresholds
    """

    def __init__(self, thresholds):
        self.thresholds = thresholds

    def __repr__(self):
        return f"{self.__class__.__name__}(thresholds={self.thresholds!r})"

    def classify(self, record, diagnostic):
        """Classifies a record

        Parameters
        ----------
        record : OccurrenceRecord
            the record to classify
        diagnostic : Diagnostic
            diagnostic populated by the precision estimator, geographic
            matcher, and area resolver

        Returns
        -------
        ClassificationResult
            the category, usability, and representative area of the record
        """
        uncer_type, area, based_on = self.decide(record, diagnostic)
        diagnostic.coord_uncer_based_on = based_on
        usable = uncer_type != UNUSABLE and self.thresholds.within_max_area(area)
        return ClassificationResult(
            record.key,
            uncer_type,
            usable=usable,
            representative_area_km2=area,
            diagnostic=diagnostic,
        )

    def decide(self, record, diagnostic):
        """Decides the category of a record

        Returns
        -------
        tuple of (str, float, str)
            category, representative area, and the basis for the area
        """
        if not record.has_coords:
            if (
                not record.has_state
                or not diagnostic.state_in_geog
                or (record.has_county and not diagnostic.state_county_matches)
            ):
                return UNUSABLE, None, None
            return self.fall_back(record, diagnostic)

        if record.has_geospatial_issues or diagnostic.coords_match_named is False:
            return self.fall_back(record, diagnostic)

        augmented_m = diagnostic.coord_uncer_augmented_m
        buffer_area = diagnostic.coord_uncer_area_km2
        if augmented_m is None or buffer_area is None:
            return self.fall_back(record, diagnostic)

        if augmented_m <= self.thresholds.min_coord_uncer_for_precise_m:
            return PRECISE, buffer_area, self.basis(record, diagnostic)

        return self.force(record, diagnostic)

    def fall_back(self, record, diagnostic):
        """Assigns a record to the smallest resolvable administrative unit"""
        county_area = self.county_area(record, diagnostic)
        if county_area is not None and (
            self.thresholds.max_area_km2 is None
            or county_area <= self.thresholds.max_area_km2
        ):
            return COUNTY, county_area, BASED_ON_COUNTY
        state_area = self.state_area(record, diagnostic)
        if state_area is not None:
            return STATE, state_area, BASED_ON_STATE
        return UNUSABLE, None, None

    def force(self, record, diagnostic):
        """Forces imprecise records to a smaller administrative unit"""
        thresholds = self.thresholds
        augmented_m = diagnostic.coord_uncer_augmented_m
        buffer_area = diagnostic.coord_uncer_area_km2

        # Prefer the county unless it exceeds the maximum area
        county_area = self.county_area(record, diagnostic)
        if (
            augmented_m >= thresholds.max_precision_uncer_force_county_m
            and county_area is not None
            and county_area < buffer_area
            and thresholds.within_max_area(county_area)
        ):
            return COUNTY, county_area, BASED_ON_COUNTY

        state_area = self.state_area(record, diagnostic)
        if (
            augmented_m >= thresholds.max_precision_uncer_force_state_m
            and state_area is not None
            and state_area < buffer_area
        ):
            return STATE, state_area, BASED_ON_STATE

        return IMPRECISE, buffer_area, self.basis(record, diagnostic)

    @staticmethod
    def basis(record, diagnostic):
        """Returns the larger contributor to the augmented uncertainty"""
        if (record.coord_uncer_m or 0) >= (diagnostic.coord_precision_m or 0):
            return BASED_ON_STATED
        return BASED_ON_PRECISION

    def county_area(self, record, diagnostic):
        """Returns the area of the county that best represents the record

        The named county is used if it occurs in the named state. Otherwise
        the county at the coordinates is used if it falls in the named state.
        Coordinates flagged with geospatial issues are only used for records
        that name neither a state nor a county.
        """
        if diagnostic.state_county_matches:
            return diagnostic.area_of_county_km2
        if self._use_derived(
            record, diagnostic, diagnostic.state_of_county_from_coords
        ):
            return diagnostic.area_of_county_from_coords_km2
        return None

    def state_area(self, record, diagnostic):
        """Returns the area of the state that best represents the record"""
        if diagnostic.state_in_geog:
            return diagnostic.area_of_state_km2
        if self._use_derived(record, diagnostic, diagnostic.state_from_coords):
            return diagnostic.area_of_state_from_coords_km2
        return None

    @staticmethod
    def _use_derived(record, diagnostic, derived_state):
        """Tests if a unit derived from the coordinates can stand in for a name"""
        if not record.has_coords or derived_state is None:
            return False
        # Flagged coordinates only stand in when no unit is named
        if record.has_geospatial_issues and (record.has_state or record.has_county):
            return False
        if record.has_state and diagnostic.state_in_geog:
            return same_name(record.state_province, derived_state)
        return True
