"""Compares named and coordinate-derived states and counties"""

import logging

from ...records import Diagnostic
from ...utils import same_name


logger = logging.getLogger(__name__)


class GeographicMatcher:
    """Matches the administrative units on a record to a boundary layer

    Name comparisons ignore case but nothing else. Misspellings, diacritics,
    and stray whitespace all produce mismatches.

    Parameters
    ----------
    boundaries : AdminBoundaries
        indexed state and county layers
    """

    def __init__(self, boundaries):
        self.boundaries = boundaries

    def __repr__(self):
        return f"{self.__class__.__name__}(boundaries={self.boundaries!r})"

    def match(self, record, diagnostic=None):
        """Records name and location matches for a single record

        Parameters
        ----------
        record : OccurrenceRecord
            the record to match
        diagnostic : Diagnostic
            the diagnostic to update. A new one is created if omitted.

        Returns
        -------
        Diagnostic
            the updated diagnostic
        """
        if diagnostic is None:
            diagnostic = Diagnostic()
        bnd = self.boundaries

        diagnostic.state_in_geog = bnd.has_state(record.state_province)
        diagnostic.county_in_geog = bnd.has_county_name(record.county)
        if record.has_state and record.has_county:
            diagnostic.state_county_matches = bnd.state_has_county(
                record.state_province, record.county
            )

        if record.has_coords:
            states = bnd.states_at(record.lat, record.lon)
            diagnostic.num_states_at_coords = len(states)
            if len(states) == 1:
                diagnostic.state_from_coords = states[0]

            counties = bnd.counties_at(record.lat, record.lon)
            diagnostic.num_counties_at_coords = len(counties)
            if len(counties) == 1:
                state, county = counties[0]
                diagnostic.state_of_county_from_coords = state
                diagnostic.county_from_coords = county

            if len(states) > 1 or len(counties) > 1:
                logger.debug(
                    f"Coordinates on {record.key} are ambiguous"
                    f" ({len(states)} states, {len(counties)} counties)"
                )

        diagnostic.coords_match_named = self.coords_match_named(record, diagnostic)
        return diagnostic

    @staticmethod
    def coords_match_named(record, diagnostic):
        """Tests if the named units agree with the units at the coordinates

        Returns
        -------
        bool
            None if the record lacks coordinates or names, otherwise whether
            every named unit matches the unit containing the coordinates
        """
        if not record.has_coords or not (record.has_state or record.has_county):
            return None
        if record.has_state and not same_name(
            record.state_province, diagnostic.state_from_coords
        ):
            return False
        if record.has_county:
            if not same_name(record.county, diagnostic.county_from_coords):
                return False
            if record.has_state and not same_name(
                record.state_province, diagnostic.state_of_county_from_coords
            ):
                return False
        return True
