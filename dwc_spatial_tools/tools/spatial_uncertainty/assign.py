"""Assigns spatial uncertainty categories to a table of occurrence records"""

import logging

from .areas import AreaResolver
from .assembler import assemble
from .classifier import COARSENESS, Classifier, Thresholds
from .matcher import GeographicMatcher
from .precision import estimate_record_precision
from ..geographic_operations import AdminBoundaries
from ...config import CONFIG
from ...records import Diagnostic, check_fields, read_occurrences


logger = logging.getLogger(__name__)


class SpatialUncertaintyAssigner:
    """Classifies occurrence records against a pair of boundary layers

    The boundary layers are indexed and measured once when the assigner is
    created. The assigner does not change afterward, so it can be reused for
    any number of record tables.

    Parameters
    ----------
    geog_county : geopandas.GeoDataFrame
        county polygons
    geog_state : geopandas.GeoDataFrame
        state polygons
    thresholds : Thresholds
        validated thresholds
    ea_proj : str | pyproj.CRS
        equal-area projection
    state_field : str
        field with state names in both layers
    county_field : str
        field with county names in the county layer
    precision_rel_err : float
        fraction of the last-digit step treated as error
    progress_interval : int
        number of records between progress messages
    verbose : bool
        whether to log stage and progress messages as INFO instead of DEBUG
    engine : GeometryEngine
        geometry engine used for all spatial operations
    """

    def __init__(
        self,
        geog_county,
        geog_state,
        thresholds,
        ea_proj,
        state_field="NAME_1",
        county_field="NAME_2",
        precision_rel_err=1.0,
        progress_interval=10000,
        verbose=True,
        engine=None,
    ):
        self.thresholds = thresholds
        self.precision_rel_err = precision_rel_err
        self.progress_interval = progress_interval
        self.verbose = verbose
        self._log = logger.info if verbose else logger.debug

        self._log("Pre-processing boundary layers...")
        self.boundaries = AdminBoundaries(
            geog_county,
            geog_state,
            state_field=state_field,
            county_field=county_field,
            engine=engine,
        )
        self.areas = AreaResolver(
            self.boundaries,
            ea_proj,
            engine=self.boundaries.engine,
            max_coord_uncer_m=thresholds.max_coord_uncer_m,
        )
        self.matcher = GeographicMatcher(self.boundaries)
        self.classifier = Classifier(thresholds)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(boundaries={self.boundaries!r},"
            f" areas={self.areas!r}, thresholds={self.thresholds!r})"
        )

    def assign(self, darwin):
        """Assigns spatial uncertainty categories to a record table

        Parameters
        ----------
        darwin : pandas.DataFrame
            Darwin Core records

        Returns
        -------
        pandas.DataFrame
            one row per record with the category, usability, representative
            area, and diagnostics, indexed like the input
        """
        records = read_occurrences(darwin)
        self._log("Pre-processing {:,} records...".format(len(records)))

        diagnostics = []
        for i, record in enumerate(records):
            diagnostic = Diagnostic()
            estimate_record_precision(record, diagnostic, self.precision_rel_err)
            self.matcher.match(record, diagnostic)
            diagnostics.append(diagnostic)
            self._progress(i, "matched")
        self._log(
            "Matched {:,} records ({:,} with coordinates)".format(
                len(records), sum(r.has_coords for r in records)
            )
        )

        for i, (record, diagnostic) in enumerate(zip(records, diagnostics)):
            self.areas.resolve(record, diagnostic)
            self._progress(i, "measured")
        self._log(
            "Measured {:,} uncertainty buffers".format(
                sum(d.coord_uncer_area_km2 is not None for d in diagnostics)
            )
        )

        results = []
        for i, (record, diagnostic) in enumerate(zip(records, diagnostics)):
            results.append(self.classifier.classify(record, diagnostic))
            self._progress(i, "classified")

        counts = {}
        for result in results:
            counts[result.uncer_type] = counts.get(result.uncer_type, 0) + 1
        self._log(
            "Classified {:,} records ({})".format(
                len(results),
                ", ".join(f"{k}={counts[k]:,}" for k in COARSENESS if k in counts),
            )
        )

        return assemble(results, darwin.index)

    def _progress(self, i, verb):
        if i and not i % self.progress_interval:
            self._log("{:,} records {}".format(i, verb))


def assign_spatial_uncertainty(
    darwin,
    geog_county,
    geog_state,
    ea_proj=None,
    min_coord_uncer_for_precise_m=None,
    max_precision_uncer_force_county_m=None,
    max_precision_uncer_force_state_m=None,
    max_area_km2=None,
    county_geog_field=None,
    state_geog_field=None,
    verbose=True,
    config=None,
    engine=None,
):
    """Assigns a spatial uncertainty category to each occurrence record

    Parameters
    ----------
    darwin : pandas.DataFrame
        Darwin Core records with stateProvince, county, decimalLatitude,
        decimalLongitude, coordinateUncertaintyInMeters, and optionally
        hasGeospatialIssues
    geog_county : geopandas.GeoDataFrame
        county polygons
    geog_state : geopandas.GeoDataFrame
        state polygons
    ea_proj : str | pyproj.CRS
        equal-area projection. Defaults to the configured projection.
    min_coord_uncer_for_precise_m : float
        maximum augmented uncertainty for a precise record. Required here or
        in the configuration file.
    max_precision_uncer_force_county_m : float
        augmented uncertainty at or above which records may be forced to
        their county
    max_precision_uncer_force_state_m : float
        augmented uncertainty at or above which records may be forced to
        their state
    max_area_km2 : float
        maximum representative area for a usable record
    county_geog_field : str
        field with county names in the county layer
    state_geog_field : str
        field with state names in both layers
    verbose : bool
        whether to report progress as INFO log messages
    config : SpatialConfig
        configuration used for any argument left as None. Defaults to the
        global configuration.
    engine : GeometryEngine
        geometry engine used for all spatial operations

    Returns
    -------
    pandas.DataFrame
        one row per record, indexed like the input

    Raises
    ------
    ConfigurationError
        if thresholds, record fields, or boundary fields are invalid
    GeometryEngineError
        if the projection or boundary layers are invalid
    """
    if config is None:
        config = CONFIG

    # Validate thresholds before touching the data
    thresholds = Thresholds.from_config(
        config,
        min_coord_uncer_for_precise_m=min_coord_uncer_for_precise_m,
        max_precision_uncer_force_county_m=max_precision_uncer_force_county_m,
        max_precision_uncer_force_state_m=max_precision_uncer_force_state_m,
        max_area_km2=max_area_km2,
    )
    check_fields(darwin)

    assigner = SpatialUncertaintyAssigner(
        geog_county,
        geog_state,
        thresholds,
        ea_proj if ea_proj is not None else config["ea_proj"],
        state_field=state_geog_field or config["state_field"],
        county_field=county_geog_field or config["county_field"],
        precision_rel_err=config["precision_rel_err"],
        progress_interval=config["progress_interval"],
        verbose=verbose,
        engine=engine,
    )
    return assigner.assign(darwin)
