"""Tests assigning spatial uncertainty to a table of occurrence records"""

import logging
import math

import pandas as pd
import pytest


from dwc_spatial_tools.config import ALBERS_NORTH_AMERICA
from dwc_spatial_tools.exceptions import ConfigurationError, GeometryEngineError
from dwc_spatial_tools.records import COLUMNS, ClassificationResult
from dwc_spatial_tools.tools.spatial_uncertainty import (
    COARSENESS,
    SpatialUncertaintyAssigner,
    Thresholds,
    assemble,
    assign_spatial_uncertainty,
)
from dwc_spatial_tools.utils import lon_deg_dist_m


TRAVIS = {"decimalLatitude": 30.267153, "decimalLongitude": -97.743057}

# Six decimal places at the latitude of the Travis coordinates
TRAVIS_PRECISION_M = 1e-6 * lon_deg_dist_m(30.267153)


@pytest.fixture
def assign(counties, states, config):
    def _assign(darwin, **kwargs):
        kwargs.setdefault("min_coord_uncer_for_precise_m", 100)
        kwargs.setdefault("verbose", False)
        return assign_spatial_uncertainty(
            darwin, counties, states, config=config, **kwargs
        )

    return _assign


def test_assemble():
    index = pd.Index(["b", "a", "c"])
    results = [ClassificationResult("b", "state", True, 10.0), None, None]
    df = assemble(results, index)
    assert list(df.columns) == COLUMNS
    assert list(df.index) == ["b", "a", "c"]
    assert list(df["uncerType"]) == ["state", "unusable", "unusable"]
    assert list(df["usable"]) == [True, False, False]


def test_assemble_length_mismatch():
    with pytest.raises(ValueError):
        assemble([None], pd.Index(["a", "b"]))


def test_scenario_precise(assign, records):
    df = records(
        [
            {
                "stateProvince": "Texas",
                "county": "Travis",
                "coordinateUncertaintyInMeters": 50,
                **TRAVIS,
            }
        ]
    )
    row = assign(df).iloc[0]
    assert row["uncerType"] == "precise"
    assert row["usable"]
    assert row["coordPrecision_digits"] == 6
    augmented = 50 + TRAVIS_PRECISION_M
    assert row["coordPrecision_m"] == pytest.approx(TRAVIS_PRECISION_M)
    assert row["coordUncerAugmented_m"] == pytest.approx(augmented)
    assert row["representativeArea_km2"] == pytest.approx(
        math.pi * augmented**2 / 1e6, rel=1e-2
    )
    assert row["coordUncerBasedOn"] == "stated coordinate uncertainty"
    assert row["coordsMatchNamed"]


def test_scenario_nonexistent_county(assign, records, counties, area_km2):
    df = records(
        [
            {
                "stateProvince": "Texas",
                "county": "Nonexistent",
                "coordinateUncertaintyInMeters": 50,
                **TRAVIS,
            }
        ]
    )
    row = assign(df).iloc[0]
    assert not row["stateCountyMatches"]
    assert row["countyFromCoords"] == "Travis"
    assert row["uncerType"] == "county"
    assert row["representativeArea_km2"] == pytest.approx(
        area_km2(counties, NAME_2="Travis")
    )
    assert row["coordUncerBasedOn"] == "county area"


def test_scenario_state_without_coords(assign, records, states, area_km2):
    row = assign(records([{"stateProvince": "Oklahoma"}])).iloc[0]
    assert row["uncerType"] == "state"
    assert row["usable"]
    assert row["representativeArea_km2"] == pytest.approx(
        area_km2(states, NAME_1="Oklahoma")
    )
    assert pd.isna(row["coordPrecision_m"])


def test_scenario_integer_degrees(assign, records, counties, area_km2):
    df = records(
        [
            {
                "stateProvince": "Dakota",
                "county": "Hughes",
                "decimalLatitude": 45.0,
                "decimalLongitude": -100.0,
                "coordinateUncertaintyInMeters": 10,
            }
        ]
    )
    row = assign(df).iloc[0]
    assert row["coordPrecision_digits"] == 0
    assert row["coordPrecision_m"] == pytest.approx(78846.8, rel=1e-4)
    assert row["coordUncerAugmented_m"] == pytest.approx(78856.8, rel=1e-4)
    assert row["uncerType"] == "county"
    assert row["representativeArea_km2"] == pytest.approx(
        area_km2(counties, NAME_2="Hughes")
    )
    assert row["coordUncerBasedOn"] == "county area"


def test_forced_to_state(assign, records, states, area_km2):
    # Circle is larger than Dakota, and no county is known at the point
    df = records(
        [
            {
                "stateProvince": "Dakota",
                "decimalLatitude": 45.123456,
                "decimalLongitude": -97.123456,
                "coordinateUncertaintyInMeters": 300000,
            }
        ]
    )
    row = assign(df).iloc[0]
    assert row["uncerType"] == "state"
    assert row["representativeArea_km2"] == pytest.approx(
        area_km2(states, NAME_1="Dakota")
    )


def test_imprecise(assign, records):
    df = records(
        [
            {
                "stateProvince": "Texas",
                "county": "Travis",
                "coordinateUncertaintyInMeters": 1000,
                **TRAVIS,
            }
        ]
    )
    row = assign(df).iloc[0]
    assert row["uncerType"] == "imprecise"
    assert row["representativeArea_km2"] == pytest.approx(
        math.pi * (1000 + TRAVIS_PRECISION_M) ** 2 / 1e6, rel=1e-2
    )


def test_all_absent(assign, records):
    row = assign(records([{}])).iloc[0]
    assert row["uncerType"] == "unusable"
    assert not row["usable"]
    assert pd.isna(row["representativeArea_km2"])


def test_geospatial_issues(assign, records, counties, area_km2):
    df = records(
        [
            {
                "stateProvince": "Texas",
                "county": "Travis",
                "coordinateUncertaintyInMeters": 50,
                "hasGeospatialIssues": "true",
                **TRAVIS,
            }
        ]
    )
    row = assign(df).iloc[0]
    assert row["uncerType"] == "county"
    assert row["representativeArea_km2"] == pytest.approx(
        area_km2(counties, NAME_2="Travis")
    )


def test_geospatial_issues_without_names(assign, records, counties, area_km2):
    df = records(
        [
            {
                "decimalLatitude": 30.3,
                "decimalLongitude": -97.8,
                "coordinateUncertaintyInMeters": 50,
                "hasGeospatialIssues": "true",
            }
        ]
    )
    row = assign(df).iloc[0]
    assert row["countyFromCoords"] == "Travis"
    assert row["uncerType"] == "county"
    assert row["usable"]
    assert row["representativeArea_km2"] == pytest.approx(
        area_km2(counties, NAME_2="Travis")
    )


def test_max_area(assign, records):
    df = records([{"stateProvince": "Oklahoma"}, {"stateProvince": "Rhode Island"}])
    result = assign(df, max_area_km2=10000)
    assert list(result["uncerType"]) == ["state", "state"]
    assert list(result["usable"]) == [False, True]


def test_monotonic(assign, records):
    uncertainties = [0, 10, 50, 150, 1000, 10000, 100000, 1000000, 4000000, 6000000]
    df = records(
        [
            {
                "stateProvince": "Texas",
                "county": "Travis",
                "coordinateUncertaintyInMeters": uncer,
                **TRAVIS,
            }
            for uncer in uncertainties
        ]
    )
    ranks = [COARSENESS.index(t) for t in assign(df)["uncerType"]]
    assert ranks == sorted(ranks)
    assert ranks[0] == COARSENESS.index("precise")
    assert ranks[-1] == COARSENESS.index("county")


def test_idempotent(assign, records):
    df = records(
        [
            {"stateProvince": "Texas", "county": "Travis", "coordinateUncertaintyInMeters": 50, **TRAVIS},
            {"stateProvince": "Oklahoma"},
            {"stateProvince": "Texas", "county": "Nonexistent", **TRAVIS},
            {},
        ]
    )
    pd.testing.assert_frame_equal(assign(df), assign(df))


@pytest.mark.parametrize(
    "index",
    [None, ["x", "y", "z", "w", "v"], [5, 5, 2, 1, 0]],
)
def test_row_count(assign, records, index):
    df = records(
        [
            {},
            {"stateProvince": "Texas", "county": "Travis", "coordinateUncertaintyInMeters": 50, **TRAVIS},
            {"decimalLatitude": 95, "decimalLongitude": 0},
            {"stateProvince": "Nowhere", "county": "Nothing"},
            {"stateProvince": "Texas", "decimalLatitude": 36.0, "decimalLongitude": -100.0},
        ],
        index=index,
    )
    result = assign(df)
    assert len(result) == len(df)
    assert list(result.index) == list(df.index)


def test_area_consistency(assign, records, counties, states, area_km2):
    df = records(
        [
            {"stateProvince": "Oklahoma"},
            {"stateProvince": "Texas", "county": "Williamson"},
            {"stateProvince": "Texas", "county": "Travis", "coordinateUncertaintyInMeters": 100000, **TRAVIS},
            {"stateProvince": "Dakota", "county": "Hughes", "decimalLatitude": 45.0, "decimalLongitude": -100.0, "coordinateUncertaintyInMeters": 10},
        ]
    )
    expected = [
        ("state", area_km2(states, NAME_1="Oklahoma")),
        ("county", area_km2(counties, NAME_2="Williamson")),
        ("county", area_km2(counties, NAME_2="Travis")),
        ("county", area_km2(counties, NAME_2="Hughes")),
    ]
    result = assign(df)
    assert list(result["uncerType"]) == [e[0] for e in expected]
    assert list(result["representativeArea_km2"]) == pytest.approx(
        [e[1] for e in expected]
    )


def test_assigner_is_reusable(counties, states, records):
    assigner = SpatialUncertaintyAssigner(
        counties, states, Thresholds(100), ALBERS_NORTH_AMERICA, verbose=False
    )
    first = assigner.assign(records([{"stateProvince": "Oklahoma"}]))
    second = assigner.assign(records([{"stateProvince": "Texas"}]))
    assert first.iloc[0]["uncerType"] == second.iloc[0]["uncerType"] == "state"


def test_verbose(assign, records, caplog):
    caplog.set_level(logging.INFO, logger="dwc_spatial_tools")
    assign(records([{"stateProvince": "Oklahoma"}]), verbose=True)
    assert "Pre-processing" in caplog.text
    assert "Classified 1 records (state=1)" in caplog.text


def test_verbose_counts_are_ordered_finest_first(assign, records, caplog):
    caplog.set_level(logging.INFO, logger="dwc_spatial_tools")
    df = records(
        [
            {"stateProvince": "Oklahoma"},
            {"stateProvince": "Texas", "county": "Williamson"},
            {
                "stateProvince": "Texas",
                "county": "Travis",
                "coordinateUncertaintyInMeters": 50,
                **TRAVIS,
            },
        ]
    )
    assign(df, verbose=True)
    assert "Classified 3 records (precise=1, county=1, state=1)" in caplog.text


def test_quiet(assign, records, caplog):
    caplog.set_level(logging.INFO, logger="dwc_spatial_tools")
    assign(records([{"stateProvince": "Oklahoma"}]), verbose=False)
    assert "Pre-processing" not in caplog.text


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_coord_uncer_for_precise_m": None},
        {"max_precision_uncer_force_county_m": 600},
        {"county_geog_field": "NAME_3"},
        {"state_geog_field": "STATE"},
    ],
)
def test_configuration_errors(assign, records, kwargs):
    with pytest.raises(ConfigurationError):
        assign(records([{"stateProvince": "Oklahoma"}]), **kwargs)


def test_missing_record_field(assign, records):
    df = records([{"stateProvince": "Oklahoma"}]).drop(columns="decimalLatitude")
    with pytest.raises(ConfigurationError, match="missing required fields"):
        assign(df)


def test_geographic_equal_area_projection(assign, records):
    with pytest.raises(GeometryEngineError):
        assign(records([{"stateProvince": "Oklahoma"}]), ea_proj="EPSG:4326")


def test_config_thresholds(counties, states, config, records):
    config["min_coord_uncer_for_precise_m"] = 10
    df = records(
        [
            {
                "stateProvince": "Texas",
                "county": "Travis",
                "coordinateUncertaintyInMeters": 50,
                **TRAVIS,
            }
        ]
    )
    result = assign_spatial_uncertainty(df, counties, states, config=config, verbose=False)
    assert result.iloc[0]["uncerType"] == "imprecise"
