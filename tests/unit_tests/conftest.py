"""Defines synthetic boundary layers shared by the unit tests"""

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box


from dwc_spatial_tools.config import ALBERS_NORTH_AMERICA, SpatialConfig


STATES = [
    ("Texas", box(-106, 26, -94, 36)),
    ("Oklahoma", box(-103, 36, -94, 37)),
    ("Dakota", box(-104, 44, -96, 46)),
    ("Rhode Island", box(-71.4, 41.6, -70.6, 42.4)),
]

COUNTIES = [
    ("Texas", "Travis", box(-98.2, 30.0, -97.4, 30.6)),
    ("Texas", "Williamson", box(-98.2, 30.6, -97.2, 31.0)),
    ("Dakota", "Hughes", box(-100.3, 44.8, -99.8, 45.2)),
]


def projected_area(layer, **names):
    """Calculates the equal-area size of the matching polygons in km2"""
    layer = layer.to_crs(ALBERS_NORTH_AMERICA)
    mask = pd.Series(True, index=layer.index)
    for field, name in names.items():
        mask &= layer[field] == name
    return layer[mask].area.sum() / 1e6


def make_records(rows, index=None):
    """Builds a Darwin Core table from a list of dicts"""
    columns = [
        "stateProvince",
        "county",
        "decimalLatitude",
        "decimalLongitude",
        "coordinateUncertaintyInMeters",
        "hasGeospatialIssues",
    ]
    return pd.DataFrame(rows, columns=columns, index=index)


@pytest.fixture
def states():
    return gpd.GeoDataFrame(
        {"NAME_1": [s[0] for s in STATES]},
        geometry=[s[1] for s in STATES],
        crs="EPSG:4326",
    )


@pytest.fixture
def counties():
    return gpd.GeoDataFrame(
        {"NAME_1": [c[0] for c in COUNTIES], "NAME_2": [c[1] for c in COUNTIES]},
        geometry=[c[2] for c in COUNTIES],
        crs="EPSG:4326",
    )


@pytest.fixture
def config(tmp_path):
    # Reads from an empty directory so tests only see the defaults
    return SpatialConfig(path=str(tmp_path))


@pytest.fixture
def area_km2():
    return projected_area


@pytest.fixture
def records():
    return make_records
