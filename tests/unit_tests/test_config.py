"""Tests reading and writing the configuration file"""

import pytest


from dwc_spatial_tools.config import ALBERS_NORTH_AMERICA, CONFIG, SpatialConfig


def test_defaults(config):
    assert config["min_coord_uncer_for_precise_m"] is None
    assert config["max_precision_uncer_force_county_m"] == 100
    assert config["max_precision_uncer_force_state_m"] == 500
    assert config["max_area_km2"] is None
    assert config["max_coord_uncer_m"] == 5000000
    assert config["precision_rel_err"] == 1.0
    assert config["state_field"] == "NAME_1"
    assert config["county_field"] == "NAME_2"
    assert config["ea_proj"] == ALBERS_NORTH_AMERICA


def test_global_config():
    assert isinstance(CONFIG, SpatialConfig)
    assert "min_coord_uncer_for_precise_m" in CONFIG


def test_load_rcfile(tmp_path):
    path = tmp_path / ".dwcsrc"
    path.write_text("min_coord_uncer_for_precise_m: 250\nmax_area_km2: 1000\n")
    config = SpatialConfig(path=str(tmp_path))
    assert config["min_coord_uncer_for_precise_m"] == 250
    assert config["max_area_km2"] == 1000
    assert config["state_field"] == "NAME_1"
    assert config.path == str(path)


def test_load_rcfile_unrecognized(tmp_path, caplog):
    path = tmp_path / ".dwcsrc"
    path.write_text("bogus_option: 1\n")
    config = SpatialConfig(path=str(tmp_path))
    assert "bogus_option" not in config
    assert "Ignored unrecognized configuration option" in caplog.text


def test_load_empty_rcfile(tmp_path):
    (tmp_path / ".dwcsrc").write_text("")
    config = SpatialConfig(path=str(tmp_path))
    assert config["max_precision_uncer_force_county_m"] == 100


def test_save_rcfile(tmp_path, config):
    config["min_coord_uncer_for_precise_m"] = 50
    config.save_rcfile(str(tmp_path))

    text = (tmp_path / ".dwcsrc").read_text()
    assert text.startswith("# YAML configuration file")
    assert "# Maximum augmented coordinate uncertainty" in text

    loaded = SpatialConfig(path=str(tmp_path))
    assert dict(loaded) == dict(config)


def test_save_rcfile_exists(tmp_path, config):
    config.save_rcfile(str(tmp_path))
    with pytest.raises(IOError):
        config.save_rcfile(str(tmp_path))
    config.save_rcfile(str(tmp_path), overwrite=True)


def test_update_invalid(config):
    with pytest.raises(ValueError):
        config.update(["max_area_km2", 1])


def test_mapping(config):
    config["max_area_km2"] = 10
    assert config["max_area_km2"] == 10
    del config["max_area_km2"]
    assert "max_area_km2" not in config
    assert len(config) == 9
