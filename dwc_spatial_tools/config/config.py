"""Reads the global configuration file"""

import logging
import os
from collections.abc import MutableMapping
from pprint import pformat
from textwrap import wrap

import yaml


logger = logging.getLogger(__name__)


ALBERS_NORTH_AMERICA = (
    "+proj=aea +lat_1=29.5 +lat_2=45.5 +lat_0=37.5 +lon_0=-96 +x_0=0 +y_0=0"
    " +ellps=GRS80 +datum=NAD83 +units=m +no_defs"
)


class SpatialConfig(MutableMapping):
    """Reads and writes a configuration file

    Parameters
    ----------
    path : str
        path to the config file. If omitted, checks the home and current
        directories for the file.

    Attributes
    ----------
    path : str
        path to the config file
    title : str
        title to write at the top of the config file
    filename : str
        default filename for config file
    """

    def __init__(self, path=None):
        self.path = path
        self.title = "YAML configuration file for python dwc_spatial_tools package"
        self.filename = ".dwcsrc"
        self._config = None

        # Options as key: (default, comment)
        self._options = {
            "min_coord_uncer_for_precise_m": (
                None,
                "Maximum augmented coordinate uncertainty in meters for a record"
                " to be classified as precise. Must be given here or when"
                " calling assign_spatial_uncertainty.",
            ),
            "max_precision_uncer_force_county_m": (
                100,
                "Augmented uncertainty in meters at or above which a record is"
                " forced to its county when the county is smaller than the"
                " uncertainty circle",
            ),
            "max_precision_uncer_force_state_m": (
                500,
                "Augmented uncertainty in meters at or above which a record is"
                " forced to its state when the state is smaller than the"
                " uncertainty circle. Must be greater than the county value.",
            ),
            "max_area_km2": (
                None,
                "Maximum representative area in square kilometers for a record"
                " to be usable. Leave empty for no limit.",
            ),
            "max_coord_uncer_m": (
                5000000,
                "Stated coordinate uncertainties above this value in meters are"
                " treated as absurd and are not buffered",
            ),
            "precision_rel_err": (
                1.0,
                "Fraction of the last-digit step used as the positional error"
                " implied by coordinate rounding",
            ),
            "state_field": ("NAME_1", "Field with state names in both layers"),
            "county_field": ("NAME_2", "Field with county names in the county layer"),
            "ea_proj": (
                ALBERS_NORTH_AMERICA,
                "PROJ string or other CRS definition for an equal-area projection",
            ),
            "progress_interval": (
                10000,
                "Number of records between progress messages when verbose",
            ),
        }

        self.load_rcfile()

    def __str__(self):
        return f"{self.__class__.__name__}({pformat(self._config)})"

    def __repr__(self):
        return repr(self._config)

    def __getitem__(self, key):
        return self._config[key]

    def __setitem__(self, key, val):
        self._config[key] = val

    def __delitem__(self, key):
        del self._config[key]

    def __len__(self):
        return len(self._config)

    def __iter__(self):
        return iter(self._config)

    def load_rcfile(self, path=None):
        """Loads a configuration file

        Parameters
        ----------
        path : str
            path to the rcfile. If not given, checks the home then current
            directory for the filename.

        Returns
        -------
        dict
            either a custom configuration loaded from a file or the
            default configuration defined in this function
        """

        if path is None:
            path = self.path

        # Check the home then current directories if path not given
        if path:
            paths = [path]
        else:
            paths = [os.path.expanduser("~"), "."]

        # Create a default configuration based on _options attribute
        self._config = {k: v[0] for k, v in self._options.items()}

        # Check each location for the rcfile
        for path in paths:

            # Use a default filename if none given
            if os.path.isdir(path):
                path = os.path.join(path, self.filename)

            try:
                with open(path, encoding="utf-8") as f:
                    self.update(yaml.safe_load(f) or {})
                self.path = path
                logger.debug(f"Loaded configuration from {path}")
            except FileNotFoundError:
                pass

        return self._config

    def save_rcfile(self, path=None, overwrite=False):
        """Saves a configuration file

        Parameters
        ----------
        path : str
            path for the rcfile. If a directory, adds the filename.
            Defaults to the user's home directory.
        overwrite : bool
            whether to overwrite the file if it exists
        """

        # Default to user home directory
        if path is None:
            path = os.path.expanduser("~")

        # Use a default filename if none given
        if os.path.isdir(path):
            path = os.path.join(path, self.filename)

        if os.path.exists(path) and not overwrite:
            raise IOError(
                f"'{path}' already exists. Use overwrite=True to overwrite it."
            )

        # Write a commented YAML file. Comments aren't supported by pyyaml
        # and have to be hacked in.
        content = [f"# {self.title}"]
        for line in yaml.dump(self._config, sort_keys=False).splitlines():
            try:
                comment = self._options[line.split(":")[0]][1]
                wrapped = "\n".join([f"# {l}" for l in wrap(comment)])
                content.extend(["", wrapped, line])
            except KeyError:
                # Catches keys that are not top-level options
                content.append(line)

        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(content) + "\n")

    def update(self, obj):
        """Updates top-level options from a dict

        Parameters
        ----------
        obj : dict
            configuration read from a file
        """
        if not isinstance(obj, dict):
            raise ValueError(f"Configuration must be a mapping ({repr(obj)} given)")
        for key, val in obj.items():
            if key not in self._options:
                logger.warning(f"Ignored unrecognized configuration option: {key}")
                continue
            if isinstance(val, str) and val.startswith("~"):
                val = os.path.realpath(os.path.expanduser(val))
            self._config[key] = val


CONFIG = SpatialConfig()
