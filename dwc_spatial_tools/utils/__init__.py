"""Defines (mostly) standalone functions and classes"""

from .. import _ImportClock

with _ImportClock("utils"):

    from .classes import (
        custom_eq,
        del_immutable,
        get_attrs,
        mutable,
        repr_class,
        set_immutable,
    )
    from .geo import GEODESIC_PYPROJ, is_valid_lat_lon, lon_deg_dist_m
    from .misc import coerce_bool, configure_log, is_missing
    from .numeric import (
        last_digit_step,
        is_finite,
        rounded_dec_places,
        to_dec_str,
    )
    from .strings import same_name, std_key
