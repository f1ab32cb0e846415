"""Defines tools to assign spatial uncertainty categories to occurrences"""

from ... import _ImportClock

with _ImportClock("spatial_uncertainty"):
    from .areas import M2_PER_KM2, AreaResolver
    from .assembler import assemble
    from .assign import SpatialUncertaintyAssigner, assign_spatial_uncertainty
    from .classifier import (
        BASED_ON_COUNTY,
        BASED_ON_PRECISION,
        BASED_ON_STATE,
        BASED_ON_STATED,
        COARSENESS,
        COUNTY,
        IMPRECISE,
        PRECISE,
        STATE,
        UNUSABLE,
        Classifier,
        Thresholds,
    )
    from .matcher import GeographicMatcher
    from .precision import (
        NO_ESTIMATE,
        PrecisionEstimate,
        digits_to_meters,
        estimate_precision,
        estimate_record_precision,
        infer_digits,
    )
