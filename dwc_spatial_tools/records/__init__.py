"""Defines containers for occurrence records and their classifications"""

from .. import _ImportClock

with _ImportClock("records"):
    from .occurrences import (
        OPTIONAL_FIELDS,
        REQUIRED_FIELDS,
        OccurrenceRecord,
        check_fields,
        read_occurrences,
    )
    from .results import (
        COLUMNS,
        DIAGNOSTIC_COLUMNS,
        RESULT_COLUMNS,
        UNCER_TYPES,
        ClassificationResult,
        Diagnostic,
    )
