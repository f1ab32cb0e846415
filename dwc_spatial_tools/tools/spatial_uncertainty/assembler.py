"""Packages classification results into a table aligned with the input"""

import logging

import pandas as pd

from ...records import COLUMNS, ClassificationResult


logger = logging.getLogger(__name__)


def assemble(results, index):
    """Builds the result table

    Parameters
    ----------
    results : list of ClassificationResult
        results in the same order as the input rows. Rows that were not
        classified may be None.
    index : pandas.Index
        index of the input record table

    Returns
    -------
    pandas.DataFrame
        one row per input row in input order. Rows without a result are
        marked unusable.
    """
    if len(results) != len(index):
        raise ValueError(
            f"Got {len(results)} results for {len(index)} rows"
        )
    rows = []
    for key, result in zip(index, results):
        if result is None:
            logger.debug(f"No classification for {key}, marking unusable")
            result = ClassificationResult(key, "unusable")
        rows.append(result.to_dict())
    return pd.DataFrame(rows, columns=COLUMNS, index=index)
