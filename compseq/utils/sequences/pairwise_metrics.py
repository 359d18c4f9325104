"""
pairwise_metrics.py

This file contains functions that compare two sequences directly, aligning
them first.
"""

import sys
from typing import Callable, Optional

from compseq.alignment import align, identity, similarity, ScoringModel

__all__ = [
    "sequence_identity",
    "sequence_similarity",
]


def get_pairwise_metric(metric_name: str) -> Callable:
    """
    Dynamically retrieves a scoring function from the current module.
    """
    current_module = sys.modules[__name__]

    # Only the public API can be looked up
    if metric_name not in __all__:
        raise ValueError(
            f"Invalid pairwise metric: {metric_name}. Select from {__all__}"
        )

    func = getattr(current_module, metric_name, None)
    if not callable(func):
        raise ValueError(
            f"Invalid pairwise metric: {metric_name}. Select from {__all__}"
        )
    return func


def more_similar_is_larger(more_similar_is_larger: bool):
    """
    A decorator that adds a 'more_similar_is_larger' attribute to the pairwise
    similarity functions.

    Args:
        more_similar_is_larger (bool): If True, indicates the metric returns a
            larger value for more similar sequences. If False, indicates the
            metric returns a larger value for less similar sequences.
    """

    def decorator(func):
        setattr(func, "more_similar_is_larger", more_similar_is_larger)
        return func

    return decorator


@more_similar_is_larger(True)
def sequence_identity(
    seq1: str,
    seq2: str,
    mode: str = "global",
    scoring: Optional[ScoringModel] = None,
) -> int:
    """
    Returns the sequence identity between two sequences: the number of
    identical aligned residue pairs divided by the length of the longer
    sequence, as an integer percentage.

    Args:
        seq1 (str): The first sequence.
        seq2 (str): The second sequence.
        mode (str): 'global' or 'local' alignment.
        scoring (ScoringModel): The scoring model used for the alignment.

    Returns:
        int: The sequence identity between the two sequences, in [0, 100].
    """
    return identity(align(seq1, seq2, mode, scoring))


@more_similar_is_larger(True)
def sequence_similarity(
    seq1: str,
    seq2: str,
    mode: str = "global",
    scoring: Optional[ScoringModel] = None,
) -> int:
    """
    Returns the sequence similarity between two sequences: the share of the
    best achievable BLOSUM62 score that their alignment realizes, as an
    integer percentage. Unaligned flanks of the longer sequence count
    towards the achievable score only.

    Args:
        seq1 (str): The first sequence.
        seq2 (str): The second sequence.
        mode (str): 'global' or 'local' alignment.
        scoring (ScoringModel): The scoring model used for the alignment.

    Returns:
        int: The sequence similarity between the two sequences, in [0, 100].
    """
    if scoring is None:
        scoring = ScoringModel.blosum62()
    alignment = align(seq1, seq2, mode, scoring)
    return similarity(alignment, seq1, seq2, scoring)
