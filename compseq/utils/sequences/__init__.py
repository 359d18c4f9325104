# compseq/utils/sequences/__init__.py
"""
Sequence-level metrics: align two sequences and summarize them in one call.
"""

from .pairwise_metrics import (
    get_pairwise_metric,
    sequence_identity,
    sequence_similarity,
)

__all__ = [
    "get_pairwise_metric",
    "sequence_identity",
    "sequence_similarity",
]
