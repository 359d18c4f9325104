# compseq/comparison/__init__.py
"""
compseq.comparison subpackage: all-pairs comparison of sequence records.
"""

from .pairwise import PairwiseResult, compare_pair, compare_all_pairs, iter_all_pairs

__all__ = [
    "PairwiseResult",
    "compare_pair",
    "compare_all_pairs",
    "iter_all_pairs",
]
