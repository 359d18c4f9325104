# compseq/__init__.py
# -*- coding: utf-8 -*-
"""
compseq: pairwise sequence alignment with identity and similarity metrics.
"""

# Filesystem paths
from .paths import REPO_ROOT, LOG_DIR

# alignment engine and metrics
from . import alignment
from .alignment import (
    Alignment,
    AlignmentMode,
    Aligner,
    ScoringModel,
    align,
    identity,
    similarity,
    InvalidMode,
    AlphabetError,
    InvariantViolation,
)

# all-pairs comparison
from . import comparison
from .comparison import PairwiseResult, compare_pair, compare_all_pairs, iter_all_pairs

# util functions
from . import utils
from .utils import read_fasta


__all__ = [
    # paths
    "REPO_ROOT",
    "LOG_DIR",
    # alignment
    "Alignment",
    "AlignmentMode",
    "Aligner",
    "ScoringModel",
    "align",
    "identity",
    "similarity",
    "InvalidMode",
    "AlphabetError",
    "InvariantViolation",
    # comparison
    "PairwiseResult",
    "compare_pair",
    "compare_all_pairs",
    "iter_all_pairs",
    "read_fasta",
    # subpackages
    "alignment",
    "comparison",
    "utils",
]
