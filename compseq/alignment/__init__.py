# compseq/alignment/__init__.py
"""
compseq.alignment subpackage: scoring model, alignment engine and the
identity / similarity metrics computed from an alignment trace.
"""

from .errors import InvalidMode, AlphabetError, InvariantViolation
from .scoring import ScoringModel, GAP_OPEN, GAP_EXTEND
from .operations import (
    OpKind,
    EditOperation,
    MATCH,
    SUBST,
    DELETE,
    INSERT,
    clip_start,
    clip_end,
    consumed_by,
)
from .alignment_result import Alignment
from .aligner import AlignmentMode, Aligner, align
from .metrics import identity, similarity

__all__ = [
    # errors
    "InvalidMode",
    "AlphabetError",
    "InvariantViolation",
    # scoring
    "ScoringModel",
    "GAP_OPEN",
    "GAP_EXTEND",
    # trace
    "OpKind",
    "EditOperation",
    "MATCH",
    "SUBST",
    "DELETE",
    "INSERT",
    "clip_start",
    "clip_end",
    "consumed_by",
    # engine
    "Alignment",
    "AlignmentMode",
    "Aligner",
    "align",
    # metrics
    "identity",
    "similarity",
]
