"""
metrics.py

Identity and similarity percentages derived from an alignment trace.
"""

import math
from typing import Optional

from compseq.alignment.alignment_result import Alignment
from compseq.alignment.errors import InvariantViolation
from compseq.alignment.operations import OpKind
from compseq.alignment.scoring import ScoringModel

__all__ = ["identity", "similarity"]


def _percentage(numerator: int, denominator: int) -> int:
    # Half away from zero, both arguments are non-negative here
    return int(math.floor(100.0 * numerator / denominator + 0.5))


def identity(alignment: Alignment) -> int:
    """
    Returns the percentage of identical aligned residue pairs, relative to the
    length of the longer input sequence.

    Args:
        alignment (Alignment): The alignment to evaluate.

    Returns:
        int: The identity in [0, 100]. 0 if both sequences are empty.
    """
    length = max(alignment.x_len, alignment.y_len)
    if length == 0:
        return 0
    return _percentage(alignment.count(OpKind.MATCH), length)


def similarity(
    alignment: Alignment,
    x: str,
    y: str,
    scoring: Optional[ScoringModel] = None,
) -> int:
    """
    Returns how much of the best achievable score the alignment realizes.

    The achievable score (the ceiling) is the self-score of every residue of
    the longer sequence (the reference) outside the aligned region, plus,
    for every aligned position:
        - the shared score of identical residues,
        - the higher self-score of the two residues of a substitution,
        - the self-score of a residue aligned against a gap.
    The achieved score is the substitution scores plus the affine gap
    penalties of the trace, clamped at 0.

    Args:
        alignment (Alignment): An alignment of x against y.
        x (str): The first sequence, as passed to the aligner.
        y (str): The second sequence, as passed to the aligner.
        scoring (ScoringModel): The scoring model used for the alignment
            (default: BLOSUM62, gap open -5, gap extend -1).

    Returns:
        int: The similarity in [0, 100]. 0 if the ceiling is 0.

    Raises:
        InvariantViolation: If the trace does not walk x and y end to end.
    """
    if scoring is None:
        scoring = ScoringModel.blosum62()

    if len(x) != alignment.x_len or len(y) != alignment.y_len:
        raise InvariantViolation(
            f"Alignment covers sequences of length ({alignment.x_len}, {alignment.y_len}), "
            f"got ({len(x)}, {len(y)})"
        )
    alignment.check_consistency()

    code_x = scoring.encode(x)
    code_y = scoring.encode(y)
    self_x = scoring.self_scores(code_x)
    self_y = scoring.self_scores(code_y)

    # Flanks of the reference are scored against their own offsets
    if len(x) >= len(y):
        ref_self, ref_start, ref_end = self_x, alignment.x_start, alignment.x_end
    else:
        ref_self, ref_start, ref_end = self_y, alignment.y_start, alignment.y_end
    max_score = int(ref_self[:ref_start].sum()) + int(ref_self[ref_end:].sum())

    score = 0
    xi, yi = 0, 0
    previous = None
    for op in alignment.operations:
        kind = op.kind
        if op.is_diagonal:
            if xi >= len(x) or yi >= len(y):
                raise InvariantViolation(
                    f"{kind.name} at ({xi}, {yi}) runs past the sequence ends"
                )
            pair_score = scoring.score(x[xi], y[yi])
            score += pair_score
            if kind == OpKind.MATCH:
                max_score += pair_score
            else:
                max_score += int(max(self_x[xi], self_y[yi]))
            xi += 1
            yi += 1
        elif kind == OpKind.DELETE:
            if xi >= len(x):
                raise InvariantViolation(f"DELETE at x position {xi} runs past the sequence end")
            score += scoring.gap_extend if previous == OpKind.DELETE else scoring.gap_open
            max_score += int(self_x[xi])
            xi += 1
        elif kind == OpKind.INSERT:
            if yi >= len(y):
                raise InvariantViolation(f"INSERT at y position {yi} runs past the sequence end")
            score += scoring.gap_extend if previous == OpKind.INSERT else scoring.gap_open
            max_score += int(self_y[yi])
            yi += 1
        else:
            # Clipped flanks were already added to the ceiling
            if op.axis == "x":
                xi += op.length
            else:
                yi += op.length
        previous = kind

    if (xi, yi) != (len(x), len(y)):
        raise InvariantViolation(
            f"Trace ends at ({xi}, {yi}), expected ({len(x)}, {len(y)})"
        )

    # Ambiguity codes such as X can have a negative self-score
    if max_score <= 0:
        return 0
    return min(100, _percentage(max(score, 0), max_score))
