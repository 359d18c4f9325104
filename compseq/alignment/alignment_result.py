"""
alignment_result.py

The record produced by the alignment engine.
"""

from dataclasses import dataclass
from itertools import groupby
from typing import Optional, Tuple

from compseq.alignment.errors import InvariantViolation
from compseq.alignment.operations import EditOperation, OpKind, consumed_by
from compseq.alignment.scoring import ScoringModel


@dataclass(frozen=True)
class Alignment:
    """
    An optimal pairwise alignment of x against y.

    `x_start:x_end` and `y_start:y_end` are half-open offsets of the aligned
    region. The full `operations` trace walks both sequences from index 0 to
    their lengths; local alignments mark the unaligned flanks with clip
    operations. Without the clips, the trace walks exactly from
    (x_start, y_start) to (x_end, y_end).
    """
    score: int
    x_start: int
    x_end: int
    y_start: int
    y_end: int
    x_len: int
    y_len: int
    operations: Tuple[EditOperation, ...]
    mode: str = "global"

    @property
    def core_operations(self) -> Tuple[EditOperation, ...]:
        return tuple(op for op in self.operations if not op.is_clip)

    @property
    def x_aln_len(self) -> int:
        return self.x_end - self.x_start

    @property
    def y_aln_len(self) -> int:
        return self.y_end - self.y_start

    def count(self, kind: OpKind) -> int:
        return sum(1 for op in self.operations if op.kind == kind)

    def check_consistency(self):
        """
        Raises InvariantViolation unless the trace walks both sequences
        end to end and the core lands exactly on the aligned region.
        """
        if not (0 <= self.x_start <= self.x_end <= self.x_len):
            raise InvariantViolation(
                f"Invalid x region [{self.x_start}, {self.x_end}) for length {self.x_len}"
            )
        if not (0 <= self.y_start <= self.y_end <= self.y_len):
            raise InvariantViolation(
                f"Invalid y region [{self.y_start}, {self.y_end}) for length {self.y_len}"
            )
        if consumed_by(self.core_operations) != (self.x_aln_len, self.y_aln_len):
            raise InvariantViolation(
                f"Core trace consumes {consumed_by(self.core_operations)} residues, "
                f"expected {(self.x_aln_len, self.y_aln_len)}"
            )
        if consumed_by(self.operations) != (self.x_len, self.y_len):
            raise InvariantViolation(
                f"Full trace consumes {consumed_by(self.operations)} residues, "
                f"expected {(self.x_len, self.y_len)}"
            )

    def cigar(self) -> str:
        """
        Run-length encoded trace, e.g. "2S3=1X1D4=".

        '=' identical residues, 'X' substitutions, 'D' residues of x only,
        'I' residues of y only, 'S' clipped residues of x. Clips of y are
        not part of the string.
        """
        parts = []
        for kind, ops in groupby(self.operations, key=lambda op: op.kind):
            ops = list(ops)
            if kind in (OpKind.CLIP_START, OpKind.CLIP_END):
                length = sum(op.length for op in ops if op.axis == "x")
                if length > 0:
                    parts.append(f"{length}S")
            else:
                parts.append(f"{len(ops)}{kind.value}")
        return "".join(parts)

    def gapped_sequences(self, x: str, y: str) -> Tuple[str, str]:
        """
        Returns the aligned region of x and y with '-' at gap positions.
        """
        xi, yi = self.x_start, self.y_start
        gapped_x, gapped_y = [], []
        for op in self.core_operations:
            if op.is_diagonal:
                gapped_x.append(x[xi])
                gapped_y.append(y[yi])
                xi += 1
                yi += 1
            elif op.kind == OpKind.DELETE:
                gapped_x.append(x[xi])
                gapped_y.append("-")
                xi += 1
            else:
                gapped_x.append("-")
                gapped_y.append(y[yi])
                yi += 1
        return "".join(gapped_x), "".join(gapped_y)

    def pretty(self, x: str, y: str, ncol: int = 80, scoring: Optional[ScoringModel] = None) -> str:
        """
        Render the aligned region as blocks of three lines (x, markers, y).

        Identical residues are marked with '|'. If a scoring model is given,
        substitutions with a positive score are marked with '+'.
        """
        if ncol < 1:
            raise ValueError("ncol must be positive")
        gapped_x, gapped_y = self.gapped_sequences(x, y)
        markers = []
        for a, b in zip(gapped_x, gapped_y):
            if a == "-" or b == "-":
                markers.append(" ")
            elif a.upper() == b.upper():
                markers.append("|")
            elif scoring is not None and scoring.score(a, b) > 0:
                markers.append("+")
            else:
                markers.append(" ")
        markers = "".join(markers)

        blocks = []
        for start in range(0, len(gapped_x), ncol):
            stop = start + ncol
            blocks.append(
                "\n".join([gapped_x[start:stop], markers[start:stop], gapped_y[start:stop]])
            )
        return "\n\n".join(blocks)
