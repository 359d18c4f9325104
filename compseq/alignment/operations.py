"""
operations.py

Edit operations making up an alignment trace.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple


class OpKind(Enum):
    # diagonal move, identical residues
    MATCH = "="
    # diagonal move, different residues
    SUBST = "X"
    # residue of x against a gap in y
    DELETE = "D"
    # residue of y against a gap in x
    INSERT = "I"
    # unaligned flanks of a local alignment
    CLIP_START = "S"
    CLIP_END = "E"


AXES = ("x", "y")


@dataclass(frozen=True)
class EditOperation:
    """
    One step of an alignment trace.

    Diagonal and gap operations always cover a single position. Clip
    operations skip `length` unaligned residues of the sequence named by
    `axis` ("x" or "y") and never contribute to the score.
    """
    kind: OpKind
    length: int = 1
    axis: Optional[str] = None

    def __post_init__(self):
        if self.is_clip:
            if self.axis not in AXES:
                raise ValueError(f"Clip operations need an axis in {AXES}, got {self.axis!r}")
            if self.length < 0:
                raise ValueError("Clip length must not be negative")
        elif self.length != 1 or self.axis is not None:
            raise ValueError(f"{self.kind.name} always covers exactly one position")

    @property
    def is_clip(self) -> bool:
        return self.kind in (OpKind.CLIP_START, OpKind.CLIP_END)

    @property
    def is_diagonal(self) -> bool:
        return self.kind in (OpKind.MATCH, OpKind.SUBST)

    def consumed(self) -> Tuple[int, int]:
        """
        Returns the number of residues (dx, dy) this operation moves along x and y.
        """
        if self.is_diagonal:
            return 1, 1
        if self.kind == OpKind.DELETE:
            return 1, 0
        if self.kind == OpKind.INSERT:
            return 0, 1
        return (self.length, 0) if self.axis == "x" else (0, self.length)

    def __repr__(self):
        if self.is_clip:
            return f"{self.kind.name}({self.axis}, {self.length})"
        return self.kind.name


MATCH = EditOperation(OpKind.MATCH)
SUBST = EditOperation(OpKind.SUBST)
DELETE = EditOperation(OpKind.DELETE)
INSERT = EditOperation(OpKind.INSERT)


def clip_start(axis: str, length: int) -> EditOperation:
    return EditOperation(OpKind.CLIP_START, length=length, axis=axis)


def clip_end(axis: str, length: int) -> EditOperation:
    return EditOperation(OpKind.CLIP_END, length=length, axis=axis)


def consumed_by(operations: Iterable[EditOperation]) -> Tuple[int, int]:
    """
    Returns the total number of residues (dx, dy) a sequence of operations
    walks along x and y.
    """
    total_x, total_y = 0, 0
    for op in operations:
        dx, dy = op.consumed()
        total_x += dx
        total_y += dy
    return total_x, total_y
