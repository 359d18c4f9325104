"""
aligner.py

Optimal pairwise alignment with affine gap penalties.

Global alignments follow Needleman-Wunsch, local alignments follow
Smith-Waterman. Both use the three-table formulation of Gotoh: one table for
alignments ending in a residue pair (m), one for alignments ending in a gap in
x (ix, consumes y) and one for alignments ending in a gap in y (iy, consumes x).
A gap in x is never directly followed by a gap in y or vice versa.

    O Gotoh,
    "An improved algorithm for matching biological sequences."
    J Mol Biol, 162, 705-708 (1982).
"""

import logging
from enum import Enum
from typing import Optional, Tuple, Union
import numpy as np

from compseq.alignment.alignment_result import Alignment
from compseq.alignment.errors import InvalidMode
from compseq.alignment.operations import (
    MATCH,
    SUBST,
    DELETE,
    INSERT,
    clip_start,
    clip_end,
)
from compseq.alignment.scoring import ScoringModel
from compseq.utils.log import get_logger

__all__ = ["AlignmentMode", "Aligner", "align"]


# Large enough to never win a comparison, small enough to never overflow
# when a few penalties are added to it
NEG_INF = np.iinfo(np.int64).min // 4

# Table states, listed in tie-breaking priority
STATE_M = 0
STATE_IX = 1
STATE_IY = 2


class AlignmentMode(str, Enum):
    GLOBAL = "global"
    LOCAL = "local"

    @classmethod
    def parse(cls, mode: Union[str, "AlignmentMode"]) -> "AlignmentMode":
        """
        Returns the AlignmentMode for `mode` (case-insensitive).

        Raises:
            InvalidMode: If `mode` is neither 'global' nor 'local'.
        """
        if isinstance(mode, cls):
            return mode
        value = mode.lower() if isinstance(mode, str) else mode
        for member in cls:
            if member.value == value:
                return member
        raise InvalidMode(
            f"Select either global or local alignment, got {mode!r}"
        )


def _best_state(tables: Tuple[np.ndarray, np.ndarray, np.ndarray], i: int, j: int) -> Tuple[int, int]:
    """
    Returns (state, score) of the highest scoring table at cell (i, j).
    Ties go to m, then ix, then iy.
    """
    best_state = STATE_M
    best_score = tables[STATE_M][i, j]
    for state in (STATE_IX, STATE_IY):
        if tables[state][i, j] > best_score:
            best_state = state
            best_score = tables[state][i, j]
    return best_state, best_score


class Aligner:
    """
    Computes optimal global or local alignments under one scoring model.

    The aligner holds no state besides the scoring model, so one instance
    can serve any number of (concurrent) calls.
    """

    def __init__(self, scoring: Optional[ScoringModel] = None):
        self.scoring = scoring if scoring is not None else ScoringModel.blosum62()
        self._dispatch = {
            AlignmentMode.GLOBAL: self._align_global,
            AlignmentMode.LOCAL: self._align_local,
        }

    def align(self, x: str, y: str, mode: Union[str, AlignmentMode] = AlignmentMode.GLOBAL) -> Alignment:
        """
        Returns the best scoring alignment of x against y.

        Args:
            x (str): The first sequence.
            y (str): The second sequence.
            mode (str or AlignmentMode): 'global' or 'local'.

        Returns:
            Alignment: The optimal alignment. Equal scoring alternatives are
                resolved deterministically (diagonal > gap in x > gap in y).

        Raises:
            InvalidMode: If `mode` is not recognized.
            AlphabetError: If a residue is not covered by the scoring model.
        """
        logger = get_logger(__name__)

        mode = AlignmentMode.parse(mode)
        code_x = self.scoring.encode(x)
        code_y = self.scoring.encode(y)

        alignment = self._dispatch[mode](code_x, code_y)
        alignment.check_consistency()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"{mode.value} alignment of {len(code_x)}x{len(code_y)} residues: "
                f"score {alignment.score}, {alignment.cigar()}"
            )
        return alignment

    # -------------------------------
    # Table filling
    # -------------------------------
    def _fill_tables(self, code_x: np.ndarray, code_y: np.ndarray, local: bool):
        gap_open = self.scoring.gap_open
        gap_ext = self.scoring.gap_extend
        len_x, len_y = len(code_x), len(code_y)

        m_table = np.full((len_x + 1, len_y + 1), NEG_INF, dtype=np.int64)
        ix_table = np.full((len_x + 1, len_y + 1), NEG_INF, dtype=np.int64)
        iy_table = np.full((len_x + 1, len_y + 1), NEG_INF, dtype=np.int64)

        if not local:
            m_table[0, 0] = 0
            # Leading gaps of a global alignment
            ix_table[0, 1:] = gap_open + np.arange(len_y) * gap_ext
            iy_table[1:, 0] = gap_open + np.arange(len_x) * gap_ext

        similarity = self.scoring.substitution_block(code_x, code_y)
        # Extension cost accumulated along a row, (j - 1) * gap_ext at column j
        ext_steps = np.arange(len_y, dtype=np.int64) * gap_ext

        # Row i only depends on row i - 1 and on itself (ix)
        for i in range(1, len_x + 1):
            from_diag = np.maximum(
                np.maximum(m_table[i-1, :-1], ix_table[i-1, :-1]), iy_table[i-1, :-1]
            )
            # Local alignments may start at any residue pair
            if local:
                from_diag = np.maximum(from_diag, 0)
            m_table[i, 1:] = from_diag + similarity[i-1]
            iy_table[i, 1:] = np.maximum(
                m_table[i-1, 1:] + gap_open, iy_table[i-1, 1:] + gap_ext
            )
            # ix[i, j] = max over k < j of m[i, k] + gap_open + (j - 1 - k) * gap_ext
            best_open = np.maximum.accumulate(m_table[i, :-1] - ext_steps)
            ix_table[i, 1:] = best_open + gap_open + ext_steps

        return m_table, ix_table, iy_table

    # -------------------------------
    # Traceback
    # -------------------------------
    def _follow_trace(self, tables, code_x, code_y, i, j, state, local):
        """
        Walks from cell (i, j) in table `state` back to the start of the
        alignment. Returns the operations in left-to-right order and the
        cell the alignment starts at.
        """
        m_table, ix_table, iy_table = tables
        gap_open = self.scoring.gap_open
        operations = []

        while i > 0 or j > 0:
            if state == STATE_M:
                operations.append(MATCH if code_x[i-1] == code_y[j-1] else SUBST)
                prev_state, prev_score = _best_state(tables, i-1, j-1)
                i -= 1
                j -= 1
                if local and prev_score <= 0:
                    break
                state = prev_state
            elif state == STATE_IX:
                operations.append(INSERT)
                # Opening the gap is preferred over extending it
                if ix_table[i, j] != m_table[i, j-1] + gap_open:
                    state = STATE_IX
                else:
                    state = STATE_M
                j -= 1
            else:
                operations.append(DELETE)
                if iy_table[i, j] != m_table[i-1, j] + gap_open:
                    state = STATE_IY
                else:
                    state = STATE_M
                i -= 1

        operations.reverse()
        return operations, i, j

    def _align_global(self, code_x: np.ndarray, code_y: np.ndarray) -> Alignment:
        len_x, len_y = len(code_x), len(code_y)
        tables = self._fill_tables(code_x, code_y, local=False)

        state, score = _best_state(tables, len_x, len_y)
        operations, _, _ = self._follow_trace(
            tables, code_x, code_y, len_x, len_y, state, local=False
        )

        return Alignment(
            score=int(score),
            x_start=0,
            x_end=len_x,
            y_start=0,
            y_end=len_y,
            x_len=len_x,
            y_len=len_y,
            operations=tuple(operations),
            mode=AlignmentMode.GLOBAL.value,
        )

    def _align_local(self, code_x: np.ndarray, code_y: np.ndarray) -> Alignment:
        len_x, len_y = len(code_x), len(code_y)
        tables = self._fill_tables(code_x, code_y, local=True)
        m_table = tables[STATE_M]

        # An optimal local alignment never ends in a gap, so the end point
        # is the first maximum of m in row-major order
        best_score = int(m_table.max())
        if best_score <= 0:
            operations = []
            if len_x > 0:
                operations.append(clip_end("x", len_x))
            if len_y > 0:
                operations.append(clip_end("y", len_y))
            return Alignment(
                score=0,
                x_start=0,
                x_end=0,
                y_start=0,
                y_end=0,
                x_len=len_x,
                y_len=len_y,
                operations=tuple(operations),
                mode=AlignmentMode.LOCAL.value,
            )

        x_end, y_end = np.unravel_index(np.argmax(m_table), m_table.shape)
        x_end, y_end = int(x_end), int(y_end)
        core, x_start, y_start = self._follow_trace(
            tables, code_x, code_y, x_end, y_end, STATE_M, local=True
        )

        operations = []
        if x_start > 0:
            operations.append(clip_start("x", x_start))
        if y_start > 0:
            operations.append(clip_start("y", y_start))
        operations.extend(core)
        if x_end < len_x:
            operations.append(clip_end("x", len_x - x_end))
        if y_end < len_y:
            operations.append(clip_end("y", len_y - y_end))

        return Alignment(
            score=best_score,
            x_start=x_start,
            x_end=x_end,
            y_start=y_start,
            y_end=y_end,
            x_len=len_x,
            y_len=len_y,
            operations=tuple(operations),
            mode=AlignmentMode.LOCAL.value,
        )


def align(
    x: str,
    y: str,
    mode: Union[str, AlignmentMode] = AlignmentMode.GLOBAL,
    scoring: Optional[ScoringModel] = None,
) -> Alignment:
    """
    Returns the best scoring `mode` alignment of x against y.
    See Aligner.align for details.
    """
    return Aligner(scoring).align(x, y, mode)
