"""
scoring.py

The scoring model shared by the alignment engine and the metrics calculator:
a substitution matrix plus the affine gap penalties.
"""

from dataclasses import dataclass, field
from functools import cached_property
import numpy as np
import biotite.sequence as seq
import biotite.sequence.align as biotite_align

from compseq.alignment.errors import AlphabetError


GAP_OPEN = -5
GAP_EXTEND = -1


@dataclass(frozen=True)
class ScoringModel:
    """
    Holds the substitution matrix and the affine gap penalties used to score
    an alignment. Opening a gap costs `gap_open`, every further consecutive
    gap position costs `gap_extend`.

    Objects of this class are immutable and can be shared between processes.
    """
    matrix: biotite_align.SubstitutionMatrix = field(repr=False)
    gap_open: int = GAP_OPEN
    gap_extend: int = GAP_EXTEND
    name: str = "BLOSUM62"

    def __post_init__(self):
        if self.gap_open >= 0 or self.gap_extend >= 0:
            raise ValueError(
                f"Gap penalties must be negative, got open {self.gap_open}, extend {self.gap_extend}"
            )
        if not self.matrix.is_symmetric():
            raise ValueError("Substitution matrix must be symmetric")

    @classmethod
    def blosum62(cls) -> "ScoringModel":
        """
        Returns the standard protein scoring model (BLOSUM62, gap open -5,
        gap extend -1).
        """
        return cls(matrix=biotite_align.SubstitutionMatrix.std_protein_matrix())

    @property
    def alphabet(self) -> seq.Alphabet:
        return self.matrix.get_alphabet1()

    @cached_property
    def _symbols(self) -> frozenset:
        return frozenset(self.alphabet.get_symbols())

    def encode(self, sequence: str) -> np.ndarray:
        """
        Convert a residue string into the symbol codes of the matrix alphabet.

        Args:
            sequence (str): The residues, upper or lower case.

        Returns:
            np.ndarray: The symbol codes, one per residue.

        Raises:
            AlphabetError: If a residue is not covered by the matrix.
        """
        sequence = sequence.upper()
        for pos, symbol in enumerate(sequence):
            if symbol not in self._symbols:
                raise AlphabetError(
                    f"Residue {symbol!r} at position {pos} is not covered by {self.name}"
                )
        return self.alphabet.encode_multiple(sequence)

    def score(self, a: str, b: str) -> int:
        """
        Returns the substitution score for the residue pair (a, b).
        """
        try:
            return int(self.matrix.get_score(a.upper(), b.upper()))
        except seq.AlphabetError as err:
            raise AlphabetError(
                f"Residue pair ({a!r}, {b!r}) is not covered by {self.name}"
            ) from err

    def self_score(self, a: str) -> int:
        return self.score(a, a)

    def substitution_block(self, code_x: np.ndarray, code_y: np.ndarray) -> np.ndarray:
        """
        Look up the scores of every residue pair at once.

        Returns:
            np.ndarray: shape (len(code_x), len(code_y)), where element [i, j]
                is the score of aligning x[i] with y[j].
        """
        return self.matrix.score_matrix()[np.ix_(code_x, code_y)].astype(np.int64)

    def self_scores(self, codes: np.ndarray) -> np.ndarray:
        return np.diagonal(self.matrix.score_matrix())[codes].astype(np.int64)

    def gap_cost(self, length: int) -> int:
        """
        Returns the (negative) score of a single gap of `length` positions.
        """
        if length <= 0:
            return 0
        return self.gap_open + (length - 1) * self.gap_extend
