import os
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from biotite.file import InvalidFileError, TextFile
from biotite.sequence.io import fasta

from compseq.alignment.scoring import ScoringModel


RESULT_COLUMNS = ["id_x", "id_y", "identity", "similarity", "score", "mode"]


def validate_sequence(sequence: str, scoring: Optional[ScoringModel] = None) -> str:
    """
    Check that every residue of `sequence` is covered by the scoring model.
    Returns the upper-cased sequence.

    Raises:
        AlphabetError: naming the first residue outside the alphabet.
    """
    if scoring is None:
        scoring = ScoringModel.blosum62()
    scoring.encode(sequence)
    return sequence.upper()


def _check_first_line_is_header(file: Union[str, Path]):
    # FastaFile.read_iter silently drops residue lines before the first header
    for line in TextFile.read_iter(str(file)):
        line = line.strip()
        if len(line) == 0 or line[0] == ";":
            continue
        if line[0] != ">":
            raise InvalidFileError(f"File {file} starts with '{line[0]}' instead of '>'")
        return


def read_fasta(
    file: Union[str, Path],
    validate: bool = False,
    scoring: Optional[ScoringModel] = None,
) -> List[Tuple[str, str]]:
    """
    Read all records of a FASTA file, in file order.

    The identifier of a record is its header up to the first whitespace.
    Residues are upper-cased.

    Args:
        file (str or Path): Path to the FASTA file.
        validate (bool): If True, raise AlphabetError for records with
            residues the scoring model does not cover.
        scoring (ScoringModel): The model used for validation (default: BLOSUM62).

    Returns:
        List[Tuple[str, str]]: (identifier, residues) pairs.

    Raises:
        FileNotFoundError: If `file` does not exist.
        InvalidFileError: If the file holds no record, or residues precede
            the first header.
    """
    if not os.path.exists(file):
        raise FileNotFoundError(f"File {file} does not exist.")
    _check_first_line_is_header(file)

    if validate and scoring is None:
        scoring = ScoringModel.blosum62()

    records = []
    for header, seq_str in fasta.FastaFile.read_iter(str(file)):
        header = header.strip()
        identifier = header.split()[0] if header else ""
        if validate:
            seq_str = validate_sequence(seq_str, scoring)
        records.append((identifier, seq_str.upper()))

    if not records:
        raise InvalidFileError(f"File {file} is empty or contains only comments")
    return records


def results_to_dataframe(
    rows: Sequence[Dict[str, Any]],
    columns: Optional[List[str]] = None,
) -> pd.DataFrame:
    """Returns one row per pairwise comparison, columns in `RESULT_COLUMNS` order."""
    return pd.DataFrame(list(rows), columns=columns or RESULT_COLUMNS)


def write_results_csv(
    rows: Sequence[Dict[str, Any]],
    path: Union[str, Path],
    columns: Optional[List[str]] = None,
) -> Path:
    """
    Write one row per pairwise comparison to `path` as CSV using pandas,
    creating parent directories. Writes the header even without rows.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = results_to_dataframe(rows, columns)
    df.to_csv(path, index=False)
    return path
