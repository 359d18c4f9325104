"""
test_comparison.py
"""

from concurrent.futures import Future

import pandas as pd
from biotite.file import InvalidFileError
import pytest

from compseq.alignment import AlphabetError, InvalidMode
from compseq.comparison import PairwiseResult, compare_all_pairs, compare_pair, iter_all_pairs
from compseq.comparison import pairwise
from compseq.utils import read_fasta, results_to_dataframe, write_results_csv, RESULT_COLUMNS


FASTA_TEXT = """\
>seq1 first test sequence
LSPADKTNVK
AA
>seq2
LSPADKTNVKAA
; a comment line
>seq3 substituted
lspadqtnvk

>seq4
PEEKSAV
"""

RECORDS = [
    ("seq1", "LSPADKTNVKAA"),
    ("seq2", "LSPADKTNVKAA"),
    ("seq3", "LSPADQTNVK"),
    ("seq4", "PEEKSAV"),
]


@pytest.fixture
def fasta_path(tmp_path):
    path = tmp_path / "input.fasta"
    path.write_text(FASTA_TEXT)
    return path


def test_read_fasta(fasta_path):
    assert read_fasta(fasta_path) == RECORDS


def test_read_fasta_validation(tmp_path):
    path = tmp_path / "bad.fasta"
    path.write_text(">ok\nLSPADK\n>bad\nLSP#DK\n")

    assert read_fasta(path)[1] == ("bad", "LSP#DK")
    with pytest.raises(AlphabetError, match="position 3"):
        read_fasta(path, validate=True)


@pytest.mark.parametrize(
    "content", ["LSPADK\n", "LSPADK\n>seq1\nLSPADK\n", "", "\n; comment\n"]
)
def test_read_fasta_without_records(tmp_path, content):
    path = tmp_path / "bad.fasta"
    path.write_text(content)
    with pytest.raises(InvalidFileError):
        read_fasta(path)


def test_read_missing_fasta(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_fasta(tmp_path / "missing.fasta")


def test_compare_pair():
    result = compare_pair(("a", "LSPADKTNVK"), ("b", "LSPADQTNVK"), "global")
    assert result == PairwiseResult(
        id_x="a", id_y="b", identity=90, similarity=92, score=46, mode="global"
    )
    assert str(result) == "Alignment between a and b: identity 90%, similarity 92%."


def test_compare_all_pairs_order():
    results = compare_all_pairs(RECORDS, mode="global")

    assert len(results) == len(RECORDS) * (len(RECORDS) - 1) // 2
    assert [(r.id_x, r.id_y) for r in results] == [
        ("seq1", "seq2"),
        ("seq1", "seq3"),
        ("seq1", "seq4"),
        ("seq2", "seq3"),
        ("seq2", "seq4"),
        ("seq3", "seq4"),
    ]
    assert (results[0].identity, results[0].similarity) == (100, 100)


def test_compare_all_pairs_local():
    results = compare_all_pairs(RECORDS, mode="local")
    seq1_seq4 = results[2]
    assert (seq1_seq4.identity, seq1_seq4.similarity, seq1_seq4.score) == (25, 27, 16)
    assert all(result.mode == "local" for result in results)


def test_parallel_matches_serial():
    serial = compare_all_pairs(RECORDS, mode="global")
    parallel = compare_all_pairs(RECORDS, mode="global", num_workers=2)
    assert parallel == serial


@pytest.mark.parametrize("records", [[], [("only", "LSPADK")]])
def test_nothing_to_compare(records):
    assert compare_all_pairs(records) == []


def test_invalid_mode_before_alignment():
    with pytest.raises(InvalidMode):
        compare_all_pairs([("a", "LSP#")], mode="semiglobal")


def test_invalid_worker_count():
    with pytest.raises(ValueError, match="num_workers"):
        compare_all_pairs(RECORDS, num_workers=0)


MANY_RECORDS = [(f"s{i}", "LSPADKTNVK"[i % 5:] + "AW" * (i % 3)) for i in range(12)]


class InlineExecutor:
    """Runs submitted chunks in this process and counts them."""

    submitted = 0

    def __init__(self, max_workers, initializer, initargs):
        initializer(*initargs)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def submit(self, fn, *args):
        InlineExecutor.submitted += 1
        future = Future()
        future.set_result(fn(*args))
        return future


def test_iter_all_pairs_is_lazy(monkeypatch):
    monkeypatch.setattr(pairwise, "ProcessPoolExecutor", InlineExecutor)
    monkeypatch.setattr(InlineExecutor, "submitted", 0)

    results = iter_all_pairs(MANY_RECORDS, num_workers=2, chunksize=1)
    assert InlineExecutor.submitted == 0

    first = next(results)
    assert (first.id_x, first.id_y) == ("s0", "s1")
    # 66 pairs, but only the chunks in flight plus one refill are queued
    assert InlineExecutor.submitted == 2 * pairwise.CHUNKS_IN_FLIGHT_PER_WORKER + 1

    rest = list(results)
    assert InlineExecutor.submitted == 66
    assert [first] + rest == compare_all_pairs(MANY_RECORDS)


def test_parallel_with_uneven_chunks():
    serial = compare_all_pairs(MANY_RECORDS, mode="local")
    parallel = list(iter_all_pairs(MANY_RECORDS, mode="local", num_workers=3, chunksize=4))
    assert parallel == serial


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"mode": "semiglobal"}, InvalidMode),
        ({"num_workers": 0}, ValueError),
        ({"chunksize": 0}, ValueError),
    ],
)
def test_iter_all_pairs_validates_when_called(kwargs, error):
    with pytest.raises(error):
        iter_all_pairs(RECORDS, **kwargs)


def test_write_results_csv(tmp_path):
    results = compare_all_pairs(RECORDS[:3], mode="global")
    path = write_results_csv([r.to_dict() for r in results], tmp_path / "out" / "results.csv")

    df = pd.read_csv(path)
    assert list(df.columns) == RESULT_COLUMNS
    assert len(df) == 3
    assert df.loc[0, "identity"] == 100


def test_write_empty_results_csv(tmp_path):
    path = write_results_csv([], tmp_path / "empty.csv")
    assert path.read_text().strip() == ",".join(RESULT_COLUMNS)


def test_results_to_dataframe():
    results = compare_all_pairs(RECORDS, mode="local")
    df = results_to_dataframe([r.to_dict() for r in results])

    assert list(df.columns) == RESULT_COLUMNS
    assert df.iloc[2][["id_x", "id_y", "score"]].tolist() == ["seq1", "seq4", 16]
