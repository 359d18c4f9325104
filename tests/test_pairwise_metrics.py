"""
test_pairwise_metrics.py
"""

import pytest


from compseq.utils.sequences.pairwise_metrics import (
    get_pairwise_metric,
    __all__ as pairwise_comparison_functions,
)


TEST_CASES = [
    {
        "description": "Identical sequences",
        "seq1": "LSPADKTNVKAA",
        "seq2": "LSPADKTNVKAA",
        "expected": {
            "sequence_identity": 100,
            "sequence_similarity": 100,
        },
    },
    {
        "description": "No shared residues",
        "seq1": "LSPADKTNVKAA",
        "seq2": "QQQQQQQQQQQQ",
        "expected": {
            "sequence_identity": 0,
            "sequence_similarity": 0,
        },
    },
    {
        "description": "Single substitution",
        "seq1": "LSPADKTNVK",
        "seq2": "LSPADQTNVK",
        "expected": {
            "sequence_identity": 90,
            "sequence_similarity": 92,
        },
    },
    {
        "description": "Empty second sequence",
        "seq1": "LSPADKTNVK",
        "seq2": "",
        "expected": {
            "sequence_identity": 0,
            "sequence_similarity": 0,
        },
    },
    {
        "description": "Leading residue deleted",
        "seq1": "ALSPADQTNVK",
        "seq2": "LSPADQTNVK",
        "expected": {
            "sequence_identity": 91,
            "sequence_similarity": 83,
        },
    },
    {
        "description": "Net negative alignment",
        "seq1": "LSPADKTNVKAA",
        "seq2": "LLLLL",
        "expected": {
            "sequence_identity": 8,
            "sequence_similarity": 0,
        },
    },
    {
        "description": "Lower case input",
        "seq1": "lspadktnvk",
        "seq2": "LSPADQTNVK",
        "expected": {
            "sequence_identity": 90,
            "sequence_similarity": 92,
        },
    },
]


@pytest.mark.parametrize("pairwise_metric", pairwise_comparison_functions)
@pytest.mark.parametrize(
    "test_case", TEST_CASES, ids=[tc["description"] for tc in TEST_CASES]
)
def test_pairwise_metrics(pairwise_metric, test_case):
    pairwise_metric_func = get_pairwise_metric(pairwise_metric)
    value = pairwise_metric_func(test_case["seq1"], test_case["seq2"])

    assert (
        value == test_case["expected"][pairwise_metric]
    ), f"Test case '{test_case['description']}' failed for {pairwise_metric}: expected {test_case['expected'][pairwise_metric]} but got {value}"


@pytest.mark.parametrize("pairwise_metric", pairwise_comparison_functions)
def test_metrics_are_larger_for_similar_sequences(pairwise_metric):
    assert get_pairwise_metric(pairwise_metric).more_similar_is_larger is True


def test_unknown_metric():
    with pytest.raises(ValueError, match="Invalid pairwise metric"):
        get_pairwise_metric("levenshtein_distance")


def test_local_mode_is_forwarded():
    func = get_pairwise_metric("sequence_identity")
    assert func("LSPADKTNVKAA", "PEEKSAV", mode="local") == 25
