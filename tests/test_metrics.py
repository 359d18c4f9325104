"""
test_metrics.py
"""

import pytest

from compseq.alignment import (
    Alignment,
    InvariantViolation,
    ScoringModel,
    align,
    identity,
    similarity,
    MATCH,
    SUBST,
    DELETE,
    INSERT,
    clip_start,
    clip_end,
)


# Concrete scenarios, global mode, BLOSUM62, gap open -5, gap extend -1
SCENARIOS = [
    {
        "description": "Identical sequences",
        "x": "LSPADKTNVKAA",
        "y": "LSPADKTNVKAA",
        "mode": "global",
        "identity": 100,
        "similarity": 100,
    },
    {
        "description": "Nothing in common",
        "x": "LSPADKTNVKAA",
        "y": "QQQQQQQQQQQQ",
        "mode": "global",
        "identity": 0,
        "similarity": 0,
    },
    {
        "description": "Shorter unrelated sequence",
        "x": "LSPADKTNVKAA",
        "y": "QQQQQQQQQQ",
        "mode": "global",
        "identity": 0,
        "similarity": 0,
    },
    {
        "description": "One substitution",
        "x": "LSPADKTNVK",
        "y": "LSPADQTNVK",
        "mode": "global",
        "identity": 90,
        "similarity": 92,
    },
    {
        "description": "Empty second sequence",
        "x": "LSPADKTNVK",
        "y": "",
        "mode": "global",
        "identity": 0,
        "similarity": 0,
    },
    {
        "description": "Empty first sequence",
        "x": "",
        "y": "LSPADKTNVK",
        "mode": "global",
        "identity": 0,
        "similarity": 0,
    },
    {
        "description": "Both empty",
        "x": "",
        "y": "",
        "mode": "global",
        "identity": 0,
        "similarity": 0,
    },
    {
        "description": "Longer first sequence",
        "x": "ALSPADQTNVK",
        "y": "LSPADQTNVK",
        "mode": "global",
        "identity": 91,
        "similarity": 83,
    },
    {
        "description": "Longer second sequence",
        "x": "LSPADQTNVK",
        "y": "ALSPADQTNVK",
        "mode": "global",
        "identity": 91,
        "similarity": 83,
    },
    {
        "description": "Local core with unaligned flanks",
        "x": "LSPADKTNVKAA",
        "y": "PEEKSAV",
        "mode": "local",
        "identity": 25,
        "similarity": 27,
    },
    {
        "description": "Local identical sequences",
        "x": "LSPADKTNVKAA",
        "y": "LSPADKTNVKAA",
        "mode": "local",
        "identity": 100,
        "similarity": 100,
    },
    {
        "description": "Local without positive score",
        "x": "AAAA",
        "y": "WWWW",
        "mode": "local",
        "identity": 0,
        "similarity": 0,
    },
]


@pytest.mark.parametrize(
    "scenario", SCENARIOS, ids=[s["description"] for s in SCENARIOS]
)
def test_scenarios(scenario):
    x, y = scenario["x"], scenario["y"]
    alignment = align(x, y, scenario["mode"])

    assert identity(alignment) == scenario["identity"]
    assert similarity(alignment, x, y) == scenario["similarity"]


@pytest.mark.parametrize(
    "scenario", SCENARIOS, ids=[s["description"] for s in SCENARIOS]
)
def test_bounds(scenario):
    x, y = scenario["x"], scenario["y"]
    alignment = align(x, y, scenario["mode"])

    assert 0 <= identity(alignment) <= 100
    assert 0 <= similarity(alignment, x, y) <= 100


@pytest.mark.parametrize("mode", ["global", "local"])
@pytest.mark.parametrize("x", ["W", "HEAGAWGHEE", "MKTAYIAKQRQISFVKSHFSRQLEERLGLIEVQ"])
def test_self_comparison(x, mode):
    alignment = align(x, x, mode)
    assert identity(alignment) == 100
    assert similarity(alignment, x, x) == 100


def test_identity_counts_matches_only():
    alignment = Alignment(
        score=0, x_start=0, x_end=4, y_start=0, y_end=4, x_len=4, y_len=4,
        operations=(MATCH, SUBST, SUBST, MATCH),
    )
    assert identity(alignment) == 50


def test_identity_rounds_half_up():
    # 1 of 8 residues -> 12.5 %
    alignment = Alignment(
        score=0, x_start=0, x_end=8, y_start=0, y_end=8, x_len=8, y_len=8,
        operations=(MATCH,) + (SUBST,) * 7,
    )
    assert identity(alignment) == 13


def test_gap_runs_use_affine_costs():
    # A-A (4) + three deleted residues (-5, -1, -1) + A-A (4) = 1
    x, y = "AWWWA", "AA"
    alignment = Alignment(
        score=1, x_start=0, x_end=5, y_start=0, y_end=2, x_len=5, y_len=2,
        operations=(MATCH, DELETE, DELETE, DELETE, MATCH),
    )
    # ceiling: 4 + 3 * 11 + 4
    assert similarity(alignment, x, y) == 2


def test_similarity_of_insert_runs():
    x, y = "AA", "AWWWA"
    alignment = Alignment(
        score=1, x_start=0, x_end=2, y_start=0, y_end=5, x_len=2, y_len=5,
        operations=(MATCH, INSERT, INSERT, INSERT, MATCH),
    )
    assert similarity(alignment, x, y) == 2


def test_similarity_of_global_alignment_matches_score():
    x, y = "ALSPADQTNVK", "LSPADQTNVK"
    alignment = align(x, y, "global")
    # ceiling 54: self-score of A plus the ten identical residues
    assert alignment.score == 45
    assert similarity(alignment, x, y) == round(100 * 45 / 54)


def test_similarity_with_explicit_scoring():
    scoring = ScoringModel.blosum62()
    x, y = "LSPADKTNVK", "LSPADQTNVK"
    assert similarity(align(x, y, "global", scoring), x, y, scoring) == 92


def test_similarity_rejects_other_sequences():
    alignment = align("LSPADKTNVK", "LSPADQTNVK", "global")
    with pytest.raises(InvariantViolation):
        similarity(alignment, "LSPADKTNVKAA", "LSPADQTNVK")


@pytest.mark.parametrize(
    "operations",
    [
        # one residue short
        (MATCH, MATCH),
        # one residue too many
        (MATCH, MATCH, MATCH, DELETE),
        # clip runs past the end
        (clip_start("x", 2), MATCH, clip_end("y", 2)),
    ],
)
def test_inconsistent_trace(operations):
    alignment = Alignment(
        score=0, x_start=0, x_end=3, y_start=0, y_end=3, x_len=3, y_len=3,
        operations=operations,
    )
    with pytest.raises(InvariantViolation):
        similarity(alignment, "LSP", "LSP")
    with pytest.raises(InvariantViolation):
        alignment.check_consistency()
