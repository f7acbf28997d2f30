"""Tests for coverage tracking."""
import pytest
from pairgen.coverage import CoverageTracker
from pairgen.universe import Pair, build_pair_universe

@pytest.fixture
def tracker():
    universe = build_pair_universe([("P1", ["a", "b"]), ("P2", ["x", "y"]), ("P3", ["m", "n"])])
    return CoverageTracker(universe)

def test_initial_state(tracker):
    assert tracker.covered_count == 0
    assert tracker.total_count == 12
    assert tracker.coverage_ratio() == 0.0
    assert not tracker.is_full()
    assert len(tracker.uncovered_pairs()) == 12
    assert tracker.open_count("P1", "a") == 4

def test_count_newly_covered_is_pure(tracker):
    case = {"P1": "a", "P2": "x", "P3": "m"}
    assert tracker.count_newly_covered(case) == 3
    assert tracker.count_newly_covered(case) == 3
    assert tracker.covered_count == 0

def test_mark_covered(tracker):
    assert tracker.mark_covered({"P1": "a", "P2": "x", "P3": "m"}) == 3
    assert tracker.covered_count == 3
    assert tracker.is_covered(Pair.of("P3", "m", "P1", "a"))
    assert tracker.coverage_ratio() == pytest.approx(0.25)
    assert tracker.open_count("P1", "a") == 2

    # overlaps only on (P1: a, P2: x)
    case = {"P1": "a", "P2": "x", "P3": "n"}
    assert tracker.count_newly_covered(case) == 2
    assert tracker.mark_covered(case) == 2
    assert tracker.mark_covered(case) == 0
    assert tracker.covered_count == 5

def test_partial_case_counts_assigned_pairs_only(tracker):
    assert tracker.count_newly_covered({"P1": "a"}) == 0
    assert tracker.count_newly_covered({"P1": "a", "P3": "m"}) == 1

def test_full_and_reset(tracker):
    for case in [
        {"P1": "a", "P2": "x", "P3": "m"},
        {"P1": "a", "P2": "y", "P3": "n"},
        {"P1": "b", "P2": "x", "P3": "n"},
        {"P1": "b", "P2": "y", "P3": "m"},
    ]:
        tracker.mark_covered(case)
    assert tracker.is_full()
    assert tracker.coverage_ratio() == 1.0
    assert tracker.uncovered_pairs() == []
    assert tracker.open_count("P2", "y") == 0

    tracker.reset()
    assert tracker.covered_count == 0
    assert not tracker.is_full()
    assert tracker.open_count("P2", "y") == 4

def test_uncovered_partners_follow_marking(tracker):
    assert tracker.uncovered_partners("P1", "a", "P2") == {"x", "y"}
    tracker.mark_covered({"P1": "a", "P2": "x", "P3": "m"})
    assert tracker.uncovered_partners("P1", "a", "P2") == {"y"}
    assert tracker.uncovered_partners("P2", "x", "P1") == {"b"}
    assert tracker.uncovered_partners("P3", "m", "P2") == {"y"}

    tracker.reset()
    assert tracker.uncovered_partners("P2", "x", "P1") == {"a", "b"}

def test_uncovered_partners_of_unknown_endpoints_are_empty(tracker):
    assert tracker.uncovered_partners("P1", "zzz", "P2") == set()
    assert tracker.uncovered_partners("P1", "a", "Nope") == set()
    assert tracker.count_newly_covered({"P1": "zzz", "P2": "x", "P3": "m"}) == 1
