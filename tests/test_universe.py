"""Tests for pair universe construction."""
import pytest
from pairgen.bounds import compute_universe_size
from pairgen.model import InvalidInput
from pairgen.universe import Pair, build_pair_universe

THREE_BY_TWO = [("P1", ["a", "b"]), ("P2", ["x", "y"]), ("P3", ["m", "n"])]

def test_pair_is_independent_of_argument_order():
    assert Pair.of("A", "a", "B", "b") == Pair.of("B", "b", "A", "a")
    assert Pair.of("B", "b", "A", "a").key == ("A", "a", "B", "b")
    assert len({Pair.of("A", "a", "B", "b"), Pair.of("B", "b", "A", "a")}) == 1

def test_pair_needs_distinct_parameters():
    with pytest.raises(ValueError):
        Pair.of("A", "a", "A", "b")

def test_pair_satisfaction():
    pair = Pair.of("A", "1", "B", "x")
    assert pair.is_satisfied_by({"A": "1", "B": "x", "C": "z"})
    assert not pair.is_satisfied_by({"A": "1", "B": "y"})
    assert not pair.is_satisfied_by({"A": "1"})
    assert str(pair) == "(A: 1, B: x)"

def test_three_by_two_example():
    universe = build_pair_universe(THREE_BY_TWO)
    assert len(universe) == 12
    assert Pair.of("P3", "n", "P1", "b") in universe
    assert universe.pairs[0] == Pair.of("P1", "a", "P2", "x")
    assert universe.pairs[-1] == Pair.of("P2", "y", "P3", "n")

@pytest.mark.parametrize("counts", [[1, 1], [2, 3], [3, 1, 4], [2, 2, 2, 2, 2], [5, 4, 3, 2, 1]])
def test_universe_size_formula(counts):
    params = [(f"p{i}", [f"v{k}" for k in range(c)]) for i, c in enumerate(counts)]
    universe = build_pair_universe(params)
    assert len(universe) == compute_universe_size(counts)
    assert len(universe.keys()) == len(universe)

def test_universe_is_deterministic():
    first = build_pair_universe(THREE_BY_TWO)
    second = build_pair_universe(THREE_BY_TWO)
    assert first.pairs == second.pairs
    assert first.keys() == second.keys()

def test_duplicate_values_do_not_inflate_universe():
    universe = build_pair_universe([("A", ["a", "a", "b"]), ("B", ["x"])])
    assert universe.parameter("A").values == ("a", "b")
    assert len(universe) == 2

@pytest.mark.parametrize("params", [
    [],
    [("A", ["1", "2"])],
    [("A", ["1"]), ("B", [])],
    [("A", ["1"]), (" ", ["2"])],
])
def test_invalid_input(params):
    with pytest.raises(InvalidInput):
        build_pair_universe(params)

def test_pairs_satisfied_by_partial_case():
    universe = build_pair_universe(THREE_BY_TWO)
    satisfied = list(universe.pairs_satisfied_by({"P1": "a", "P3": "n"}))
    assert satisfied == [Pair.of("P1", "a", "P3", "n")]

    full = list(universe.pairs_satisfied_by({"P1": "a", "P2": "y", "P3": "n"}))
    assert len(full) == 3

    # values outside the universe match nothing
    assert list(universe.pairs_satisfied_by({"P1": "zzz", "P2": "x"})) == []

def test_pairs_with_endpoint():
    universe = build_pair_universe(THREE_BY_TWO)
    with_a = universe.pairs_with("P1", "a")
    assert len(with_a) == 4
    assert all(("P1", "a") in ((p.param_a, p.value_a), (p.param_b, p.value_b)) for p in with_a)
    assert universe.pairs_with("P1", "nope") == ()
