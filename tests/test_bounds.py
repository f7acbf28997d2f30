"""Tests for lower bound and universe size computation."""
from pairgen.bounds import compute_pairwise_lower_bound, compute_universe_size

def test_lower_bound_empty():
    assert compute_pairwise_lower_bound([]) == 0

def test_lower_bound_single():
    assert compute_pairwise_lower_bound([5]) == 0

def test_lower_bound_two_params():
    assert compute_pairwise_lower_bound([3, 4]) == 12

def test_lower_bound_multiple():
    # two largest counts are 4 and 4
    assert compute_pairwise_lower_bound([4, 4, 3, 3, 3]) == 16
    assert compute_pairwise_lower_bound([2, 5, 2, 8]) == 40

def test_universe_size():
    assert compute_universe_size([2, 2, 2]) == 12
    assert compute_universe_size([3, 4]) == 12
    # 2*3 + 2*4 + 3*4
    assert compute_universe_size([2, 3, 4]) == 26
    assert compute_universe_size([7]) == 0
