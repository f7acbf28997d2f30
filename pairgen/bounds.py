"""Computes pairwise size bounds for a given model."""
from typing import List

def compute_pairwise_lower_bound(counts: List[int]) -> int:
    """
    Computes the product of the two largest parameter value counts.
    No pairwise suite can be smaller, since those two parameters alone
    need every one of their value combinations in a separate row.
    If there are less than 2 parameters, returns 0.
    """
    if len(counts) < 2:
        return 0

    largest = sorted(counts, reverse=True)
    return largest[0] * largest[1]

def compute_universe_size(counts: List[int]) -> int:
    """Number of value pairs to cover: sum over i<j of v_i * v_j."""
    total = 0
    running = 0
    for count in counts:
        total += running * count
        running += count
    return total
