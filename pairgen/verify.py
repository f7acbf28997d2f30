"""Pairwise coverage verification logic."""
from typing import Any, List, Tuple

from .coverage import CoverageTracker
from .universe import build_pair_universe

def verify_pairwise_coverage(parameters: Any, rows: List[List[str]], limit: int = 20) -> Tuple[bool, List[str]]:
    """
    Replays `rows` against the pair universe of `parameters` and reports
    whether every pair is covered.
    Assumes `rows` are ordered according to the declared parameter order.
    At most `limit` missing pairs are returned.
    """
    universe = build_pair_universe(parameters)
    tracker = CoverageTracker(universe)
    params = universe.parameters
    num_params = len(params)

    for row_idx, row in enumerate(rows):
        if len(row) < num_params:
            continue

        case = {}
        for i, p in enumerate(params):
            val = row[i]
            if val not in p.values:
                raise ValueError(f"CRITICAL: Value '{val}' at row {row_idx+1}, col {i+1} is not a valid parameter value in the model for '{p.name}'.")
            case[p.name] = val
        tracker.mark_covered(case)

    missing_pairs = [str(pair) for pair in tracker.uncovered_pairs()[:limit]]
    return tracker.is_full(), missing_pairs
