"""Tracks which pairs of a universe are already covered."""
from typing import AbstractSet, Dict, List, Mapping, Set, Tuple

from .universe import Pair, PairUniverse

_NO_VALUES: AbstractSet[str] = frozenset()


class CoverageTracker:
    """
    Holds the covered subset of a PairUniverse.

    Only `mark_covered` and `reset` mutate state; every other method is a
    query, so several candidates can be scored before one is accepted.
    """

    def __init__(self, universe: PairUniverse):
        self.universe = universe
        self._covered: Set[Pair] = set()
        self._open_by_endpoint: Dict[Tuple[str, str], int] = {}
        # (name, value) -> other parameter name -> its values still uncovered with (name, value)
        self._open_partners: Dict[Tuple[str, str], Dict[str, Set[str]]] = {}
        self.reset()

    @property
    def covered_count(self) -> int:
        return len(self._covered)

    @property
    def total_count(self) -> int:
        return len(self.universe)

    def is_covered(self, pair: Pair) -> bool:
        return pair in self._covered

    def uncovered_pairs(self) -> List[Pair]:
        """Uncovered pairs in universe order."""
        return [p for p in self.universe.pairs if p not in self._covered]

    def open_count(self, name: str, value: str) -> int:
        """Number of uncovered pairs with (name, value) as an endpoint."""
        return self._open_by_endpoint.get((name, value), 0)

    def uncovered_partners(self, name: str, value: str, other_name: str) -> AbstractSet[str]:
        """Values of `other_name` still uncovered alongside (name, value). Do not mutate."""
        partners = self._open_partners.get((name, value))
        if partners is None:
            return _NO_VALUES
        return partners.get(other_name, _NO_VALUES)

    def count_newly_covered(self, test_case: Mapping[str, str]) -> int:
        assigned = [(p.name, test_case[p.name]) for p in self.universe.parameters if p.name in test_case]
        newly = 0
        for i, (name, value) in enumerate(assigned):
            partners = self._open_partners.get((name, value))
            if not partners:
                continue
            for other_name, other_value in assigned[i + 1:]:
                if other_value in partners.get(other_name, _NO_VALUES):
                    newly += 1
        return newly

    def mark_covered(self, test_case: Mapping[str, str]) -> int:
        """Marks every pair the test case satisfies. Returns how many were new."""
        newly = 0
        for pair in self.universe.pairs_satisfied_by(test_case):
            if pair in self._covered:
                continue
            self._covered.add(pair)
            self._open_by_endpoint[(pair.param_a, pair.value_a)] -= 1
            self._open_by_endpoint[(pair.param_b, pair.value_b)] -= 1
            self._open_partners[(pair.param_a, pair.value_a)][pair.param_b].discard(pair.value_b)
            self._open_partners[(pair.param_b, pair.value_b)][pair.param_a].discard(pair.value_a)
            newly += 1
        return newly

    def coverage_ratio(self) -> float:
        return len(self._covered) / len(self.universe)

    def is_full(self) -> bool:
        return len(self._covered) == len(self.universe)

    def reset(self) -> None:
        self._covered.clear()
        self._open_by_endpoint = {}
        self._open_partners = {}
        params = self.universe.parameters
        for p in params:
            for v in p.values:
                self._open_by_endpoint[(p.name, v)] = len(self.universe.pairs_with(p.name, v))
                self._open_partners[(p.name, v)] = {o.name: set() for o in params if o.name != p.name}
        for pair in self.universe.pairs:
            self._open_partners[(pair.param_a, pair.value_a)][pair.param_b].add(pair.value_b)
            self._open_partners[(pair.param_b, pair.value_b)][pair.param_a].add(pair.value_a)
