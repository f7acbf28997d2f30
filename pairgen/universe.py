"""Enumerates the value pairs a pairwise suite has to cover."""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from .model import Parameter, normalize_parameters


@dataclass(frozen=True)
class Pair:
    """
    One value combination of two distinct parameters.

    Endpoints are stored ordered by parameter name, so build pairs with
    `Pair.of` and equality does not depend on argument order.
    """
    param_a: str
    value_a: str
    param_b: str
    value_b: str

    @classmethod
    def of(cls, param_1: str, value_1: str, param_2: str, value_2: str) -> "Pair":
        if param_1 == param_2:
            raise ValueError(f"A pair needs two distinct parameters, got '{param_1}' twice.")
        if param_2 < param_1:
            return cls(param_2, value_2, param_1, value_1)
        return cls(param_1, value_1, param_2, value_2)

    @property
    def key(self) -> Tuple[str, str, str, str]:
        return (self.param_a, self.value_a, self.param_b, self.value_b)

    def is_satisfied_by(self, test_case: Mapping[str, str]) -> bool:
        return test_case.get(self.param_a) == self.value_a and test_case.get(self.param_b) == self.value_b

    def __str__(self) -> str:
        return f"({self.param_a}: {self.value_a}, {self.param_b}: {self.value_b})"


class PairUniverse:
    """Read-only, ordered set of every pair derivable from a parameter list."""

    def __init__(self, parameters: List[Parameter]):
        self.parameters: Tuple[Parameter, ...] = tuple(parameters)
        self._by_name: Dict[str, Parameter] = {p.name: p for p in self.parameters}

        pairs = []
        for i in range(len(self.parameters)):
            for j in range(i + 1, len(self.parameters)):
                p1 = self.parameters[i]
                p2 = self.parameters[j]
                for v1 in p1.values:
                    for v2 in p2.values:
                        pairs.append(Pair.of(p1.name, v1, p2.name, v2))
        self.pairs: Tuple[Pair, ...] = tuple(pairs)
        self._pair_set = frozenset(self.pairs)

        endpoints: Dict[Tuple[str, str], List[Pair]] = {}
        for pair in self.pairs:
            endpoints.setdefault((pair.param_a, pair.value_a), []).append(pair)
            endpoints.setdefault((pair.param_b, pair.value_b), []).append(pair)
        self._by_endpoint = {k: tuple(v) for k, v in endpoints.items()}

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.parameters]

    def parameter(self, name: str) -> Parameter:
        return self._by_name[name]

    def keys(self) -> frozenset:
        return frozenset(p.key for p in self.pairs)

    def pairs_with(self, name: str, value: str) -> Tuple[Pair, ...]:
        """Pairs having (name, value) as one of their endpoints."""
        return self._by_endpoint.get((name, value), ())

    def pairs_satisfied_by(self, test_case: Mapping[str, str]) -> Iterator[Pair]:
        """
        Yields universe pairs matched by the assigned entries of a test case.
        Unassigned parameters and values outside the universe are skipped,
        so partial test cases can be scored too.
        """
        assigned = [(p.name, test_case[p.name]) for p in self.parameters if p.name in test_case]
        for i in range(len(assigned)):
            for j in range(i + 1, len(assigned)):
                pair = Pair.of(assigned[i][0], assigned[i][1], assigned[j][0], assigned[j][1])
                if pair in self._pair_set:
                    yield pair

    def __contains__(self, pair: object) -> bool:
        return pair in self._pair_set

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)


def build_pair_universe(parameters: Any) -> PairUniverse:
    """
    Validates the parameter list and enumerates its pair universe.
    Raises InvalidInput before anything is built.
    """
    return PairUniverse(normalize_parameters(parameters))
