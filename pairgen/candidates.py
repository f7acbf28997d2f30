"""Candidate test-case construction strategies."""
import random
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .coverage import CoverageTracker
from .universe import Pair

TestCase = Dict[str, str]


class GenerationStrategy(str, Enum):
    GREEDY = "greedy"
    WEIGHTED_RANDOM = "weighted-random"


class CandidateGenerator:
    """Produces the candidates scored in one round."""

    # True when output depends on coverage state alone.
    deterministic = False

    def candidates(self, tracker: CoverageTracker) -> Iterable[TestCase]:
        raise NotImplementedError


class GreedyCandidateGenerator(CandidateGenerator):
    """
    Builds one candidate per uncovered seed pair.

    The seed's two assignments are fixed first. Each remaining parameter,
    in declared order, takes the value that joins the most uncovered pairs
    with the other parameters: a fixed parameter counts only its assigned
    value, an open one counts all of its values. Ties keep the earlier
    declared value.
    """

    deterministic = True

    def candidates(self, tracker: CoverageTracker) -> Iterable[TestCase]:
        for seed in tracker.uncovered_pairs():
            yield self.build_candidate(tracker, seed)

    def build_candidate(self, tracker: CoverageTracker, seed: Pair) -> TestCase:
        universe = tracker.universe
        case = {seed.param_a: seed.value_a, seed.param_b: seed.value_b}

        for param in universe.parameters:
            if param.name in case:
                continue
            best_value = param.values[0]
            best_score = -1
            for value in param.values:
                score = self._score_value(tracker, case, param.name, value)
                if score > best_score:
                    best_score = score
                    best_value = value
            case[param.name] = best_value

        return {p.name: case[p.name] for p in universe.parameters}

    @staticmethod
    def _score_value(tracker: CoverageTracker, case: TestCase, name: str, value: str) -> int:
        score = 0
        for other in tracker.universe.parameters:
            if other.name == name:
                continue
            open_values = tracker.uncovered_partners(name, value, other.name)
            if other.name in case:
                score += case[other.name] in open_values
            else:
                score += len(open_values)
        return score


class WeightedRandomCandidateGenerator(CandidateGenerator):
    """
    Draws a batch of independent random candidates per round.

    Each value is weighted by its number of uncovered pairs; a parameter
    whose values all have zero weight is drawn uniformly.
    """

    def __init__(self, rng: random.Random, batch_size: int = 50):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1 (got {batch_size}).")
        self.rng = rng
        self.batch_size = batch_size

    def candidates(self, tracker: CoverageTracker) -> List[TestCase]:
        params = tracker.universe.parameters
        weights = {p.name: [tracker.open_count(p.name, v) for v in p.values] for p in params}

        batch = []
        for _ in range(self.batch_size):
            case = {}
            for p in params:
                w = weights[p.name]
                if any(w):
                    case[p.name] = self.rng.choices(p.values, weights=w, k=1)[0]
                else:
                    case[p.name] = self.rng.choice(p.values)
            batch.append(case)
        return batch


def make_candidate_generator(strategy: GenerationStrategy,
                             rng: Optional[random.Random] = None,
                             batch_size: int = 50) -> CandidateGenerator:
    strategy = GenerationStrategy(strategy)
    if strategy == GenerationStrategy.GREEDY:
        return GreedyCandidateGenerator()
    if rng is None:
        raise ValueError("The weighted-random strategy needs a random source.")
    return WeightedRandomCandidateGenerator(rng, batch_size=batch_size)
