"""Generation orchestration."""
import random
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .bounds import compute_pairwise_lower_bound
from .candidates import (
    CandidateGenerator,
    GenerationStrategy,
    make_candidate_generator,
)
from .coverage import CoverageTracker
from .model import Parameter, normalize_parameters, reorder_by_value_count
from .universe import Pair, PairUniverse


class OrderingMode(str, Enum):
    KEEP = "keep"
    AUTO = "auto"


class CoverageStatus(str, Enum):
    FULL = "full"
    BUDGET_EXHAUSTED = "budget-exhausted"
    NON_CONVERGENCE = "non-convergence"


@dataclass
class GenerationConfig:
    strategy: GenerationStrategy = GenerationStrategy.GREEDY
    batch_size: int = 50
    round_budget_multiplier: int = 10
    stagnation_threshold: float = 0.95
    checkpoint_interval: int = 100
    max_restarts: int = 5
    random_seed: Optional[int] = 0
    ordering_mode: OrderingMode = OrderingMode.KEEP
    timeout_sec: Optional[float] = None

    def validate(self) -> None:
        """Throws ValueError on out-of-range settings."""
        GenerationStrategy(self.strategy)
        OrderingMode(self.ordering_mode)
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1 (got {self.batch_size}).")
        if self.round_budget_multiplier < 1:
            raise ValueError(f"round_budget_multiplier must be >= 1 (got {self.round_budget_multiplier}).")
        if not 0.0 <= self.stagnation_threshold <= 1.0:
            raise ValueError(f"stagnation_threshold must be between 0 and 1 (got {self.stagnation_threshold}).")
        if self.checkpoint_interval < 1:
            raise ValueError(f"checkpoint_interval must be >= 1 (got {self.checkpoint_interval}).")
        if self.max_restarts < 0:
            raise ValueError(f"max_restarts must be >= 0 (got {self.max_restarts}).")
        if self.timeout_sec is not None and self.timeout_sec <= 0:
            raise ValueError(f"timeout_sec must be > 0 (got {self.timeout_sec}).")


@dataclass
class GenerationResult:
    test_cases: List[Dict[str, str]]
    covered_pairs: int
    total_pairs: int
    status: CoverageStatus
    missing_pairs: List[Pair]
    minimum_required: int
    rounds: int
    restarts: int
    strategy: GenerationStrategy
    seed: Optional[int]
    ordering_mode: OrderingMode
    parameters: List[Parameter] = field(default_factory=list)

    @property
    def ratio(self) -> float:
        return self.covered_pairs / self.total_pairs if self.total_pairs else 1.0

    @property
    def fully_covered(self) -> bool:
        return self.status == CoverageStatus.FULL

    @property
    def n(self) -> int:
        return len(self.test_cases)

    @property
    def headers(self) -> List[str]:
        return [p.name for p in self.parameters]

    @property
    def rows(self) -> List[List[str]]:
        return [[case[h] for h in self.headers] for case in self.test_cases]

    def diagnostics(self) -> Dict[str, Any]:
        return {
            "covered_pairs": self.covered_pairs,
            "total_pairs": self.total_pairs,
            "ratio": self.ratio,
            "fully_covered": self.fully_covered,
            "status": self.status.value,
        }


def generate_suite(parameters: Any,
                   config: Optional[GenerationConfig] = None,
                   *,
                   rng: Optional[random.Random] = None,
                   candidate_generator: Optional[CandidateGenerator] = None,
                   verbose: bool = False) -> GenerationResult:
    """
    Greedily builds a pairwise test suite for the given parameters.

    Each round scores the generator's candidates against current coverage
    and accepts the best one if it covers at least one new pair. Running
    out of rounds or restarts is reported through the result status, not
    raised. Raises InvalidInput for unusable parameters, ValueError for a
    bad config, and TimeoutError when `config.timeout_sec` elapses.
    """
    config = config or GenerationConfig()
    config.validate()

    canonical_params = normalize_parameters(parameters)
    ordering_mode = OrderingMode(config.ordering_mode)
    if ordering_mode == OrderingMode.AUTO:
        run_params = reorder_by_value_count(canonical_params)
    else:
        run_params = canonical_params

    universe = PairUniverse(run_params)
    tracker = CoverageTracker(universe)

    if rng is None:
        rng = random.Random(config.random_seed)
    generator = candidate_generator or make_candidate_generator(
        config.strategy, rng=rng, batch_size=config.batch_size
    )

    minimum_required = compute_pairwise_lower_bound([len(p.values) for p in canonical_params])
    round_budget = minimum_required * config.round_budget_multiplier
    deadline = None
    if config.timeout_sec is not None:
        deadline = time.monotonic() + config.timeout_sec

    accepted: List[Dict[str, str]] = []
    rounds = 0
    total_rounds = 0
    restarts = 0
    status = None

    while not tracker.is_full():
        if rounds >= round_budget:
            status = CoverageStatus.BUDGET_EXHAUSTED
            break
        if deadline is not None and time.monotonic() > deadline:
            raise TimeoutError(
                f"Generation timeout of {config.timeout_sec} seconds exceeded after {total_rounds} rounds."
            )

        rounds += 1
        total_rounds += 1

        best_case = None
        best_score = 0
        for candidate in generator.candidates(tracker):
            score = tracker.count_newly_covered(candidate)
            if score > best_score:
                best_score = score
                best_case = candidate

        if best_case is not None:
            tracker.mark_covered(best_case)
            accepted.append(best_case)
            if verbose:
                print(
                    f"Round {rounds}: accepted case #{len(accepted)} covering {best_score} new pairs "
                    f"({tracker.coverage_ratio():.1%})",
                    file=sys.stderr
                )

        if tracker.is_full():
            break

        # a deterministic generator would replay the same rounds after a
        # restart, so only the round budget ends its run
        if (
            not generator.deterministic
            and rounds % config.checkpoint_interval == 0
            and len(accepted) >= minimum_required
            and tracker.coverage_ratio() < config.stagnation_threshold
        ):
            if restarts >= config.max_restarts:
                if verbose:
                    print(
                        f"Stagnated at {tracker.coverage_ratio():.1%} after {restarts} restarts; giving up.",
                        file=sys.stderr
                    )
                status = CoverageStatus.NON_CONVERGENCE
                break
            restarts += 1
            if verbose:
                print(
                    f"Stagnated at {tracker.coverage_ratio():.1%} after {rounds} rounds; restart {restarts}/{config.max_restarts}.",
                    file=sys.stderr
                )
            accepted = []
            tracker.reset()
            rounds = 0

    if status is None:
        status = CoverageStatus.FULL

    by_name = {p.name: p for p in canonical_params}
    test_cases = [{name: case[name] for name in by_name} for case in accepted]

    return GenerationResult(
        test_cases=test_cases,
        covered_pairs=tracker.covered_count,
        total_pairs=tracker.total_count,
        status=status,
        missing_pairs=tracker.uncovered_pairs(),
        minimum_required=minimum_required,
        rounds=total_rounds,
        restarts=restarts,
        strategy=GenerationStrategy(config.strategy),
        seed=config.random_seed,
        ordering_mode=ordering_mode,
        parameters=canonical_params,
    )
