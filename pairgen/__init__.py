"""pairgen: greedy pairwise (2-wise) covering-array generator."""

__version__ = "1.0.0"

EXIT_SUCCESS = 0
EXIT_VALIDATION = 2
EXIT_GENERATION_ERR = 3
EXIT_VERIF_ERR = 4
EXIT_TIMEOUT = 5
EXIT_INCOMPLETE = 6

from .model import Parameter, PairwiseModel, InvalidInput, normalize_parameters  # noqa: E402
from .universe import Pair, PairUniverse, build_pair_universe  # noqa: E402
from .coverage import CoverageTracker  # noqa: E402
from .candidates import GenerationStrategy  # noqa: E402
from .generate import (  # noqa: E402
    CoverageStatus,
    GenerationConfig,
    GenerationResult,
    OrderingMode,
    generate_suite,
)
from .delimited import ImportFormatError, parse_delimited, format_parameters_delimited  # noqa: E402

__all__ = [
    "__version__",
    "Parameter",
    "PairwiseModel",
    "InvalidInput",
    "normalize_parameters",
    "Pair",
    "PairUniverse",
    "build_pair_universe",
    "CoverageTracker",
    "GenerationStrategy",
    "CoverageStatus",
    "GenerationConfig",
    "GenerationResult",
    "OrderingMode",
    "generate_suite",
    "ImportFormatError",
    "parse_delimited",
    "format_parameters_delimited",
]
