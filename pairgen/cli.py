"""Command-line interface."""
import sys
import argparse
import csv
import os
from typing import List

from . import __version__
from .bounds import compute_pairwise_lower_bound, compute_universe_size
from .candidates import GenerationStrategy
from .delimited import ImportFormatError, parse_delimited, format_parameters_delimited
from .generate import generate_suite, GenerationConfig, OrderingMode
from .model import PairwiseModel, InvalidInput
from .output import format_table, format_csv, format_json, read_cases_csv, read_cases_json
from .verify import verify_pairwise_coverage

def _read_text(path: str, what: str) -> str:
    from . import EXIT_VALIDATION

    if not os.path.exists(path):
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError:
        print(f"Validation error: {what} is not valid UTF-8 text: {path}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except OSError as e:
        print(f"Validation error: Could not read {what.lower()}: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

def _load_model(path: str, input_format: str) -> PairwiseModel:
    """Reads a model file, either `name: v1, v2` lines or delimited text."""
    from . import EXIT_VALIDATION

    content = _read_text(path, "Model file")
    if input_format == "auto":
        input_format = "delimited" if path.lower().endswith(".csv") else "model"

    try:
        if input_format == "delimited":
            model = PairwiseModel.from_parameters(parse_delimited(content))
        else:
            model = PairwiseModel.from_model_text(content)
    except ImportFormatError as e:
        print(f"Import error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except InvalidInput as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    return model

def _write_or_print(out_str: str, out_path: str):
    if out_path:
        with open(out_path, "w", encoding="utf-8", newline="") as f:
            f.write(out_str)
            if not out_str.endswith("\n"):
                f.write('\n')
    else:
        print(out_str.rstrip("\n"))

def cmd_generate(args):
    from . import EXIT_SUCCESS, EXIT_VALIDATION, EXIT_GENERATION_ERR, EXIT_TIMEOUT, EXIT_INCOMPLETE

    config = GenerationConfig(
        strategy=GenerationStrategy(args.strategy),
        batch_size=args.batch_size,
        round_budget_multiplier=args.round_budget_multiplier,
        stagnation_threshold=args.stagnation_threshold,
        checkpoint_interval=args.checkpoint_interval,
        max_restarts=args.max_restarts,
        random_seed=args.seed,
        ordering_mode=OrderingMode.KEEP if args.keep_order else OrderingMode(args.ordering),
        timeout_sec=args.timeout_sec,
    )
    try:
        config.validate()
    except ValueError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    model = _load_model(args.model, args.input_format)
    try:
        model.validate_limits(
            max_params=args.max_params,
            max_values_per_param=args.max_values_per_param,
            max_total_values=args.max_total_values
        )
    except InvalidInput as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    counts = model.get_counts()
    if args.dry_run:
        print("Model parsing valid.", file=sys.stderr)
        print(f"Parameter counts   : {', '.join(str(c) for c in counts)}", file=sys.stderr)
        print(f"Pairs to cover     : {compute_universe_size(counts)}", file=sys.stderr)
        print(f"Lower bound (LB)   : {compute_pairwise_lower_bound(counts)}", file=sys.stderr)
        print(f"Strategy           : {config.strategy.value}", file=sys.stderr)
        sys.exit(EXIT_SUCCESS)

    try:
        res = generate_suite(model.parameters, config, verbose=args.verbose)
    except InvalidInput as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    except TimeoutError as e:
        print(f"Generation timeout error: {e}", file=sys.stderr)
        sys.exit(EXIT_TIMEOUT)
    except Exception as e:
        print(f"Generation error: {e}", file=sys.stderr)
        sys.exit(EXIT_GENERATION_ERR)

    if not res.fully_covered:
        print(
            f"Warning: Coverage incomplete ({res.status.value}): {res.covered_pairs}/{res.total_pairs} "
            f"pairs covered ({res.ratio:.1%}).",
            file=sys.stderr
        )
        for pair in res.missing_pairs[:20]:
            print(f" Missing pair: {pair}", file=sys.stderr)

    if args.format == 'table':
        out_str = format_table(res.headers, res.rows)
    elif args.format == 'csv':
        out_str = format_csv(res.headers, res.rows)
    else:
        metadata = dict(res.diagnostics())
        metadata.update({
            "strategy": res.strategy.value,
            "ordering_mode": res.ordering_mode.value,
            "seed": res.seed,
            "lb": res.minimum_required,
            "n": res.n,
            "rounds": res.rounds,
            "restarts": res.restarts,
        })
        out_str = format_json(res.headers, res.rows, metadata=metadata)

    _write_or_print(out_str, args.out)

    if args.require_full and not res.fully_covered:
        sys.exit(EXIT_INCOMPLETE)
    sys.exit(EXIT_SUCCESS)

def cmd_verify(args):
    from . import EXIT_SUCCESS, EXIT_VALIDATION, EXIT_VERIF_ERR

    model = _load_model(args.model, args.input_format)
    headers = [p.name for p in model.parameters]
    content = _read_text(args.cases, "Cases file")

    try:
        if args.cases.lower().endswith(".json"):
            rows = read_cases_json(content, headers)
        else:
            rows = read_cases_csv(content, headers)
    except (ValueError, csv.Error) as e:
        print(f"Validation error: Cases file is invalid: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    try:
        passed, missing = verify_pairwise_coverage(model.parameters, rows)
    except ValueError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)

    if not passed:
        print("Error: Coverage verification failed.", file=sys.stderr)
        for pair in missing:
            print(f" Missing pair: {pair}", file=sys.stderr)
        sys.exit(EXIT_VERIF_ERR)

    print("Coverage verified successfully.", file=sys.stderr)
    sys.exit(EXIT_SUCCESS)

def cmd_import(args):
    """Converts delimited text into a model file."""
    from . import EXIT_SUCCESS

    model = _load_model(args.input, "delimited")
    _write_or_print(model.to_model_text(), args.out)
    sys.exit(EXIT_SUCCESS)

def cmd_export(args):
    """Converts a model file into delimited text."""
    from . import EXIT_SUCCESS, EXIT_VALIDATION

    model = _load_model(args.model, "model")
    try:
        out_str = format_parameters_delimited(model.parameters)
    except ValueError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(EXIT_VALIDATION)
    _write_or_print(out_str, args.out)
    sys.exit(EXIT_SUCCESS)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="pairgen: greedy pairwise (2-wise) test suite generator.")
    subparsers = parser.add_subparsers(dest="command")

    input_formats = ["auto", "model", "delimited"]

    gen_parser = subparsers.add_parser("generate", help="Generate a pairwise test suite from a model file")
    gen_parser.add_argument("--model", required=True, help="Path to the model file")
    gen_parser.add_argument("--input-format", choices=input_formats, default="auto", help="Model file format; auto picks delimited for .csv (default: auto)")
    gen_parser.add_argument("--format", choices=["table", "csv", "json"], default="table", help="Output format")
    gen_parser.add_argument("--out", help="Output file (prints to standard output if not provided)")
    gen_parser.add_argument("--strategy", choices=[s.value for s in GenerationStrategy], default="greedy", help="Candidate strategy (default: greedy)")
    gen_parser.add_argument("--ordering", choices=["keep", "auto"], default="keep", help="Parameter ordering used while generating (default: keep)")
    gen_parser.add_argument("--keep-order", action="store_true", help="Shorthand for --ordering keep")
    gen_parser.add_argument("--seed", type=int, default=0, help="Random seed for the weighted-random strategy (default: 0)")
    gen_parser.add_argument("--batch-size", type=int, default=50, help="Candidates drawn per round by weighted-random (default: 50)")
    gen_parser.add_argument("--round-budget-multiplier", type=int, default=10, help="Round budget as a multiple of the lower bound (default: 10)")
    gen_parser.add_argument("--stagnation-threshold", type=float, default=0.95, help="Coverage ratio below which a checkpoint counts as stagnation (default: 0.95)")
    gen_parser.add_argument("--checkpoint-interval", type=int, default=100, help="Rounds between stagnation checks (default: 100)")
    gen_parser.add_argument("--max-restarts", type=int, default=5, help="Maximum restarts after stagnation (default: 5)")
    gen_parser.add_argument("--timeout-sec", type=float, default=None, help="Overall generation deadline in seconds")

    # Limits and Boundaries
    gen_parser.add_argument("--max-params", type=int, default=50, help="Maximum number of parameters allowed (default: 50)")
    gen_parser.add_argument("--max-values-per-param", type=int, default=50, help="Maximum number of values per parameter allowed (default: 50)")
    gen_parser.add_argument("--max-total-values", type=int, default=500, help="Maximum total sum of all values allowed (default: 500)")

    # Booleans
    gen_parser.add_argument("--dry-run", action="store_true", help="Parse the model and print its size and lower bound without generating")
    gen_parser.add_argument("--require-full", action="store_true", help="Exit non-zero when full pairwise coverage was not reached")
    gen_parser.add_argument("--verbose", action="store_true", help="Print per-round progress")

    ver_parser = subparsers.add_parser("verify", help="Verify coverage of a generated suite")
    ver_parser.add_argument("--model", required=True, help="Path to the model file")
    ver_parser.add_argument("--input-format", choices=input_formats, default="auto", help="Model file format (default: auto)")
    ver_parser.add_argument("--cases", required=True, help="Path to the cases file (CSV or JSON)")

    imp_parser = subparsers.add_parser("import", help="Convert delimited text into a model file")
    imp_parser.add_argument("--input", required=True, help="Path to the delimited text file")
    imp_parser.add_argument("--out", help="Output file (prints to standard output if not provided)")

    exp_parser = subparsers.add_parser("export", help="Convert a model file into delimited text")
    exp_parser.add_argument("--model", required=True, help="Path to the model file")
    exp_parser.add_argument("--out", help="Output file (prints to standard output if not provided)")

    subparsers.add_parser("version", help="Print version information")
    return parser

def main(argv: List[str] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "verify":
        cmd_verify(args)
    elif args.command == "import":
        cmd_import(args)
    elif args.command == "export":
        cmd_export(args)
    elif args.command == "version":
        print(f"pairgen {__version__}")
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
