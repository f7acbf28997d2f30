"""Defines parameters, the pairwise model, and its text serialization."""
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .preflight import PreflightIssue, validate_generation_preflight


class InvalidInput(ValueError):
    """Raised when a parameter list cannot be used for generation."""

    def __init__(self, message: str, issues: Optional[List[PreflightIssue]] = None):
        super().__init__(message)
        self.issues = issues or []


@dataclass(frozen=True)
class Parameter:
    name: str
    values: Tuple[str, ...]

    @classmethod
    def create(cls, name: str, values: Iterable[str]) -> "Parameter":
        """Builds a parameter with a stripped name and stripped, de-duplicated values."""
        return cls(name.strip(), dedupe_values(values))


def dedupe_values(values: Iterable[str]) -> Tuple[str, ...]:
    """Strips values and drops repeats, keeping first-seen order."""
    cleaned = []
    seen = set()
    for v in values:
        v_clean = v.strip()
        if v_clean in seen:
            continue
        seen.add(v_clean)
        cleaned.append(v_clean)
    return tuple(cleaned)


class _Record:
    """Loose view over a caller-supplied parameter record for preflight."""

    def __init__(self, name: Any, values: Any):
        self.name = name
        if values is not None and not isinstance(values, (str, bytes, list, tuple)):
            try:
                values = list(values)
            except TypeError:
                pass
        self.values = values


def _as_record(raw: Any) -> _Record:
    if isinstance(raw, Parameter):
        return _Record(raw.name, raw.values)
    if isinstance(raw, Mapping):
        return _Record(raw.get("name"), raw.get("values"))
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return _Record(raw[0], raw[1])
    return _Record(getattr(raw, "name", None), getattr(raw, "values", None))


def normalize_parameters(raw_parameters: Any) -> List[Parameter]:
    """
    Validates and normalizes caller input into a list of Parameters.

    Accepts Parameter objects, (name, values) pairs, or mappings with
    'name' and 'values' keys. Raises InvalidInput listing every problem
    found; nothing is silently corrected except duplicate values.
    """
    if raw_parameters is None or isinstance(raw_parameters, (str, bytes)):
        records = raw_parameters
    else:
        try:
            records = [_as_record(raw) for raw in raw_parameters]
        except TypeError:
            records = raw_parameters

    report = validate_generation_preflight(records)
    if not report.ok:
        message = "; ".join(issue.message for issue in report.issues)
        raise InvalidInput(message, issues=report.issues)

    return [Parameter.create(r.name, r.values) for r in records]


class PairwiseModel:
    def __init__(self):
        self.parameters: List[Parameter] = []

    def add_parameter(self, name: str, values: List[str]) -> Parameter:
        name = name.strip()
        if not name:
            raise InvalidInput("Parameter name cannot be empty.")

        if name in {p.name for p in self.parameters}:
            raise InvalidInput(f"Duplicate parameter name detected: '{name}'")

        for v in values:
            if not v.strip():
                raise InvalidInput(f"Parameter '{name}' contains an empty value.")

        param = Parameter.create(name, values)
        if not param.values:
            raise InvalidInput(f"Parameter '{name}' must have at least 1 value.")

        self.parameters.append(param)
        return param

    def get_counts(self) -> List[int]:
        return [len(p.values) for p in self.parameters]

    def to_model_text(self, parameters: List[Parameter] = None) -> str:
        params = parameters if parameters is not None else self.parameters
        lines = []
        for p in params:
            vals_str = ", ".join(p.values)
            lines.append(f"{p.name}: {vals_str}")
        return "\n".join(lines) + "\n"

    def get_reordered_parameters(self) -> List[Parameter]:
        """Returns parameters sorted by value count descending, stable tie-break."""
        return reorder_by_value_count(self.parameters)

    @classmethod
    def from_parameters(cls, parameters: Iterable[Parameter]) -> "PairwiseModel":
        model = cls()
        for p in parameters:
            model.add_parameter(p.name, list(p.values))
        return model

    @classmethod
    def from_model_text(cls, content: str) -> "PairwiseModel":
        model = cls()
        for i, line in enumerate(content.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith('#') or line.startswith('//'):
                continue
            if ':' not in line:
                raise InvalidInput(f"Line {i}: Missing colon in parameter definition: '{line}'")

            name_part, vals_part = line.split(':', 1)
            name = name_part.strip()
            if not name:
                raise InvalidInput(f"Line {i}: Parameter name is empty.")

            values = [v.strip() for v in vals_part.split(',')]
            try:
                model.add_parameter(name, values)
            except InvalidInput as e:
                raise InvalidInput(f"Line {i}: {str(e)}")

        if len(model.parameters) < 2:
            raise InvalidInput("Model must contain at least 2 parameters.")

        return model

    def validate_limits(self, max_params: int = 50, max_values_per_param: int = 50, max_total_values: int = 500):
        """Throws InvalidInput if model size exceeds limits."""
        if len(self.parameters) > max_params:
            raise InvalidInput(f"Model has {len(self.parameters)} parameters, exceeding limit of {max_params}. Use --max-params to override.")

        total_vals = 0
        for p in self.parameters:
            count = len(p.values)
            if count > max_values_per_param:
                raise InvalidInput(f"Parameter '{p.name}' has {count} values, exceeding limit of {max_values_per_param}. Use --max-values-per-param to override.")
            total_vals += count

        if total_vals > max_total_values:
            raise InvalidInput(f"Model has {total_vals} total values, exceeding limit of {max_total_values}. Use --max-total-values to override.")


def reorder_by_value_count(parameters: List[Parameter]) -> List[Parameter]:
    return sorted(parameters, key=lambda p: len(p.values), reverse=True)
