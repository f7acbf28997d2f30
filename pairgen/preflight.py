"""Shared structural preflight validation for generation paths."""
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class PreflightIssue:
    code: str
    message: str
    field: Optional[str] = None


@dataclass
class PreflightReport:
    issues: List[PreflightIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


def validate_generation_preflight(parameters: Any) -> PreflightReport:
    """Validates structural generation preconditions without raising.

    `parameters` is a sequence of objects exposing `name` and `values`.
    Duplicate values are not reported; they are collapsed during
    normalization. Model-size limits are checked by
    `PairwiseModel.validate_limits`.
    """
    report = PreflightReport()
    seen_keys = set()

    def add_issue(code: str, message: str, field_name: Optional[str] = None) -> None:
        key = (code, field_name)
        if key in seen_keys:
            return
        seen_keys.add(key)
        report.issues.append(PreflightIssue(code=code, message=message, field=field_name))

    if parameters is None:
        add_issue("parameters_missing", "Input Error: Parameter list is missing.", "parameters")
        return report

    if isinstance(parameters, (str, bytes)):
        add_issue("parameters_malformed", "Input Error: Parameter list is malformed.", "parameters")
        return report

    if not isinstance(parameters, (list, tuple)):
        try:
            parameters = list(parameters)
        except TypeError:
            add_issue("parameters_malformed", "Input Error: Parameter list is malformed.", "parameters")
            return report

    param_count = len(parameters)
    if param_count < 2:
        add_issue("too_few_params", "Input Error: At least 2 parameters are required.", "parameters")

    seen_param_names = set()

    for p_idx, param in enumerate(parameters):
        p_field = f"parameters[{p_idx}]"
        name = getattr(param, "name", None)
        if not isinstance(name, str) or not name.strip():
            add_issue("empty_param_name", f"Input Error: Parameter #{p_idx + 1} has an empty name.", f"{p_field}.name")
        else:
            name_key = name.strip()
            if name_key in seen_param_names:
                add_issue(
                    "duplicate_param_name",
                    f"Input Error: Duplicate parameter name detected: '{name_key}'.",
                    f"{p_field}.name",
                )
            else:
                seen_param_names.add(name_key)

        values = getattr(param, "values", None)
        if values is None or isinstance(values, (str, bytes)):
            add_issue(
                "values_missing",
                f"Input Error: Parameter #{p_idx + 1} has an invalid values list.",
                f"{p_field}.values",
            )
            continue

        if not isinstance(values, (list, tuple)):
            try:
                values = list(values)
            except TypeError:
                add_issue(
                    "values_missing",
                    f"Input Error: Parameter #{p_idx + 1} has an invalid values list.",
                    f"{p_field}.values",
                )
                continue

        value_count = len({v.strip() for v in values if isinstance(v, str) and v.strip()})

        if value_count < 1:
            add_issue(
                "too_few_values",
                f"Input Error: Parameter #{p_idx + 1} must have at least 1 value.",
                f"{p_field}.values",
            )

        for v_idx, value in enumerate(values):
            if not isinstance(value, str) or not value.strip():
                add_issue(
                    "empty_value",
                    f"Input Error: Parameter #{p_idx + 1} contains an empty value.",
                    f"{p_field}.values[{v_idx}]",
                )

    return report
