"""Tests for the non-raising preflight report."""
from pairgen.model import Parameter
from pairgen.preflight import validate_generation_preflight

def codes(report):
    return [issue.code for issue in report.issues]

def test_valid_parameters_pass():
    report = validate_generation_preflight([Parameter("A", ("1", "2")), Parameter("B", ("x",))])
    assert report.ok

def test_duplicate_values_are_not_reported():
    report = validate_generation_preflight([Parameter("A", ("1", "1")), Parameter("B", ("x",))])
    assert report.ok

def test_malformed_containers():
    assert codes(validate_generation_preflight(None)) == ["parameters_missing"]
    assert codes(validate_generation_preflight("AB")) == ["parameters_malformed"]
    assert codes(validate_generation_preflight(42)) == ["parameters_malformed"]

def test_string_values_are_rejected():
    report = validate_generation_preflight([Parameter("A", "12"), Parameter("B", ("x",))])
    assert codes(report) == ["values_missing"]
    assert report.issues[0].field == "parameters[0].values"

def test_size_is_not_a_preflight_concern():
    params = [Parameter(f"p{i}", tuple(str(v) for v in range(60))) for i in range(60)]
    assert validate_generation_preflight(params).ok

def test_issues_are_deduplicated_per_field():
    report = validate_generation_preflight([Parameter("A", ("", " ")), Parameter("B", ("x",))])
    # two blank values at different indexes are two issues; zero usable values is one more
    assert codes(report).count("empty_value") == 2
    assert codes(report).count("too_few_values") == 1
