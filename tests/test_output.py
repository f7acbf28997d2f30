import json

import pytest
from pairgen.output import format_table, format_csv, format_json, read_cases_csv, read_cases_json

HEADERS = ["Language", "Display Mode"]
ROWS = [["English", "Full"], ["French", "Text"]]

def test_format_table():
    out = format_table(HEADERS, ROWS)
    lines = out.split("\n")
    assert lines[0] == "Language  Display Mode"
    assert lines[1] == "English   Full        "
    assert format_table([], []) == ""

def test_format_csv():
    assert format_csv(HEADERS, ROWS) == "Language,Display Mode\r\nEnglish,Full\r\nFrench,Text\r\n"

def test_format_json_with_and_without_metadata():
    bare = json.loads(format_json(HEADERS, ROWS))
    assert bare == [{"Language": "English", "Display Mode": "Full"}, {"Language": "French", "Display Mode": "Text"}]

    wrapped = json.loads(format_json(HEADERS, ROWS, metadata={"n": 2}))
    assert wrapped["metadata"] == {"n": 2}
    assert wrapped["test_cases"] == bare

def test_read_cases_csv_reorders_columns():
    content = "Display Mode,Language,Extra\nFull,English,?\nText\n"
    rows = read_cases_csv(content, HEADERS)
    assert rows == [["English", "Full"], ["", "Text"]]

def test_read_cases_csv_empty():
    with pytest.raises(ValueError, match="empty"):
        read_cases_csv("", HEADERS)

def test_read_cases_json_both_shapes():
    cases = [{"Language": "English", "Display Mode": "Full"}]
    assert read_cases_json(json.dumps(cases), HEADERS) == [["English", "Full"]]
    assert read_cases_json(json.dumps({"metadata": {}, "test_cases": cases}), HEADERS) == [["English", "Full"]]

def test_read_cases_json_rejects_bad_shapes():
    with pytest.raises(ValueError):
        read_cases_json("{not json", HEADERS)
    with pytest.raises(ValueError, match="array"):
        read_cases_json('{"x": 1}', HEADERS)
    with pytest.raises(ValueError, match="object"):
        read_cases_json("[1, 2]", HEADERS)
