"""Formats generated suites and reads them back."""
import csv
import io
import json
from typing import Any, Dict, List, Optional

def format_table(headers: List[str], rows: List[List[str]]) -> str:
    if not headers:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for col_idx, val in enumerate(row):
            widths[col_idx] = max(widths[col_idx], len(val))

    header_str = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    lines = [header_str]
    for row in rows:
        lines.append("  ".join(v.ljust(w) for v, w in zip(row, widths)))

    return "\n".join(lines)

def format_csv(headers: List[str], rows: List[List[str]]) -> str:
    f = io.StringIO()
    writer = csv.writer(f)
    writer.writerow(headers)
    writer.writerows(rows)
    return f.getvalue()

def format_json(headers: List[str], rows: List[List[str]], metadata: Optional[Dict[str, Any]] = None) -> str:
    cases = []
    for row in rows:
        cases.append({headers[i]: v for i, v in enumerate(row)})
    if metadata is None:
        return json.dumps(cases, indent=2)
    return json.dumps({"metadata": metadata, "test_cases": cases}, indent=2)

def read_cases_csv(content: str, headers: List[str]) -> List[List[str]]:
    """Reads CSV cases, reordering columns to `headers`; missing columns become ''."""
    reader = csv.reader(io.StringIO(content))
    file_headers = next(reader, None)
    if not file_headers:
        raise ValueError("Cases file is empty.")

    header_idx = {h: i for i, h in enumerate(file_headers)}
    rows = []
    for line in reader:
        row = []
        for h in headers:
            if h in header_idx and header_idx[h] < len(line):
                row.append(line[header_idx[h]])
            else:
                row.append("")
        rows.append(row)
    return rows

def read_cases_json(content: str, headers: List[str]) -> List[List[str]]:
    """Reads JSON cases, either a bare array or {"test_cases": [...]}."""
    data = json.loads(content)
    if isinstance(data, dict) and "test_cases" in data:
        cases = data["test_cases"]
    else:
        cases = data

    if not isinstance(cases, list):
        raise ValueError("Cases JSON must be an array or contain a 'test_cases' array.")

    rows = []
    for test_case in cases:
        if not isinstance(test_case, dict):
            raise ValueError("Each JSON case must be an object.")
        rows.append([str(test_case.get(h, "")) for h in headers])
    return rows
