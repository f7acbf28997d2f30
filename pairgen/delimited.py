"""Imports and exports parameter lists as delimited text.

The format is one header row of parameter names separated by ';',
followed by data rows whose ';'-separated cells each hold a
','-separated list of values for the parameter in that column:

    Browser;OS
    Chrome,Firefox;Linux
    Safari;macOS,Windows
"""
from typing import Dict, Iterable, List

from .model import Parameter, dedupe_values

COLUMN_SEP = ";"
VALUE_SEP = ","


class ImportFormatError(ValueError):
    """Raised when delimited text cannot be turned into parameters."""


def parse_delimited(content: str) -> List[Parameter]:
    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line]

    if len(lines) < 2:
        raise ImportFormatError("Delimited text must contain at least a header row and one data row.")

    header = [name.strip() for name in lines[0].split(COLUMN_SEP)]
    columns = [(idx, name) for idx, name in enumerate(header) if name]
    if not columns:
        raise ImportFormatError("No valid parameter names found in the header row.")

    raw_values: Dict[int, List[str]] = {idx: [] for idx, _ in columns}
    for line in lines[1:]:
        cells = line.split(COLUMN_SEP)
        # cells under a blank or missing header have no parameter to land in
        for idx, cell in enumerate(cells):
            if idx in raw_values:
                raw_values[idx].extend(v for v in cell.split(VALUE_SEP) if v.strip())

    parameters = []
    for idx, name in columns:
        values = dedupe_values(raw_values[idx])
        if values:
            parameters.append(Parameter(name, values))
    return parameters


def format_parameters_delimited(parameters: Iterable[Parameter]) -> str:
    parameters = list(parameters)
    for p in parameters:
        for text in (p.name,) + tuple(p.values):
            if COLUMN_SEP in text or VALUE_SEP in text or "\n" in text:
                raise ValueError(f"'{text}' in parameter '{p.name}' contains a separator and cannot be exported.")

    header = COLUMN_SEP.join(p.name for p in parameters)
    row = COLUMN_SEP.join(VALUE_SEP.join(p.values) for p in parameters)
    return f"{header}\n{row}\n"
