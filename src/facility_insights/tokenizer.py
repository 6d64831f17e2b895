"""Split raw CSV text into rows and validate them into RawRow models."""

import logging

from .models import RAW_COLUMNS, RawRow

logger = logging.getLogger(__name__)


def parse_csv_line(line: str) -> list[str]:
    """
    Tokenize one CSV line, honouring double-quote quoting.

    A doubled quote inside a quoted field emits one literal quote. Commas
    inside quotes are kept. Every field is trimmed of surrounding whitespace.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current).strip())
    return fields


def parse_csv(text: str) -> list[dict[str, str]]:
    """
    Parse CSV text into header->value dicts.

    The first line is the header. Blank lines are skipped, missing trailing
    fields become "", extra fields are dropped. Fewer than two lines yields [].
    A leading byte-order mark is dropped.
    """
    lines = text.lstrip("\ufeff").split("\n")
    if len(lines) < 2:
        return []
    headers = parse_csv_line(lines[0])
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue
        values = parse_csv_line(line)
        if len(values) != len(headers):
            logger.debug(f"Row {len(rows)}: {len(values)} fields for {len(headers)} headers")
        row = {}
        for idx, header in enumerate(headers):
            row[header] = values[idx] if idx < len(values) else ""
        rows.append(row)
    return rows


def recognized_columns(headers: list[str]) -> list[str]:
    """Headers that map onto a RawRow field."""
    return [h for h in headers if h in RAW_COLUMNS]


def unknown_columns(headers: list[str]) -> list[str]:
    """Headers that are ignored when building facilities."""
    return [h for h in headers if h not in RAW_COLUMNS]


def to_raw_row(mapping: dict[str, str]) -> RawRow:
    return RawRow.from_mapping(mapping)


def tokenize(text: str) -> list[RawRow]:
    """Parse CSV text straight into validated RawRow models."""
    rows = parse_csv(text)
    if rows:
        ignored = unknown_columns(list(rows[0].keys()))
        if ignored:
            logger.debug(f"Ignoring {len(ignored)} unrecognized column(s): {', '.join(ignored)}")
    return [to_raw_row(r) for r in rows]


def read_headers(text: str) -> list[str]:
    """Header names of a CSV text (empty list for empty input)."""
    first = text.lstrip("\ufeff").split("\n", 1)[0]
    if not first.strip():
        return []
    return parse_csv_line(first)
