"""
CSV serialization for marketplace bulk-upload files.

Rules:
- A field is quoted only if it contains a comma, a double quote, CR or LF.
- Inside a quoted field every double quote is doubled.
- Empty values stay empty (never ``""``).
- Lines are joined with ``\\n``; there is no trailing newline.
"""

import csv
import io
from collections.abc import Iterable, Mapping, Sequence

from mrlister.core.interfaces import RowValue

FIELD_SEPARATOR = ","
LINE_SEPARATOR = "\n"
QUOTE = '"'
_QUOTE_TRIGGERS = (FIELD_SEPARATOR, QUOTE, "\n", "\r")


def format_value(value: RowValue) -> str:
    """Render a mapped cell value as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        # 250.0 → "250", 249.99 → "249.99"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def escape_value(value: str) -> str:
    """Quote a field if needed."""
    if any(trigger in value for trigger in _QUOTE_TRIGGERS):
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def unescape_value(field: str) -> str:
    """Inverse of ``escape_value`` for a single field."""
    if len(field) >= 2 and field.startswith(QUOTE) and field.endswith(QUOTE):
        return field[1:-1].replace(QUOTE * 2, QUOTE)
    return field


def render_row(headers: Sequence[str], row: Mapping[str, RowValue]) -> str:
    """One CSV line with a field for every header, in header order."""
    return FIELD_SEPARATOR.join(
        escape_value(format_value(row.get(header, ""))) for header in headers
    )


def render_csv(headers: Sequence[str], rows: Iterable[Mapping[str, RowValue]]) -> str:
    """Header line followed by one line per row."""
    lines = [FIELD_SEPARATOR.join(escape_value(h) for h in headers)]
    lines.extend(render_row(headers, row) for row in rows)
    return LINE_SEPARATOR.join(lines)


def parse_csv(text: str) -> list[list[str]]:
    """Split CSV text back into records (quoted newlines stay inside fields)."""
    return list(csv.reader(io.StringIO(text, newline="")))
