"""Name/table record parsing.

Turns loosely structured invitee lists into ordered ``Record`` sequences.
Each text line is resolved by the first matching rule:

1. ``name = table``: split on the first ``=``; later ``=`` stay in the table.
2. ``name: table`` or ``name<TAB>table``: split on colons and tabs, keep the
   first two segments.
3. anything else: the whole line is the name and the table is empty.

Records whose name is blank or is the ``Liste`` column header (compared
case- and whitespace-insensitively) are dropped. Parsing never raises.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from app.schemas.records import Record


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


_LINE_BREAK = re.compile(r"\r?\n")
_WHITESPACE = re.compile(r"\s+")
_FIELD_SEPARATORS = re.compile(r"[:\t]")
_COLON = re.compile(r":")

HEADER_TOKENS = frozenset({"liste"})


def split_on_equals(text: str) -> Record | None:
    """Split ``text`` on its first ``=``, or return None if there is none."""
    name, separator, table = text.partition("=")
    if not separator:
        return None
    return Record(name=name.strip(), table=table.strip())


def split_on_separator(
    text: str, separators: re.Pattern[str] = _FIELD_SEPARATORS
) -> Record | None:
    """Split ``text`` on ``separators``, keeping only the first two segments."""
    parts = separators.split(text)
    if len(parts) < 2:
        return None
    return Record(name=parts[0].strip(), table=parts[1].strip())


def split_name_table(
    text: str, separators: re.Pattern[str] = _FIELD_SEPARATORS
) -> Record:
    """Resolve one line into a record using the delimiter priority chain."""
    record = split_on_equals(text)
    if record is not None:
        return record
    record = split_on_separator(text, separators)
    if record is not None:
        return record
    return Record(name=text.strip(), table="")


def is_discarded(record: Record) -> bool:
    """True for blank names and ``Liste`` header rows."""
    normalized = _WHITESPACE.sub("", record.name.lower())
    return not normalized or normalized in HEADER_TOKENS


def parse_records(text: str) -> list[Record]:
    """Parse free text (one invitee per line) into records.

    Args:
        text: Raw text, with ``\\n`` or ``\\r\\n`` line endings.

    Returns:
        Records in line order, header and blank entries removed.
    """
    if not text:
        return []
    lines = (line for line in _LINE_BREAK.split(text) if line.strip())
    return _keep(split_name_table(line) for line in lines)


def parse_tabular_records(rows: Iterable[Sequence[Any]]) -> list[Record]:
    """Parse spreadsheet rows (name in column 0, table in column 1).

    An empty or missing table cell means the name cell may carry both
    values, so it is re-split on ``=`` and then on ``:``.
    """
    records = []
    for row in rows:
        name = _cell_text(row, 0)
        table = _cell_text(row, 1)
        record = Record(name=name, table=table)
        if not table:
            record = (
                split_on_equals(name) or split_on_separator(name, _COLON) or record
            )
        records.append(record)
    return _keep(records)


def _keep(records: Iterable[Record]) -> list[Record]:
    return [record for record in records if not is_discarded(record)]


def _cell_text(row: Sequence[Any], index: int) -> str:
    if row is None or index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


__all__ = [
    "HEADER_TOKENS",
    "is_discarded",
    "parse_records",
    "parse_tabular_records",
    "split_name_table",
    "split_on_equals",
    "split_on_separator",
]
