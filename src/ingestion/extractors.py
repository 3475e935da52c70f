"""Invitee list extraction with multi-format support.

Handles: TXT, CSV, XLSX/XLS, DOCX, PDF (and treats anything else as text).

Every format is reduced either to raw text, fed to ``parse_records``, or to
spreadsheet rows, fed to ``parse_tabular_records``. A file a reader cannot
open is logged and treated as empty, so extraction never raises.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import pandas as pd  # type: ignore[import-untyped]
import pdfplumber
from docx import Document
from docx.table import Table

from app.schemas.records import ParsedList
from ingestion.base import BaseListReader
from ingestion.records import parse_records, parse_tabular_records


if TYPE_CHECKING:
    from collections.abc import Callable

    from app.schemas.base import ListFormat
    from app.schemas.records import Record


logger = logging.getLogger(__name__)


class ListExtractor(BaseListReader):
    """Extracts invitee records from uploaded list files."""

    SPREADSHEET_EXTENSIONS: ClassVar[frozenset[str]] = frozenset({".xlsx", ".xls"})

    def read(self, content: str | bytes, filename: str = "") -> ParsedList:
        """Extract records, dispatching on the file extension.

        Args:
            content: Raw file content (str or bytes).
            filename: Original filename; its extension selects the reader.

        Returns:
            The parsed records; empty when the file could not be read.
        """
        file_ext = Path(filename).suffix.lower()

        if file_ext in self.SPREADSHEET_EXTENSIONS:
            return self._guarded(filename, "spreadsheet", self._read_spreadsheet, content)
        if file_ext == ".docx":
            return self._guarded(filename, "docx", self._read_docx, content)
        if file_ext == ".pdf":
            return self._guarded(filename, "pdf", self._read_pdf, content)
        return super().read(content, filename)

    def _guarded(
        self,
        filename: str,
        list_format: ListFormat,
        reader: Callable[[bytes], list[Record]],
        content: str | bytes,
    ) -> ParsedList:
        try:
            records: list[Record] = reader(self._as_bytes(content))
        except Exception as exc:
            logger.warning("Could not read %s list %s: %s", list_format, filename, exc)
            records = []
        return ParsedList(filename=filename, list_format=list_format, records=records)

    def _read_spreadsheet(self, content: bytes) -> list[Record]:
        """First sheet only; every row is data, the caller skips nothing."""
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=str)
        df = df.fillna("")
        rows = [list(row) for row in df.itertuples(index=False)]
        return parse_tabular_records(rows)

    def _read_docx(self, content: bytes) -> list[Record]:
        """Body paragraphs and table rows, in document order."""
        doc = Document(io.BytesIO(content))
        lines: list[str] = []
        for block in doc.iter_inner_content():
            if isinstance(block, Table):
                for row in block.rows:
                    lines.append("\t".join(cell.text.strip() for cell in row.cells))
            else:
                lines.append(block.text)
        return parse_records("\n".join(lines))

    def _read_pdf(self, content: bytes) -> list[Record]:
        pages: list[str] = []
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
        return parse_records("\n".join(pages))

    def _as_bytes(self, content: str | bytes) -> bytes:
        if isinstance(content, str):
            return content.encode("utf-8")
        return content


def extract_records(content: str | bytes, filename: str) -> list[Record]:
    """Convenience wrapper returning only the records."""
    return ListExtractor().read(content, filename).records


__all__ = ["ListExtractor", "extract_records"]
