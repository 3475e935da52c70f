from pathlib import Path

from app.schemas.records import ParsedList
from ingestion.records import parse_records


class BaseListReader:
    """Base class for invitee list readers."""

    def _decode_content(self, content: str | bytes) -> str:
        """Decode raw content into a string.

        Args:
            content: Raw content as `str` or `bytes`.

        Returns:
            Decoded string content.
        """
        if isinstance(content, bytes):
            try:
                return content.decode("utf-8-sig")
            except UnicodeDecodeError:
                return content.decode("latin-1")
        return content

    def read(self, content: str | bytes, filename: str = "") -> ParsedList:
        """Read a plain-text list, one invitee per line.

        Args:
            content: Raw file content (str or bytes).
            filename: Original filename, kept for reporting.

        Returns:
            The parsed records.
        """
        list_format = "csv" if Path(filename).suffix.lower() == ".csv" else "text"
        return ParsedList(
            filename=filename,
            list_format=list_format,
            records=parse_records(self._decode_content(content)),
        )
