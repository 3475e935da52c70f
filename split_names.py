"""Print the name/table records parsed from a list file.

Usage: python split_names.py <path_to_list> [<path_to_list> ...]
"""

import argparse
import sys
from pathlib import Path

import pandas as pd

from ingestion.extractors import ListExtractor

# --- Configuration ---
# Show every record without truncation
pd.set_option("display.max_rows", None)
pd.set_option("display.width", 200)
pd.set_option("display.max_colwidth", 80)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("paths", nargs="+", type=Path, help="TXT, CSV, XLSX, DOCX or PDF")
    args = parser.parse_args(argv)

    extractor = ListExtractor()
    status = 0
    for path in args.paths:
        if not path.exists():
            print(f"File not found: {path}", file=sys.stderr)
            status = 1
            continue

        print(f"Processing file: {path}...")
        parsed = extractor.read(path.read_bytes(), path.name)
        if not parsed.records:
            print("No names found or error occurred.")
            continue

        df = pd.DataFrame([record.model_dump() for record in parsed.records])
        print("\nResults:")
        print("-" * 45)
        print(df)
        print("-" * 45)
        print(f"Total: {parsed.total} entries ({parsed.list_format}).")
    return status


if __name__ == "__main__":
    sys.exit(main())
