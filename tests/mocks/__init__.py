"""Test data builders.

This module provides:
- Sample name lists with their expected records (data_generators)
- In-memory PNG, XLSX and DOCX builders for upload tests

Files are generated on the fly so the suite needs no binary fixtures.
"""
