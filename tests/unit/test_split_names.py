from pathlib import Path

import pytest

import split_names


class TestSplitNamesScript:
    @pytest.mark.unit
    def test_prints_records(
        self, tmp_path: Path, mixed_list_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "guests.txt"
        path.write_text(mixed_list_text, encoding="utf-8")

        assert split_names.main([str(path)]) == 0

        out = capsys.readouterr().out
        assert "Alice Wonderland" in out
        assert "Table = Something" in out
        assert "Total: 6 entries (text)." in out

    @pytest.mark.unit
    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert split_names.main([str(tmp_path / "missing.docx")]) == 1

        assert "File not found" in capsys.readouterr().err

    @pytest.mark.unit
    def test_empty_list(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "empty.txt"
        path.write_text("Liste\n\n", encoding="utf-8")

        assert split_names.main([str(path)]) == 0

        assert "No names found" in capsys.readouterr().out
