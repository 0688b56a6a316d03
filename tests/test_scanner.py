"""Tests für den Nummern-Scan (Hausaufgaben-Verzeichnisse, Lektions-Dateien)."""

from pathlib import Path

import pytest

from notes.errors import FilesystemError, PatternMismatch
from notes.scanner import DocumentKind, next_number, parse_number, scan, scan_or_empty


def _touch(path: Path) -> None:
    path.write_text("", encoding="utf-8")


# ─── NÄCHSTE NUMMER ───────────────────────────────────────────────────────────

class TestNextNumber:
    def test_empty_set_starts_at_one(self):
        assert next_number([]) == 1

    def test_max_plus_one(self):
        assert next_number([1, 2, 3]) == 4

    def test_gap_is_not_backfilled(self):
        """homework2 gelöscht → trotzdem 4, nicht 2."""
        assert next_number([1, 3]) == 4

    def test_single_element(self):
        assert next_number([7]) == 8


# ─── NAMEN PARSEN ─────────────────────────────────────────────────────────────

class TestParseNumber:
    def test_homework_name(self):
        assert parse_number("homework12", DocumentKind.HOMEWORK) == 12

    def test_lesson_name(self):
        assert parse_number("les3.tex", DocumentKind.LESSON) == 3

    @pytest.mark.parametrize("name", [
        "homework", "homework1.pdf", "old_homework2", "Homework3", "homework01",
        "homework0",
    ])
    def test_homework_mismatch(self, name):
        with pytest.raises(PatternMismatch):
            parse_number(name, DocumentKind.HOMEWORK)

    @pytest.mark.parametrize("name", [
        "les.tex", "les1.pdf", "les1.tex.bak", "lesson1.tex", "main.tex", "les0.tex",
    ])
    def test_lesson_mismatch(self, name):
        with pytest.raises(PatternMismatch):
            parse_number(name, DocumentKind.LESSON)

    def test_entry_and_file_names(self):
        assert DocumentKind.HOMEWORK.entry_name(4) == "homework4"
        assert DocumentKind.HOMEWORK.file_name(4) == "homework4.tex"
        assert DocumentKind.LESSON.entry_name(4) == "les4.tex"
        assert DocumentKind.LESSON.file_name(4) == "les4.tex"


# ─── VERZEICHNIS-SCAN ─────────────────────────────────────────────────────────

class TestScan:
    def test_homework_ignores_unrelated_entries(self, tmp_path: Path):
        """homework1, homework3, notes.txt, homework → [1, 3]."""
        (tmp_path / "homework1").mkdir()
        (tmp_path / "homework3").mkdir()
        (tmp_path / "homework").mkdir()
        _touch(tmp_path / "notes.txt")
        assert scan(tmp_path, DocumentKind.HOMEWORK) == [1, 3]

    def test_homework_requires_directory(self, tmp_path: Path):
        """Eine Datei namens homework2 zählt nicht als Hausaufgabe."""
        (tmp_path / "homework1").mkdir()
        _touch(tmp_path / "homework2")
        assert scan(tmp_path, DocumentKind.HOMEWORK) == [1]

    def test_lessons_sorted_numerically(self, tmp_path: Path):
        for n in (10, 2, 1):
            _touch(tmp_path / f"les{n}.tex")
        _touch(tmp_path / "main.tex")
        _touch(tmp_path / "main.pdf")
        (tmp_path / "figures").mkdir()
        assert scan(tmp_path, DocumentKind.LESSON) == [1, 2, 10]

    def test_lesson_requires_file(self, tmp_path: Path):
        (tmp_path / "les1.tex").mkdir()
        assert scan(tmp_path, DocumentKind.LESSON) == []

    def test_not_recursive(self, tmp_path: Path):
        (tmp_path / "sub").mkdir()
        _touch(tmp_path / "sub" / "les5.tex")
        assert scan(tmp_path, DocumentKind.LESSON) == []

    def test_empty_directory(self, tmp_path: Path):
        assert scan(tmp_path, DocumentKind.HOMEWORK) == []

    def test_missing_directory_raises(self, tmp_path: Path):
        with pytest.raises(FilesystemError):
            scan(tmp_path / "fehlt", DocumentKind.HOMEWORK)

    def test_scan_or_empty_missing_directory(self, tmp_path: Path):
        assert scan_or_empty(tmp_path / "fehlt", DocumentKind.LESSON) == []

    def test_scan_or_empty_existing_directory(self, tmp_path: Path):
        _touch(tmp_path / "les1.tex")
        assert scan_or_empty(tmp_path, DocumentKind.LESSON) == [1]
