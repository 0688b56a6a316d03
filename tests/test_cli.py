"""Tests für die Kommandozeile (click CliRunner, Desktop-Programme gemockt)."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from config.courses import CourseRepository
from config.defaults import default_config
from config.manager import ConfigManager
from main import cli


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    cfg = tmp_path / "cfg"
    mgr = ConfigManager(cfg)
    config = default_config(tmp_path / "notes", cfg)
    mgr.save(config)
    mgr.ensure_templates(config)
    return cfg


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def launched(monkeypatch):
    """Fängt Editor- und Viewer-Aufrufe ab."""
    calls = []
    monkeypatch.setattr("desktop.launcher.launch_tex",
                        lambda d, f, launch: calls.append(("tex", Path(d), f)))
    monkeypatch.setattr("desktop.launcher.launch_pdf",
                        lambda d, f, launch: calls.append(("pdf", Path(d), f)))
    return calls


def _picks(monkeypatch, *answers):
    """Auswahldialog liefert nacheinander die gegebenen Indizes."""
    queue = list(answers)
    titles = []

    def fake_pick(title, options, command="rofi"):
        titles.append((title, list(options)))
        return queue.pop(0)

    monkeypatch.setattr("desktop.picker.pick", fake_pick)
    return titles


def _init_course(runner, config_dir):
    result = runner.invoke(cli, ["-c", str(config_dir), "init", "cs101",
                                 "Intro to CS", "Ada Lovelace", "fall24"])
    assert result.exit_code == 0, result.output
    return result


# ─── SETUP / INIT ─────────────────────────────────────────────────────────────

class TestSetupAndInit:
    def test_missing_config_aborts(self, runner, tmp_path: Path):
        result = runner.invoke(cli, ["-c", str(tmp_path / "leer"), "courses"])
        assert result.exit_code == 1
        assert "Keine Konfiguration" in result.output

    def test_setup_wizard(self, runner, tmp_path: Path):
        cfg = tmp_path / "cfg"
        result = runner.invoke(cli, ["-c", str(cfg), "setup"],
                               input=f"{tmp_path / 'notes'}\ny\n")
        assert result.exit_code == 0, result.output
        loaded = ConfigManager(cfg).load()
        assert loaded.root == tmp_path / "notes"
        assert loaded.lecture_template.exists()
        assert loaded.homework_template.exists()

    def test_init_registers_course(self, runner, config_dir, tmp_path: Path):
        _init_course(runner, config_dir)
        repo = CourseRepository(config_dir).load()
        assert repo.get("cs101").title == "Intro to CS"
        assert (tmp_path / "notes" / "fall24" / "cs101").is_dir()

    def test_init_invalid_name(self, runner, config_dir):
        result = runner.invoke(cli, ["-c", str(config_dir), "init", "intro",
                                     "Intro", "Ada", "fall24"])
        assert result.exit_code == 1
        assert len(CourseRepository(config_dir).load()) == 0

    def test_courses_table(self, runner, config_dir):
        _init_course(runner, config_dir)
        result = runner.invoke(cli, ["-c", str(config_dir), "courses"])
        assert result.exit_code == 0
        assert "CS 101" in result.output

    def test_courses_unreadable_lecture_directory(self, runner, config_dir, tmp_path: Path):
        """Ein Dateisystemfehler beim Zählen wird gemeldet statt als Traceback."""
        _init_course(runner, config_dir)
        (tmp_path / "notes" / "fall24" / "cs101" / "lecture").write_text("", encoding="utf-8")
        result = runner.invoke(cli, ["-c", str(config_dir), "courses"])
        assert result.exit_code == 1
        assert "Fehler" in result.output

    def test_config_show(self, runner, config_dir):
        result = runner.invoke(cli, ["-c", str(config_dir), "config", "show"])
        assert result.exit_code == 0
        assert "zathura" in result.output


# ─── NICHT-INTERAKTIVE BEFEHLE ────────────────────────────────────────────────

class TestCommands:
    def test_lesson_new_twice(self, runner, config_dir, tmp_path: Path, launched):
        _init_course(runner, config_dir)
        for _ in range(2):
            result = runner.invoke(cli, ["-c", str(config_dir), "lesson", "new", "cs101"])
            assert result.exit_code == 0, result.output

        lecture = tmp_path / "notes" / "fall24" / "cs101" / "lecture"
        assert (lecture / "les2.tex").exists()
        assert [c[2] for c in launched] == ["les1.tex", "les2.tex"]
        main = (lecture / "main.tex").read_text(encoding="utf-8")
        assert "    \\input{les1.tex}\n    \\input{les2.tex}\n" in main

    def test_homework_new_no_edit(self, runner, config_dir, tmp_path: Path, launched):
        _init_course(runner, config_dir)
        result = runner.invoke(cli, ["-c", str(config_dir), "homework", "new", "cs101",
                                     "--no-edit"])
        assert result.exit_code == 0, result.output
        hw = tmp_path / "notes" / "fall24" / "cs101" / "homework1" / "homework1.tex"
        assert "CS 101 Homework 1" in hw.read_text(encoding="utf-8")
        assert launched == []

    def test_homework_recent_without_homeworks(self, runner, config_dir):
        _init_course(runner, config_dir)
        result = runner.invoke(cli, ["-c", str(config_dir), "homework", "recent", "cs101"])
        assert result.exit_code == 1
        assert "Fehler" in result.output

    def test_homework_list(self, runner, config_dir, launched):
        _init_course(runner, config_dir)
        runner.invoke(cli, ["-c", str(config_dir), "homework", "new", "cs101", "--no-edit"])
        result = runner.invoke(cli, ["-c", str(config_dir), "homework", "list", "cs101"])
        assert result.exit_code == 0
        assert "homework1.tex" in result.output

    def test_unknown_course(self, runner, config_dir):
        result = runner.invoke(cli, ["-c", str(config_dir), "lesson", "new", "cs999"])
        assert result.exit_code == 1
        assert "cs999" in result.output

    def test_broken_main_reports_error(self, runner, config_dir, tmp_path: Path, launched):
        _init_course(runner, config_dir)
        lecture = tmp_path / "notes" / "fall24" / "cs101" / "lecture"
        lecture.mkdir()
        (lecture / "main.tex").write_text("kein Block\n", encoding="utf-8")
        result = runner.invoke(cli, ["-c", str(config_dir), "lesson", "new", "cs101"])
        assert result.exit_code == 1
        assert "Markierung" in result.output
        assert launched == []


# ─── OPEN (rofi) ──────────────────────────────────────────────────────────────

class TestOpen:
    def test_open_new_lesson_via_pickers(self, runner, config_dir, tmp_path: Path,
                                         monkeypatch, launched):
        _init_course(runner, config_dir)
        titles = _picks(monkeypatch, 0, 0, 0)  # Kurs, Lecture, New Lesson
        result = runner.invoke(cli, ["-c", str(config_dir), "open"])
        assert result.exit_code == 0, result.output
        assert [t for t, _ in titles] == ["Courses", "Type", "Action"]
        assert titles[0][1] == ["CS101: Intro to CS"]
        assert launched[0][2] == "les1.tex"

    def test_open_view_pdf(self, runner, config_dir, tmp_path: Path, monkeypatch, launched):
        _init_course(runner, config_dir)
        _picks(monkeypatch, 0, 2)  # Lecture, View
        result = runner.invoke(cli, ["-c", str(config_dir), "open", "cs101"])
        assert result.exit_code == 0, result.output
        assert launched == [("pdf", tmp_path / "notes" / "fall24" / "cs101" / "lecture",
                             "main.pdf")]

    def test_open_view_previous_homework(self, runner, config_dir, tmp_path: Path,
                                         monkeypatch, launched):
        _init_course(runner, config_dir)
        for _ in range(2):
            runner.invoke(cli, ["-c", str(config_dir), "homework", "new", "cs101", "--no-edit"])
        titles = _picks(monkeypatch, 1, 2, 0)  # Homework, View Previous, Homework 1
        result = runner.invoke(cli, ["-c", str(config_dir), "open", "cs101"])
        assert result.exit_code == 0, result.output
        assert titles[-1] == ("Homeworks", ["Homework 1", "Homework 2"])
        assert launched[-1][2] == "homework1.tex"

    def test_open_no_selection(self, runner, config_dir, monkeypatch, launched):
        _init_course(runner, config_dir)
        _picks(monkeypatch, None)
        result = runner.invoke(cli, ["-c", str(config_dir), "open", "cs101"])
        assert result.exit_code == 0
        assert "Keine Auswahl" in result.output
        assert launched == []
