"""Erzeugt neue Hausaufgaben und Lektionen.

Ablauf jeweils: Verzeichnis scannen → nächste Nummer → Datei(en) anlegen
(→ bei Lektionen: main.tex synchronisieren). Es gibt keine Sperren; laufen
zwei Aufrufe gleichzeitig, kollidiert der zweite beim exklusiven Anlegen
und bricht mit CreationConflict ab. Ein Rollback findet nicht statt.
"""

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional

from config.schema import LecternConfig
from models.course import Course
from notes.aggregator import sync
from notes.errors import CreationConflict, FilesystemError, NoDocuments
from notes.scanner import DocumentKind, next_number, scan, scan_or_empty
from notes.template import render_file

logger = logging.getLogger(__name__)

AGGREGATOR_NAME = "main.tex"


def lesson_stub(number: int) -> str:
    """Fester Inhalt einer neuen Lektion."""
    return f"\\lesson{{{number}}}{{}}\n\n"


def _write_new(path: Path, content: str) -> None:
    """Schreibt eine Datei, die noch nicht existieren darf."""
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError as e:
        raise CreationConflict(f"Datei existiert bereits: {path}") from e
    except OSError as e:
        raise FilesystemError(f"{path} kann nicht geschrieben werden ({e})") from e


def _ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Verzeichnis kann nicht angelegt werden: {path} ({e})") from e


# ─── Hausaufgaben ───

def create_homework(
    course_dir: Path,
    number: int,
    context: Mapping[str, object],
    template_path: Path,
) -> tuple[Path, str]:
    """Legt homework<N>/homework<N>.tex an.

    Die Vorlage wird gerendert, bevor irgendetwas angelegt wird.

    Returns:
        (Hausaufgaben-Verzeichnis, Dateiname)

    Raises:
        CreationConflict: homework<N> existiert bereits.
        TemplateError: Vorlage fehlerhaft.
        FilesystemError: Lesen/Anlegen/Schreiben fehlgeschlagen.
    """
    kind = DocumentKind.HOMEWORK
    rendered = render_file(template_path, context)

    directory = Path(course_dir) / kind.entry_name(number)
    try:
        directory.mkdir()
    except FileExistsError as e:
        raise CreationConflict(f"Verzeichnis existiert bereits: {directory}") from e
    except OSError as e:
        raise FilesystemError(f"Verzeichnis kann nicht angelegt werden: {directory} ({e})") from e

    file_name = kind.file_name(number)
    _write_new(directory / file_name, rendered)
    logger.info(f"Hausaufgabe {number} angelegt: {directory / file_name}")
    return directory, file_name


def homework_location(course: Course, config: LecternConfig, number: int) -> tuple[Path, str]:
    kind = DocumentKind.HOMEWORK
    directory = course.directory(config.root) / kind.entry_name(number)
    return directory, kind.file_name(number)


def list_homeworks(course: Course, config: LecternConfig) -> list[int]:
    return scan_or_empty(course.directory(config.root), DocumentKind.HOMEWORK)


def new_homework(course: Course, config: LecternConfig) -> tuple[Path, str]:
    """Nächste Hausaufgabe eines Kurses anlegen."""
    course_dir = course.directory(config.root)
    _ensure_directory(course_dir)

    number = next_number(scan(course_dir, DocumentKind.HOMEWORK))
    return create_homework(
        course_dir, number, course.homework_context(number), config.homework_template
    )


def recent_homework(course: Course, config: LecternConfig) -> tuple[Path, str]:
    """Hausaufgabe mit der höchsten Nummer."""
    homeworks = list_homeworks(course, config)
    if not homeworks:
        raise NoDocuments(f"Keine Hausaufgaben für {course.display_name} vorhanden.")
    return homework_location(course, config, homeworks[-1])


# ─── Vorlesung ───

def init_lecture(course: Course, config: LecternConfig) -> Path:
    """Legt das Vorlesungsverzeichnis an und erzeugt main.tex aus der Vorlage."""
    lecture_dir = course.lecture_directory(config.root)
    rendered = render_file(config.lecture_template, course.lecture_context(config.root))

    _ensure_directory(lecture_dir)
    main_path = lecture_dir / AGGREGATOR_NAME
    _write_new(main_path, rendered)
    logger.info(f"Vorlesung initialisiert: {main_path}")
    return main_path


def create_lesson(
    lecture_dir: Path,
    number: int,
    known: Optional[Iterable[int]] = None,
) -> str:
    """Legt les<N>.tex an und trägt alle Lektionen in main.tex ein.

    Args:
        lecture_dir: Vorlesungsverzeichnis mit main.tex.
        number: Nummer der neuen Lektion.
        known: Bereits vorhandene Lektionen. None = neu scannen.

    Returns:
        Dateiname der neuen Lektion.
    """
    lecture_dir = Path(lecture_dir)
    kind = DocumentKind.LESSON
    if known is None:
        known = scan(lecture_dir, kind)

    file_name = kind.file_name(number)
    _write_new(lecture_dir / file_name, lesson_stub(number))
    logger.info(f"Lektion {number} angelegt: {lecture_dir / file_name}")

    sync(lecture_dir / AGGREGATOR_NAME, [*known, number])
    return file_name


def new_lesson(course: Course, config: LecternConfig) -> tuple[Path, str]:
    """Nächste Lektion eines Kurses anlegen (inkl. Erst-Initialisierung)."""
    lecture_dir = course.lecture_directory(config.root)
    if not (lecture_dir / AGGREGATOR_NAME).exists():
        init_lecture(course, config)

    lessons = scan(lecture_dir, DocumentKind.LESSON)
    file_name = create_lesson(lecture_dir, next_number(lessons), lessons)
    return lecture_dir, file_name
