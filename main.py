"""Lectern — Haupt-CLI.

Verwendung:
  lectern setup                                   Ersteinrichtung (Wizard)
  lectern config show                             Konfiguration anzeigen
  lectern init <kurs> <titel> <prof> <semester>   Kurs anlegen
  lectern courses                                 Kurse auflisten
  lectern open [kurs]                             Interaktiv (rofi): Vorlesung/Hausaufgaben
  lectern lesson new <kurs>                       Nächste Lektion anlegen
  lectern homework new <kurs>                     Nächste Hausaufgabe anlegen
  lectern homework recent <kurs>                  Letzte Hausaufgabe öffnen
  lectern homework list <kurs>                    Hausaufgaben auflisten
"""

import functools
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from notes.errors import LecternError, NoDocuments

console = Console()
logger = logging.getLogger(__name__)


def _manager(ctx: click.Context):
    from config.manager import ConfigManager
    return ConfigManager(ctx.obj.get("config_dir"))


def _load_config_or_abort(ctx: click.Context):
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    mgr = _manager(ctx)
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]lectern setup[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red bold]{e}[/red bold]")
        sys.exit(1)


def _load_courses_or_abort(mgr):
    from config.courses import CourseRepository
    try:
        return CourseRepository(mgr.CONFIG_DIR).load()
    except ValueError as e:
        console.print(f"[red bold]{e}[/red bold]")
        sys.exit(1)


def _get_course_or_abort(courses, name: str):
    try:
        return courses.get(name)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)


def _abort_on_error(f):
    """Meldet Lectern-Fehler in Rot und beendet mit Status 1."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except LecternError as e:
            logger.debug("Abbruch", exc_info=True)
            console.print(f"[red bold]Fehler:[/red bold] {escape(str(e))}")
            sys.exit(1)
    return wrapper


def _open_tex(config, directory: Path, file_name: str, edit: bool) -> None:
    console.print(f"[green]✓[/green] {directory / file_name}")
    if edit:
        from desktop.launcher import launch_tex
        launch_tex(directory, file_name, config.launch)


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.pass_context
def cmd_setup(ctx: click.Context):
    """Ersteinrichtung: Ablageort und Vorlagen festlegen."""
    from config.wizard import run_wizard

    mgr = _manager(ctx)
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            f"Datei: {mgr.DEFAULT_CONFIG}"
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = run_wizard(mgr.CONFIG_DIR)
    if config is None:
        return
    mgr.save(config)
    for path in mgr.ensure_templates(config):
        console.print(f"[green]✓[/green] Vorlage angelegt: {path}")
    console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
    console.print("Legen Sie jetzt mit [bold]lectern init[/bold] einen Kurs an.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktuelle Konfiguration an."""
    from config.wizard import show_config_table

    mgr, config = _load_config_or_abort(ctx)
    console.print(Panel(
        f"[bold]{mgr.DEFAULT_CONFIG}[/bold]",
        title="Lectern",
        border_style="cyan",
    ))
    show_config_table(config)


# ─── KURSE ────────────────────────────────────────────────────────────────────

@click.command("init")
@click.argument("name")
@click.argument("title")
@click.argument("prof")
@click.argument("semester")
@click.pass_context
@_abort_on_error
def cmd_init(ctx: click.Context, name: str, title: str, prof: str, semester: str):
    """Legt einen Kurs an (z.B. cs101 "Intro to CS" "Ada Lovelace" fall24)."""
    from models.course import Course
    from notes.errors import FilesystemError

    mgr, config = _load_config_or_abort(ctx)
    courses = _load_courses_or_abort(mgr)

    try:
        course = Course(name=name, title=title, prof=prof, semester=semester)
    except ValidationError as e:
        console.print(f"[red bold]Ungültiger Kurs:[/red bold]\n{e}")
        sys.exit(1)

    if course.name in courses:
        if not click.confirm(f"Kurs '{course.name}' existiert bereits. Überschreiben?",
                             default=False):
            console.print("[yellow]Abgebrochen.[/yellow]")
            return

    course_dir = course.directory(config.root)
    try:
        course_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Kursverzeichnis kann nicht angelegt werden: {course_dir} ({e})") from e

    courses.add(course)
    courses.save()
    console.print(f"[green]✓[/green] Kurs {course.display_name} angelegt: {course_dir}")


@click.command("courses")
@click.pass_context
@_abort_on_error
def cmd_courses(ctx: click.Context):
    """Listet alle Kurse auf."""
    from notes.factory import list_homeworks
    from notes.scanner import DocumentKind, scan_or_empty

    mgr, config = _load_config_or_abort(ctx)
    courses = _load_courses_or_abort(mgr)

    if not len(courses):
        console.print("[dim]Keine Kurse vorhanden.[/dim]")
        return

    table = Table(title="Kurse", box=box.ROUNDED)
    table.add_column("Kurs", style="bold")
    table.add_column("Titel")
    table.add_column("Prof.")
    table.add_column("Semester")
    table.add_column("Lekt.", justify="right")
    table.add_column("HA", justify="right")
    for c in courses.all():
        lessons = scan_or_empty(c.lecture_directory(config.root), DocumentKind.LESSON)
        table.add_row(c.display_name, c.title, c.prof, c.semester,
                      str(len(lessons)), str(len(list_homeworks(c, config))))
    console.print(table)


# ─── VORLESUNG ────────────────────────────────────────────────────────────────

@click.group("lesson")
def cmd_lesson():
    """Lektionen verwalten."""


@cmd_lesson.command("new")
@click.argument("name")
@click.option("--no-edit", is_flag=True, default=False,
              help="Nur anlegen, keinen Editor starten.")
@click.pass_context
@_abort_on_error
def lesson_new(ctx: click.Context, name: str, no_edit: bool):
    """Legt die nächste Lektion an und trägt sie in main.tex ein."""
    from notes.factory import new_lesson

    mgr, config = _load_config_or_abort(ctx)
    course = _get_course_or_abort(_load_courses_or_abort(mgr), name)
    directory, file_name = new_lesson(course, config)
    _open_tex(config, directory, file_name, edit=not no_edit)


# ─── HAUSAUFGABEN ─────────────────────────────────────────────────────────────

@click.group("homework")
def cmd_homework():
    """Hausaufgaben verwalten."""


@cmd_homework.command("new")
@click.argument("name")
@click.option("--no-edit", is_flag=True, default=False,
              help="Nur anlegen, keinen Editor starten.")
@click.pass_context
@_abort_on_error
def homework_new(ctx: click.Context, name: str, no_edit: bool):
    """Legt die nächste Hausaufgabe aus der Vorlage an."""
    from notes.factory import new_homework

    mgr, config = _load_config_or_abort(ctx)
    course = _get_course_or_abort(_load_courses_or_abort(mgr), name)
    directory, file_name = new_homework(course, config)
    _open_tex(config, directory, file_name, edit=not no_edit)


@cmd_homework.command("recent")
@click.argument("name")
@click.option("--no-edit", is_flag=True, default=False,
              help="Nur Pfad ausgeben, keinen Editor starten.")
@click.pass_context
@_abort_on_error
def homework_recent(ctx: click.Context, name: str, no_edit: bool):
    """Öffnet die Hausaufgabe mit der höchsten Nummer."""
    from notes.factory import recent_homework

    mgr, config = _load_config_or_abort(ctx)
    course = _get_course_or_abort(_load_courses_or_abort(mgr), name)
    directory, file_name = recent_homework(course, config)
    _open_tex(config, directory, file_name, edit=not no_edit)


@cmd_homework.command("list")
@click.argument("name")
@click.pass_context
@_abort_on_error
def homework_list(ctx: click.Context, name: str):
    """Listet alle Hausaufgaben eines Kurses auf."""
    from notes.factory import homework_location, list_homeworks

    mgr, config = _load_config_or_abort(ctx)
    course = _get_course_or_abort(_load_courses_or_abort(mgr), name)
    numbers = list_homeworks(course, config)
    if not numbers:
        console.print(f"[dim]Keine Hausaufgaben für {course.display_name}.[/dim]")
        return

    course_dir = course.directory(config.root)
    table = Table(title=f"Hausaufgaben {course.display_name}", box=box.ROUNDED)
    table.add_column("Nr.", style="bold", justify="right")
    table.add_column("Datei")
    for n in numbers:
        directory, file_name = homework_location(course, config, n)
        table.add_row(str(n), str((directory / file_name).relative_to(course_dir)))
    console.print(table)


# ─── OPEN (interaktiv) ────────────────────────────────────────────────────────

def _pick(config, title: str, options: list[str]) -> Optional[int]:
    from desktop.picker import pick
    choice = pick(title, options, config.launch.picker)
    if choice is None:
        console.print("[dim]Keine Auswahl.[/dim]")
    return choice


def _open_lecture(course, config) -> None:
    from desktop.launcher import launch_pdf
    from notes.factory import AGGREGATOR_NAME, new_lesson

    action = _pick(config, "Action", ["New Lesson", "Edit Notes", "View"])
    if action is None:
        return

    lecture_dir = course.lecture_directory(config.root)
    if action == 0:
        directory, file_name = new_lesson(course, config)
    elif action == 1:
        directory, file_name = lecture_dir, AGGREGATOR_NAME
    else:
        launch_pdf(lecture_dir, "main.pdf", config.launch)
        return
    _open_tex(config, directory, file_name, edit=True)


def _open_homework(course, config) -> None:
    from notes.factory import homework_location, list_homeworks, new_homework, recent_homework

    action = _pick(config, "Action", ["Edit Recent", "New Homework", "View Previous"])
    if action is None:
        return

    if action == 0:
        directory, file_name = recent_homework(course, config)
    elif action == 1:
        directory, file_name = new_homework(course, config)
    else:
        numbers = list_homeworks(course, config)
        if not numbers:
            raise NoDocuments(f"Keine Hausaufgaben für {course.display_name} vorhanden.")
        idx = _pick(config, "Homeworks", [f"Homework {n}" for n in numbers])
        if idx is None:
            return
        directory, file_name = homework_location(course, config, numbers[idx])
    _open_tex(config, directory, file_name, edit=True)


@click.command("open")
@click.argument("name", required=False)
@click.pass_context
@_abort_on_error
def cmd_open(ctx: click.Context, name: Optional[str]):
    """Öffnet Mitschriften eines Kurses (Auswahl über rofi)."""
    mgr, config = _load_config_or_abort(ctx)
    courses = _load_courses_or_abort(mgr)

    if name:
        course = _get_course_or_abort(courses, name)
    else:
        all_courses = courses.all()
        if not all_courses:
            console.print("[dim]Keine Kurse vorhanden.[/dim]")
            return
        idx = _pick(config, "Courses", [c.picker_label() for c in all_courses])
        if idx is None:
            return
        course = all_courses[idx]

    kind = _pick(config, "Type", ["Lecture", "Homework"])
    if kind is None:
        return
    if kind == 0:
        _open_lecture(course, config)
    else:
        _open_homework(course, config)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "-c", "config_dir", type=click.Path(path_type=Path),
              envvar="LECTERN_CONFIG_DIR", default=None,
              help="Konfigurationsverzeichnis.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
@click.pass_context
def cli(ctx: click.Context, config_dir: Optional[Path], verbose: bool):
    """Lectern: Vorlesungs-Mitschriften und Hausaufgaben in LaTeX.

    Starten Sie mit: lectern setup
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen bei Lectern![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_init)
cli.add_command(cmd_courses)
cli.add_command(cmd_open)
cli.add_command(cmd_lesson)
cli.add_command(cmd_homework)


if __name__ == "__main__":
    main()
