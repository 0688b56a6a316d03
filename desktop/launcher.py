"""Startet Editor (im Terminal) und PDF-Betrachter."""

import logging
import subprocess
from pathlib import Path

from config.schema import LaunchConfig
from notes.errors import LecternError

logger = logging.getLogger(__name__)


class LaunchError(LecternError):
    """Externes Programm konnte nicht gestartet werden."""


def _spawn(cmd: list[str], **kwargs) -> subprocess.Popen:
    logger.debug(f"Starte: {' '.join(cmd)}")
    try:
        return subprocess.Popen(cmd, **kwargs)
    except OSError as e:
        raise LaunchError(f"{cmd[0]} konnte nicht gestartet werden: {e}") from e


def editor_command(directory: Path, file_name: str, launch: LaunchConfig) -> list[str]:
    # wezterm-Syntax
    return [
        launch.terminal, "start", "--always-new-process", "--cwd", str(directory),
        launch.editor, file_name,
    ]


def launch_tex(directory: Path, file_name: str, launch: LaunchConfig) -> None:
    """Öffnet `file_name` im Editor und blockiert, bis das Terminal geschlossen ist.

    Solange läuft der Abbildungs-Watcher auf <directory>/figures.
    """
    directory = Path(directory)
    watcher = None
    if launch.figure_watcher:
        watcher = _spawn([launch.figure_watcher, "sit", str(directory / "figures")])

    try:
        terminal = _spawn(editor_command(directory, file_name, launch))
        terminal.wait()
    finally:
        if watcher is not None:
            watcher.terminate()
            watcher.wait()


def launch_pdf(directory: Path, file_name: str, launch: LaunchConfig) -> None:
    """Öffnet das PDF im Betrachter, ohne auf ihn zu warten."""
    _spawn([launch.viewer, str(Path(directory) / file_name)], start_new_session=True)
