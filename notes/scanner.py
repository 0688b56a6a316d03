"""Ermittelt vorhandene Hausaufgaben und Lektionen anhand der Dateinamen.

Es gibt keinen Index: der aktuelle Stand wird bei jedem Aufruf aus dem
Verzeichnisinhalt abgeleitet.
"""

import logging
import re
from enum import Enum
from pathlib import Path

from notes.errors import FilesystemError, PatternMismatch

logger = logging.getLogger(__name__)


class DocumentKind(str, Enum):
    HOMEWORK = "homework"
    LESSON = "lesson"

    @property
    def pattern(self) -> re.Pattern:
        # Nur positive Nummern ohne führende Nullen ("homework0", "homework01" zählen nicht)
        if self is DocumentKind.HOMEWORK:
            return re.compile(r"homework([1-9]\d*)")
        return re.compile(r"les([1-9]\d*)\.tex")

    @property
    def is_directory(self) -> bool:
        """Hausaufgaben sind Verzeichnisse, Lektionen einzelne Dateien."""
        return self is DocumentKind.HOMEWORK

    def entry_name(self, number: int) -> str:
        """Name des Verzeichniseintrags für eine Nummer."""
        if self is DocumentKind.HOMEWORK:
            return f"homework{number}"
        return f"les{number}.tex"

    def file_name(self, number: int) -> str:
        """Name der .tex-Datei (bei Hausaufgaben innerhalb des Verzeichnisses)."""
        if self is DocumentKind.HOMEWORK:
            return f"homework{number}.tex"
        return f"les{number}.tex"


def parse_number(name: str, kind: DocumentKind) -> int:
    """Extrahiert die Nummer aus einem Eintragsnamen.

    'homework12' → 12, 'les3.tex' → 3. Alles andere → PatternMismatch.
    """
    match = kind.pattern.fullmatch(name)
    if match is None:
        raise PatternMismatch(f"'{name}' ist kein {kind.value}-Eintrag")
    return int(match.group(1))


def scan(directory: Path, kind: DocumentKind) -> list[int]:
    """Listet die Nummern aller Einträge einer Art in `directory` auf.

    Nur eine Ebene, nicht rekursiv. Fremde Einträge (Abbildungen, PDFs, ...)
    werden übersprungen. Ergebnis aufsteigend sortiert, ohne Duplikate.
    Lücken bleiben erhalten.

    Raises:
        FilesystemError: Verzeichnis existiert nicht oder ist nicht lesbar.
    """
    directory = Path(directory)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FilesystemError(
            f"Verzeichnis kann nicht gelesen werden: {directory} ({e})"
        ) from e

    numbers: set[int] = set()
    for entry in entries:
        try:
            number = parse_number(entry.name, kind)
        except PatternMismatch:
            logger.debug(f"Übersprungen: {entry.name}")
            continue
        if entry.is_dir() != kind.is_directory:
            logger.debug(f"Übersprungen (falscher Typ): {entry.name}")
            continue
        numbers.add(number)

    result = sorted(numbers)
    logger.debug(f"{kind.value} in {directory}: {result}")
    return result


def scan_or_empty(directory: Path, kind: DocumentKind) -> list[int]:
    """Wie scan(), ein fehlendes Verzeichnis gilt aber als leere Menge."""
    if not Path(directory).exists():
        return []
    return scan(directory, kind)


def next_number(numbers: list[int]) -> int:
    """max + 1, bzw. 1 wenn noch nichts existiert. Lücken werden nie aufgefüllt."""
    return max(numbers, default=0) + 1
