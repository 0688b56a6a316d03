"""Synchronisiert den Lektionen-Block in lecture/main.tex.

Aufbau des Dokuments::

    ...handgeschriebener Text...
        % start lessons
        \\input{les1.tex}
        \\input{les2.tex}
        % end lessons
    ...handgeschriebener Text...

Der Block zwischen den Markierungen wird bei jedem Sync komplett aus der
Nummernmenge neu erzeugt, alles außerhalb bleibt Byte für Byte erhalten.
"""

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

from notes.errors import AggregatorBlockNotFound, FilesystemError
from notes.scanner import DocumentKind

logger = logging.getLogger(__name__)

START_SENTINEL = "% start lessons"
END_SENTINEL = "% end lessons"
INDENT = "    "

_GENERATED_RE = re.compile(r" {4}\\input\{les([1-9]\d*)\.tex\}")


def generated_line(number: int, newline: str = "\n") -> str:
    """Eine erzeugte Zeile, z.B. '    \\input{les3.tex}'."""
    return f"{INDENT}\\input{{{DocumentKind.LESSON.file_name(number)}}}{newline}"


def _find_sentinel(lines: list[str], sentinel: str) -> int:
    hits = [i for i, line in enumerate(lines) if line.strip() == sentinel]
    if not hits:
        raise AggregatorBlockNotFound(f"Markierung '{sentinel}' nicht gefunden")
    if len(hits) > 1:
        raise AggregatorBlockNotFound(
            f"Markierung '{sentinel}' kommt {len(hits)}-mal vor (Zeilen "
            f"{', '.join(str(i + 1) for i in hits)})"
        )
    return hits[0]


def split_block(text: str) -> tuple[str, str, str]:
    """Zerlegt das Dokument in (Präfix inkl. Start-Markierung, Block, Suffix ab End-Markierung).

    Raises:
        AggregatorBlockNotFound: Markierungen fehlen, sind doppelt, vertauscht,
            oder der Block enthält Zeilen, die nicht erzeugt wurden.
    """
    lines = text.splitlines(keepends=True)
    start = _find_sentinel(lines, START_SENTINEL)
    end = _find_sentinel(lines, END_SENTINEL)
    if end < start:
        raise AggregatorBlockNotFound(
            f"'{END_SENTINEL}' (Zeile {end + 1}) steht vor "
            f"'{START_SENTINEL}' (Zeile {start + 1})"
        )

    block = lines[start + 1:end]
    for offset, line in enumerate(block):
        if _GENERATED_RE.fullmatch(line.rstrip("\r\n")) is None:
            raise AggregatorBlockNotFound(
                f"Unerwarteter Inhalt im Lektionen-Block (Zeile "
                f"{start + 2 + offset}): {line.rstrip()!r}"
            )

    return (
        "".join(lines[:start + 1]),
        "".join(block),
        "".join(lines[end:]),
    )


def listed_numbers(text: str) -> list[int]:
    """Nummern, die aktuell im Block stehen (in Dokumentreihenfolge)."""
    _, block, _ = split_block(text)
    return [
        int(_GENERATED_RE.fullmatch(line.rstrip("\r\n")).group(1))
        for line in block.splitlines()
    ]


def rebuild_block(text: str, numbers: Iterable[int]) -> str:
    """Gibt das Dokument mit neu erzeugtem Block zurück (reine Funktion)."""
    prefix, _, suffix = split_block(text)
    newline = "\r\n" if prefix.endswith("\r\n") else "\n"
    block = "".join(generated_line(n, newline) for n in sorted(set(numbers)))
    return prefix + block + suffix


def _write_atomic(path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def sync(aggregator_path: Path, numbers: Iterable[int]) -> None:
    """Schreibt genau eine \\input-Zeile pro Nummer in den Block von main.tex.

    Idempotent: bei unverändertem Ergebnis wird die Datei nicht angefasst.
    """
    path = Path(aggregator_path)
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise FilesystemError(
            f"{path} ist keine gültige UTF-8-Datei (Byte {e.start})"
        ) from e
    except OSError as e:
        raise FilesystemError(f"{path} kann nicht gelesen werden ({e})") from e

    try:
        updated = rebuild_block(text, numbers)
    except AggregatorBlockNotFound as e:
        raise AggregatorBlockNotFound(f"{path}: {e}") from e

    if updated == text:
        logger.debug(f"{path}: Lektionen-Block bereits aktuell")
        return

    try:
        _write_atomic(path, updated)
    except OSError as e:
        raise FilesystemError(f"{path} kann nicht geschrieben werden ({e})") from e
    logger.info(f"{path}: Lektionen-Block aktualisiert")
