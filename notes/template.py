"""Minimaler Vorlagen-Renderer für LaTeX-Dateien.

Platzhalter: ``{{ feld }}`` (Leerzeichen optional). Alles andere ist Literal,
einfache geschweifte Klammern von LaTeX bleiben also unangetastet.
Keine Schleifen, keine Bedingungen.
"""

import re
from pathlib import Path
from typing import Mapping

from notes.errors import FilesystemError, MalformedTemplate, MissingField

OPEN = "{{"
CLOSE = "}}"

_FIELD_RE = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_]*)\s*")


def _parse(template_text: str) -> list[tuple[str, str]]:
    """Zerlegt die Vorlage in ("text", literal) und ("field", name) Teile."""
    parts: list[tuple[str, str]] = []
    pos = 0
    while True:
        start = template_text.find(OPEN, pos)
        if start == -1:
            parts.append(("text", template_text[pos:]))
            return parts
        end = template_text.find(CLOSE, start + len(OPEN))
        if end == -1:
            raise MalformedTemplate("Platzhalter nicht abgeschlossen", start)
        inner = template_text[start + len(OPEN):end]
        match = _FIELD_RE.fullmatch(inner)
        if match is None:
            raise MalformedTemplate(f"Ungültiger Feldname '{inner.strip()}'", start)
        parts.append(("text", template_text[pos:start]))
        parts.append(("field", match.group(1)))
        pos = end + len(CLOSE)


def placeholders(template_text: str) -> list[str]:
    """Alle referenzierten Feldnamen in Reihenfolge des ersten Auftretens."""
    seen: list[str] = []
    for kind, value in _parse(template_text):
        if kind == "field" and value not in seen:
            seen.append(value)
    return seen


def render(template_text: str, context: Mapping[str, object]) -> str:
    """Ersetzt alle Platzhalter durch die Werte aus `context`.

    Die Vorlage wird vollständig geprüft, bevor etwas zusammengesetzt wird.

    Raises:
        MalformedTemplate: Platzhalter nicht abgeschlossen oder ungültig.
        MissingField: Feld fehlt im Kontext.
    """
    parts = _parse(template_text)
    for kind, value in parts:
        if kind == "field" and value not in context:
            raise MissingField(value)
    return "".join(
        value if kind == "text" else str(context[value])
        for kind, value in parts
    )


def render_file(path: Path, context: Mapping[str, object]) -> str:
    """Liest eine Vorlagendatei (UTF-8) und rendert sie."""
    try:
        template_text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FilesystemError(
            f"Vorlage ist keine gültige UTF-8-Datei: {path} (Byte {e.start})"
        ) from e
    except OSError as e:
        raise FilesystemError(f"Vorlage kann nicht gelesen werden: {path} ({e})") from e
    return render(template_text, context)
