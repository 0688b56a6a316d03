"""Fehlerklassen für Scan, Rendering, Dokumenterzeugung und Aggregator-Sync."""


class LecternError(Exception):
    """Basisklasse aller Lectern-Fehler."""


class FilesystemError(LecternError):
    """Lesen, Schreiben oder Anlegen im Dateisystem fehlgeschlagen."""


class PatternMismatch(LecternError):
    """Ein Eintragsname folgt nicht der Namenskonvention."""


class TemplateError(LecternError):
    """Vorlage konnte nicht gerendert werden."""


class MissingField(TemplateError):
    """Platzhalter ohne passenden Eintrag im Kontext."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Feld '{field}' fehlt im Vorlagen-Kontext.")


class MalformedTemplate(TemplateError):
    """Platzhalter-Syntax nicht abgeschlossen oder ungültig."""

    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(f"{message} (Position {position})")


class AggregatorBlockNotFound(LecternError):
    """Markierter Block in main.tex fehlt oder ist beschädigt."""


BlockNotFound = AggregatorBlockNotFound


class CreationConflict(LecternError):
    """Zielverzeichnis oder -datei existiert bereits."""


class NoDocuments(LecternError):
    """Es gibt (noch) keine Dokumente dieser Art."""
