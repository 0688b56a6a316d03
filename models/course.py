"""Datenmodell für einen Kurs (Pydantic v2)."""

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

_NAME_RE = re.compile(r"([a-z]+)(\d{3})")


class Course(BaseModel):
    """Ein Kurs eines Semesters, z.B. cs101 im Semester 'fall24'."""

    model_config = ConfigDict(frozen=True)

    name: str       # Kürzel + Nummer: "cs101"
    title: str      # "Introduction to Computer Science"
    prof: str       # "Ada Lovelace"
    semester: str   # Gruppierung im Ablageverzeichnis, z.B. "fall24"

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip().lower()
        if not _NAME_RE.fullmatch(v):
            raise ValueError(
                f"Kursname '{v}' ungültig: erwartet Kleinbuchstaben + 3 Ziffern (z.B. cs101)"
            )
        return v

    @property
    def display_name(self) -> str:
        """'cs101' → 'CS 101'."""
        dept, number = _NAME_RE.fullmatch(self.name).groups()
        return f"{dept.upper()} {number}"

    def directory(self, root: Path) -> Path:
        """Kursverzeichnis: <root>/<semester>/<name>."""
        return Path(root) / self.semester / self.name

    def lecture_directory(self, root: Path) -> Path:
        return self.directory(root) / "lecture"

    def lecture_context(self, root: Path) -> dict[str, str]:
        """Felder für die Vorlesungs-Vorlage (main.tex)."""
        return {
            "name": self.name,
            "title": self.title,
            "prof": self.prof,
            "semester": self.semester,
            "notebook": str(root),
        }

    def homework_context(self, number: int) -> dict[str, str]:
        """Felder für die Hausaufgaben-Vorlage."""
        return {
            "course": self.display_name,
            "number": str(number),
        }

    def picker_label(self) -> str:
        return f"{self.name.upper()}: {self.title}"
