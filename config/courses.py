"""Kursverzeichnis: courses.yaml im Konfigurationsverzeichnis.

Format::

    cs101:
      name: cs101
      title: Introduction to Computer Science
      prof: Ada Lovelace
      semester: fall24
"""

from pathlib import Path

from ruamel.yaml import YAML

from models.course import Course

yaml = YAML()
yaml.default_flow_style = False


class CourseRepository:
    """Lädt und speichert die registrierten Kurse."""

    FILE_NAME = "courses.yaml"

    def __init__(self, config_dir: Path):
        self.path = Path(config_dir) / self.FILE_NAME
        self._courses: dict[str, Course] = {}

    def load(self) -> "CourseRepository":
        """Liest courses.yaml. Fehlende Datei = keine Kurse."""
        self._courses = {}
        if not self.path.exists():
            return self
        with open(self.path, "r", encoding="utf-8") as f:
            raw = yaml.load(f) or {}
        try:
            for attrs in raw.values():
                course = Course.model_validate(dict(attrs))
                self._courses[course.name] = course
        except Exception as e:
            raise ValueError(
                f"Kursdatei ungültig: {self.path}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        return self

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: c.model_dump() for key, c in self._courses.items()}
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(data, f)

    def get(self, name: str) -> Course:
        """Kurs per Kennung, z.B. 'cs101'."""
        key = name.strip().lower()
        if key not in self._courses:
            raise KeyError(
                f"Kurs '{name}' nicht gefunden. "
                f"Verfügbar: {sorted(self._courses)}"
            )
        return self._courses[key]

    def all(self) -> list[Course]:
        """Alle Kurse, sortiert nach Semester und Name."""
        return sorted(self._courses.values(), key=lambda c: (c.semester, c.name))

    def add(self, course: Course) -> None:
        """Registriert (oder ersetzt) einen Kurs."""
        self._courses[course.name] = course

    def __contains__(self, name: str) -> bool:
        return name.strip().lower() in self._courses

    def __len__(self) -> int:
        return len(self._courses)
