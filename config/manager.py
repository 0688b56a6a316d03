"""Konfigurationsmanager: Laden, Speichern und Vorlagen-Bootstrap.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import DEFAULT_HOMEWORK_TEMPLATE, DEFAULT_LECTURE_TEMPLATE
from config.schema import LecternConfig

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120

CONFIG_DIR_ENV = "LECTERN_CONFIG_DIR"


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Lectern — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "root": (
        "Ablage",
        "Mitschriften liegen unter <root>/<semester>/<kurs>/.",
    ),
    "lecture_template": (
        "Vorlagen",
        "Platzhalter: {{ feld }}. Vorlesung: name, title, prof, semester, notebook.\n"
        "Hausaufgaben: course, number.",
    ),
    "launch": (
        "Externe Programme",
        None,
    ),
}


def default_config_dir() -> Path:
    """Konfigurationsverzeichnis: $LECTERN_CONFIG_DIR oder das Plattform-Default von click."""
    env = os.environ.get(CONFIG_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return Path(click.get_app_dir("lectern"))


class ConfigManager:
    def __init__(self, config_dir: Optional[Path] = None):
        self.CONFIG_DIR = Path(config_dir) if config_dir else default_config_dir()
        self.DEFAULT_CONFIG = self.CONFIG_DIR / "config.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> LecternConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'lectern setup' aus, um Lectern einzurichten."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            config = LecternConfig.model_validate(dict(raw or {}))
            return config
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    # ─── Speichern ───

    def save(self, config: LecternConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: LecternConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "launch" in cm:
            launch_map = CommentedMap(cm["launch"])
            launch_map.yaml_add_eol_comment("null = deaktiviert", "figure_watcher")
            cm["launch"] = launch_map

        return cm

    # ─── Vorlagen ───

    def ensure_templates(self, config: LecternConfig) -> list[Path]:
        """Legt fehlende Vorlagendateien mit den Standard-Vorlagen an.

        Vorhandene Dateien werden nie überschrieben. Gibt die neu
        angelegten Pfade zurück.
        """
        created = []
        for path, content in (
            (config.lecture_template, DEFAULT_LECTURE_TEMPLATE),
            (config.homework_template, DEFAULT_HOMEWORK_TEMPLATE),
        ):
            if path.exists():
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            logger.info(f"Standard-Vorlage angelegt: {path}")
            created.append(path)
        return created
