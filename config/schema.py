from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ─── EXTERNE PROGRAMME ───

class LaunchConfig(BaseModel):
    """Programme für Auswahl, Bearbeitung und Anzeige."""
    # dmenu-kompatibler Auswahldialog (muss "-format i" verstehen)
    picker: str = Field("rofi",
        description="Auswahldialog (rofi)")
    # Terminal, in dem der Editor gestartet wird
    terminal: str = Field("wezterm",
        description="Terminal-Emulator")
    # Editor im Terminal
    editor: str = Field("nvim",
        description="Editor")
    # PDF-Betrachter
    viewer: str = Field("zathura",
        description="PDF-Betrachter")
    # Beobachtet <dir>/figures während der Bearbeitung. None = deaktiviert
    figure_watcher: Optional[str] = Field("xoppdog",
        description="Abbildungs-Watcher (None = aus)")


# ─── GESAMT-CONFIG ───

class LecternConfig(BaseModel):
    """Gesamtkonfiguration."""
    # Ablageort aller Mitschriften: <root>/<semester>/<kurs>/...
    root: Path = Field(
        description="Wurzelverzeichnis der Mitschriften")
    # Vorlage für lecture/main.tex
    lecture_template: Path = Field(
        description="Vorlage für lecture/main.tex")
    # Vorlage für homework<N>/homework<N>.tex
    homework_template: Path = Field(
        description="Vorlage für Hausaufgaben")
    # Externe Programme
    launch: LaunchConfig = Field(default_factory=LaunchConfig)

    @field_validator("root", "lecture_template", "homework_template")
    @classmethod
    def expand_home(cls, v: Path) -> Path:
        """'~/notes' → '/home/<user>/notes'."""
        return v.expanduser()
