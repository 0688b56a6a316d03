"""Interaktiver Setup-Wizard für die Ersteinrichtung.

Fragt den Ablageort der Mitschriften ab und legt Konfiguration und
Standard-Vorlagen im Konfigurationsverzeichnis an.
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich import box

from config.defaults import default_config
from config.schema import LecternConfig

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _info(text: str) -> None:
    console.print(f"[dim]{text}[/dim]")


def show_config_table(config: LecternConfig) -> None:
    """Zeigt die Konfiguration als rich-Tabelle an."""
    table = Table(title="Konfiguration", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Ablage", str(config.root))
    table.add_row("Vorlage Vorlesung", str(config.lecture_template))
    table.add_row("Vorlage Hausaufgaben", str(config.homework_template))
    for k, v in config.launch.model_dump().items():
        table.add_row(k, "[dim]aus[/dim]" if v is None else str(v))
    console.print(table)


def run_wizard(config_dir: Path) -> Optional[LecternConfig]:
    """Führt durch die Ersteinrichtung. None = abgebrochen."""
    _header("Lectern — Ersteinrichtung")
    _info(f"Konfigurationsverzeichnis: {config_dir}")

    while True:
        answer = Prompt.ask("Wo sollen die Mitschriften abgelegt werden?")
        if answer.strip():
            break
        console.print("[yellow]Bitte einen Pfad angeben.[/yellow]")

    root = Path(answer.strip()).expanduser()
    config = default_config(root, config_dir)
    show_config_table(config)

    if not Confirm.ask("Konfiguration übernehmen?", default=True):
        console.print("[yellow]Abgebrochen.[/yellow]")
        return None
    return config
