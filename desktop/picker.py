"""Auswahl aus einer Liste über rofi (dmenu-Modus).

rofi bekommt die Optionen zeilenweise auf stdin und gibt mit ``-format i``
den nullbasierten Index der Auswahl zurück. Leere Ausgabe = abgebrochen.
"""

import logging
import subprocess
from typing import Optional, Sequence

from notes.errors import LecternError

logger = logging.getLogger(__name__)


class PickerError(LecternError):
    """Auswahldialog konnte nicht gestartet oder ausgewertet werden."""


def pick(title: str, options: Sequence[str], command: str = "rofi") -> Optional[int]:
    """Zeigt `options` an und gibt den gewählten Index zurück (None = keine Auswahl)."""
    cmd = [command, "-dmenu", "-i", "-p", title, "-format", "i"]
    try:
        result = subprocess.run(
            cmd,
            input="\n".join(options),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise PickerError(f"{command} konnte nicht gestartet werden: {e}") from e

    choice = result.stdout.strip()
    if not choice:
        logger.debug(f"{title}: keine Auswahl (Exit-Code {result.returncode})")
        return None

    try:
        index = int(choice)
    except ValueError as e:
        raise PickerError(f"Unerwartete Ausgabe von {command}: {choice!r}") from e
    if not 0 <= index < len(options):
        raise PickerError(f"{command} lieferte Index {index} außerhalb der Liste")
    return index
