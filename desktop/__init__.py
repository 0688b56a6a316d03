"""Anbindung an Desktop-Programme: Auswahldialog, Editor, PDF-Betrachter."""

from .picker import PickerError, pick
from .launcher import LaunchError, launch_pdf, launch_tex

__all__ = [
    "PickerError",
    "pick",
    "LaunchError",
    "launch_pdf",
    "launch_tex",
]
