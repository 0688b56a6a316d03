"""Kern: Nummern-Scan, Vorlagen, Dokumenterzeugung und main.tex-Sync."""

from .errors import (
    AggregatorBlockNotFound,
    BlockNotFound,
    CreationConflict,
    FilesystemError,
    LecternError,
    MalformedTemplate,
    MissingField,
    NoDocuments,
    PatternMismatch,
    TemplateError,
)
from .scanner import DocumentKind, next_number, parse_number, scan, scan_or_empty
from .template import placeholders, render, render_file
from .aggregator import listed_numbers, rebuild_block, split_block, sync
from .factory import (
    create_homework,
    create_lesson,
    homework_location,
    init_lecture,
    list_homeworks,
    new_homework,
    new_lesson,
    recent_homework,
)

__all__ = [
    "AggregatorBlockNotFound",
    "BlockNotFound",
    "CreationConflict",
    "FilesystemError",
    "LecternError",
    "MalformedTemplate",
    "MissingField",
    "NoDocuments",
    "PatternMismatch",
    "TemplateError",
    "DocumentKind",
    "next_number",
    "parse_number",
    "scan",
    "scan_or_empty",
    "placeholders",
    "render",
    "render_file",
    "listed_numbers",
    "rebuild_block",
    "split_block",
    "sync",
    "create_homework",
    "create_lesson",
    "homework_location",
    "init_lecture",
    "list_homeworks",
    "new_homework",
    "new_lesson",
    "recent_homework",
]
