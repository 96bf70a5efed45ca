# src/lasclean/io/__init__.py
from __future__ import annotations

from .las_text import (
    NULL_SENTINELS,
    Curve,
    HeaderItem,
    LogDocument,
    ParseOutcome,
    parse_document,
    parse_las_text,
    read_las_text,
    try_parse_document,
)

__all__ = [
    "NULL_SENTINELS",
    "Curve",
    "HeaderItem",
    "LogDocument",
    "ParseOutcome",
    "parse_document",
    "parse_las_text",
    "read_las_text",
    "try_parse_document",
]
