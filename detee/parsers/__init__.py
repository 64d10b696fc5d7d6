"""Output classifier and parser registry for DeeTEE CLI text."""

from __future__ import annotations

import logging

from detee.models import OutputShape, RawOutput, StructuredRecord

from .account import AccountInfoParser
from .base import BaseParser, ParserError
from .container import ContainerIdParser
from .generic import GenericParser
from .version import VersionInfoParser
from .vm_created import VmCreatedParser
from .vm_table import VmTableParser, parse_table
from .vm_update import VmUpdateParser

logger = logging.getLogger("detee.parsers")

# Evaluation order matters: markers are not mutually exclusive and the first
# match wins. GenericParser must stay last.
_PARSER_CLASSES: tuple[type[BaseParser], ...] = (
    VersionInfoParser,
    ContainerIdParser,
    AccountInfoParser,
    VmCreatedParser,
    VmTableParser,
    VmUpdateParser,
    GenericParser,
)


def classify(text: str) -> OutputShape:
    """Return the shape of ``text``; falls back to ``OutputShape.GENERIC``."""
    for parser_cls in _PARSER_CLASSES:
        if parser_cls.detect(text):
            return parser_cls.shape
    return OutputShape.GENERIC


def get_parser(name: str | OutputShape) -> BaseParser:
    """Look a parser up by shape tag (``"VmTable"``) or parser name (``"vm_table"``)."""
    key = name.value if isinstance(name, OutputShape) else (name or "")
    for parser_cls in _PARSER_CLASSES:
        if key in (parser_cls.shape.value, parser_cls.name):
            return parser_cls()
    raise ParserError(f"No parser registered for '{name}'")


def translate(text: str, command: str | None = None) -> StructuredRecord:
    """Classify raw CLI output and extract the matching structured record."""
    raw = RawOutput(text=text, command=command)
    shape = classify(raw.text)
    logger.debug("Classified output of %r as %s", command, shape.value)
    return get_parser(shape).parse(raw)


__all__ = [
    "BaseParser",
    "ParserError",
    "classify",
    "get_parser",
    "parse_table",
    "translate",
]
