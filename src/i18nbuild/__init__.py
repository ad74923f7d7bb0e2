from i18nbuild.catalog import render_catalog
from i18nbuild.classes import MessageEntry, MessageTable, PlaceholderDef
from i18nbuild.declaration import DEFAULT_SUBSTITUTION_TYPE, render_declaration
from i18nbuild.errors import (
    I18nBuildError,
    ParseError,
    StructuralError,
    UnsupportedFormatError,
)
from i18nbuild.formats import Deserializer, deserializer_for
from i18nbuild.parser import normalize, parse

__all__ = [
    "DEFAULT_SUBSTITUTION_TYPE",
    "Deserializer",
    "I18nBuildError",
    "MessageEntry",
    "MessageTable",
    "ParseError",
    "PlaceholderDef",
    "StructuralError",
    "UnsupportedFormatError",
    "deserializer_for",
    "normalize",
    "parse",
    "render_catalog",
    "render_declaration",
]
