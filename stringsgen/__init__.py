"""
stringsgen - Android and iOS string resources from a translations table

Reads a ';' delimited translations table (one row per key, one column per
language), merges optional client-specific tables over it, and writes
strings.xml, Localizable.strings and TranslationKey.swift files for every
client configured in the settings file.

Quick start:
    stringsgen generate --project .. --csv-folder translations
    stringsgen generate --client mainClient --platform ios --create-missing
"""

__version__ = "1.0.0"

from .errors import (
    ClientPathMissingError,
    MalformedRowError,
    MissingFileError,
    OutputPathMissingError,
    SettingsError,
    StringsGenError,
    UnknownLanguageError,
)
from .languages import LanguageCodeResolver
from .merge import MergeResult, override_translations
from .model import Platform, TranslationItem, TranslationSet, TranslationSetBuilder
from .parser import parse_translations

__all__ = [
    "ClientPathMissingError",
    "LanguageCodeResolver",
    "MalformedRowError",
    "MergeResult",
    "MissingFileError",
    "OutputPathMissingError",
    "Platform",
    "SettingsError",
    "StringsGenError",
    "TranslationItem",
    "TranslationSet",
    "TranslationSetBuilder",
    "UnknownLanguageError",
    "override_translations",
    "parse_translations",
]
