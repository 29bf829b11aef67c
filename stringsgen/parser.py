#!/usr/bin/env python3
"""
Translation table (.csv) parser.

Table layout:
```
Section;Key;Android;iOS;Notes;English;German
General;key_ok;x;x;OK button;OK;OK
;key_cancel;x;;;Cancel;Abbrechen
```

The first five columns are fixed (the Android and iOS marker columns may
be swapped, which is detected from the header). Every following column is
a language. An "x" in a marker column makes the row available on that
platform.
"""

import csv
import logging
import re
from enum import IntEnum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Optional

from .errors import MalformedRowError, MissingFileError
from .languages import LanguageCodeResolver
from .model import Platform, TranslationItem, TranslationSet

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ';'
ESCAPE_CHAR = '\\'
PLATFORM_MARKER = 'x'

ESCAPE_SEQUENCE = re.compile(r'\\(.)')
CONTROL_ESCAPE = re.compile(r'\\([nrtbf])')
CONTROL_CHARS = {'n': '\n', 'r': '\r', 't': '\t', 'b': '\b', 'f': '\f'}

# First private-use code point; stands in for escaped characters while the
# csv module splits the row
PLACEHOLDER_BASE = 0xE000


class EscapeDecoder:
    """
    Backslash escapes of the translations table.

    - ``\\n``, ``\\r``, ``\\t``, ``\\b`` and ``\\f`` become control characters
    - ``\\;`` (the delimiter), ``\\"`` and ``\\\\`` become the plain character
    - any other escape is kept as written, so ``it\\'s`` stays ``it\\'s``

    Escaped literals are swapped for placeholders before the csv module
    sees the line (an escaped delimiter must not split the cell) and put
    back in every cell afterwards.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER):
        self.delimiter = delimiter
        literals = dict.fromkeys((ESCAPE_CHAR, '"', delimiter))
        self.placeholders = {
            char: chr(PLACEHOLDER_BASE + idx) for idx, char in enumerate(literals)
        }

    def protect(self, line: str) -> str:
        """Replace escaped literals in a raw line with placeholders."""
        return ESCAPE_SEQUENCE.sub(
            lambda m: self.placeholders.get(m.group(1), m.group(0)), line
        )

    def decode(self, cell: str) -> str:
        """Resolve the escapes of a cell split from protected lines."""
        cell = CONTROL_ESCAPE.sub(lambda m: CONTROL_CHARS[m.group(1)], cell)
        for char, placeholder in self.placeholders.items():
            cell = cell.replace(placeholder, char)
        return cell

    def read(self, lines: Iterable[str]):
        """Yield decoded rows of a table given as lines."""
        reader = csv.reader((self.protect(line) for line in lines), delimiter=self.delimiter)
        for row in reader:
            yield [self.decode(cell) for cell in row]


class HeaderColumn(IntEnum):
    """The fixed columns at the start of every table."""
    SECTION = 0
    KEY = 1
    ANDROID = 2
    IOS = 3
    NOTES = 4


FIXED_COLUMN_COUNT = len(HeaderColumn)


def parse_translations(
    csv_path,
    debug_mode: bool = False,
    fallback_to_default_language: bool = False,
    delimiter: str = DEFAULT_DELIMITER,
    resolver: Optional[LanguageCodeResolver] = None,
) -> TranslationSet:
    """
    Parse a translations table file.

    A missing or undecodable file is logged and yields an empty set so that
    callers can carry on with the other files.

    Args:
        csv_path: Path to the .csv file
        debug_mode: Replace every translation with its key
        fallback_to_default_language: Fill blank cells with the first language's text
        delimiter: Column delimiter (default ';')
        resolver: Optional resolver used to report unknown language columns

    Returns:
        Parsed TranslationSet

    Raises:
        MalformedRowError: if a row's column count doesn't match the header
    """
    path = Path(csv_path)
    try:
        with open(path, encoding='utf-8-sig', newline='') as f:
            return parse_rows(
                EscapeDecoder(delimiter).read(f),
                debug_mode=debug_mode,
                fallback_to_default_language=fallback_to_default_language,
                delimiter=delimiter,
                resolver=resolver,
            )
    except FileNotFoundError:
        logger.error(str(MissingFileError(path, "Translations file")))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.error(f"Cannot read translations file {path}: {e}")
    return TranslationSet()


def parse_rows(
    rows: Iterable[list[str]],
    debug_mode: bool = False,
    fallback_to_default_language: bool = False,
    delimiter: str = DEFAULT_DELIMITER,
    resolver: Optional[LanguageCodeResolver] = None,
) -> TranslationSet:
    """
    Build a TranslationSet from already split table rows (header first).

    Blank lines are ignored, but still count for the row numbers reported
    in errors. Rows with a blank key are skipped.
    """
    records = ((number, row) for number, row in enumerate(rows, start=1) if row)

    header_number, header = next(records, (0, None))
    if header is None:
        logger.warning("Translations table is empty")
        return TranslationSet()

    if len(header) < FIXED_COLUMN_COUNT:
        raise MalformedRowError(
            header_number,
            delimiter.join(header),
            f"Header has {len(header)} columns, expected at least {FIXED_COLUMN_COUNT}.",
        )

    android_idx, ios_idx = _marker_columns(header)

    languages: list[str] = []
    language_indices: dict[str, int] = {}
    for idx in range(FIXED_COLUMN_COUNT, len(header)):
        language = header[idx].strip()
        if language in language_indices:
            logger.warning(f"Language column {language} appears more than once; using the first one")
            continue
        languages.append(language)
        language_indices[language] = idx
        if resolver is not None:
            resolver.warn_if_unknown(language)

    items: list[TranslationItem] = []
    keys: list[str] = []
    current_section = ""

    for record_number, record in records:
        section = record[HeaderColumn.SECTION]
        if section:
            current_section = section

        if len(record) != len(header):
            raise MalformedRowError(record_number, delimiter.join(record))

        key = record[HeaderColumn.KEY]
        if not key.strip():
            continue

        platforms = set()
        if record[ios_idx] == PLATFORM_MARKER:
            platforms.add(Platform.IOS)
        if record[android_idx] == PLATFORM_MARKER:
            platforms.add(Platform.ANDROID)

        translations: dict[str, str] = {}
        for language in languages:
            if debug_mode:
                translations[language] = key
                continue
            text = record[language_indices[language]]
            if fallback_to_default_language and not text.strip():
                text = record[language_indices[languages[0]]]
            translations[language] = text

        items.append(TranslationItem(
            key=key,
            platforms=frozenset(platforms),
            translations=MappingProxyType(translations),
            section=current_section,
        ))
        keys.append(key)

    logger.debug(f"Parsed {len(items)} items in {len(languages)} languages")
    return TranslationSet(items=tuple(items), languages=tuple(languages), keys=tuple(keys))


def _marker_columns(header: list[str]) -> tuple[int, int]:
    """Return (android_idx, ios_idx), swapping them if the header says so."""
    android_header = header[HeaderColumn.ANDROID].lower()
    ios_header = header[HeaderColumn.IOS].lower()
    if 'ios' in android_header or 'android' in ios_header:
        return HeaderColumn.IOS, HeaderColumn.ANDROID
    return HeaderColumn.ANDROID, HeaderColumn.IOS
