#!/usr/bin/env python3
"""
iOS Localizable.strings writer.

Output structure:
```
// General
"key_ok" = "OK";
"key_welcome" = "Welcome, %@!";
```
"""

import re
from pathlib import Path
from typing import Optional

from ..model import Platform
from .base import Translation, TranslationWriter, parse_cdata_parts, section_changes

# "%1$s" -> "%1$@": only the trailing "s" of an indexed placeholder changes
INDEXED_STRING_PLACEHOLDER = re.compile(r'(%\d+\$)s')

UNESCAPED_QUOTE = re.compile(r'(?<!\\)"')
CONTROL_ESCAPES = (('\n', '\\n'), ('\r', '\\r'), ('\t', '\\t'))


def to_ios_format(text: str) -> str:
    """Convert Java-style string placeholders (%s, %1$s) to %@ / %1$@."""
    text = text.replace('%s', '%@')
    return INDEXED_STRING_PLACEHOLDER.sub(r'\1@', text)


def escape_value(text: str) -> str:
    r"""
    Escape text for a quoted .strings value.

    Double quotes not already escaped get a backslash, and control
    characters are written as \n, \r and \t escapes.
    """
    text = UNESCAPED_QUOTE.sub(r'\\"', text)
    for char, escaped in CONTROL_ESCAPES:
        text = text.replace(char, escaped)
    return text


def strip_cdata(text: str) -> str:
    """Replace CDATA sections with their literal content."""
    return ''.join(part for _, part in parse_cdata_parts(text))


class IosStringsWriter(TranslationWriter):
    """Writes <module>/Localization/<code>.lproj/Localizable.strings files."""

    @property
    def platform(self) -> Platform:
        return Platform.IOS

    @property
    def name(self) -> str:
        return "strings"

    def output_path_template(
        self,
        module_path: str,
        language: str,
        default_language: str,
        language_code: Optional[str],
    ) -> Path:
        return Path(module_path) / 'Localization' / f'{language_code}.lproj' / 'Localizable.strings'

    def render(self, translations: list[Translation], path: Path) -> str:
        lines = []
        for section, translation in section_changes(translations):
            if section is not None:
                lines.append(f'// {section}')
            text = escape_value(to_ios_format(strip_cdata(translation.text)))
            lines.append(f'"{translation.key}" = "{text}";')
        return ''.join(f'{line}\n' for line in lines)
