#!/usr/bin/env python3
"""
Translation writers for the supported platforms.

Supported outputs:
- Android: res/values*/strings.xml
- iOS: *.lproj/Localizable.strings
- iOS: TranslationKey.swift key constants
"""

from .base import (
    EmissionReport,
    LanguageResult,
    Translation,
    TranslationWriter,
    parse_cdata_parts,
)
from .android_xml import AndroidXmlWriter, escape_apostrophes
from .ios_strings import IosStringsWriter, to_ios_format
from .ios_keys import IosKeysWriter, KeyCaseType, format_key

__all__ = [
    'AndroidXmlWriter',
    'EmissionReport',
    'IosKeysWriter',
    'IosStringsWriter',
    'KeyCaseType',
    'LanguageResult',
    'Translation',
    'TranslationWriter',
    'escape_apostrophes',
    'format_key',
    'parse_cdata_parts',
    'to_ios_format',
]
