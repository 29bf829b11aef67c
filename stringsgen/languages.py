#!/usr/bin/env python3
"""
Language name -> language code resolution.

The translation table names its language columns by English display name
("English", "German", ...). Output paths need short codes ("en", "de").
LanguageCodeResolver is built once per run from the ISO 639-1 registry
plus the optional mapping from the settings file, and handed to whatever
needs it.
"""

import difflib
import logging
from typing import Mapping, Optional

from .errors import UnknownLanguageError

logger = logging.getLogger(__name__)


# ISO 639-1 English display names (lower case) -> code
ISO_LANGUAGE_CODES = {
    'afar': 'aa', 'abkhazian': 'ab', 'avestan': 'ae', 'afrikaans': 'af',
    'akan': 'ak', 'amharic': 'am', 'aragonese': 'an', 'arabic': 'ar',
    'assamese': 'as', 'avaric': 'av', 'aymara': 'ay', 'azerbaijani': 'az',
    'bashkir': 'ba', 'belarusian': 'be', 'bulgarian': 'bg', 'bihari': 'bh',
    'bislama': 'bi', 'bambara': 'bm', 'bangla': 'bn', 'bengali': 'bn',
    'tibetan': 'bo', 'breton': 'br', 'bosnian': 'bs', 'catalan': 'ca',
    'chechen': 'ce', 'chamorro': 'ch', 'corsican': 'co', 'cree': 'cr',
    'czech': 'cs', 'church slavic': 'cu', 'chuvash': 'cv', 'welsh': 'cy',
    'danish': 'da', 'german': 'de', 'divehi': 'dv', 'dzongkha': 'dz',
    'ewe': 'ee', 'greek': 'el', 'english': 'en', 'esperanto': 'eo',
    'spanish': 'es', 'estonian': 'et', 'basque': 'eu', 'persian': 'fa',
    'fulah': 'ff', 'finnish': 'fi', 'fijian': 'fj', 'faroese': 'fo',
    'french': 'fr', 'western frisian': 'fy', 'irish': 'ga', 'scottish gaelic': 'gd',
    'galician': 'gl', 'guarani': 'gn', 'gujarati': 'gu', 'manx': 'gv',
    'hausa': 'ha', 'hebrew': 'he', 'hindi': 'hi', 'hiri motu': 'ho',
    'croatian': 'hr', 'haitian creole': 'ht', 'hungarian': 'hu', 'armenian': 'hy',
    'herero': 'hz', 'interlingua': 'ia', 'indonesian': 'id', 'interlingue': 'ie',
    'igbo': 'ig', 'sichuan yi': 'ii', 'inupiaq': 'ik', 'ido': 'io',
    'icelandic': 'is', 'italian': 'it', 'inuktitut': 'iu', 'japanese': 'ja',
    'javanese': 'jv', 'georgian': 'ka', 'kongo': 'kg', 'kikuyu': 'ki',
    'kuanyama': 'kj', 'kazakh': 'kk', 'kalaallisut': 'kl', 'khmer': 'km',
    'kannada': 'kn', 'korean': 'ko', 'kanuri': 'kr', 'kashmiri': 'ks',
    'kurdish': 'ku', 'komi': 'kv', 'cornish': 'kw', 'kyrgyz': 'ky',
    'latin': 'la', 'luxembourgish': 'lb', 'ganda': 'lg', 'limburgish': 'li',
    'lingala': 'ln', 'lao': 'lo', 'lithuanian': 'lt', 'luba-katanga': 'lu',
    'latvian': 'lv', 'malagasy': 'mg', 'marshallese': 'mh', 'maori': 'mi',
    'macedonian': 'mk', 'malayalam': 'ml', 'mongolian': 'mn', 'marathi': 'mr',
    'malay': 'ms', 'maltese': 'mt', 'burmese': 'my', 'nauru': 'na',
    'norwegian bokmål': 'nb', 'north ndebele': 'nd', 'nepali': 'ne', 'ndonga': 'ng',
    'dutch': 'nl', 'norwegian nynorsk': 'nn', 'norwegian': 'no', 'south ndebele': 'nr',
    'navajo': 'nv', 'nyanja': 'ny', 'occitan': 'oc', 'ojibwa': 'oj',
    'oromo': 'om', 'odia': 'or', 'ossetic': 'os', 'punjabi': 'pa',
    'pali': 'pi', 'polish': 'pl', 'pashto': 'ps', 'portuguese': 'pt',
    'quechua': 'qu', 'romansh': 'rm', 'rundi': 'rn', 'romanian': 'ro',
    'russian': 'ru', 'kinyarwanda': 'rw', 'sanskrit': 'sa', 'sardinian': 'sc',
    'sindhi': 'sd', 'northern sami': 'se', 'sango': 'sg', 'sinhala': 'si',
    'slovak': 'sk', 'slovenian': 'sl', 'samoan': 'sm', 'shona': 'sn',
    'somali': 'so', 'albanian': 'sq', 'serbian': 'sr', 'swati': 'ss',
    'southern sotho': 'st', 'sundanese': 'su', 'swedish': 'sv', 'swahili': 'sw',
    'tamil': 'ta', 'telugu': 'te', 'tajik': 'tg', 'thai': 'th',
    'tigrinya': 'ti', 'turkmen': 'tk', 'tagalog': 'tl', 'tswana': 'tn',
    'tongan': 'to', 'turkish': 'tr', 'tsonga': 'ts', 'tatar': 'tt',
    'twi': 'tw', 'tahitian': 'ty', 'uyghur': 'ug', 'ukrainian': 'uk',
    'urdu': 'ur', 'uzbek': 'uz', 'venda': 've', 'vietnamese': 'vi',
    'volapük': 'vo', 'walloon': 'wa', 'wolof': 'wo', 'xhosa': 'xh',
    'yiddish': 'yi', 'yoruba': 'yo', 'zhuang': 'za', 'chinese': 'zh',
    'zulu': 'zu',
}


class LanguageCodeResolver:
    """
    Resolves language display names to codes.

    Lookups are case-insensitive. Entries of the settings-provided mapping
    win over the ISO registry, which also lets a table use names like
    "Serbian Latin" or "Chinese Traditional".
    """

    def __init__(
        self,
        overrides: Optional[Mapping[str, str]] = None,
        registry: Mapping[str, str] = ISO_LANGUAGE_CODES,
    ):
        self.registry = dict(registry)
        self.overrides = {name.lower(): code for name, code in (overrides or {}).items()}

    def is_known(self, language: str) -> bool:
        lang = language.strip().lower()
        return lang in self.overrides or lang in self.registry

    def suggestions(self, language: str, limit: int = 5) -> list[str]:
        """
        Near matches for an unknown language name.

        Uses difflib similarity first; when nothing is close enough, falls
        back to registry names starting with the same letter.
        """
        lang = language.strip().lower()
        if not lang:
            return []
        names = list(self.overrides) + list(self.registry)
        matches = difflib.get_close_matches(lang, names, n=limit, cutoff=0.6)
        if matches:
            return matches
        same_letter = [name for name in names if name[0] == lang[0]]
        same_letter.sort(key=lambda name: sum(1 for c in name if c in lang), reverse=True)
        return same_letter[:limit]

    def resolve(self, language: str) -> str:
        """
        Resolve a language name to its code.

        Raises:
            UnknownLanguageError: if neither the mapping nor the registry knows it
        """
        lang = language.strip().lower()
        if lang in self.overrides:
            return self.overrides[lang]
        if lang in self.registry:
            return self.registry[lang]
        raise UnknownLanguageError(language, self.suggestions(language))

    def warn_if_unknown(self, language: str) -> bool:
        """Log a diagnostic for an unknown language. Returns whether it is known."""
        if self.is_known(language):
            return True
        candidates = ', '.join(self.suggestions(language)) or '(none)'
        logger.warning(
            f"Language {language} not among standard ISO English languages. "
            f"Possible candidates: {candidates}"
        )
        return False
