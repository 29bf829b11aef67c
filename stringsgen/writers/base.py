#!/usr/bin/env python3
"""
Base classes for translation writers.

TranslationWriter is the abstract base class every platform writer
implements. It resolves one output file per language, filters the items
that are valid for its platform and that language, and hands the ordered
Translation view to the concrete writer for rendering.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ..errors import ClientPathMissingError, StringsGenError, UnknownLanguageError
from ..languages import LanguageCodeResolver
from ..model import Platform, TranslationItem

logger = logging.getLogger(__name__)

CDATA_PATTERN = re.compile(r'<!\[CDATA\[(.*?)]]>', re.DOTALL)


@dataclass
class Translation:
    """A single translation to be written."""
    key: str
    text: str
    section: str = ""


@dataclass
class LanguageResult:
    """Outcome of writing one language's file."""
    language: str
    path: Optional[Path]
    success: bool
    item_count: int = 0
    error: Optional[str] = None


@dataclass
class EmissionReport:
    """Per-language outcomes of one writer run."""
    client_name: str
    platform: Platform
    writer: str
    results: list[LanguageResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True only if every language was written."""
        return all(result.success for result in self.results)

    @property
    def paths(self) -> list[Path]:
        return [result.path for result in self.results if result.path is not None]

    def to_dict(self) -> dict:
        return {
            'client': self.client_name,
            'platform': self.platform.value,
            'writer': self.writer,
            'success': self.success,
            'files': [
                {
                    'language': r.language,
                    'path': str(r.path) if r.path else None,
                    'items': r.item_count,
                    'success': r.success,
                    'error': r.error,
                }
                for r in self.results
            ],
        }


def parse_cdata_parts(text: str) -> list[tuple[bool, str]]:
    """
    Split text into plain and CDATA parts.

    ``"a<![CDATA[b]]>c"`` becomes ``[(False, "a"), (True, "b"), (False, "c")]``.
    Empty CDATA sections are dropped.

    Args:
        text: Translation text, possibly with embedded CDATA sections

    Returns:
        List of (is_cdata, text) tuples in order
    """
    matches = list(CDATA_PATTERN.finditer(text))
    if not matches:
        return [(False, text)]

    parts = []
    position = 0
    for match in matches:
        if match.start() > position:
            parts.append((False, text[position:match.start()]))
        if match.group(1):
            parts.append((True, match.group(1)))
        position = match.end()
    if position < len(text):
        parts.append((False, text[position:]))
    return parts


class TranslationWriter(ABC):
    """
    Abstract base class for platform writers.

    A writer is bound to one client: its items (already merged with the
    client's overrides), its target languages and default language, and
    the directory of its platform module relative to ``output_root``.
    """

    def __init__(
        self,
        client_name: str,
        resolver: LanguageCodeResolver,
        items: Sequence[TranslationItem],
        languages: Sequence[str],
        default_language: str,
        output_root,
        module_path: Optional[str] = None,
        verbose: bool = False,
    ):
        self.client_name = client_name
        self.resolver = resolver
        self.items = list(items)
        self.languages = list(languages)
        self.default_language = default_language
        self.output_root = Path(output_root)
        self.module_path = module_path or client_name
        self.verbose = verbose

    @property
    @abstractmethod
    def platform(self) -> Platform:
        """The platform this writer emits for."""
        pass

    @property
    def name(self) -> str:
        """Human-readable writer name used in diagnostics."""
        return self.platform.value

    @abstractmethod
    def output_path_template(
        self,
        module_path: str,
        language: str,
        default_language: str,
        language_code: Optional[str],
    ) -> Path:
        """
        Relative output file path for a language.

        Must be a pure function of its arguments (no file system access).
        """
        pass

    @abstractmethod
    def render(self, translations: list[Translation], path: Path) -> str:
        """
        Render the translations into the file content.

        Args:
            translations: Filtered, ordered translations for one language
            path: Destination file (some formats mention it in a header)

        Returns:
            Complete file content
        """
        pass

    def requires_language_code(self, language: str) -> bool:
        """Whether output_path_template needs a resolved code for this language."""
        return True

    def resolve_output_path(self, language: str) -> Path:
        """
        Absolute output path for a language.

        Raises:
            UnknownLanguageError: if a needed language code can't be resolved
        """
        code = self.resolver.resolve(language) if self.requires_language_code(language) else None
        relative = self.output_path_template(self.module_path, language, self.default_language, code)
        return self.output_root / relative

    def get_all_resolved_paths(self, languages: Optional[Sequence[str]] = None) -> list[Path]:
        """
        Output paths for all (or the given) languages.

        Used to check up front that every file can be written. Languages
        that can't be resolved are reported and left out.
        """
        paths = []
        for language in self.languages if languages is None else languages:
            try:
                paths.append(self.resolve_output_path(language))
            except UnknownLanguageError as e:
                logger.error(f"[{self.client_name}/{self.name}/{language}] {e}")
        return paths

    def is_valid_item(self, item: TranslationItem, language: str) -> bool:
        """Whether the item will be written for the given language."""
        if not item.key.strip():
            return False

        if self.platform not in item.platforms:
            return False

        if language not in item.translations:
            if self.verbose:
                logger.warning(f"There is no translation for item {item.key} in {language}")
            return False

        if not item.translations[language]:
            if self.verbose:
                logger.warning(f"Translation for item {item.key} in {language} is empty and will be skipped.")
            return False

        return True

    def build_translations(self, language: str) -> list[Translation]:
        """Filtered, ordered view of the items for one language."""
        return [
            Translation(key=item.key, text=item.translations[language], section=item.section)
            for item in self.items
            if self.is_valid_item(item, language)
        ]

    def write(self, translations: list[Translation], path: Path) -> None:
        """
        Write the translations to a file. The parent directory must exist.

        Raises:
            ClientPathMissingError: if the output directory doesn't exist
        """
        if not path.parent.is_dir():
            raise ClientPathMissingError(self.client_name, path)
        content = self.render(translations, path)
        with open(path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(content)

    def write_all(self) -> EmissionReport:
        """
        Write the file of every target language.

        A failing language is reported and doesn't stop the others.
        """
        report = EmissionReport(self.client_name, self.platform, self.name)
        for language in self.languages:
            path = None
            try:
                path = self.resolve_output_path(language)
                translations = self.build_translations(language)
                self.write(translations, path)
            except (StringsGenError, OSError) as e:
                logger.error(f"[{self.client_name}/{self.name}/{language}] {path or '-'}: {e}")
                report.results.append(LanguageResult(language, path, False, error=str(e)))
                continue
            logger.debug(f"[{self.client_name}/{self.name}/{language}] wrote {len(translations)} items to {path}")
            report.results.append(LanguageResult(language, path, True, len(translations)))
        return report


def section_changes(translations: Sequence[Translation]):
    """
    Yield (new_section, translation) pairs.

    new_section is the section to announce before the translation, or None
    when the section didn't change (or the item has none).
    """
    current = ""
    for translation in translations:
        if translation.section and translation.section != current:
            current = translation.section
            yield current, translation
        else:
            yield None, translation
