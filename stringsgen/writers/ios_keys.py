#!/usr/bin/env python3
"""
iOS translation key constants writer.

Generates a Swift struct with one constant per iOS key, so the app can
refer to keys without string literals:

```swift
struct TranslationKey {

	// General
	static let keyOk = "key_ok"
}
```
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from ..languages import LanguageCodeResolver
from ..model import Platform, TranslationItem
from .base import Translation, TranslationWriter, section_changes


class KeyCaseType(Enum):
    """How keys are turned into Swift identifiers."""
    PASCAL = "pascal"
    CAMEL = "camel"
    SNAKE = "snake"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["KeyCaseType"]:
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            available = ', '.join(c.value.capitalize() for c in cls)
            raise ValueError(f"Unknown iOS key case type: {name}. Available: {available}")


def format_key(key: str, case_type: Optional[KeyCaseType]) -> str:
    """
    Swift identifier for a key.

    Pascal: key_ok -> KeyOk, Camel: key_ok -> keyOk, Snake/None: unchanged.
    """
    if case_type is None or case_type is KeyCaseType.SNAKE:
        return key

    pascal = ''.join(part[:1].upper() + part[1:] for part in key.split('_'))
    if case_type is KeyCaseType.PASCAL:
        return pascal
    if not pascal.strip():
        return key
    return pascal[0].lower() + pascal[1:]


class IosKeysWriter(TranslationWriter):
    """
    Writes <module>/Localization/TranslationKey.swift.

    Runs once per client over its default language, not per target language.
    """

    def __init__(
        self,
        client_name: str,
        resolver: LanguageCodeResolver,
        items: Sequence[TranslationItem],
        default_language: str,
        output_root,
        module_path: Optional[str] = None,
        case_type: Optional[KeyCaseType] = None,
        verbose: bool = False,
    ):
        super().__init__(
            client_name,
            resolver,
            items,
            [default_language],
            default_language,
            output_root,
            module_path=module_path,
            verbose=verbose,
        )
        self.case_type = case_type

    @property
    def platform(self) -> Platform:
        return Platform.IOS

    @property
    def name(self) -> str:
        return "swift-keys"

    def requires_language_code(self, language: str) -> bool:
        return False

    def output_path_template(
        self,
        module_path: str,
        language: str,
        default_language: str,
        language_code: Optional[str],
    ) -> Path:
        return Path(module_path) / 'Localization' / 'TranslationKey.swift'

    def render(self, translations: list[Translation], path: Path) -> str:
        lines = [
            '//',
            f'//  {path.name}',
            f'//  {self.client_name}',
            '//',
            '//',
            '// swiftlint:disable:next type_body_length',
            'struct TranslationKey {',
        ]
        for section, translation in section_changes(translations):
            if section is not None:
                lines.append('')
                lines.append(f'\t// {section}')
            identifier = format_key(translation.key, self.case_type)
            lines.append(f'\tstatic let {identifier} = "{translation.key}"')
        lines.append('}')
        return '\n'.join(lines) + '\n'
