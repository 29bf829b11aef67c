#!/usr/bin/env python3
"""
Data model for translation items.

TranslationItem is one translatable key with per-language text and the
platforms it applies to. TranslationSet is the frozen result of an
ingestion (and optional client merge); TranslationSetBuilder is the only
mutable form, used while client overrides are merged in.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping


class Platform(Enum):
    """The platforms the translations can be generated for."""
    IOS = "ios"
    ANDROID = "android"

    @classmethod
    def from_name(cls, name: str) -> "Platform":
        """Resolve a platform from a case-insensitive name (ios/android)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            available = ', '.join(p.value for p in cls)
            raise ValueError(f"Unknown platform: {name}. Available: {available}")


@dataclass(frozen=True)
class TranslationItem:
    """
    A single translatable string.

    Attributes:
        key: Item key (never blank once ingested)
        platforms: Platforms the item applies to
        translations: Language name -> translated text, in ingestion language order
        section: Grouping label; empty means "same section as the previous item"
    """
    key: str
    platforms: frozenset
    translations: Mapping[str, str] = field(default_factory=dict)
    section: str = ""

    def matches(self, other: "TranslationItem") -> bool:
        """Whether both items describe the same key on the same platforms."""
        return self.key == other.key and set(self.platforms) == set(other.platforms)

    def __str__(self) -> str:
        return f"{self.key} ({len(self.translations)} translations)"


@dataclass(frozen=True)
class TranslationSet:
    """Parsed translations: ordered items plus the languages and keys seen."""
    items: tuple = ()
    languages: tuple = ()
    keys: tuple = ()

    def __iter__(self) -> Iterator[TranslationItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class TranslationSetBuilder:
    """
    Mutable working copy of a translation set.

    Items in a builder own plain dict translation maps, so the override
    merge can update them in place. ``freeze()`` hands back an immutable
    TranslationSet; the builder should not be used afterwards.
    """

    def __init__(
        self,
        items: Iterable[TranslationItem] = (),
        languages: Iterable[str] = (),
        keys: Iterable[str] = (),
    ):
        self.items: list[TranslationItem] = [_thaw(item) for item in items]
        self.languages = list(languages)
        self.keys = list(keys)

    @classmethod
    def from_set(cls, translation_set: TranslationSet) -> "TranslationSetBuilder":
        """Start a builder from a frozen set (translation maps are copied)."""
        return cls(translation_set.items, translation_set.languages, translation_set.keys)

    def append(self, item: TranslationItem) -> None:
        self.items.append(_thaw(item))
        self.keys.append(item.key)

    def __len__(self) -> int:
        return len(self.items)

    def freeze(self) -> TranslationSet:
        """Return an immutable snapshot of the current items."""
        return TranslationSet(
            items=tuple(
                replace(item, translations=MappingProxyType(dict(item.translations)))
                for item in self.items
            ),
            languages=tuple(self.languages),
            keys=tuple(self.keys),
        )


def _thaw(item: TranslationItem) -> TranslationItem:
    return replace(item, translations=dict(item.translations))
