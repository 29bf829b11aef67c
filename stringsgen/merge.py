#!/usr/bin/env python3
"""
Client override merge.

A client may ship its own translations table next to the shared default
one. Client items that match a default item (same key, same platforms)
override that item's languages; anything else is appended as a new item.
"""

import logging
from typing import Iterable, NamedTuple

from .model import TranslationItem, TranslationSetBuilder

logger = logging.getLogger(__name__)


class MergeResult(NamedTuple):
    """Number of default items overridden and client items added."""
    overridden: int
    added: int


def override_translations(
    default_items: TranslationSetBuilder,
    client_items: Iterable[TranslationItem],
) -> MergeResult:
    """
    Merge client-specific items into the default items, in place.

    Only the languages present in a client item are written over the
    matching default item; its other languages are kept. Client items are
    processed in order, so for duplicates the last one wins.

    Args:
        default_items: Working copy of the default translations (mutated)
        client_items: Client-specific items (not modified)

    Returns:
        MergeResult(overridden, added)
    """
    overridden = 0
    added = 0

    for client_item in client_items:
        match = next(
            (item for item in default_items.items if item.matches(client_item)),
            None,
        )
        if match is not None:
            match.translations.update(client_item.translations)
            overridden += 1
        else:
            default_items.append(client_item)
            added += 1

    logger.debug(f"Merge: {overridden} overridden, {added} added")
    return MergeResult(overridden, added)
