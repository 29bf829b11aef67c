#!/usr/bin/env python3
"""
Tests for translation table parsing.

Tests verify:
1. Languages, items and keys are read in table order
2. Sections carry over to rows without one
3. Platform markers (including swapped marker columns)
4. Malformed rows, missing files, debug mode and language fallback
"""

import logging

import pytest

from stringsgen.errors import MalformedRowError
from stringsgen.languages import LanguageCodeResolver
from stringsgen.model import Platform
from stringsgen.parser import parse_rows, parse_translations


def test_languages_items_and_keys(default_csv):
    """Blank-key rows are dropped, everything else is kept in order."""
    data = parse_translations(default_csv)

    assert data.languages == ("English", "German")
    assert [item.key for item in data] == ["key_ok", "key_cancel", "key_error", "key_ios_only"]
    assert data.keys == ("key_ok", "key_cancel", "key_error", "key_ios_only")
    assert data.items[1].translations == {"English": "Cancel", "German": "Abbrechen"}


def test_item_count_never_exceeds_data_rows(write_csv):
    rows = [
        "Section;Key;Android;iOS;Notes;English",
        ";a;x;x;;A",
        ";;x;x;;no key",
        ";   ;x;x;;blank key",
    ]
    data = parse_translations(write_csv(rows))

    assert len(data) == 1
    assert len(data) <= len(rows) - 1


def test_translation_order_follows_language_columns(default_csv):
    data = parse_translations(default_csv)

    assert list(data.items[0].translations) == ["English", "German"]


def test_sections_are_inherited(default_csv):
    data = parse_translations(default_csv)
    sections = {item.key: item.section for item in data}

    assert sections == {
        "key_ok": "General",
        "key_cancel": "General",
        "key_error": "Errors",
        "key_ios_only": "Errors",
    }


def test_section_starts_empty(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        ";first;x;x;;First",
    ]))

    assert data.items[0].section == ""


def test_platform_markers(default_csv):
    platforms = {item.key: item.platforms for item in parse_translations(default_csv)}

    assert platforms["key_ok"] == {Platform.IOS, Platform.ANDROID}
    assert platforms["key_error"] == {Platform.ANDROID}
    assert platforms["key_ios_only"] == {Platform.IOS}


def test_platform_marker_must_be_exactly_x(write_csv):
    """Only a lower-case "x" counts; other non-empty values don't."""
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        ";upper;X;X;;a",
        ";words;yes;true;;b",
        ";padded; x;x ;;c",
    ]))

    assert all(item.platforms == frozenset() for item in data)


def test_swapped_marker_columns(write_csv):
    """An iOS;Android header gives the same platforms as Android;iOS."""
    regular = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        ";android_only;x;;;a",
        ";ios_only;;x;;b",
        ";both;x;x;;c",
    ], name="regular.csv"))
    swapped = parse_translations(write_csv([
        "Section;Key;iOS;Android;Notes;English",
        ";android_only;;x;;a",
        ";ios_only;x;;;b",
        ";both;x;x;;c",
    ], name="swapped.csv"))

    assert [i.platforms for i in regular] == [i.platforms for i in swapped]
    assert swapped.items[0].platforms == {Platform.ANDROID}


def test_swap_detection_is_case_insensitive(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;IOS app;ANDROID app;Notes;English",
        ";k;x;;;a",
    ]))

    assert data.items[0].platforms == {Platform.IOS}


def test_malformed_row_raises(write_csv):
    path = write_csv([
        "Section;Key;Android;iOS;Notes;English;German",
        ";fine;x;x;;a;b",
        ";broken;x;x;;a",
    ])

    with pytest.raises(MalformedRowError) as exc_info:
        parse_translations(path)

    assert exc_info.value.row_number == 3
    assert ";broken;x;x;;a" in str(exc_info.value)


def test_short_header_raises():
    with pytest.raises(MalformedRowError) as exc_info:
        parse_rows([["Section", "Key", "Android"]])

    assert exc_info.value.row_number == 1


def test_blank_lines_are_ignored(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        "",
        ";a;x;x;;A",
        "",
        ";b;x;x;;B",
    ]))

    assert [item.key for item in data] == ["a", "b"]


def test_escaped_delimiter(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        r";k;x;x;;one\; two",
    ]))

    assert data.items[0].translations["English"] == "one; two"


def test_control_escapes_become_characters(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        r";k;x;x;;Line1\nLine2\tend",
    ]))

    assert data.items[0].translations["English"] == "Line1\nLine2\tend"


def test_other_escapes_keep_backslash(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        r";k;x;x;;it\'s \@home",
    ]))

    assert data.items[0].translations["English"] == r"it\'s \@home"


def test_escaped_quote_and_backslash(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        r';k;x;x;;Say \"hi\" C:\\new',
    ]))

    assert data.items[0].translations["English"] == 'Say "hi" C:\\new'


def test_escapes_inside_quoted_cells(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        r';k;x;x;;"one; two\nthree"',
    ]))

    assert data.items[0].translations["English"] == "one; two\nthree"


def test_malformed_row_number_counts_blank_lines(write_csv):
    path = write_csv([
        "Section;Key;Android;iOS;Notes;English;German",
        ";fine;x;x;;a;b",
        "",
        ";broken;x;x;;a",
    ])

    with pytest.raises(MalformedRowError) as exc_info:
        parse_translations(path)

    assert exc_info.value.row_number == 4


def test_quoted_cells(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English",
        ';k;x;x;;"Hello; ""world"""',
    ]))

    assert data.items[0].translations["English"] == 'Hello; "world"'


def test_missing_file_yields_empty_set(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        data = parse_translations(tmp_path / "nope.csv")

    assert len(data) == 0
    assert data.languages == ()
    assert "doesn't exist" in caplog.text


def test_undecodable_file_yields_empty_set(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes("Section;Key;Android;iOS;Notes;Deutsch\n;k;x;x;;Gr\xfc\xdfe\n".encode("latin-1"))

    assert len(parse_translations(path)) == 0


def test_debug_mode_uses_keys(write_csv):
    data = parse_translations(write_csv([
        "Section;Key;Android;iOS;Notes;English;German",
        ";key_ok;x;x;;OK;",
    ]), debug_mode=True)

    assert data.items[0].translations == {"English": "key_ok", "German": "key_ok"}


def test_fallback_to_first_language(write_csv):
    lines = [
        "Section;Key;Android;iOS;Notes;English;German;French",
        ";key_ok;x;x;;OK;;  ",
    ]
    with_fallback = parse_translations(write_csv(lines), fallback_to_default_language=True)
    without = parse_translations(write_csv(lines, name="again.csv"))

    assert with_fallback.items[0].translations == {"English": "OK", "German": "OK", "French": "OK"}
    assert without.items[0].translations == {"English": "OK", "German": "", "French": "  "}


def test_parsed_translations_are_read_only(default_csv):
    item = parse_translations(default_csv).items[0]

    with pytest.raises(TypeError):
        item.translations["English"] = "changed"


def test_unknown_language_is_reported_not_fatal(write_csv, caplog):
    with caplog.at_level(logging.WARNING):
        data = parse_translations(write_csv([
            "Section;Key;Android;iOS;Notes;English;Germann",
            ";k;x;x;;a;b",
        ]), resolver=LanguageCodeResolver())

    assert data.languages == ("English", "Germann")
    assert "Germann" in caplog.text
    assert "german" in caplog.text


def test_custom_delimiter(write_csv):
    data = parse_translations(write_csv([
        "Section,Key,Android,iOS,Notes,English",
        ",k,x,,,a",
    ]), delimiter=",")

    assert data.items[0].platforms == {Platform.ANDROID}
