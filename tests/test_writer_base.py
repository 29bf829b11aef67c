#!/usr/bin/env python3
"""
Tests for the shared writer behaviour.

Tests verify:
1. CDATA detection splits text into plain and CDATA parts
2. Items are filtered by platform and by missing/empty translations
3. Output paths per platform and language
4. One failing language doesn't stop the others
"""

import logging

from stringsgen.languages import LanguageCodeResolver
from stringsgen.model import Platform, TranslationItem
from stringsgen.writers import AndroidXmlWriter, IosStringsWriter, parse_cdata_parts

BOTH = frozenset({Platform.IOS, Platform.ANDROID})


def make_items():
    return [
        TranslationItem("key_ok", BOTH, {"English": "OK", "German": "OK"}, "General"),
        TranslationItem("key_android", frozenset({Platform.ANDROID}), {"English": "Droid", "German": "Droid"}),
        TranslationItem("key_missing", BOTH, {"English": "Only English"}),
        TranslationItem("key_empty", BOTH, {"English": "Empty German", "German": ""}),
        TranslationItem("", BOTH, {"English": "No key", "German": "Kein Key"}),
    ]


def make_writer(cls, root, languages=("English", "German"), **kwargs):
    return cls("mainClient", LanguageCodeResolver(), make_items(), list(languages), "English", root, **kwargs)


def test_cdata_none():
    assert parse_cdata_parts("plain text") == [(False, "plain text")]


def test_cdata_single():
    assert parse_cdata_parts("a<![CDATA[b]]>c") == [(False, "a"), (True, "b"), (False, "c")]


def test_cdata_multiple():
    text = "<![CDATA[<b>x</b>]]> mid <![CDATA[<i>y</i>]]>"

    assert parse_cdata_parts(text) == [(True, "<b>x</b>"), (False, " mid "), (True, "<i>y</i>")]


def test_cdata_leading_and_trailing_text():
    assert parse_cdata_parts("start <![CDATA[x]]>") == [(False, "start "), (True, "x")]
    assert parse_cdata_parts("<![CDATA[x]]> end") == [(True, "x"), (False, " end")]


def test_cdata_empty_section_is_dropped():
    assert parse_cdata_parts("a<![CDATA[]]>b") == [(False, "a"), (False, "b")]


def test_platform_filter(tmp_path):
    """An Android-only item never shows up for iOS."""
    ios = make_writer(IosStringsWriter, tmp_path)
    android = make_writer(AndroidXmlWriter, tmp_path)

    assert "key_android" not in [t.key for t in ios.build_translations("English")]
    assert "key_android" in [t.key for t in android.build_translations("English")]


def test_missing_and_empty_translations_are_skipped(tmp_path):
    writer = make_writer(AndroidXmlWriter, tmp_path)

    english = [t.key for t in writer.build_translations("English")]
    german = [t.key for t in writer.build_translations("German")]

    assert english == ["key_ok", "key_android", "key_missing", "key_empty"]
    assert german == ["key_ok", "key_android"]


def test_blank_key_is_skipped(tmp_path):
    writer = make_writer(AndroidXmlWriter, tmp_path)

    assert "" not in [t.key for t in writer.build_translations("English")]


def test_translation_view_carries_section(tmp_path):
    writer = make_writer(AndroidXmlWriter, tmp_path)
    first = writer.build_translations("German")[0]

    assert (first.key, first.text, first.section) == ("key_ok", "OK", "General")


def test_verbose_reports_missing_and_empty(tmp_path, caplog):
    quiet = make_writer(AndroidXmlWriter, tmp_path)
    verbose = make_writer(AndroidXmlWriter, tmp_path, verbose=True)

    with caplog.at_level(logging.WARNING):
        quiet.build_translations("German")
    assert caplog.text == ""

    with caplog.at_level(logging.WARNING):
        verbose.build_translations("German")
    assert "There is no translation for item key_missing in German" in caplog.text
    assert "Translation for item key_empty in German is empty" in caplog.text


def test_android_paths(tmp_path):
    writer = make_writer(AndroidXmlWriter, tmp_path)

    assert writer.resolve_output_path("English") == tmp_path / "mainClient/src/main/res/values/strings.xml"
    assert writer.resolve_output_path("German") == tmp_path / "mainClient/src/main/res/values-de/strings.xml"


def test_ios_paths_with_module_override(tmp_path):
    writer = make_writer(IosStringsWriter, tmp_path, module_path="App/Clients/main")

    assert writer.get_all_resolved_paths() == [
        tmp_path / "App/Clients/main/Localization/en.lproj/Localizable.strings",
        tmp_path / "App/Clients/main/Localization/de.lproj/Localizable.strings",
    ]


def test_language_code_mapping(tmp_path):
    resolver = LanguageCodeResolver({"Serbian Latin": "b+sr+Latn"})
    writer = AndroidXmlWriter("c", resolver, [], ["Serbian Latin"], "English", tmp_path)

    assert writer.resolve_output_path("Serbian Latin").parent.name == "values-b+sr+Latn"


def test_unknown_language_path_is_left_out(tmp_path, caplog):
    writer = make_writer(IosStringsWriter, tmp_path, languages=("English", "Klingon"))

    with caplog.at_level(logging.ERROR):
        paths = writer.get_all_resolved_paths()

    assert len(paths) == 1
    assert "Klingon" in caplog.text


def test_write_all_partial_failure(tmp_path):
    """A missing language folder fails that language only."""
    writer = make_writer(AndroidXmlWriter, tmp_path)
    english_path = writer.resolve_output_path("English")
    english_path.parent.mkdir(parents=True)

    report = writer.write_all()

    assert not report.success
    assert [r.success for r in report.results] == [True, False]
    assert report.results[0].item_count == 4
    assert english_path.exists()
    assert "does not exist" in report.results[1].error
    assert not writer.resolve_output_path("German").exists()


def test_write_all_unknown_language(tmp_path):
    writer = make_writer(IosStringsWriter, tmp_path, languages=("English", "Klingon"))
    writer.resolve_output_path("English").parent.mkdir(parents=True)

    report = writer.write_all()

    assert [r.success for r in report.results] == [True, False]
    assert report.results[1].path is None
    assert "Klingon" in report.results[1].error


def test_write_all_success(tmp_path):
    writer = make_writer(IosStringsWriter, tmp_path)
    for path in writer.get_all_resolved_paths():
        path.parent.mkdir(parents=True)

    report = writer.write_all()

    assert report.success
    assert report.paths == writer.get_all_resolved_paths()
    assert report.to_dict()["platform"] == "ios"
