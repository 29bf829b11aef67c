#!/usr/bin/env python3
"""Shared fixtures: small translation tables and a sample project layout."""

import json

import pytest

DEFAULT_TABLE = [
    "Section;Key;Android;iOS;Notes;English;German",
    "General;key_ok;x;x;OK button;OK;OK",
    ";key_cancel;x;x;;Cancel;Abbrechen",
    "Errors;key_error;x;;;Error;Fehler",
    ";key_ios_only;;x;;Only iOS;Nur iOS",
    ";;x;x;row without key;Orphan;Waise",
]

CLIENT_TABLE = [
    "Section;Key;Android;iOS;Notes;English;German",
    "General;key_ok;x;x;;Okay;Okay",
    "Client;key_client;x;;;Client text;Kundentext",
]


@pytest.fixture
def write_csv(tmp_path):
    """Write table lines to a .csv file and return its path."""
    def _write(lines, name="translations.csv", folder=None):
        path = (folder or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def project(tmp_path, write_csv):
    """
    A project folder with translations/settings.json and two tables.

    mainClient: both platforms, English + German, default table only.
    clientTwo: Android only, own table, module in android/clientTwo.
    """
    root = tmp_path / "project"
    folder = root / "translations"
    write_csv(DEFAULT_TABLE, folder=folder)
    write_csv(CLIENT_TABLE, name="translations_clientTwo.csv", folder=folder)
    settings = {
        "iosKeyCaseType": "Camel",
        "targets": [
            {
                "clientName": "mainClient",
                "targetLanguages": ["English", "German"],
                "doIOS": True,
                "doAndroid": True,
                "defaultLanguage": "English",
            },
            {
                "clientName": "clientTwo",
                "targetLanguages": ["English", "German"],
                "doIOS": False,
                "doAndroid": True,
                "defaultLanguage": "English",
                "clientCSVFilename": "translations_clientTwo.csv",
                "relativePathAndroid": "android/clientTwo",
            },
        ],
    }
    (folder / "settings.json").write_text(json.dumps(settings), encoding="utf-8")
    return root


@pytest.fixture
def default_csv(write_csv):
    return write_csv(DEFAULT_TABLE)


@pytest.fixture
def client_csv(write_csv):
    return write_csv(CLIENT_TABLE, name="translations_client.csv")
