#!/usr/bin/env python3
"""
Generator settings file.

The settings document (settings.json, or settings.yaml / .yml) lists the
clients (targets) to generate translations for:

```json
{
  "languageCodeMapping": {"Serbian Latin": "b+sr+Latn"},
  "writeEnglishIfMissing": false,
  "iosKeyCaseType": "Camel",
  "targets": [
    {
      "clientName": "mainClient",
      "targetLanguages": ["English", "German"],
      "doIOS": true,
      "doAndroid": true,
      "defaultLanguage": "English",
      "clientCSVFilename": "translations_mainClient.csv",
      "relativePathAndroid": "android/mainClient",
      "relativePathIOS": "App/Clients/mainClient"
    }
  ]
}
```
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import MissingFileError, SettingsError
from .parser import DEFAULT_DELIMITER
from .writers import KeyCaseType


@dataclass
class TargetSetting:
    """Settings for a single target (client)."""
    client_name: str
    target_languages: list[str]
    do_ios: bool
    do_android: bool
    default_language: str
    client_csv_filename: Optional[str] = None
    relative_path_android: Optional[str] = None
    relative_path_ios: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "TargetSetting":
        """Create from a settings document entry (camelCase keys)."""
        if not isinstance(data, dict):
            raise SettingsError(f"Target entry must be a mapping, got {type(data).__name__}")

        client_name = _require(data, 'clientName', str, 'target')
        where = f"target '{client_name}'"
        languages = _require(data, 'targetLanguages', list, where)
        if not all(isinstance(lang, str) for lang in languages):
            raise SettingsError(f"{where}: targetLanguages must be a list of language names")

        return cls(
            client_name=client_name,
            target_languages=languages,
            do_ios=_require(data, 'doIOS', bool, where),
            do_android=_require(data, 'doAndroid', bool, where),
            default_language=_require(data, 'defaultLanguage', str, where),
            client_csv_filename=_optional(data, 'clientCSVFilename', str, where),
            relative_path_android=_optional(data, 'relativePathAndroid', str, where),
            relative_path_ios=_optional(data, 'relativePathIOS', str, where),
        )


@dataclass
class TranslationsSettings:
    """The whole settings document."""
    targets: list[TargetSetting] = field(default_factory=list)
    language_code_mapping: dict[str, str] = field(default_factory=dict)
    write_english_if_missing: bool = False
    ios_key_case_type: Optional[KeyCaseType] = None
    csv_delimiter: str = DEFAULT_DELIMITER

    @classmethod
    def from_dict(cls, data: Any) -> "TranslationsSettings":
        if not isinstance(data, dict):
            raise SettingsError("Settings root must be a mapping")

        targets = data.get('targets') or []
        if not isinstance(targets, list):
            raise SettingsError("'targets' must be a list")

        mapping = data.get('languageCodeMapping') or {}
        if not isinstance(mapping, dict):
            raise SettingsError("'languageCodeMapping' must be a mapping of language name to code")

        delimiter = _optional(data, 'csvDelimiter', str, 'settings') or DEFAULT_DELIMITER
        if len(delimiter) != 1:
            raise SettingsError(f"'csvDelimiter' must be a single character, got {delimiter!r}")

        try:
            case_type = KeyCaseType.from_name(_optional(data, 'iosKeyCaseType', str, 'settings'))
        except ValueError as e:
            raise SettingsError(str(e))

        return cls(
            targets=[TargetSetting.from_dict(target) for target in targets],
            language_code_mapping={str(k): str(v) for k, v in mapping.items()},
            write_english_if_missing=bool(data.get('writeEnglishIfMissing', False)),
            ios_key_case_type=case_type,
            csv_delimiter=delimiter,
        )


def load_settings(path) -> TranslationsSettings:
    """
    Load a settings file. The format is chosen by extension: .yaml/.yml are
    read as YAML, anything else as JSON.

    Raises:
        MissingFileError: if the file doesn't exist
        SettingsError: if the document can't be parsed or is invalid
    """
    path = Path(path)
    if not path.is_file():
        raise MissingFileError(path, "Settings file")

    content = path.read_text(encoding='utf-8')
    try:
        if path.suffix.lower() in ('.yaml', '.yml'):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SettingsError(f"Invalid settings file {path}: {e}")

    return TranslationsSettings.from_dict(data)


def _require(data: dict, key: str, expected: type, where: str):
    if key not in data or data[key] is None:
        raise SettingsError(f"{where}: missing required setting '{key}'")
    return _check_type(data[key], key, expected, where)


def _optional(data: dict, key: str, expected: type, where: str):
    value = data.get(key)
    if value is None:
        return None
    return _check_type(value, key, expected, where)


def _check_type(value, key: str, expected: type, where: str):
    if not isinstance(value, expected):
        raise SettingsError(f"{where}: '{key}' must be {expected.__name__}, got {type(value).__name__}")
    return value
