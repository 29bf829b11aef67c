#!/usr/bin/env python3
"""
Exceptions raised while ingesting translation tables and writing output files.
"""

from pathlib import Path
from typing import Optional, Sequence


class StringsGenError(Exception):
    """Base class for all generator errors."""


class SettingsError(StringsGenError):
    """The settings document is missing required values or is malformed."""


class MalformedRowError(StringsGenError):
    """A table row does not have the same number of columns as the header."""

    def __init__(self, row_number: int, raw: str, message: Optional[str] = None):
        self.row_number = row_number
        self.raw = raw
        if message is None:
            message = f"Number of columns in row {row_number} doesn't match header size."
        super().__init__(f"{message}\n{raw}")


class MissingFileError(StringsGenError):
    """A source file (translations table or settings) does not exist."""

    def __init__(self, path, description: str = "File"):
        self.path = Path(path)
        super().__init__(f"{description} {self.path} doesn't exist.")


class OutputPathMissingError(StringsGenError):
    """The directory an output file should be written to does not exist."""

    def __init__(self, path):
        self.path = Path(path)
        super().__init__(f"Folder {self.path.parent} does not exist. Will not generate {self.path.name}.")


class ClientPathMissingError(OutputPathMissingError):
    """The output directory of a client module is missing."""

    def __init__(self, client_name: str, path):
        super().__init__(path)
        self.client_name = client_name
        self.args = (f"Client {client_name} does not exist for path {self.path}",)


class UnknownLanguageError(StringsGenError):
    """A language name could not be resolved to a language code."""

    def __init__(self, language: str, suggestions: Sequence[str] = ()):
        self.language = language
        self.suggestions = list(suggestions)
        message = (
            f"Language '{language}' not among standard ISO English languages "
            f"and not in the language mapping of the settings file."
        )
        if self.suggestions:
            message += f" Possible candidates: {', '.join(self.suggestions)}"
        super().__init__(message)
