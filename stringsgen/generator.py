#!/usr/bin/env python3
"""
Translations generation run.

Ties the pieces together: reads the settings and the default translations
table, merges each client's own table over the defaults, and sets up the
platform writers of every client. Writing happens in a separate step so the
caller can first make sure all output paths exist.
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import MalformedRowError, MissingFileError
from .languages import LanguageCodeResolver
from .merge import MergeResult, override_translations
from .model import Platform, TranslationSet, TranslationSetBuilder
from .parser import parse_translations
from .settings import TargetSetting, TranslationsSettings, load_settings
from .writers import (
    AndroidXmlWriter,
    EmissionReport,
    IosKeysWriter,
    IosStringsWriter,
    KeyCaseType,
    TranslationWriter,
)

logger = logging.getLogger(__name__)


@dataclass
class GeneratorSettings:
    """Options of a generation run (usually from the command line)."""
    project_path: Optional[str] = None
    csv_folder: Optional[str] = None
    settings_filename: str = "settings.json"
    csv_filename: str = "translations.csv"
    selected_client: Optional[str] = None
    wanted_platform: Optional[Platform] = None
    verbose: bool = False
    debug_mode: bool = False
    create_all_missing_paths: bool = False

    @property
    def only_selected_client(self) -> bool:
        return self.selected_client is not None

    def resolve_project_path(self) -> Path:
        """The given project folder, or the parent of the working directory."""
        if self.project_path:
            return Path(self.project_path).absolute()
        return Path.cwd().parent

    def resolve_csv_folder(self, project_path: Path) -> Path:
        """The folder holding settings and tables (working directory by default)."""
        if self.csv_folder:
            return project_path / self.csv_folder
        return Path('.')


class ClientWriter:
    """All platform writers of one client."""

    def __init__(
        self,
        target: TargetSetting,
        translations: TranslationSet,
        resolver: LanguageCodeResolver,
        project_path: Path,
        do_ios: bool = True,
        do_android: bool = True,
        key_case_type: Optional[KeyCaseType] = None,
        verbose: bool = False,
    ):
        self.target = target
        self.translations = translations
        self.writers: list[TranslationWriter] = []

        if do_android:
            self.writers.append(AndroidXmlWriter(
                target.client_name,
                resolver,
                translations.items,
                target.target_languages,
                target.default_language,
                project_path,
                module_path=target.relative_path_android,
                verbose=verbose,
            ))
        if do_ios:
            self.writers.append(IosStringsWriter(
                target.client_name,
                resolver,
                translations.items,
                target.target_languages,
                target.default_language,
                project_path,
                module_path=target.relative_path_ios,
                verbose=verbose,
            ))
            self.writers.append(IosKeysWriter(
                target.client_name,
                resolver,
                translations.items,
                target.default_language,
                project_path,
                module_path=target.relative_path_ios,
                case_type=key_case_type,
                verbose=verbose,
            ))

    @property
    def client_name(self) -> str:
        return self.target.client_name

    @property
    def generated_file_paths(self) -> list[Path]:
        paths = []
        for writer in self.writers:
            paths.extend(writer.get_all_resolved_paths())
        return paths

    def write_all(self) -> list[EmissionReport]:
        return [writer.write_all() for writer in self.writers]


@dataclass
class GenerationResult:
    """Writers for each client and every file path they will write."""
    writers: list[ClientWriter] = field(default_factory=list)
    generated_file_paths: list[Path] = field(default_factory=list)
    selected_client_done: bool = False
    merges: dict[str, MergeResult] = field(default_factory=dict)
    skipped_clients: list[str] = field(default_factory=list)


def prepare(
    settings: GeneratorSettings,
    translations_settings: Optional[TranslationsSettings] = None,
) -> GenerationResult:
    """
    Prepare the writers and the translation file paths.

    Args:
        settings: Run options
        translations_settings: Already loaded settings document (loaded from
            the settings file when not given)

    Returns:
        GenerationResult

    Raises:
        MissingFileError: if the settings file or the main table is missing
        MalformedRowError: if the main table is malformed
    """
    project_path = settings.resolve_project_path()
    csv_folder = settings.resolve_csv_folder(project_path)
    settings_path = csv_folder / settings.settings_filename
    csv_path = csv_folder / settings.csv_filename

    if translations_settings is None:
        _check_input_files(settings_path, csv_path)
        translations_settings = load_settings(settings_path)
    elif not csv_path.is_file():
        raise MissingFileError(csv_path, "Main .csv file")

    resolver = LanguageCodeResolver(translations_settings.language_code_mapping)

    if not translations_settings.targets:
        logger.warning("No clients found in the settings file.")
        return GenerationResult()

    if settings.wanted_platform is not None:
        logger.info(f"Generating for {settings.wanted_platform.value}")

    default_set = _parse(csv_path, settings, translations_settings, resolver)
    logger.info(
        f"Parsed {len(default_set)} items in {len(default_set.languages)} languages "
        f"({', '.join(default_set.languages)}) from {csv_path}"
    )

    result = GenerationResult()
    for target in translations_settings.targets:
        if settings.only_selected_client and target.client_name != settings.selected_client:
            continue

        platforms = _platforms_for(target, settings.wanted_platform)
        if platforms is None:
            result.skipped_clients.append(target.client_name)
        else:
            do_ios, do_android = platforms
            client_set = _client_translations(
                target, default_set, csv_folder, settings, translations_settings, resolver, result
            )
            if client_set is None:
                result.skipped_clients.append(target.client_name)
            else:
                client_writer = ClientWriter(
                    target,
                    client_set,
                    resolver,
                    project_path,
                    do_ios=do_ios,
                    do_android=do_android,
                    key_case_type=translations_settings.ios_key_case_type,
                    verbose=settings.verbose,
                )
                result.writers.append(client_writer)
                result.generated_file_paths.extend(client_writer.generated_file_paths)
                result.selected_client_done = settings.only_selected_client

        if settings.only_selected_client:
            break

    return result


def ensure_output_paths(
    paths: Sequence[Path],
    create_all: bool = False,
    prompt: Optional[Callable[[str], str]] = None,
) -> list[Path]:
    """
    Make sure every output file exists, asking before creating missing ones.

    For each missing file the user answers Y (create it), ALL (create it and
    all following ones) or anything else (stop creating files).

    Args:
        paths: Files that will be written
        create_all: Create missing files without asking
        prompt: Function asking the question and returning the answer

    Returns:
        List of files that were created
    """
    ask = prompt or _ask
    created = []
    for path in paths:
        if path.exists():
            continue
        if not create_all:
            response = ask(f"File {path} does not exist. Create?\nY (yes) / _ (no) / ALL (yes to all): ")
            response = response.strip().upper()
            if response in ('YES TO ALL', 'ALL'):
                create_all = True
            elif response not in ('Y', 'YES'):
                logger.warning(
                    "File will not be created. Either fix the paths or the "
                    "targetLanguages specified in the settings file."
                )
                break
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        logger.info(f"Created {path}")
        created.append(path)
    return created


def write_all(writers: Sequence[ClientWriter]) -> tuple[bool, list[EmissionReport]]:
    """
    Have every client write its translation files.

    Returns:
        (all files written, reports of every writer)
    """
    reports = []
    success = True
    for client_writer in writers:
        client_reports = client_writer.write_all()
        reports.extend(client_reports)
        if all(report.success for report in client_reports):
            logger.info(f"Translations for client {client_writer.client_name} generated successfully.")
        else:
            logger.error(f"Translations for client {client_writer.client_name} generated with errors.")
            success = False
    return success, reports


def _check_input_files(settings_path: Path, csv_path: Path) -> None:
    missing = []
    if not settings_path.is_file():
        logger.error(f"Settings file: {settings_path} doesn't exist.")
        missing.append(MissingFileError(settings_path, "Settings file"))
    if not csv_path.is_file():
        logger.error(f"Main .csv file: {csv_path} doesn't exist.")
        missing.append(MissingFileError(csv_path, "Main .csv file"))
    if missing:
        raise missing[0]


def _parse(
    path: Path,
    settings: GeneratorSettings,
    translations_settings: TranslationsSettings,
    resolver: LanguageCodeResolver,
) -> TranslationSet:
    return parse_translations(
        path,
        debug_mode=settings.debug_mode,
        fallback_to_default_language=translations_settings.write_english_if_missing,
        delimiter=translations_settings.csv_delimiter,
        resolver=resolver,
    )


def _platforms_for(target: TargetSetting, wanted: Optional[Platform]) -> Optional[tuple[bool, bool]]:
    """(do_ios, do_android) for a target, or None if it must be skipped."""
    do_ios = target.do_ios
    do_android = target.do_android
    if wanted is Platform.IOS:
        if not target.do_ios:
            logger.warning(f"{target.client_name} setting does not include iOS! Will not generate.")
            return None
        do_android = False
    elif wanted is Platform.ANDROID:
        if not target.do_android:
            logger.warning(f"{target.client_name} setting does not include Android! Will not generate.")
            return None
        do_ios = False
    return do_ios, do_android


def _client_translations(
    target: TargetSetting,
    default_set: TranslationSet,
    csv_folder: Path,
    settings: GeneratorSettings,
    translations_settings: TranslationsSettings,
    resolver: LanguageCodeResolver,
    result: GenerationResult,
) -> Optional[TranslationSet]:
    """
    The default translations with the client's own table merged in.

    Returns None (after logging why) when the client's table is missing or
    malformed.
    """
    if not target.client_csv_filename:
        return default_set

    client_path = csv_folder / target.client_csv_filename
    if not client_path.is_file():
        logger.error(f"Client .csv file: {client_path} doesn't exist. Skipping client {target.client_name}.")
        return None

    try:
        client_set = _parse(client_path, settings, translations_settings, resolver)
    except MalformedRowError as e:
        logger.error(f"Client .csv file: {client_path} is malformed, skipping client {target.client_name}: {e}")
        return None

    builder = TranslationSetBuilder.from_set(default_set)
    merge = override_translations(builder, client_set.items)
    result.merges[target.client_name] = merge
    logger.info(
        f"{merge.overridden} translations overridden, {merge.added} translations added "
        f"for client {target.client_name}."
    )
    return builder.freeze()


def _ask(message: str) -> str:
    print(message, end='', file=sys.stderr, flush=True)
    return sys.stdin.readline()
