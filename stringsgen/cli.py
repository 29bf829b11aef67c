#!/usr/bin/env python3
"""
stringsgen - generate Android and iOS string resources from a translations table

Commands:
    generate - Write strings.xml / Localizable.strings / TranslationKey.swift
               for every client in the settings file
    clients  - List the clients in the settings file
    inspect  - Parse a translations table and report what's in it

Example:
    stringsgen generate --project .. --csv-folder translations --platform android
    stringsgen generate --client mainClient --create-missing
    stringsgen inspect --csv translations/translations.csv
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .errors import StringsGenError
from .generator import GeneratorSettings, ensure_output_paths, prepare, write_all
from .languages import LanguageCodeResolver
from .model import Platform
from .parser import DEFAULT_DELIMITER, parse_translations
from .settings import load_settings

logger = logging.getLogger("stringsgen")


def configure_logging(verbose: bool) -> None:
    """Send log output to stderr; DEBUG level when verbose."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def cmd_generate(args) -> dict:
    """Generate the translation files."""
    settings = GeneratorSettings(
        project_path=args.project,
        csv_folder=args.csv_folder,
        settings_filename=args.settings,
        csv_filename=args.csv,
        selected_client=args.client,
        wanted_platform=Platform.from_name(args.platform) if args.platform else None,
        verbose=args.verbose,
        debug_mode=args.debug,
        create_all_missing_paths=args.create_missing,
    )

    result = prepare(settings)

    if settings.only_selected_client and not result.selected_client_done:
        if settings.selected_client in result.skipped_clients:
            return {
                "status": "error",
                "error": "client_skipped",
                "message": f"Client {settings.selected_client} has nothing to generate "
                           f"(no matching platform or unreadable client table).",
            }
        return {
            "status": "error",
            "error": "client_not_found",
            "message": f"Client {settings.selected_client} not found in settings file.",
        }

    created = ensure_output_paths(
        result.generated_file_paths,
        create_all=settings.create_all_missing_paths,
    )
    success, reports = write_all(result.writers)

    files = [f for report in reports for f in report.to_dict()["files"]]
    failed = [f for f in files if not f["success"]]

    return {
        "status": "ok" if success else "partial",
        "clients": [writer.client_name for writer in result.writers],
        "skipped_clients": result.skipped_clients,
        "merges": {
            client: {"overridden": merge.overridden, "added": merge.added}
            for client, merge in result.merges.items()
        },
        "created_paths": [str(path) for path in created],
        "reports": [report.to_dict() for report in reports],
        "summary": f"{len(files) - len(failed)} of {len(files)} files written for "
                   f"{len(result.writers)} clients.",
    }


def cmd_clients(args) -> dict:
    """List the clients in the settings file."""
    folder = Path(args.project or '.') / (args.csv_folder or '')
    translations_settings = load_settings(folder / args.settings)
    clients = [target.client_name for target in translations_settings.targets]
    return {
        "status": "ok",
        "clients": clients,
        "summary": ' '.join(clients),
    }


def cmd_inspect(args) -> dict:
    """Parse a translations table and report languages and item counts."""
    resolver = LanguageCodeResolver()
    translations = parse_translations(
        args.csv,
        debug_mode=False,
        fallback_to_default_language=args.fallback,
        delimiter=args.delimiter,
        resolver=resolver,
    )

    per_platform = {
        platform.value: sum(1 for item in translations if platform in item.platforms)
        for platform in Platform
    }
    unknown = [lang for lang in translations.languages if not resolver.is_known(lang)]

    return {
        "status": "ok",
        "file": str(args.csv),
        "languages": list(translations.languages),
        "unknown_languages": {lang: resolver.suggestions(lang) for lang in unknown},
        "items": len(translations),
        "platforms": per_platform,
        "sections": list(dict.fromkeys(item.section for item in translations if item.section)),
        "summary": f"{len(translations)} items in {len(translations.languages)} languages.",
    }


def main():
    parser = argparse.ArgumentParser(
        prog="stringsgen",
        description="stringsgen - Android/iOS string resources from a translations table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Translations table (';' delimited, UTF-8):
  Section;Key;Android;iOS;Notes;English;German
  General;key_ok;x;x;OK button;OK;OK

Examples:
  # All clients, both platforms
  stringsgen generate --project .. --csv-folder translations

  # One client, Android only, create missing files without asking
  stringsgen generate --client mainClient --platform android --create-missing

  # Show translation keys instead of texts in the app
  stringsgen generate --debug
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose output (missing or empty translation items)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser("generate", help="Generate translation files")
    generate_parser.add_argument("--project", "-P", help="Project folder (default: parent of the current folder)")
    generate_parser.add_argument("--csv-folder", "-f", help="Folder with the settings and .csv files, relative to the project")
    generate_parser.add_argument("--settings", "-s", default="settings.json", help="Settings file name (default: settings.json)")
    generate_parser.add_argument("--csv", "-l", default="translations.csv", help=".csv file name (default: translations.csv)")
    generate_parser.add_argument("--client", "-c", help="Only generate for the given client")
    generate_parser.add_argument("--platform", "-p", choices=["ios", "android"], type=str.lower,
                                 help="Only generate for the given platform")
    generate_parser.add_argument("--debug", "-d", action="store_true", help="Replace translations with their keys")
    generate_parser.add_argument("--create-missing", "-y", action="store_true",
                                 help="Create missing output files without asking")
    generate_parser.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS,
                                 help="Verbose output (missing or empty translation items)")

    clients_parser = subparsers.add_parser("clients", help="List clients in the settings file")
    clients_parser.add_argument("--project", "-P", help="Project folder")
    clients_parser.add_argument("--csv-folder", "-f", help="Folder with the settings file, relative to the project")
    clients_parser.add_argument("--settings", "-s", default="settings.json", help="Settings file name")

    inspect_parser = subparsers.add_parser("inspect", help="Report languages and items of a .csv file")
    inspect_parser.add_argument("--csv", "-l", required=True, help=".csv file path")
    inspect_parser.add_argument("--delimiter", default=DEFAULT_DELIMITER, help="Column delimiter (default: ';')")
    inspect_parser.add_argument("--fallback", action="store_true",
                                help="Fill missing translations with the first language")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)

    try:
        if args.command == "generate":
            result = cmd_generate(args)
        elif args.command == "clients":
            result = cmd_clients(args)
        elif args.command == "inspect":
            result = cmd_inspect(args)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except (StringsGenError, ValueError, OSError) as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)

    if result.get("status") != "ok":
        sys.exit(1)


if __name__ == "__main__":
    main()
