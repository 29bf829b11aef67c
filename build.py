#!/usr/bin/env python3
"""
Build script for the stringsgen binary.
Creates a standalone executable for the current platform, to be placed next
to the translations table and settings file.

Usage:
    python build.py          # Build for current platform
    python build.py --clean  # Clean build artifacts first
"""

import argparse
import platform
import shutil
import subprocess
import sys
from pathlib import Path

BINARY_NAME = "stringsgen"


def get_platform_name() -> str:
    """Get platform identifier for binary naming."""
    system = platform.system().lower()
    machine = platform.machine().lower()

    if system == "darwin":
        if machine == "arm64":
            return "macos-arm64"
        return "macos-x64"
    elif system == "linux":
        if machine == "aarch64":
            return "linux-arm64"
        return "linux-x64"
    elif system == "windows":
        return "windows-x64"
    else:
        return f"{system}-{machine}"


def clean_build_artifacts(project_root: Path) -> None:
    """Remove build artifacts."""
    for dir_name in ["build", "dist"]:
        dir_path = project_root / dir_name
        if dir_path.exists():
            print(f"Removing {dir_path}")
            shutil.rmtree(dir_path)

    for spec_file in project_root.glob("*.spec"):
        print(f"Removing {spec_file}")
        spec_file.unlink()

    for pycache in project_root.rglob("__pycache__"):
        print(f"Removing {pycache}")
        shutil.rmtree(pycache)


def build_binary(project_root: Path) -> Path:
    """Build the binary using PyInstaller."""
    entry_point = project_root / "stringsgen_main.py"

    print(f"Building {BINARY_NAME} for {get_platform_name()}...")
    print("-" * 50)

    cmd = [
        sys.executable, "-m", "PyInstaller",
        "--clean",
        "--noconfirm",
        "--onefile",
        "--name", BINARY_NAME,
        "--hidden-import", "yaml",
        str(entry_point),
    ]

    result = subprocess.run(cmd, cwd=project_root)

    if result.returncode != 0:
        print("Error: PyInstaller build failed")
        sys.exit(1)

    dist_dir = project_root / "dist"
    suffix = ".exe" if platform.system().lower() == "windows" else ""
    binary_path = dist_dir / f"{BINARY_NAME}{suffix}"

    if not binary_path.exists():
        print(f"Error: Binary not found at {binary_path}")
        sys.exit(1)

    final_path = dist_dir / f"{BINARY_NAME}-{get_platform_name()}{suffix}"
    if final_path.exists():
        final_path.unlink()
    binary_path.rename(final_path)
    final_path.chmod(0o755)

    print("-" * 50)
    print(f"Binary built successfully: {final_path}")
    print(f"  Size: {final_path.stat().st_size / 1024 / 1024:.1f} MB")

    return final_path


def main():
    parser = argparse.ArgumentParser(description=f"Build {BINARY_NAME} binary")
    parser.add_argument("--clean", action="store_true", help="Clean build artifacts first")
    args = parser.parse_args()

    project_root = Path(__file__).parent.absolute()

    if args.clean:
        clean_build_artifacts(project_root)

    binary_path = build_binary(project_root)

    print()
    print("To test the binary:")
    print(f"  {binary_path} --help")
    print()
    print("Copy it next to settings.json and translations.csv, then run:")
    print(f"  {binary_path.name} generate")


if __name__ == "__main__":
    main()
