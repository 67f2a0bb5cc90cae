#!/usr/bin/env python3
"""
Formatting for generated Go sources.

Runs gofmt (or a configured replacement) over generated files, either
rewriting them in place or, with --check, only listing the files that
would change.
"""

from __future__ import annotations

import argparse
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Sequence

from .shared.config import DEFAULT_FORMATTER, split_command
from .shared.errors import FormatError

CHECK_COMMAND: tuple[str, ...] = ("gofmt", "-l")


def run_command(
    command: Sequence[str],
    cwd: Path | None = None,
    *,
    check: bool = True,
    capture: bool = False,
) -> subprocess.CompletedProcess:
    """Run a command with proper error handling."""
    print(f"$ {' '.join(str(c) for c in command)}")
    # On Windows, resolve the executable path to handle .cmd/.bat files
    resolved_cmd = [str(c) for c in command]
    if sys.platform == "win32" and command:
        resolved = shutil.which(resolved_cmd[0])
        if resolved:
            resolved_cmd[0] = resolved
    return subprocess.run(
        resolved_cmd,
        cwd=cwd,
        check=check,
        capture_output=capture,
        text=True,
    )


def format_go(path: Path, command: Sequence[str] = DEFAULT_FORMATTER) -> None:
    """Format a generated Go file in place.

    Raises:
        FormatError: If the formatter is missing or exits non-zero.
    """
    full_command = [*command, str(path)]
    try:
        result = run_command(full_command, check=False, capture=True)
    except FileNotFoundError as e:
        raise FormatError(
            f"Formatter '{command[0]}' not found", str(path), command=full_command
        ) from e

    if result.returncode != 0:
        if result.stderr:
            print(result.stderr, file=sys.stderr, end="")
        raise FormatError(
            "Formatter failed",
            str(path),
            command=full_command,
            returncode=result.returncode,
        )


def check_go(
    paths: Sequence[Path], command: Sequence[str] = CHECK_COMMAND
) -> list[str]:
    """Return the files among ``paths`` that the formatter would change.

    Raises:
        FormatError: If the formatter is missing or exits non-zero.
    """
    full_command = [*command, *(str(p) for p in paths)]
    try:
        result = run_command(full_command, check=False, capture=True)
    except FileNotFoundError as e:
        raise FormatError(
            f"Formatter '{command[0]}' not found", command=full_command
        ) from e

    if result.returncode != 0:
        if result.stderr:
            print(result.stderr, file=sys.stderr, end="")
        raise FormatError(
            "Formatter failed", command=full_command, returncode=result.returncode
        )
    return [line for line in result.stdout.splitlines() if line.strip()]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="Go files or directories to format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check only, don't rewrite (useful for CI)",
    )
    parser.add_argument(
        "--formatter",
        default=None,
        help="Formatter command (default: 'gofmt -w', or 'gofmt -l' with --check)",
    )
    args = parser.parse_args(argv)

    try:
        missing = [p for p in args.paths if not p.exists()]
        if missing:
            raise FileNotFoundError(f"Path '{missing[0]}' does not exist")

        if args.check:
            command = split_command(args.formatter) if args.formatter else CHECK_COMMAND
            unformatted = check_go(args.paths, command)
            if unformatted:
                print("Files need formatting:")
                for name in unformatted:
                    print(f"  {name}")
                sys.exit(1)
            print("All files formatted.")
            return

        command = split_command(args.formatter) if args.formatter else DEFAULT_FORMATTER
        for path in args.paths:
            format_go(path, command)
        print(f"Formatted {len(args.paths)} path(s).")
    except (FormatError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
