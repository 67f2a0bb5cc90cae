#!/usr/bin/env python3
"""
Wrapper for schemagen.

This is a convenience wrapper that forwards to the schemagen module.
Run with --help to see available commands.

Usage:
    python generate.py <command> [options]
    ./generate.py <command> [options]  (on Unix with execute permission)

Commands:
    generate    Generate Go table records and accessors from the catalog
    inspect     Print the introspected catalog as YAML
    fmt         Format generated Go files

Examples:
    python generate.py generate -s public -p model -o model/tables.go
    python generate.py inspect -s public
"""

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def _env() -> dict[str, str]:
    env = os.environ.copy()
    paths = [str(ROOT)]
    if env.get("PYTHONPATH"):
        paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


def main() -> int:
    """Forward all arguments to the schemagen module.

    Runs in the caller's working directory so relative paths resolve there.
    """
    return subprocess.call(
        [sys.executable, "-m", "schemagen"] + sys.argv[1:],
        env=_env(),
    )


if __name__ == "__main__":
    sys.exit(main())
