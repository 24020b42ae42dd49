"""Console and step-output utilities.

Progress goes to stdout, errors to stderr, and computed values to the
GitHub Actions step output file so later steps can consume them.
"""

from __future__ import annotations

import sys
from typing import NoReturn


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of version resolution in CI logs.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def fatal(msg: str) -> NoReturn:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the run.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


def write_output(output_path: str | None, name: str, value: str) -> None:
    """Emit a ``name=value`` step output.

    Appends to the GITHUB_OUTPUT file when one is given, otherwise prints
    the line to stdout so the value is still visible in local runs.
    """
    line = f"{name}={value}"
    if not output_path:
        print(line)
        return
    with open(output_path, "a") as fh:
        fh.write(f"{line}\n")
