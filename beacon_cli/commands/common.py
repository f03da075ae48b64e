"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def read_json(path: str | Path) -> Any:
    """Read a JSON document. Raises OSError or ValueError."""
    with open(path, "r") as f:
        return json.load(f)


def write_json(path: str | Path, data: Any) -> None:
    """Write a JSON document with a trailing newline."""
    Path(path).write_text(json.dumps(data, indent=2) + "\n")


def status_mark(ok: bool | None) -> str:
    if ok is None:
        return "-"
    return "✓" if ok else "✗"
