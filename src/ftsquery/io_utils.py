"""I/O utilities for stop-word configuration and JSON output.

JSON goes through orjson.  Stop-word files are either a JSON array of
strings or plain text with one word per line.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def dump_json_bytes(obj: Any, *, pretty: bool = True) -> bytes:
    """Serialize *obj* to JSON bytes, indented when *pretty*."""
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2 if pretty else 0)


def load_stop_words(path: Path) -> list[str]:
    """Load an ordered, de-duplicated stop-word list from *path*.

    ``.json`` files must hold an array of strings.  Any other file is read
    as UTF-8 text, one word per line; blank lines and lines starting with
    ``#`` are skipped and surrounding whitespace is removed.

    Raises ``ValueError`` on a malformed JSON payload.
    """
    if path.suffix.lower() == ".json":
        try:
            data = load_json(path)
        except orjson.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in stop-word file {path}: {e}") from e
        if not isinstance(data, list):
            raise ValueError(
                f"Stop-word file {path} must contain a JSON array, got {type(data).__name__}"
            )
        words: list[str] = []
        for i, item in enumerate(data):
            if not isinstance(item, str):
                raise ValueError(
                    f"Stop-word file {path}: item {i} must be a string, got {item!r}"
                )
            words.append(item)
    else:
        words = [
            line.strip()
            for line in path.read_text(encoding="utf-8").splitlines()
            if line.strip() and not line.lstrip().startswith("#")
        ]
    return list(dict.fromkeys(words))
