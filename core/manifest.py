"""composer.json and composer.lock reading and writing."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from .models import LockedPackage

logger = logging.getLogger(__name__)

# "key": [ "value" ] spread over several lines by the pretty printer
SINGLE_ELEMENT_ARRAY = re.compile(r'": \[\s*("[^"]*")\s*\]', re.MULTILINE)


def load_json(path: Path) -> dict[str, Any]:
    """Decode a JSON document from disk.

    Decoding errors are not caught; a malformed manifest or lock file
    surfaces as ``json.JSONDecodeError``.
    """
    return json.loads(Path(path).read_text(encoding="utf-8"))


def encode_pretty(data: dict[str, Any]) -> str:
    """Convert a manifest into the pretty-printed form Composer writes.

    Args:
        data: The decoded manifest

    Returns:
        Four-space indented JSON with unescaped slashes, where every
        single-element string array is kept on one line.
    """
    # json.dumps never escapes "/", matching JSON_UNESCAPED_SLASHES
    contents = json.dumps(data, indent=4)
    return SINGLE_ELEMENT_ARRAY.sub(r'": [\1]', contents)


def write_manifest(path: Path, data: dict[str, Any]) -> None:
    """Write a manifest back with exactly one trailing newline."""
    Path(path).write_text(encode_pretty(data) + "\n", encoding="utf-8")
    logger.debug("Wrote %s", path)


def locked_packages(lock: dict[str, Any]) -> list[LockedPackage]:
    """Merge the packages and packages-dev sections of a lock file."""
    records = list(lock.get("packages") or []) + list(lock.get("packages-dev") or [])
    return [
        LockedPackage(name=record.get("name", ""), version=record.get("version", ""))
        for record in records
    ]
