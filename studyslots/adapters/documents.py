"""
Reading and writing the local JSON/YAML documents behind the file-backed stores.

The format is chosen by suffix: ``.json`` is JSON, anything else is YAML.
"""

import json
import logging
from pathlib import Path
from typing import Any, Type

import yaml

from ..domain.exceptions import StorageError

logger = logging.getLogger(__name__)


def _is_json(path: Path) -> bool:
    return path.suffix.lower() == ".json"


def read_document(path: Path, error_cls: Type[StorageError] = StorageError) -> Any:
    """
    Parse a document, returning None for an empty file.

    Raises:
        error_cls: If the file cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            if _is_json(path):
                text = f.read()
                return json.loads(text) if text.strip() else None
            return yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise error_cls(f"Could not read {path}: {exc}") from exc


def write_document(path: Path, data: Any, error_cls: Type[StorageError] = StorageError) -> None:
    """
    Write a document, creating parent directories as needed.

    Raises:
        error_cls: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            if _is_json(path):
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            else:
                # safe_dump quotes strings like '10:00' that would load back as base-60 integers
                yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True, default_flow_style=False)
    except OSError as exc:
        raise error_cls(f"Could not write {path}: {exc}") from exc

    logger.debug("Wrote %s", path)


def remove_document(path: Path, error_cls: Type[StorageError] = StorageError) -> bool:
    """
    Delete a document. Returns False if there was nothing to delete.

    Raises:
        error_cls: If the file exists but cannot be removed
    """
    if not path.exists():
        return False

    try:
        path.unlink()
    except OSError as exc:
        raise error_cls(f"Could not remove {path}: {exc}") from exc

    logger.debug("Removed %s", path)
    return True
