# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""YAML file loading for the persona catalog and other static data.

Two layers are supported: a base directory shipped with the repository
and an optional override directory whose documents are deep-merged on
top, keyed by file stem.

Example:
    >>> from pathlib import Path
    >>> from src.core.config.yaml_loader import load_layered_directory
    >>> docs = load_layered_directory(Path("config/personas"))
    >>> sorted(docs)[:1]
    ['conversation_partner']
"""

from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = (".yaml", ".yml")


class YAMLLoadError(Exception):
    """Raised when a YAML file or directory cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML from '{path}': {reason}")


def load_yaml(path: Path) -> dict[str, Any]:
    """Parse one YAML document whose root must be a mapping.

    Args:
        path: File to read.

    Returns:
        The parsed mapping; an empty file yields an empty dict.

    Raises:
        YAMLLoadError: Missing file, unreadable file, bad syntax, or a
            non-mapping root.
    """
    if not path.is_file():
        reason = "File does not exist" if not path.exists() else "Path is not a file"
        raise YAMLLoadError(path, reason)

    try:
        with path.open(encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"Invalid YAML syntax: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise YAMLLoadError(
            path, f"YAML root must be a mapping, got {type(document).__name__}"
        )
    return document


def load_yaml_directory(path: Path) -> dict[str, dict[str, Any]]:
    """Load every ``.yaml``/``.yml`` file in a directory, keyed by stem.

    Files are visited in sorted name order so the result is stable.

    Raises:
        YAMLLoadError: If the directory is missing or any file fails.
    """
    if not path.is_dir():
        reason = "Directory does not exist" if not path.exists() else "Path is not a directory"
        raise YAMLLoadError(path, reason)

    documents: dict[str, dict[str, Any]] = {}
    for file_path in sorted(path.iterdir()):
        if file_path.suffix in YAML_SUFFIXES and file_path.is_file():
            documents[file_path.stem] = load_yaml(file_path)
    return documents


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Nested mappings merge key by key; any other value in ``override``
    replaces the base value outright (lists are not concatenated).
    Neither argument is modified.

    Example:
        >>> deep_merge({"voice": {"tone": "warm", "pace": "slow"}}, {"voice": {"pace": "fast"}})
        {'voice': {'tone': 'warm', 'pace': 'fast'}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_layered_directory(
    base_dir: Path,
    override_dir: Path | None = None,
) -> dict[str, dict[str, Any]]:
    """Load a base directory and deep-merge an override directory over it.

    Documents present only in the override directory are added as-is.

    Args:
        base_dir: Directory shipped with the application.
        override_dir: Optional deployment-specific directory.

    Returns:
        Mapping of file stem to merged document.
    """
    documents = load_yaml_directory(base_dir)
    if override_dir is None:
        return documents

    for stem, override in load_yaml_directory(override_dir).items():
        documents[stem] = deep_merge(documents.get(stem, {}), override)
    return documents
