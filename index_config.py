#!/usr/bin/env python3
"""Load the TOML file declaring the index title and its tag sections."""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagDefinition:
    name: str
    description: str = ""


@dataclass(frozen=True)
class IndexConfig:
    title: str = ""
    tags: tuple[TagDefinition, ...] = ()


def _string(table: dict, key: str) -> str:
    value = table.get(key)
    return value if isinstance(value, str) else ""


def index_config_from_toml(text: str) -> IndexConfig:
    """
    Build an IndexConfig from TOML text:

        title = "Site Name"
        [[tag]]
        name = "tech"
        description = "Technical writeups"

    Sections keep their declared order. Raises tomllib.TOMLDecodeError
    if the text is not TOML.
    """
    table = tomllib.loads(text)

    tags = []
    declared = table.get("tag")
    if isinstance(declared, list):
        for entry in declared:
            if not isinstance(entry, dict):
                continue
            tags.append(TagDefinition(name=_string(entry, "name"), description=_string(entry, "description")))

    return IndexConfig(title=_string(table, "title"), tags=tuple(tags))


def load_index_config(path: Path) -> IndexConfig:
    """Read an index config; fall back to an empty one if it can't be used."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to open %s: %s", path, exc)
        return IndexConfig()

    try:
        return index_config_from_toml(text)
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return IndexConfig()
