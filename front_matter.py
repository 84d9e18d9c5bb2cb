#!/usr/bin/env python3
"""
Front matter embedded at the top of a markdown document.

A document may open with a comment block holding TOML:

    <!-- metadata
    title = "My Article"
    published = 2024-05-01
    tags = ["tech", "life"]
    -->

The block stays in the document (it renders as an invisible HTML comment);
only its contents are parsed here.
"""
from __future__ import annotations

import datetime
import logging
import tomllib
from dataclasses import dataclass
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentMetadata:
    title: Optional[str] = None
    tags: tuple[str, ...] = ()
    publish_date: Optional[datetime.date] = None
    output_file_name: str = ""


class FrontMatterSyntax(Protocol):
    def extract(self, text: str) -> Optional[str]:
        """Return the raw front matter block, or None if the text has none."""


@dataclass(frozen=True)
class CommentBlockSyntax:
    opening: str = "<!-- metadata"
    closing: str = "-->"

    def extract(self, text: str) -> Optional[str]:
        lines = [line.removesuffix("\r") for line in text.split("\n")]
        if not lines or lines[0] != self.opening:
            return None

        block = ""
        for line in lines[1:]:
            if line == self.closing:
                break
            block += line + "\n"
        return block


COMMENT_BLOCK = CommentBlockSyntax()


def _published(value) -> Optional[datetime.date]:
    # datetime is a subclass of date, keep only the calendar part
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return None


def metadata_from_toml(block: str, source=None) -> DocumentMetadata:
    """
    Parse a TOML front matter block field by field.

    Keys of the wrong type are dropped silently. A block that is not valid
    TOML at all yields an empty record and a warning.
    """
    if not block:
        return DocumentMetadata()

    try:
        table = tomllib.loads(block)
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Failed to read metadata in %s: %s", source or "<document>", exc)
        return DocumentMetadata()

    title = table.get("title")
    tags = table.get("tags")

    return DocumentMetadata(
        title=title if isinstance(title, str) else None,
        tags=tuple(t for t in tags if isinstance(t, str)) if isinstance(tags, list) else (),
        publish_date=_published(table.get("published")),
    )


def parse_front_matter(text: str, syntax: FrontMatterSyntax = COMMENT_BLOCK, source=None) -> DocumentMetadata:
    block = syntax.extract(text)
    if block is None:
        return DocumentMetadata()
    return metadata_from_toml(block, source=source)
