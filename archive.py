#!/usr/bin/env python3
"""Build the tag-grouped index page for a directory of articles."""
import datetime
import logging
from pathlib import Path
from typing import Iterable, Sequence

from front_matter import DocumentMetadata
from index_config import IndexConfig
from md2html import write_text

logger = logging.getLogger(__name__)

INDEX_MARKDOWN = "index.md"
INDEX_HTML = "index.html"

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# ---------- Dates ----------

def date_to_english(date: datetime.date) -> str:
    """
    Format a date as "May 1st, 2024".

    The suffix only looks at the last digit, so the 11th renders as "11st".
    Existing index pages depend on this output.
    """
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(date.day % 10, "th")
    return f"{MONTHS[date.month - 1]} {date.day}{suffix}, {date.year}"

# ---------- Ordering ----------

def _newest_first(article: DocumentMetadata):
    if article.publish_date is None:
        return (1, 0)
    return (0, -article.publish_date.toordinal())


def sort_articles(articles: Iterable[DocumentMetadata]) -> list:
    """Newest first, undated last; equal dates keep their input order."""
    return sorted(articles, key=_newest_first)

# ---------- Rendering ----------

def render_entry(article: DocumentMetadata) -> str:
    line = f"- [{article.title}]({article.output_file_name})"
    if article.publish_date is not None:
        line += f"<br>{date_to_english(article.publish_date)}"
    return line + "\n"


def render_index(articles: Sequence[DocumentMetadata], config: IndexConfig) -> str:
    """
    Render the index as markdown: a centered title, then one section per
    declared tag listing every titled article carrying that tag.

    Articles are listed in the order given, so callers sort them first.
    """
    lines = [f"# <center> {config.title} </center>\n"]
    for tag in config.tags:
        lines.append(f"## {tag.name}\n{tag.description}\n")
        for article in articles:
            if tag.name not in article.tags or not article.title:
                continue
            lines.append(render_entry(article))
    return "".join(lines)


def write_index(markdown_text: str, directory: Path) -> Path:
    path = Path(directory) / INDEX_MARKDOWN
    write_text(path, markdown_text)
    logger.info("Wrote %s", path)
    return path
