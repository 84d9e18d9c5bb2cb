#!/usr/bin/env python3
"""Render one markdown document to an HTML page."""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from front_matter import COMMENT_BLOCK, DocumentMetadata, FrontMatterSyntax, parse_front_matter

logger = logging.getLogger(__name__)

formatter = HtmlFormatter(nowrap=True)


class PublishError(Exception):
    """A file could not be read or written; the run cannot continue."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
        self.stage = None


def pygments_highlight(code: str, lang: str, attrs: dict) -> str:
    """Highlight fenced code with Pygments; '' lets markdown-it escape it."""
    if not lang:
        return ""
    try:
        lexer = get_lexer_by_name(lang, stripall=True)
    except ClassNotFound:
        return ""
    return highlight(code, lexer, formatter)


def make_renderer() -> MarkdownIt:
    # gfm-like: tables, strikethrough, autolinks, raw HTML left untouched
    md = MarkdownIt("gfm-like", {"highlight": pygments_highlight})
    md.use(tasklists_plugin)
    md.use(footnote_plugin)
    return md


_renderer = make_renderer()


def render_markdown(text: str) -> str:
    return _renderer.render(text)


def assemble_html(body_html: str, title: Optional[str] = None, prologue: str = "", epilogue: str = "") -> str:
    """Concatenate prologue, title heading, body and epilogue, in that order."""
    html = prologue
    if title is not None:
        html += f"<h1><center> {title} </center></h1>\n"
    html += body_html
    html += epilogue
    return html


def read_text(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PublishError(f"Failed to read {path}: {exc}", path) from exc


def read_fragment(path: Optional[Path]) -> str:
    if path is None:
        return ""
    return read_text(path)


def write_text(path: Path, text: str) -> None:
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise PublishError(f"Failed to write to {path}: {exc}", path) from exc


def convert_document(
    source: Path,
    destination: Path,
    prologue: Optional[Path] = None,
    epilogue: Optional[Path] = None,
    syntax: FrontMatterSyntax = COMMENT_BLOCK,
) -> DocumentMetadata:
    """
    Render one markdown file to HTML and return its front matter.

    The returned record carries the destination's file name, which is the
    link target used by the index page. Raises PublishError if the source,
    prologue or epilogue can't be read or the destination can't be written.
    """
    source = Path(source)
    destination = Path(destination)

    document = read_text(source)
    metadata = parse_front_matter(document, syntax=syntax, source=source)

    html = assemble_html(
        render_markdown(document),
        title=metadata.title,
        prologue=read_fragment(prologue),
        epilogue=read_fragment(epilogue),
    )
    write_text(destination, html)
    logger.info("Wrote %s", destination)

    return replace(metadata, output_file_name=destination.name)
