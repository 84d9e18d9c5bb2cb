#!/usr/bin/env python3
"""Convert markdown articles to HTML and optionally build a tag index page."""
import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from archive import INDEX_HTML, render_index, sort_articles, write_index
from index_config import load_index_config
from md2html import PublishError, convert_document

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"


@dataclass(frozen=True)
class BuildOptions:
    prologue: Optional[Path] = None
    epilogue: Optional[Path] = None
    index_config: Optional[Path] = None
    # Accepted on the command line but not read; the index takes its tag
    # sections from index_config.
    tag_config: Optional[Path] = None


@dataclass(frozen=True)
class Stage:
    name: str
    run: Callable[[Any], Any]


def run_stages(stages: Sequence[Stage], value: Any) -> Any:
    """Feed value through each stage in order, returning the last output."""
    for stage in stages:
        logger.debug("Stage %s", stage.name)
        try:
            value = stage.run(value)
        except PublishError as exc:
            exc.stage = stage.name
            raise
    return value

# ---------- Stages ----------

def scan_directory(directory: Path) -> List[Path]:
    """Markdown files directly inside directory, by name."""
    try:
        entries = sorted(Path(directory).iterdir())
    except OSError as exc:
        raise PublishError(f"Failed to read {directory}: {exc}", directory) from exc
    return [path for path in entries if path.suffix == MARKDOWN_SUFFIX and path.is_file()]


def convert_all(paths: Sequence[Path], options: BuildOptions) -> list:
    return [
        convert_document(path, path.with_suffix(HTML_SUFFIX), options.prologue, options.epilogue)
        for path in paths
    ]


def directory_stages(directory: Path, options: BuildOptions) -> List[Stage]:
    directory = Path(directory)
    stages = [
        Stage("scan", scan_directory),
        Stage("convert", lambda paths: convert_all(paths, options)),
        Stage("sort", sort_articles),
    ]
    if options.index_config is not None:
        stages += [
            Stage("render-index", lambda articles: render_index(articles, load_index_config(options.index_config))),
            Stage("write-index", lambda text: write_index(text, directory)),
            Stage(
                "convert-index",
                lambda path: convert_document(path, directory / INDEX_HTML, options.prologue, options.epilogue),
            ),
        ]
    return stages


def publish_directory(directory: Path, options: BuildOptions):
    """
    Convert every article in directory to a sibling .html file.

    With an index config, also writes index.md and index.html into the same
    directory. Returns the output of the last stage: the sorted article
    metadata, or the index page's metadata when an index was built.
    """
    return run_stages(directory_stages(directory, options), Path(directory))


def publish_file(source: Path, output: Optional[Path], options: BuildOptions):
    source = Path(source)
    if output is None:
        output = source.with_suffix(HTML_SUFFIX)
    return convert_document(source, output, options.prologue, options.epilogue)

# ---------- Command line ----------

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mdpress", description=__doc__)
    parser.add_argument("input", type=Path, help="Markdown document, or directory containing markdown documents")
    parser.add_argument("-p", "--prologue", type=Path, help="File prepended to every page")
    parser.add_argument("-e", "--epilogue", type=Path, help="File appended to every page")
    parser.add_argument(
        "-o", "--output", type=Path,
        help="Output file. Defaults to an html file adjacent to the input",
    )
    parser.add_argument(
        "-i", "--index", type=Path,
        help="Index config. Creates a page listing all articles in the input directory",
    )
    parser.add_argument("-t", "--tags", type=Path, help="Tag file describing how to generate the index")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every build stage")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    options = BuildOptions(
        prologue=args.prologue,
        epilogue=args.epilogue,
        index_config=args.index,
        tag_config=args.tags,
    )
    if options.tag_config is not None:
        logger.debug("Tag file %s is accepted but not used", options.tag_config)

    if not args.input.exists():
        logger.error("Failed to read %s: no such file or directory", args.input)
        return 1

    try:
        if args.input.is_dir():
            if args.output is not None:
                logger.warning("--output is ignored when the input is a directory")
            publish_directory(args.input, options)
        else:
            if args.index is not None:
                logger.warning("--index is ignored when the input is a single file")
            publish_file(args.input, args.output, options)
    except PublishError as exc:
        if exc.stage:
            logger.error("%s (stage %s)", exc, exc.stage)
        else:
            logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
