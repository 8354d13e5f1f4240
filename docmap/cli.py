"""
Command-line interface for docmap.

Usage::

    docmap <file.md|file.pdf|dir> [flags]

    docmap .                          # all markdown and PDF files in a directory
    docmap README.md                  # single markdown file
    docmap report.pdf                 # single PDF file
    docmap README.md --section "API"  # one section's subtree
    docmap README.md --expand "API"   # one section's content
    docmap . --refs                   # cross-references between documents
    docmap . --json                   # JSON output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from docmap import __version__
from docmap.config import DocmapConfig
from docmap.exporters.json_export import JSONExporter
from docmap.loaders import LoaderError, MarkdownLoader, PDFLoader, load_directory
from docmap.render.tree import TreeRenderer
from docmap.utils.tokens import TokenCounter

logger = logging.getLogger(__name__)

EPILOG = """\
PDF support:
  PDFs with outlines show document structure; tokens are estimated.
  PDFs without outlines fall back to page-by-page structure.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docmap",
        description="docmap - instant documentation structure for LLMs and humans",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("target", help="Markdown file, PDF file or directory")
    parser.add_argument("-s", "--section", metavar="NAME", help="Filter to a specific section")
    parser.add_argument("-e", "--expand", metavar="NAME", help="Show full content of a section")
    parser.add_argument(
        "-r", "--refs", action="store_true", help="Show cross-references between markdown files"
    )
    parser.add_argument("-j", "--json", action="store_true", help="Output JSON format")
    parser.add_argument(
        "--encoding",
        default="chars",
        help='Token counting: "chars" (default, ~4 chars per token) or a tiktoken encoding',
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    parser.add_argument("-v", "--version", action="version", version=f"docmap {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the docmap CLI.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        TokenCounter(args.encoding)
    except ValueError as e:
        print(f"Error: unknown encoding {args.encoding!r}: {e}", file=sys.stderr)
        return 1

    config = DocmapConfig(
        token_encoding=args.encoding,
        color=False if args.no_color else sys.stdout.isatty(),
    )
    target = Path(args.target)

    if not target.exists():
        print(f"Error: {target}: no such file or directory", file=sys.stderr)
        return 1

    try:
        if target.is_dir():
            return _run_directory(target, args, config)
        return _run_file(target, args, config)
    except LoaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _run_directory(target: Path, args: argparse.Namespace, config: DocmapConfig) -> int:
    documents = load_directory(target, config)
    if not documents:
        print("No markdown or PDF files found")
        return 1

    if args.json:
        print(JSONExporter().to_json(documents, str(target.resolve())))
    elif args.refs:
        print(TreeRenderer(config).refs_tree(documents, args.target))
    else:
        print(TreeRenderer(config).multi_tree(documents, args.target))
    return 0


def _run_file(target: Path, args: argparse.Namespace, config: DocmapConfig) -> int:
    if target.suffix.lower() == ".pdf":
        loader = PDFLoader(config)
    else:
        loader = MarkdownLoader(config)

    # Any non-PDF file is read as markdown, whatever its extension
    document = loader.load(target)
    document.filename = target.name

    renderer = TreeRenderer(config)
    if args.json:
        print(JSONExporter().to_json([document], str(target.resolve())))
    elif args.expand:
        print(renderer.expand_section(document, args.expand))
    elif args.section:
        print(renderer.filtered_tree(document, args.section))
    else:
        print(renderer.document_tree(document))
    return 0


if __name__ == "__main__":
    sys.exit(main())
