"""CLI entry point: python -m biaslens FILE [options]"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from biaslens import settings
from biaslens.bias import ANALYSIS_FAILED_MESSAGE, NO_BIAS_MESSAGE, AnalysisUnavailable, BiasClient
from biaslens.items import NO_CONTENT_MESSAGE, AnnotatedArticle, Article
from biaslens.profiles import register_profiles
from biaslens.query import analyze, parse
from biaslens.registry import get_sources

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_CONTENT = 1
EXIT_ANALYSIS_FAILED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biaslens",
        description=(
            "Extract a news article from saved HTML and optionally flag\n"
            "biased paragraphs with the bias-analysis service."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", metavar="FILE",
                        help="HTML file to read, or '-' for stdin")
    parser.add_argument("--source", default=None, metavar="NAME",
                        help="Source adapter to use (default: detect from --url)")
    parser.add_argument("--url", default="", metavar="URL",
                        help="Original page URL, used to detect the source")
    parser.add_argument("--analyze", action="store_true", default=False,
                        help="Send paragraphs to the bias service and show flagged ones")
    parser.add_argument("--service-url", default=settings.BIAS_SERVICE_URL, metavar="URL",
                        help="Bias service endpoint (default: %(default)s)")
    parser.add_argument("--timeout", type=float, default=settings.REQUEST_TIMEOUT,
                        metavar="SECONDS",
                        help="Bias service timeout in seconds (default: none)")
    parser.add_argument("--profiles", default=settings.PROFILES_PATH, metavar="PATH",
                        help="YAML file declaring extra source adapters")
    parser.add_argument("--json", action="store_true", default=False,
                        help="Print the result as JSON instead of a formatted report")
    parser.add_argument("--list-sources", action="store_true", default=False,
                        help="List registered source adapters and exit")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: %(default)s)")
    return parser


def _read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_article(article: Article) -> None:
    from rich.console import Console
    from rich.markup import escape
    from rich.panel import Panel

    console = Console()
    meta = {k: escape(v) for k, v in article.metadata.model_dump().items()}
    console.print(
        Panel.fit(
            f"[bold cyan]{meta['title']}[/bold cyan]\n"
            f"Author:      [green]{meta['author']}[/green]\n"
            f"Published:   {meta['date_published']}\n"
            f"Modified:    {meta['date_modified']}\n"
            f"Description: {meta['description']}\n"
            f"Source:      [yellow]{article.source}[/yellow] ({article.extraction_method})",
            title="Summary Info",
        ),
    )
    for block in article.blocks:
        console.print(f"[dim]{block.index:>3}[/dim] [magenta]{block.kind:<10}[/magenta] {escape(block.text)}")


def _print_annotations(annotated: AnnotatedArticle) -> None:
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    console = Console()
    flagged = annotated.flagged
    if not flagged:
        console.print(f"[green]{NO_BIAS_MESSAGE}[/green]")
        return

    tbl = Table(title=f"Flagged paragraphs ({len(flagged)})", show_lines=True)
    tbl.add_column("#", justify="right", style="dim")
    tbl.add_column("Text", ratio=3)
    tbl.add_column("Type", style="bold red")
    tbl.add_column("Reason", ratio=2)
    for block in flagged:
        tbl.add_row(
            str(block.index),
            escape(f'"{block.text}"'),
            escape(block.label or ""),
            escape(block.reason or ""),
        )
    console.print(tbl)


def _print_sources() -> None:
    from rich.console import Console
    from rich.table import Table

    tbl = Table(title="Registered sources")
    tbl.add_column("Name", style="cyan")
    tbl.add_column("URL pattern")
    for adapter in get_sources():
        pattern = adapter.url_pattern.pattern if adapter.url_pattern else "-"
        tbl.add_row(adapter.name, pattern)
    Console().print(tbl)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=settings.LOG_FORMAT)

    if args.profiles:
        register_profiles(args.profiles)

    if args.list_sources:
        _print_sources()
        return EXIT_OK

    try:
        html = _read_document(args.file)
    except OSError as exc:
        parser.error(f"cannot read {args.file}: {exc}")

    if not args.analyze:
        article = parse(html, args.source, url=args.url)
        if args.json:
            print(article.model_dump_json(indent=2))
        else:
            _print_article(article)
        if article.is_empty:
            print(NO_CONTENT_MESSAGE, file=sys.stderr)
            return EXIT_NO_CONTENT
        return EXIT_OK

    client = BiasClient(args.service_url, timeout=args.timeout)
    try:
        annotated = asyncio.run(analyze(html, args.source, url=args.url, client=client))
    except AnalysisUnavailable as exc:
        logger.debug("Analysis failed: %s", exc)
        print(ANALYSIS_FAILED_MESSAGE, file=sys.stderr)
        return EXIT_ANALYSIS_FAILED

    if not annotated.blocks:
        print(NO_CONTENT_MESSAGE, file=sys.stderr)
        return EXIT_NO_CONTENT

    if args.json:
        print(annotated.model_dump_json(indent=2))
    else:
        _print_annotations(annotated)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
