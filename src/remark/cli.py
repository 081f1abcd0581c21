"""Command-line interface for remark."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .document import Remark
from .errors import RemarkError
from .fetch import fetch_remark
from .logging_config import setup_logging
from .models.config import FetchMethod, RemarkConfig


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="remark",
        description="Fetch a web page and convert it to Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a page rendered in a headless browser
  remark https://example.com/post

  # Plain HTTP fetch, with YAML front matter
  remark https://example.com/post --method default -i

  # Body text only
  remark https://example.com/post -p

  # Split at level 1 and 2 headings
  remark https://example.com/post --sections 2

  # Block images and fonts, send a cookie
  remark https://example.com/post --block visual -H "Cookie: session=abc"
        """,
    )

    parser.add_argument(
        "url",
        nargs="?",
        help="URL of the page to convert",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML config file",
    )

    # Output
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--include-front-matter",
        "-i",
        action="store_true",
        help="Prefix the Markdown with YAML front matter",
    )
    output_group.add_argument(
        "--plain-text",
        "-p",
        action="store_true",
        help="Print only the body text (overrides --include-front-matter)",
    )
    output_group.add_argument(
        "--sections",
        type=int,
        default=None,
        metavar="N",
        help="Print sections split at headings of level N or less",
    )
    output_group.add_argument(
        "--links",
        action="store_true",
        help="Print the page's links as Markdown",
    )

    # Fetch settings
    fetch_group = parser.add_argument_group("fetch settings")
    fetch_group.add_argument(
        "--method",
        choices=[method.value for method in FetchMethod],
        default=None,
        help="Fetch method (default: interactive)",
    )
    fetch_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Fetch timeout (default: 15)",
    )
    fetch_group.add_argument(
        "--block",
        nargs="+",
        metavar="NAME",
        help="Resource types or groups the browser must not load",
    )
    fetch_group.add_argument(
        "--header",
        "-H",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Extra request header (repeatable)",
    )

    # Logging
    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    log_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    return parser


def is_valid_url(url: str) -> bool:
    """Return True for absolute http(s) URLs with a host."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.hostname)


def parse_headers(values: list[str]) -> dict[str, str]:
    """
    Parse "Name: Value" strings into a header dict.

    Raises:
        ValueError: If a value has no colon or an empty name
    """
    headers: dict[str, str] = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Malformed header {value!r}, expected 'Name: Value'")
        headers[name.strip()] = content.strip()
    return headers


def build_config(args: argparse.Namespace) -> RemarkConfig:
    """
    Merge the config file (if any) with command-line overrides.

    Raises:
        ValueError: On malformed headers or a non-positive --sections
        ValidationError: On invalid config values
    """
    if args.config:
        config = RemarkConfig.from_yaml_file(args.config)
        data = config.model_dump()
    else:
        data = {}

    data["url"] = args.url or data.get("url")

    fetch_kwargs: dict = dict(data.get("fetch", {}))
    if args.method:
        fetch_kwargs["method"] = args.method
    if args.timeout is not None:
        fetch_kwargs["timeout"] = args.timeout
    if args.block:
        fetch_kwargs["blocked_resources"] = args.block
    if args.header:
        fetch_kwargs["headers"] = {**fetch_kwargs.get("headers", {}), **parse_headers(args.header)}
    data["fetch"] = fetch_kwargs

    if args.sections is not None:
        if args.sections < 1:
            raise ValueError("--sections must be at least 1")
        data["conversion"] = {**data.get("conversion", {}), "section_level": args.sections}

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return RemarkConfig.model_validate(data)


def render_output(remark: Remark, args: argparse.Namespace, config: RemarkConfig) -> str:
    """Select the text to print for the chosen output mode."""
    if args.links:
        return "".join(link.markdown + "\n" for link in remark.extract_links())

    if args.sections is not None:
        sections = remark.sections(max_level=config.conversion.section_level)
        return "\n\n".join(section.content for section in sections) + "\n"

    if args.plain_text:
        return remark.body

    if args.include_front_matter:
        return remark.page
    return remark.markdown


def run(args: argparse.Namespace) -> int:
    """Fetch, convert and print one page."""
    console = Console(stderr=True)

    if not args.url and not args.config:
        console.print("[red]Error:[/red] Please provide a URL to convert")
        return 1

    try:
        config = build_config(args)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    if not config.url or not is_valid_url(config.url):
        console.print(f"[red]Error:[/red] Invalid URL: {config.url!r} (expected http or https with a host)")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        force=True,
    )

    try:
        remark = asyncio.run(fetch_remark(config.url, config))
    except (RemarkError, ImportError) as e:
        console.print(f"[red]Error:[/red] {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    sys.stdout.write(render_output(remark, args, config))
    sys.stdout.flush()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
