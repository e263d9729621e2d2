"""Command-line interface for ArticleDetect."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from article_detect.batch import BatchError, BatchOrchestrator, load_candidate_urls
from article_detect.client import ServiceClient, TransportError
from article_detect.config import Settings
from article_detect.crawler import article_urls, crawl
from article_detect.renderer import PlaywrightRenderer, RenderError
from article_detect.store import DEFAULT_RESULT_FILE, ResultStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="article-detect",
        description="Discover news articles and score them for AI-generated text.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    discover = sub.add_parser("discover", help="Crawl the listing and print article URLs")
    discover.add_argument(
        "--pages",
        type=int,
        default=None,
        help="Maximum listing pages to visit (default: MAX_PAGES from .env, 383)",
    )
    discover.add_argument(
        "--service",
        action="store_true",
        help="Ask the running article service to crawl instead of launching a local browser",
    )
    discover.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path (default: stdout)",
    )

    batch = sub.add_parser("batch", help="Fetch and analyze every URL in a list file")
    batch.add_argument("input", help="Text file with one article URL per line")
    batch.add_argument(
        "-o", "--output",
        default=str(DEFAULT_RESULT_FILE),
        help=f"Result JSON file (default: {DEFAULT_RESULT_FILE})",
    )
    batch.add_argument(
        "--checkpoint-every",
        type=int,
        default=None,
        help="Save results every N processed URLs (default: 25)",
    )
    batch.add_argument(
        "--resume",
        action="store_true",
        help="Keep records already in the output file and skip their URLs",
    )

    serve = sub.add_parser("serve", help="Run the HTTP article service")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=3000, help="Port (default: 3000)")

    return parser


def _discover(args: argparse.Namespace, settings: Settings) -> int:
    pages = args.pages if args.pages is not None else settings.max_pages

    if args.service:
        urls = ServiceClient(settings).discover(pages)
    else:
        with PlaywrightRenderer(settings) as renderer:
            result = crawl(pages, renderer, settings)
        urls = article_urls(result, settings)

    output = "\n".join(urls)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        print(f"{len(urls)} URLs written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


def _batch(args: argparse.Namespace, settings: Settings) -> int:
    if args.checkpoint_every is not None:
        settings = replace(settings, checkpoint_interval=args.checkpoint_every)

    urls = load_candidate_urls(Path(args.input))
    orchestrator = BatchOrchestrator(
        ServiceClient(settings),
        ResultStore(Path(args.output)),
        settings,
        resume=args.resume,
    )
    orchestrator.run(urls)
    return 0


def _serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from article_detect.server import create_app

    uvicorn.run(create_app(settings), host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = Settings.from_env()

    commands = {"discover": _discover, "batch": _batch, "serve": _serve}
    try:
        return commands[args.command](args, settings)
    except (RenderError, TransportError, BatchError) as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
