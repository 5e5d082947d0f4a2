#!/usr/bin/env python3
"""
Command-line script to scrape news articles into Markdown.

Fetches each URL, extracts the article body, and has the LLM rewrite it as
Markdown in the requested language.

Usage:
    python run_scraper.py https://example.com/article
    python run_scraper.py https://example.com/article -l spanish
    python run_scraper.py URL1 URL2 --json -o articles.json
    python run_scraper.py URL -p anthropic -m claude-sonnet-4-20250514
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Load .env file automatically (OPENAI_API_KEY, ANTHROPIC_API_KEY, LLM_PROVIDER)
from dotenv import load_dotenv
load_dotenv()

from news_scraper.main import NewsScraper
from news_scraper.rewriter import DEFAULT_LANGUAGE
from news_scraper.logger import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape news articles and convert them to Markdown using an LLM"
    )
    parser.add_argument(
        "urls",
        nargs="+",
        help="Article URLs to scrape"
    )
    parser.add_argument(
        "--language", "-l",
        default=DEFAULT_LANGUAGE,
        help=f"Output language (default: {DEFAULT_LANGUAGE})"
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output JSON instead of title + content"
    )
    parser.add_argument(
        "--model", "-m",
        help="LLM model name (default: provider default)"
    )
    parser.add_argument(
        "--provider", "-p",
        choices=["openai", "anthropic"],
        help="LLM provider (default: LLM_PROVIDER env var or openai)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output file (default: print to stdout)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )
    return parser


def render(records, as_json: bool) -> str:
    """Successful records as text blocks, or all records as JSON."""
    if as_json:
        data = [r.model_dump() for r in records]
        # A single URL gives a single object, several give a list
        payload = data[0] if len(data) == 1 else data
        return json.dumps(payload, indent=2, ensure_ascii=False)

    return "\n\n".join(r.to_text() for r in records if r.ok)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Logs share stdout with the article, so stay quiet unless asked
    setup_logger(level=logging.DEBUG if args.verbose else logging.ERROR)

    scraper = NewsScraper(provider=args.provider, model=args.model)

    if len(args.urls) == 1:
        records = [scraper.scrape(args.urls[0], args.language)]
    else:
        records = asyncio.run(scraper.scrape_many(args.urls, args.language))

    for url, record in zip(args.urls, records):
        if not record.ok:
            prefix = f"[{url}] " if len(records) > 1 else ""
            print(f"{prefix}Error during scraping: {record.error}", file=sys.stderr)

    output = render(records, args.json)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Saved to: {args.output}", file=sys.stderr)
    elif output:
        print(output)

    return 0 if all(r.ok for r in records) else 1


if __name__ == "__main__":
    sys.exit(main())
