#!/usr/bin/env python3

"""
Weibo Trend Analysis - fetch hot-search topics, ask Claude for product ideas,
save the HTML report.

Usage
-----
python scripts/run_analysis.py                     # report lands in the current directory
python scripts/run_analysis.py --output-dir docs   # or somewhere else

Exit status is 0 when the run finishes (with or without a report) and 1 on a
missing API key or any unexpected error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fetchers.weibo_trend_fetcher import fetch_weibo_trends, resolve_trends
from report_engine.claude_client import request_analysis
from report_engine.config import AnalyzerConfig, ConfigError
from report_engine.html_extractor import extract_html, is_html_document
from report_engine.prompt_builder import build_system_prompt, build_user_message, load_skill
from report_engine.report_writer import write_report

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run(config: AnalyzerConfig, http_client=None, claude_client=None) -> Optional[Path]:
    """Execute one analysis run and return the report path, or None if no report was produced.

    Completion-API errors propagate to the caller.
    """
    logger.info("🚀 Starting Weibo Trend Analysis...")
    logger.info(f"Timestamp: {datetime.now(timezone.utc).isoformat()}")
    logger.info(f"API Base: {config.api_base}")

    system_prompt = build_system_prompt(load_skill(config.skill_path))

    logger.info("📡 Fetching Weibo trending topics...")
    fetch_result = fetch_weibo_trends(config, client=http_client)
    trends = resolve_trends(fetch_result)
    logger.info(f"Fetched {len(trends)} trending topics")

    user_message = build_user_message(trends, limit=config.max_topics)
    text = request_analysis(config, system_prompt, user_message, client=claude_client)
    logger.info("✅ Analysis completed")

    extraction = extract_html(text)
    if not (extraction.found and is_html_document(extraction.html)):
        logger.warning("⚠️ No valid HTML content found in response")
        logger.info(f"Response starts with: {text[:100]}")
        logger.info(f"Response ends with: {text[-100:]}")
        return None

    return write_report(extraction.html, config.output_dir)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate an HTML product-idea report from Weibo hot searches")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Directory for the HTML report (overrides REPORT_OUTPUT_DIR)")
    parser.add_argument("--endpoint", dest="trend_endpoint", default=None,
                        help="Hot-search endpoint URL (overrides WEIBO_API_ENDPOINT)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry-point; returns the process exit status."""
    args = _parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    load_dotenv()

    try:
        config = AnalyzerConfig.from_env(output_dir=args.output_dir, trend_endpoint=args.trend_endpoint)
    except ConfigError as exc:
        logger.error(f"Error: {exc}")
        return 1

    try:
        run(config)
    except Exception as exc:
        logger.error(f"❌ Fatal error: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
