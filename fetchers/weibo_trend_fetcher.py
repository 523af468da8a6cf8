from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, List

import httpx

from report_engine.config import AnalyzerConfig
from report_engine.models import FetchResult, TrendItem

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json",
    "Referer": "https://weibo.com",
}

# Used when the hot-search endpoint gives us nothing to work with
FALLBACK_TRENDS: tuple[TrendItem, ...] = (
    TrendItem(title="人工智能发展趋势", heat=5_000_000, rank=1),
    TrendItem(title="新能源汽车市场", heat=4_500_000, rank=2),
    TrendItem(title="远程办公工具", heat=4_000_000, rank=3),
    TrendItem(title="健康生活方式", heat=3_500_000, rank=4),
    TrendItem(title="在线教育平台", heat=3_000_000, rank=5),
)

_HEAT_SUFFIXES = {
    "k": 1_000,
    "m": 1_000_000,
    "万": 10_000,
    "亿": 100_000_000,
}
_HEAT_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(k|m|万|亿)?$", re.IGNORECASE)


def parse_heat(value: Any) -> int:
    """Convert a heat value (e.g. 1234, '1,234', '12.5万', '3k') to a non-negative integer."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))

    text = str(value).replace(",", "").strip()
    match = _HEAT_RE.match(text)
    if not match:
        return 0

    number = float(match.group(1))
    if not math.isfinite(number):
        return 0
    suffix = (match.group(2) or "").lower()
    return int(number * _HEAT_SUFFIXES.get(suffix, 1))


def _parse_rank(value: Any, position: int) -> int:
    try:
        rank = int(value)
    except (TypeError, ValueError, OverflowError):
        return position
    return rank if rank >= 1 else position


def _normalize(entries: List[Dict[str, Any]], title_keys: tuple[str, str], heat_key: str,
               rank_key: str | None) -> List[TrendItem]:
    """Map raw list entries into :class:`TrendItem` objects.

    Position numbering follows the source list even when an entry is skipped.
    """
    items: List[TrendItem] = []
    for position, entry in enumerate(entries, 1):
        if not isinstance(entry, dict):
            continue
        title = str(entry.get(title_keys[0]) or entry.get(title_keys[1]) or "").strip()
        if not title:
            logger.debug(f"Skipping untitled entry at position {position}")
            continue
        rank = _parse_rank(entry.get(rank_key), position) if rank_key else position
        items.append(TrendItem(title=title, heat=parse_heat(entry.get(heat_key)), rank=rank))
    return items


def parse_trend_payload(payload: Any) -> FetchResult:
    """Detect which hot-search format *payload* is in and normalize it."""
    if not isinstance(payload, dict):
        logger.error(f"Unknown response format: {str(payload)[:200]}")
        return FetchResult.failure(f"Unexpected payload type: {type(payload).__name__}")

    # tianapi.com: {"code": 200, "result": {"list": [{"hotword", "hotwordnum"}]}}
    result = payload.get("result")
    if payload.get("code") == 200 and isinstance(result, dict) and isinstance(result.get("list"), list):
        trends = result["list"]
        logger.info(f"Parsed {len(trends)} trends from tianapi")
        items = _normalize(trends, ("hotword", "title"), "hotwordnum", rank_key=None)
        return FetchResult(items=items, source="tianapi")

    # weibo.com: {"data": {"realtime": [{"word", "num", "rank"}]}}
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("realtime"), list):
        trends = data["realtime"]
        logger.info(f"Parsed {len(trends)} trends from weibo")
        items = _normalize(trends, ("word", "note"), "num", rank_key="rank")
        return FetchResult(items=items, source="weibo")

    snippet = json.dumps(payload, ensure_ascii=False)[:200]
    logger.error(f"Unknown response format: {snippet}")
    return FetchResult.failure("Unknown response format")


def fetch_weibo_trends(config: AnalyzerConfig, client: httpx.Client | None = None) -> FetchResult:
    """Fetch hot-search topics from ``config.trend_endpoint``.

    Never raises: every transport, status or parse problem is logged and
    returned as a failed :class:`FetchResult` with an empty item list.
    """
    endpoint = config.trend_endpoint
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=config.fetch_timeout)

    try:
        logger.info(f"Requesting: {endpoint}")
        response = client.get(endpoint, headers=REQUEST_HEADERS, timeout=config.fetch_timeout)
    except httpx.TimeoutException:
        logger.error("Request timeout")
        return FetchResult.failure("Request timeout")
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        logger.error(f"Request error: {e}")
        return FetchResult.failure(f"Request error: {e}")
    finally:
        if owns_client:
            client.close()

    logger.info(f"Response status: {response.status_code}")
    if response.status_code != 200:
        logger.error(f"API returned status {response.status_code}")
        logger.error(f"Response: {response.text[:500]}")
        return FetchResult.failure(f"HTTP {response.status_code}")

    try:
        payload = response.json()
    except ValueError as e:
        logger.error(f"Parse error: {e}")
        logger.error(f"Response: {response.text[:500]}")
        return FetchResult.failure(f"Parse error: {e}")

    return parse_trend_payload(payload)


def resolve_trends(result: FetchResult) -> List[TrendItem]:
    """Return the fetched items, or the fixed fallback list when there are none."""
    if result.ok:
        return list(result.items)

    reason = f" ({result.error})" if result.error else ""
    logger.warning(f"Failed to fetch real data{reason}, using fallback topics")
    return list(FALLBACK_TRENDS)
