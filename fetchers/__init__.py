"""Trend-data fetchers."""

from .weibo_trend_fetcher import FALLBACK_TRENDS, fetch_weibo_trends, resolve_trends

__all__ = [
    "FALLBACK_TRENDS",
    "fetch_weibo_trends",
    "resolve_trends",
]
