"""Weibo trend report engine.

Lightweight package that turns a list of trending topics into a Claude prompt,
calls the Messages API and pulls the HTML report back out of the response.
"""

from .models import ExtractionResult, FetchResult, TrendItem

__all__ = [
    "ExtractionResult",
    "FetchResult",
    "TrendItem",
]

__version__ = "0.1.0"
