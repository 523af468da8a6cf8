"""Pull the HTML report out of a free-text model response.

Model output is inconsistently formatted: sometimes the document sits in a
```` ```html ```` fence, sometimes the fence is cut off by the token limit,
sometimes the document is emitted bare. Strategies are tried in that order
and the first non-empty hit wins.
"""
from __future__ import annotations

import logging
import re

from .models import ExtractionResult

logger = logging.getLogger(__name__)

HTML_FENCE = "```html"
FENCE = "```"
DOCTYPE_MARKER = "<!DOCTYPE html>"

_FENCED_BLOCK_RE = re.compile(r"```html\s*(.*?)```", re.IGNORECASE | re.DOTALL)
_RAW_DOCUMENT_RE = re.compile(r"<!DOCTYPE html>.*</html>", re.IGNORECASE | re.DOTALL)


def _from_fenced_block(text: str) -> str | None:
    match = _FENCED_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip() or None
    return None


def _from_unterminated_fence(text: str) -> str | None:
    """Everything after the first opening fence, up to the last closing fence if one follows it."""
    start = text.find(HTML_FENCE)
    if start == -1:
        return None
    start += len(HTML_FENCE)

    end = text.rfind(FENCE)
    if end > start:
        return text[start:end].strip() or None
    return text[start:].strip() or None


def _from_raw_document(text: str) -> str | None:
    match = _RAW_DOCUMENT_RE.search(text)
    return match.group(0) if match else None


_STRATEGIES = (
    ("fenced", _from_fenced_block),
    ("unterminated_fence", _from_unterminated_fence),
    ("raw_document", _from_raw_document),
)


def extract_html(text: str) -> ExtractionResult:
    """Return the embedded HTML document of *text*, or an empty result."""
    for name, strategy in _STRATEGIES:
        html = strategy(text)
        if html:
            logger.info(f"Extracted HTML using {name} strategy ({len(html)} characters)")
            return ExtractionResult(html=html, strategy=name)

    logger.debug("No HTML found by any extraction strategy")
    return ExtractionResult()


def is_html_document(html: str | None) -> bool:
    """Acceptance gate: content only counts as a report if it carries the doctype marker."""
    return bool(html) and DOCTYPE_MARKER in html
