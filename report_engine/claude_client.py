"""Thin wrapper around the Anthropic Messages API.

Errors are deliberately not caught here: a failed completion call has no
sensible local recovery and is reported by the entry script.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

import anthropic

from .config import AnalyzerConfig

logger = logging.getLogger(__name__)


def create_client(config: AnalyzerConfig) -> anthropic.Anthropic:
    """Build a client pointed at ``config.api_base`` with SDK retries disabled."""
    return anthropic.Anthropic(
        api_key=config.api_key,
        base_url=config.api_base,
        timeout=config.completion_timeout,
        max_retries=0,
    )


def join_text_blocks(content: Iterable[Any]) -> str:
    """Concatenate the ``text`` blocks of a Messages API response, in order."""
    return "\n".join(
        block.text for block in content if getattr(block, "type", None) == "text"
    )


def request_analysis(
    config: AnalyzerConfig,
    system_prompt: str,
    user_message: str,
    client: anthropic.Anthropic | None = None,
) -> str:
    """Send one analysis request and return the full response text."""
    client = client or create_client(config)

    logger.info(f"Calling Claude API ({config.model}, max_tokens={config.max_tokens})...")
    response = client.messages.create(
        model=config.model,
        max_tokens=config.max_tokens,
        system=system_prompt,
        messages=[{"role": "user", "content": user_message}],
    )

    text = join_text_blocks(response.content)
    logger.info(f"Response length: {len(text)} characters")
    logger.info(f"Response preview: {text[:300]}...")
    if getattr(response, "stop_reason", None) == "max_tokens":
        logger.warning("Response hit the max_tokens limit; the HTML may be truncated")
    return text
