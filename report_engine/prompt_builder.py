"""Prompt construction for the trend-analysis request."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from .models import TrendItem

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a Weibo trend analysis and product innovation expert. You will receive Weibo "
    "trending topics data and generate creative product ideas based on social trends."
)


def load_skill(skill_path: Path | None) -> str | None:
    """Read the optional skill description; a missing file only produces a warning."""
    if skill_path is None:
        return None

    path = Path(skill_path)
    if not path.is_file():
        logger.warning(f"Skill file not found at {path}, continuing without it")
        return None

    content = path.read_text(encoding="utf-8").strip()
    logger.info(f"Skill loaded successfully ({path})")
    return content or None


def build_system_prompt(skill: str | None = None) -> str:
    if not skill:
        return SYSTEM_PROMPT
    return f"{SYSTEM_PROMPT}\n\nSKILL REFERENCE:\n{skill}"


def serialize_trends(trends: Sequence[TrendItem], limit: int = 20) -> str:
    """Pretty-printed JSON of the first *limit* topics, Chinese text left readable."""
    rows = [item.model_dump() for item in list(trends)[:limit]]
    return json.dumps(rows, ensure_ascii=False, indent=2)


def build_user_message(trends: Sequence[TrendItem], limit: int = 20) -> str:
    """Generate the user prompt asking for a complete HTML report."""
    return f"""Based on these Weibo trending topics, generate a comprehensive HTML report with product innovation ideas.

Trending Topics:
{serialize_trends(trends, limit)}

Requirements:
1. Analyze each topic and score it based on:
   - Interest Score (80%): How engaging and novel is this trend?
   - Utility Score (20%): How practical are products based on this trend?
2. Generate creative product ideas for high-scoring topics
3. Output COMPLETE HTML code (from <!DOCTYPE html> to </html>)
4. Use modern, beautiful styling with gradients and cards
5. Include topic rankings, scores, and product ideas

CRITICAL: Output the FULL HTML code directly. Do NOT use any tool calls or function calls."""
