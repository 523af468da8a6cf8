"""Runtime configuration for a single analysis run.

Everything the pipeline needs from the environment is read once, in
:meth:`AnalyzerConfig.from_env`, and the resulting object is handed to each
component explicitly.

Environment
-----------
``CLAUDE_API_KEY``      required
``CLAUDE_API_BASE``     Messages API base URL
``WEIBO_API_ENDPOINT``  hot-search endpoint (tianapi or weibo.com format)
``CLAUDE_MODEL``        model identifier
``CLAUDE_MAX_TOKENS``   completion budget
``REPORT_OUTPUT_DIR``   directory the HTML report is written to
``SKILL_PATH``          optional skill description appended to the system prompt
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_API_BASE = "https://code.newcli.com/claude/aws"
DEFAULT_TREND_ENDPOINT = "https://weibo.com/ajax/side/hotSearch"
DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 16000
DEFAULT_SKILL_PATH = Path("skills") / "weibo-trend-analyzer" / "SKILL.md"


class ConfigError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""


class AnalyzerConfig(BaseModel):
    """Immutable settings for one trend-analysis run."""

    api_key: str = Field(..., min_length=1)
    api_base: str = DEFAULT_API_BASE
    trend_endpoint: str = DEFAULT_TREND_ENDPOINT
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, gt=0)
    fetch_timeout: float = Field(10.0, gt=0)
    completion_timeout: float = Field(600.0, gt=0)
    max_topics: int = Field(20, gt=0, description="Topics serialized into the prompt")
    output_dir: Path = Path(".")
    skill_path: Path | None = DEFAULT_SKILL_PATH

    model_config = {
        "frozen": True,
    }

    @field_validator("api_key", "api_base", "trend_endpoint", "model")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "AnalyzerConfig":
        """Build a config from *environ* (defaults to ``os.environ``).

        Keyword *overrides* win over environment values, which lets the CLI
        flags take precedence without touching the process environment.
        """
        env = os.environ if environ is None else environ

        api_key = env.get("CLAUDE_API_KEY", "").strip()
        if not api_key:
            raise ConfigError("CLAUDE_API_KEY environment variable is required")

        values: dict = {
            "api_key": api_key,
            "api_base": env.get("CLAUDE_API_BASE") or DEFAULT_API_BASE,
            "trend_endpoint": env.get("WEIBO_API_ENDPOINT") or DEFAULT_TREND_ENDPOINT,
            "model": env.get("CLAUDE_MODEL") or DEFAULT_MODEL,
        }
        if env.get("CLAUDE_MAX_TOKENS"):
            values["max_tokens"] = env["CLAUDE_MAX_TOKENS"]
        if env.get("REPORT_OUTPUT_DIR"):
            values["output_dir"] = Path(env["REPORT_OUTPUT_DIR"])
        if env.get("SKILL_PATH"):
            values["skill_path"] = Path(env["SKILL_PATH"])

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
