import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from report_engine.config import AnalyzerConfig  # noqa: E402


@pytest.fixture
def config(tmp_path: Path) -> AnalyzerConfig:
    """Config pointing all file output at a temporary directory."""
    return AnalyzerConfig(
        api_key="test-key",
        trend_endpoint="https://apis.example.com/weibohot/index",
        output_dir=tmp_path / "out",
        skill_path=None,
    )
