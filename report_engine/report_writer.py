"""Report file naming and persistence."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

REPORT_PREFIX = "weibo-trend-report"


def report_filename(day: date | None = None) -> str:
    """``weibo-trend-report-YYYY-MM-DD.html``, using today's UTC date by default."""
    day = day or datetime.now(timezone.utc).date()
    return f"{REPORT_PREFIX}-{day.isoformat()}.html"


def write_report(html: str, output_dir: Path, day: date | None = None) -> Path:
    """Write *html* as UTF-8 into *output_dir* and return the file path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    report_path = output_dir / report_filename(day)
    # newline="" keeps line endings exactly as the model produced them
    with open(report_path, "w", encoding="utf-8", newline="") as f:
        f.write(html)

    size_kb = report_path.stat().st_size / 1024
    logger.info(f"✅ Report saved: {report_path} ({size_kb:.2f} KB)")
    return report_path
