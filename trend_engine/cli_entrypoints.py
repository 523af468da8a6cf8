#!/usr/bin/env python3
"""Console-script wrapper for the Weibo trend analysis.

After an editable install (``pip install -e .``) the following command becomes
available system-wide:

* ``weibo-trend-report`` – fetch hot searches, call Claude, write the HTML report

The function below simply forwards to ``scripts/run_analysis.py`` (passing any
extra CLI arguments through) so there is no business-logic duplication.
"""
from __future__ import annotations

import sys
from pathlib import Path
from subprocess import run

PYTHON = sys.executable
ROOT = Path(__file__).resolve().parents[1]  # Repository root


def _exec(cmd: list[str]) -> None:  # noqa: WPS421 (subprocess wrapper)
    """Execute *cmd* and propagate its exit status."""
    completed = run(cmd)
    if completed.returncode != 0:
        sys.exit(completed.returncode)


# ---------------------------------------------------------------------------
# Entry-points
# ---------------------------------------------------------------------------

def analyze() -> None:
    """Run the trend analysis once and write today's report."""
    _exec([PYTHON, str(ROOT / "scripts/run_analysis.py"), *sys.argv[1:]])
