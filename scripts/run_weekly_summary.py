"""Run one weekly summary pass now, outside the scheduler.

Usage: python scripts/run_weekly_summary.py [--no-reset]

With --no-reset the summaries are sent but no history is deleted. Otherwise
the script waits for the configured reset delay before deleting, the same as
the scheduled run.
"""

from __future__ import annotations

import argparse
import importlib
import sys
import time
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.worktime.worktime.common.logging_setup import setup_logging
from src.worktime.worktime.container import build_container
from src.worktime.worktime.main import rollup_options_from


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--no-reset", action="store_true", help="send summaries but keep session history")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_output=False)

    options = rollup_options_from(settings)
    container = build_container(db_config=settings.DB_CONFIG, rollup_options=options)
    rollup = container.rollup

    summaries = rollup.run_once()
    print(f"OK: sent {len(summaries)} weekly summaries")

    if args.no_reset:
        for s in summaries:
            rollup.cancel_pending_reset(s.tenant_id)
        print("Reset skipped (--no-reset)")
        return

    rollup.scheduler.start()
    try:
        while rollup.pending_resets():
            time.sleep(1)
    finally:
        rollup.shutdown(wait=True)
    print("OK: totals reset")


if __name__ == "__main__":
    main()
