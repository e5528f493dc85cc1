"""Recalculate and store monthly performance scores.

Cron-friendly: re-running for the same company and period overwrites the
stored results.

    python scripts/calculate_scores.py --company-id 1 --period 2026-02
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.pams.pams.common.datetime_utils import current_period
from src.pams.pams.container import build_container
from src.pams.pams.core.enums import Role

logger = logging.getLogger("calculate_scores")


def main() -> int:
    parser = argparse.ArgumentParser(description="Calculate performance scores for every active user of a company")
    parser.add_argument("--company-id", type=int, nargs="+", required=True, help="Company id(s) to calculate")
    parser.add_argument("--period", default=None, help="YYYY-MM (default: current month)")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    container = build_container(db_config=settings.DB_CONFIG, engine=getattr(settings, "ENGINE", None))
    period = args.period or current_period()

    failures = 0
    for company_id in args.company_id:
        try:
            summary = container.performance_service.calculate_company(
                current_role=Role.SUPER_ADMIN, company_id=company_id, period=period
            )
        except Exception:
            logger.exception("score calculation failed for company=%s", company_id)
            failures += 1
            continue
        logger.info("company=%s period=%s calculated=%s", company_id, summary["period"], summary["calculated"])
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
