"""Daily anomaly sweep, meant for cron.

    python scripts/detect_anomalies.py --company-id 1 2
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

from src.pams.pams.container import build_container
from src.pams.pams.core.enums import Role

logger = logging.getLogger("detect_anomalies")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run anomaly detection and store the daily report")
    parser.add_argument("--company-id", type=int, nargs="+", required=True, help="Company id(s) to sweep")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    container = build_container(db_config=settings.DB_CONFIG, engine=getattr(settings, "ENGINE", None))

    failures = 0
    for company_id in args.company_id:
        try:
            report = container.anomaly_service.generate_daily_report(
                current_role=Role.SUPER_ADMIN, company_id=company_id
            )
        except Exception:
            logger.exception("anomaly sweep failed for company=%s", company_id)
            failures += 1
            continue
        logger.info("company=%s %s", company_id, report.summary)
        if report.failed_checks:
            failures += 1
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
