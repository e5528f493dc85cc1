from __future__ import annotations

import logging
from typing import Optional, Sequence

from .checks import AnomalyCheck, DetectionContext, default_checks
from .model import AnomalyItem, DetectionResult

logger = logging.getLogger(__name__)


class AnomalyDetector:
    """Runs each check on its own; a check that raises is logged and listed, the rest still run."""

    def __init__(self, checks: Optional[Sequence[AnomalyCheck]] = None):
        self._checks = list(checks) if checks is not None else default_checks()

    @property
    def checks(self) -> list[AnomalyCheck]:
        return list(self._checks)

    def detect(self, ctx: DetectionContext) -> DetectionResult:
        items: list[AnomalyItem] = []
        failed: list[str] = []
        for check in self._checks:
            try:
                found = check.run(ctx)
            except Exception:
                logger.exception("anomaly check %s failed for company=%s", check.name, ctx.company_id)
                failed.append(check.name)
                continue
            items.extend(found)
        return DetectionResult(items=tuple(items), failed_checks=tuple(failed))
