#!/usr/bin/env python3
# scripts/run_expiry_scan.py
"""
Daily expiry check, for cron.

Example crontab entry (08:00 every day):
  0 8 * * * cd /srv/qmedic && python -m scripts.run_expiry_scan
"""

from __future__ import annotations

import logging

from qmedic.core.database import session_scope
from qmedic.services.expiry_service import run_expiry_scan

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    with session_scope() as db:
        result = run_expiry_scan(db)

    logger.info(
        "Checked %s item(s), created %s expiry alert(s)",
        result.items_checked,
        result.alerts_created,
    )


if __name__ == "__main__":
    main()
