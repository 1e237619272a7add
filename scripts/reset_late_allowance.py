"""Restore every employee's monthly late allowance.

Note: Meant to be scheduled on the first day of each month (cron, Task Scheduler).
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.payroll_system.payroll_system.container import build_container

logger = logging.getLogger("payroll_system.scripts.reset_late_allowance")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO))

    container = build_container(db_config=dict(settings.DB_CONFIG))
    updated = container.employee_service.reset_late_allowances()
    logger.info("Monthly late allowance reset for %d employee(s)", updated)


if __name__ == "__main__":
    main()
