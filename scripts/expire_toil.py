"""Run the TOIL expiry sweep once.

Meant for an external scheduler, e.g. a daily cron entry:

    5 0 * * *  cd /srv/toil && APP_ENV=production python scripts/expire_toil.py
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

from src.toil_system.toil_system.common.datetime_utils import parse_iso_datetime
from src.toil_system.toil_system.container import build_container

logger = logging.getLogger("toil_system.scripts.expire_toil")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Mark lapsed TOIL credit as expired.")
    parser.add_argument("--now", help="ISO-8601 timestamp to sweep at (default: current time)")
    args = parser.parse_args(argv)
    try:
        now = parse_iso_datetime(args.now)
    except ValueError:
        parser.error(f"--now is not an ISO-8601 timestamp: {args.now!r}")

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=getattr(settings, "DB_CONFIG", None),
        toil_policy=getattr(settings, "TOIL_POLICY", None),
        backend=str(getattr(settings, "STORAGE_BACKEND", "mysql")),
    )

    count = container.toil_service.expire_old_toil(now)
    logger.info("Expired %d TOIL entries", count)
    return count


if __name__ == "__main__":
    main()
