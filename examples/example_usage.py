"""Example: drive the service layer directly (no Flask).

Clocks a seeded employee in and out and prints the day's summary.
"""

import importlib

from config import get_settings_module

from src.timekeeping.timekeeping.common.logging import setup_logging
from src.timekeeping.timekeeping.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    setup_logging("INFO", json=False)
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    user_id = 4
    container.clock_service.clock_in(user_id, notes="example run")
    print(container.status_resolver.get_status(user_id).to_dict())

    entry = container.clock_service.clock_out(user_id)
    day = container.summary_service.work_date_of(user_id, entry.timestamp)
    print(container.summary_service.get_daily_summary(user_id, day).to_dict())


if __name__ == "__main__":
    main()
