"""Schedule compiler: turns the schedule section of the form into an engine schedule.

``interval`` maps to a plain period; every other mode is synthesized into a
cron expression with the selected time zone attached.
"""

from __future__ import annotations

import logging
from typing import Optional

log = logging.getLogger(__name__)


class UnknownScheduleError(ValueError):
    """Raised when the form's frequency matches no known schedule mode."""

    def __init__(self, frequency: str):
        self.frequency = frequency
        super().__init__(f"Unknown schedule frequency '{frequency}'")


def build_schedule(frequency: str, ui_schedule: dict) -> Optional[dict]:
    """Build the schedule for ``frequency`` from the mirrored schedule section.

    Returns ``None`` for an unrecognized frequency; the caller decides how to
    fail.
    """
    daily = ui_schedule["daily"]
    timezone = ui_schedule["timezone"]

    if frequency == "interval":
        return {"period": ui_schedule["period"]}

    if frequency == "daily":
        expression = f"0 {daily} * * *"
    elif frequency == "weekly":
        # No checked day leaves an empty day-of-week field; kept as the form built it.
        days = ",".join(
            day.upper() for day, checked in ui_schedule["weekly"].items() if checked
        )
        expression = f"0 {daily} * * {days}"
    elif frequency == "monthly":
        monthly = ui_schedule["monthly"]
        day_of_month = monthly["day"] if monthly["type"] == "day" else "?"
        expression = f"0 {daily} {day_of_month} */1 *"
    elif frequency == "cronExpression":
        expression = ui_schedule["cronExpression"]
    else:
        log.debug("No schedule mode for frequency %r", frequency)
        return None

    return {"cron": {"expression": expression, "timezone": timezone}}
