"""Monitor assembler: compiles a saved form into the engine's monitor definition."""

from __future__ import annotations

import logging

from form_models import FormValues
from input_compiler import compile_input
from schedule_compiler import UnknownScheduleError, build_schedule
from ui_metadata import to_ui_schedule, to_ui_search
from where_filters import OPERATORS_QUERY_MAP, OperatorTable

log = logging.getLogger(__name__)


def formik_to_monitor(
    values: FormValues, operators: OperatorTable = OPERATORS_QUERY_MAP
) -> dict:
    """Return the monitor definition for ``values``.

    Raises:
        json.JSONDecodeError: extraction query text is not valid JSON.
        KeyError: the where operator is not in ``operators``.
        UnknownScheduleError: ``values.frequency`` is not a schedule mode.
    """
    monitor_input = compile_input(values, operators)
    ui_schedule = to_ui_schedule(values)
    schedule = build_schedule(values.frequency, ui_schedule)
    if schedule is None:
        raise UnknownScheduleError(values.frequency)
    ui_search = to_ui_search(values)

    log.info(
        "Compiled monitor %r (search=%s, frequency=%s)",
        values.name, values.search_type.value, values.frequency,
    )
    return {
        "name": values.name,
        "type": "monitor",
        "enabled": not values.disabled,
        "schedule": schedule,
        "inputs": [{"input": monitor_input}],
        "triggers": [],
        "ui_metadata": {
            "schedule": ui_schedule,
            "search": ui_search,
        },
    }
