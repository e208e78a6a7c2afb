"""Query compiler: builds the search body a monitor runs on each execution.

Graph monitors get a fixed-shape aggregation query over a rolling window that
ends at the engine's ``{{period_end}}`` template token.  Extraction monitors
carry a user-authored query that is passed through exactly as parsed.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Callable, Optional

import config
from form_models import FormValues, SearchType, WhereClause
from where_filters import OPERATORS_QUERY_MAP, OperatorTable

log = logging.getLogger(__name__)

PERIOD_END = "{{period_end}}"


# ── Helpers ──────────────────────────────────────────────────────────


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def _format_number(value: float) -> str:
    """Write integral floats without a fractional part (``2.0`` → ``"2"``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _reject_constant(text: str) -> Callable[[str], float]:
    """``parse_constant`` hook: NaN and Infinity are not valid JSON."""

    def reject(name: str) -> float:
        raise json.JSONDecodeError(f"Invalid constant {name!r}", text, max(text.find(name), 0))

    return reject


def resolve_local_timezone() -> str:
    """Return the configured preview time zone, else the host's UTC offset."""
    if config.PREVIEW_TIME_ZONE:
        return config.PREVIEW_TIME_ZONE
    offset = datetime.now().astimezone().strftime("%z")
    return f"{offset[:3]}:{offset[3:]}"


# ── Public API ───────────────────────────────────────────────────────


def compile_query(
    values: FormValues, operators: OperatorTable = OPERATORS_QUERY_MAP
) -> dict:
    if values.search_type == SearchType.graph:
        return compile_graph_query(values, operators)
    return compile_extraction_query(values)


def compile_extraction_query(values: FormValues) -> dict:
    """Parse the raw query text.  Malformed JSON raises ``json.JSONDecodeError``."""
    return json.loads(values.query, parse_constant=_reject_constant(values.query))


def compile_graph_query(
    values: FormValues, operators: OperatorTable = OPERATORS_QUERY_MAP
) -> dict:
    bucket = f"{_round_half_up(values.bucket_value)}{values.bucket_unit_of_time}"
    filters = [
        {
            "range": {
                values.time_field: {
                    "gte": f"{PERIOD_END}||-{bucket}",
                    "lte": PERIOD_END,
                    "format": "epoch_millis",
                }
            }
        }
    ]
    clause = where_clause(values.where, operators)
    if clause is not None:
        filters.append(clause)

    return {
        "size": 0,
        "aggregations": when_aggregation(values),
        "query": {"bool": {"filter": filters}},
    }


def compile_ui_graph_query(
    values: FormValues,
    operators: OperatorTable = OPERATORS_QUERY_MAP,
    timezone_resolver: Callable[[], str] = resolve_local_timezone,
) -> dict:
    """Build the live-preview variant of the graph query.

    The window is anchored on ``now`` and spans ``BUCKET_COUNT`` buckets so the
    form can chart recent data.  Never persist this query: the engine expects
    the ``{{period_end}}`` anchored one from :func:`compile_graph_query`.
    """
    filters = [
        {
            "range": {
                values.time_field: {
                    "gte": _preview_window_start(values),
                    "lte": "now",
                }
            }
        }
    ]
    clause = where_clause(values.where, operators)
    if clause is not None:
        filters.append(clause)

    return {
        "size": 0,
        "aggregations": ui_over_aggregation(values, timezone_resolver()),
        "query": {"bool": {"filter": filters}},
    }


def ui_over_aggregation(values: FormValues, time_zone: str) -> dict:
    return {
        "over": {
            "date_histogram": {
                "field": values.time_field,
                "interval": f"{_format_number(values.bucket_value)}{values.bucket_unit_of_time}",
                "time_zone": time_zone,
                "min_doc_count": 0,
                "extended_bounds": {
                    "min": _preview_window_start(values),
                    "max": "now",
                },
            },
            "aggregations": when_aggregation(values),
        }
    }


def where_clause(
    where: WhereClause, operators: OperatorTable = OPERATORS_QUERY_MAP
) -> Optional[dict]:
    """Build the where filter, or ``None`` when no field is selected.

    An operator missing from ``operators`` raises ``KeyError``.
    """
    if not where.field_name:
        return None
    log.debug("Where filter: %s %s", where.field_name, where.operator)
    return operators[where.operator](where)


def when_aggregation(values: FormValues) -> dict:
    """Metric aggregation for the graph; empty for plain document counts."""
    if values.aggregation_type == "count" or not values.field_name:
        return {}
    return {"when": {values.aggregation_type: {"field": values.field_name}}}


def _preview_window_start(values: FormValues) -> str:
    width = values.bucket_value * config.BUCKET_COUNT
    return f"now-{_format_number(width)}{values.bucket_unit_of_time}"
