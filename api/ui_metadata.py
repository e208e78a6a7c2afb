"""UI metadata mirror.

Copies of the schedule and search sections stored next to the compiled
monitor so the form can be rehydrated exactly.  Compiled schedules and queries
are lossy (a cron string cannot be turned back into weekday checkboxes), so the
form never re-derives its state from them.
"""

from __future__ import annotations

from form_models import FormValues


def to_ui_schedule(values: FormValues) -> dict:
    return {
        "timezone": values.timezone,
        "frequency": values.frequency,
        "period": values.period,
        "daily": values.daily,
        "weekly": dict(values.weekly),
        "monthly": values.monthly.model_dump(),
        "cronExpression": values.cron_expression,
    }


def to_ui_search(values: FormValues) -> dict:
    return {
        "searchType": values.search_type.value,
        "aggregationType": values.aggregation_type,
        "timeField": values.time_field,
        "fieldName": values.field_name or "",
        "overDocuments": values.over_documents,
        "groupedOverTop": values.grouped_over_top,
        "groupedOverFieldName": values.grouped_over_field_name,
        "bucketValue": values.bucket_value,
        "bucketUnitOfTime": values.bucket_unit_of_time,
        "where": values.where.to_form(),
    }
