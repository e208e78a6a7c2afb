"""Monitor form state: the flat record the create-monitor form submits on save.

Wire names are the form's camelCase keys (aliases); attributes are snake_case.
Single-choice autocomplete fields arrive wrapped as ``[{"label": ...}]`` and
are unwrapped here, once, into plain optional strings.
"""

from __future__ import annotations

import copy
import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ── Enums ──────────────────────────────────────────────────────────────

class SearchType(str, Enum):
    graph = "graph"
    query = "query"
    http = "http"


class UrlType(str, Enum):
    url = "url"
    attribute_url = "attribute_url"


# ── Helpers ────────────────────────────────────────────────────────────

DEFAULT_EXTRACTION_QUERY = json.dumps(
    {"size": 0, "query": {"match_all": {}}},
    indent=4,
)


def unwrap_selection(value: Any) -> Optional[str]:
    """Collapse a ``[{"label": x}]`` selection into ``x`` (``None`` if empty)."""
    if value is None or isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        return value.get("label") or None
    if not value:
        return None
    first = value[0]
    if isinstance(first, dict):
        return first.get("label") or None
    return first or None


def wrap_selection(value: Optional[str]) -> list[dict]:
    return [{"label": value}] if value else []


class _FormModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ── Nested form sections ───────────────────────────────────────────────

class IndexOption(_FormModel):
    label: str


class QueryParam(_FormModel):
    key: str = ""
    value: Any = ""


class MonthlyValues(_FormModel):
    type: str = "day"
    day: Any = 1


class WhereClause(_FormModel):
    field_name: Optional[str] = Field(default=None, alias="fieldName")
    operator: str = "is"
    field_value: Any = Field(default="", alias="fieldValue")
    # Submitted record, kept so the UI mirror carries keys this model drops
    form_payload: dict = Field(default_factory=dict, exclude=True, repr=False)

    @model_validator(mode="before")
    @classmethod
    def keep_form_payload(cls, data: Any) -> Any:
        if isinstance(data, dict) and "form_payload" not in data:
            return {**data, "form_payload": copy.deepcopy(data)}
        return data

    @field_validator("field_name", mode="before")
    @classmethod
    def unwrap_field_name(cls, value: Any) -> Optional[str]:
        return unwrap_selection(value)

    def to_form(self) -> dict:
        """Re-emit the clause in the shape the form widget expects.

        Keys from the submitted record win, so selection options keep their
        extra attributes (e.g. ``type``).
        """
        form = {
            "fieldName": wrap_selection(self.field_name),
            "operator": self.operator,
            "fieldValue": self.field_value,
        }
        for key, value in self.form_payload.items():
            if key in ("field_name", "field_value"):
                continue
            if key == "fieldName" and not isinstance(value, list):
                continue
            form[key] = copy.deepcopy(value)
        return form


class HttpValues(_FormModel):
    url_type: UrlType = Field(default=UrlType.url, alias="urlType")
    url: str = ""
    scheme: str = "HTTP"
    host: Any = "localhost"
    port: Any = 9200
    path: str = ""
    query_params: list[QueryParam] = Field(default_factory=list, alias="queryParams")


def _default_weekly() -> dict[str, bool]:
    return {day: False for day in ("mon", "tue", "wed", "thur", "fri", "sat", "sun")}


# ── Form root ──────────────────────────────────────────────────────────

class FormValues(_FormModel):
    name: str = ""
    disabled: bool = False
    search_type: SearchType = Field(default=SearchType.graph, alias="searchType")

    # Schedule section
    frequency: str = "interval"
    period: Any = Field(default_factory=lambda: {"interval": 1, "unit": "MINUTES"})
    daily: Any = 0
    weekly: dict[str, bool] = Field(default_factory=_default_weekly)
    monthly: MonthlyValues = Field(default_factory=MonthlyValues)
    cron_expression: str = Field(default="0 */1 * * *", alias="cronExpression")
    timezone: Optional[str] = None

    # Search section
    index: list[IndexOption] = Field(default_factory=list)
    time_field: str = Field(default="", alias="timeField")
    query: str = DEFAULT_EXTRACTION_QUERY
    aggregation_type: str = Field(default="count", alias="aggregationType")
    field_name: Optional[str] = Field(default=None, alias="fieldName")
    over_documents: str = Field(default="all documents", alias="overDocuments")
    grouped_over_top: Any = Field(default=5, alias="groupedOverTop")
    grouped_over_field_name: Any = Field(default="bytes", alias="groupedOverFieldName")
    bucket_value: int | float = Field(default=1, alias="bucketValue")
    bucket_unit_of_time: str = Field(default="h", alias="bucketUnitOfTime")
    where: WhereClause = Field(default_factory=WhereClause)

    # HTTP section
    http: HttpValues = Field(default_factory=HttpValues)
    connection_timeout: Any = 5
    socket_timeout: Any = 5

    @field_validator("timezone", "field_name", mode="before")
    @classmethod
    def unwrap_selections(cls, value: Any) -> Optional[str]:
        return unwrap_selection(value)
