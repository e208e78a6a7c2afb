"""Where-clause operators for graph monitors.

Maps each operator the form offers to a builder that turns the where record
into a single Elasticsearch query DSL filter object.
"""

from __future__ import annotations

from typing import Callable, Mapping

from form_models import WhereClause

WhereBuilder = Callable[[WhereClause], dict]
OperatorTable = Mapping[str, WhereBuilder]


# ── Builders ─────────────────────────────────────────────────────────


def _is(where: WhereClause) -> dict:
    return {"term": {where.field_name: where.field_value}}


def _is_not(where: WhereClause) -> dict:
    return {"bool": {"must_not": {"term": {where.field_name: where.field_value}}}}


def _is_null(where: WhereClause) -> dict:
    return {"bool": {"must_not": {"exists": {"field": where.field_name}}}}


def _is_not_null(where: WhereClause) -> dict:
    return {"exists": {"field": where.field_name}}


def _range(bound: str) -> WhereBuilder:
    def build(where: WhereClause) -> dict:
        return {"range": {where.field_name: {bound: where.field_value}}}

    return build


def _starts_with(where: WhereClause) -> dict:
    return {"prefix": {where.field_name: where.field_value}}


def _ends_with(where: WhereClause) -> dict:
    return {"wildcard": {where.field_name: f"*{where.field_value}"}}


def _contains(where: WhereClause) -> dict:
    return {
        "query_string": {
            "query": f"*{where.field_value}*",
            "default_field": where.field_name,
        }
    }


def _does_not_contain(where: WhereClause) -> dict:
    return {"bool": {"must_not": _contains(where)}}


# ── Default table ────────────────────────────────────────────────────

OPERATORS_QUERY_MAP: dict[str, WhereBuilder] = {
    "is": _is,
    "is_not": _is_not,
    "is_null": _is_null,
    "is_not_null": _is_not_null,
    "is_greater": _range("gt"),
    "is_greater_equal": _range("gte"),
    "is_less": _range("lt"),
    "is_less_equal": _range("lte"),
    "starts_with": _starts_with,
    "ends_with": _ends_with,
    "contains": _contains,
    "does_not_contains": _does_not_contain,
}
