"""Input compiler: what a monitor queries or calls on each run."""

from __future__ import annotations

from form_models import FormValues, SearchType
from query_compiler import compile_query
from where_filters import OPERATORS_QUERY_MAP, OperatorTable


def compile_input(
    values: FormValues, operators: OperatorTable = OPERATORS_QUERY_MAP
) -> dict:
    if values.search_type == SearchType.http:
        return compile_http(values)
    return compile_search(values, operators)


def compile_search(
    values: FormValues, operators: OperatorTable = OPERATORS_QUERY_MAP
) -> dict:
    return {
        "search": {
            "indices": compile_indices(values),
            "query": compile_query(values, operators),
        }
    }


def compile_indices(values: FormValues) -> list[str]:
    """Selected index labels, in selection order (duplicates kept)."""
    return [option.label for option in values.index]


def compile_http(values: FormValues) -> dict:
    """HTTP input; fields are copied as entered, with no coercion."""
    http = values.http

    # Later entries with the same key overwrite earlier ones
    params: dict = {}
    for param in http.query_params:
        params[param.key] = param.value

    return {
        "http": {
            "scheme": http.scheme,
            "host": http.host,
            "port": http.port,
            "path": http.path,
            "params": params,
            "url": http.url,
            "connection_timeout": values.connection_timeout,
            "socket_timeout": values.socket_timeout,
        }
    }
