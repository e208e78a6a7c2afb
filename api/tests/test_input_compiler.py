"""Tests for search and HTTP input compilation."""

from unittest.mock import patch


class TestHttpInput:
    def test_fields_copied_verbatim(self, make_form_values):
        from input_compiler import compile_input
        values = make_form_values(
            searchType="http",
            http={
                "url": "",
                "scheme": "HTTPS",
                "host": "search.internal",
                "port": "9243",
                "path": "_cluster/health",
                "queryParams": [{"key": "pretty", "value": "true"}],
            },
            connection_timeout=10,
            socket_timeout=60,
        )
        assert compile_input(values) == {
            "http": {
                "scheme": "HTTPS",
                "host": "search.internal",
                "port": "9243",
                "path": "_cluster/health",
                "params": {"pretty": "true"},
                "url": "",
                "connection_timeout": 10,
                "socket_timeout": 60,
            }
        }

    def test_duplicate_param_last_wins(self, make_form_values):
        from input_compiler import compile_http
        values = make_form_values(
            searchType="http",
            http={"queryParams": [
                {"key": "a", "value": "1"},
                {"key": "b", "value": "x"},
                {"key": "a", "value": "2"},
            ]},
        )
        assert compile_http(values)["http"]["params"] == {"a": "2", "b": "x"}

    def test_no_params_is_empty_mapping(self, make_form_values):
        from input_compiler import compile_http
        values = make_form_values(searchType="http")
        assert compile_http(values)["http"]["params"] == {}

    def test_http_does_not_build_query(self, make_form_values):
        from input_compiler import compile_input
        values = make_form_values(searchType="http", query="not json")
        with patch("input_compiler.compile_query") as m_query:
            compile_input(values)
        m_query.assert_not_called()


class TestSearchInput:
    def test_indices_in_order_without_dedup(self, make_form_values):
        from input_compiler import compile_indices
        values = make_form_values(index=[
            {"label": "logs-b"}, {"label": "logs-a"}, {"label": "logs-b"},
        ])
        assert compile_indices(values) == ["logs-b", "logs-a", "logs-b"]

    def test_search_wraps_indices_and_query(self, make_form_values):
        from input_compiler import compile_input
        values = make_form_values(searchType="query", query='{"size": 3}', index=[{"label": "x*"}])
        assert compile_input(values) == {
            "search": {"indices": ["x*"], "query": {"size": 3}}
        }

    def test_operators_forwarded(self, make_form_values, fake_operators):
        from input_compiler import compile_input
        operators, calls = fake_operators
        values = make_form_values(
            where={"fieldName": [{"label": "level"}], "operator": "is", "fieldValue": "warn"}
        )
        result = compile_input(values, operators)
        assert result["search"]["query"]["query"]["bool"]["filter"][1] == {"fake": {"level": "warn"}}
        assert len(calls) == 1
