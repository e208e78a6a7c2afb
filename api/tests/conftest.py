"""Shared fixtures for the monitor compiler test suite."""

import os

import pytest

# ---- Environment setup (MUST happen before any api module import) ----
os.environ.setdefault("BUCKET_COUNT", "5")
os.environ.setdefault("PREVIEW_TIME_ZONE", "")


# ── Form factories ────────────────────────────────────────────────────


@pytest.fixture
def make_form_values():
    """Factory for FormValues built from wire-shaped (camelCase) overrides."""
    from form_models import FormValues

    def _factory(**overrides):
        defaults = dict(
            name="test-monitor",
            disabled=False,
            searchType="graph",
            frequency="interval",
            period={"interval": 1, "unit": "MINUTES"},
            index=[{"label": "app-logs"}],
            timeField="@timestamp",
            aggregationType="count",
            fieldName=[],
            bucketValue=5,
            bucketUnitOfTime="m",
            where={"fieldName": [], "operator": "is", "fieldValue": ""},
        )
        defaults.update(overrides)
        return FormValues.model_validate(defaults)

    return _factory


@pytest.fixture
def make_http_values():
    """Factory for HttpValues from wire-shaped overrides."""
    from form_models import HttpValues

    def _factory(**overrides):
        defaults = dict(
            urlType="url",
            url="http://localhost:9200/_cluster/health",
            scheme="HTTP",
            host="localhost",
            port=9200,
            path="",
            queryParams=[],
        )
        defaults.update(overrides)
        return HttpValues.model_validate(defaults)

    return _factory


@pytest.fixture
def fake_operators():
    """Operator table whose single entry records what it was called with."""
    calls = []

    def _fake(where):
        calls.append(where)
        return {"fake": {where.field_name: where.field_value}}

    return {"is": _fake}, calls


# ── FastAPI TestClient ────────────────────────────────────────────────


@pytest.fixture
def test_client():
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
