"""Monitor Compiler API: compiles create-monitor form state into monitor definitions."""

import json
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

import metrics
from config import LOG_LEVEL
from form_models import FormValues, HttpValues, UrlType
from monitor_assembler import formik_to_monitor
from query_compiler import compile_ui_graph_query
from schedule_compiler import UnknownScheduleError
from url_mode import switch_url_type
from where_filters import OPERATORS_QUERY_MAP

logging.basicConfig(level=LOG_LEVEL)
log = logging.getLogger(__name__)

app = FastAPI(title="Monitor Compiler API", version="0.1.0")


class UrlTypeSwitch(BaseModel):
    http: HttpValues
    target: UrlType


@app.exception_handler(json.JSONDecodeError)
async def query_parse_error_handler(request: Request, exc: json.JSONDecodeError):
    metrics.compile_failures.labels(reason="invalid_query").inc()
    log.warning("Rejected extraction query: %s", exc)
    return JSONResponse(
        status_code=422,
        content={"detail": f"Extraction query is not valid JSON: {exc}"},
    )


@app.exception_handler(UnknownScheduleError)
async def unknown_schedule_handler(request: Request, exc: UnknownScheduleError):
    metrics.compile_failures.labels(reason="unknown_schedule").inc()
    log.warning("Rejected schedule: %s", exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def _require_known_operator(values: FormValues) -> None:
    where = values.where
    if where.field_name and where.operator not in OPERATORS_QUERY_MAP:
        metrics.compile_failures.labels(reason="unknown_operator").inc()
        log.warning("Rejected where operator %r", where.operator)
        raise HTTPException(
            status_code=422,
            detail=f"Unknown where operator '{where.operator}'",
        )


# ── Compile endpoints ─────────────────────────────────────────────────


@app.post("/api/monitors/compile")
def compile_monitor(values: FormValues):
    _require_known_operator(values)
    monitor = formik_to_monitor(values)
    metrics.monitors_compiled.labels(
        search_type=values.search_type.value, frequency=values.frequency,
    ).inc()
    return monitor


@app.post("/api/monitors/preview-query")
def preview_query(values: FormValues):
    """Return the now-anchored graph query used to chart the form's preview."""
    _require_known_operator(values)
    return compile_ui_graph_query(values)


@app.post("/api/monitors/url-type", response_model=HttpValues, response_model_by_alias=True)
def switch_url(body: UrlTypeSwitch):
    return switch_url_type(body.http, body.target)


# ── Health & metrics ──────────────────────────────────────────────────


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def prometheus_metrics():
    return Response(content=metrics.generate(), media_type="text/plain; version=0.0.4")
