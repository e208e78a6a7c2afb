"""Prometheus counters for compile requests served by the API."""

from prometheus_client import CollectorRegistry, Counter, generate_latest

# Dedicated registry so we don't mix with prometheus_client default metrics
registry = CollectorRegistry()

monitors_compiled = Counter(
    "monitor_compiler_monitors_compiled",
    "Monitor definitions compiled",
    ["search_type", "frequency"],
    registry=registry,
)
compile_failures = Counter(
    "monitor_compiler_compile_failures",
    "Compile requests rejected by the compiler",
    ["reason"],
    registry=registry,
)


def generate() -> bytes:
    return generate_latest(registry)
