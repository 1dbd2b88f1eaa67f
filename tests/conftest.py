"""
Shared fixtures for memokit tests.
"""

import os

import pytest
import structlog
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from memokit.config import MemoKitConfig


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep MEMOKIT_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("MEMOKIT_"):
            monkeypatch.delenv(key)
    yield
    structlog.reset_defaults()


@pytest.fixture
def events():
    """Trace notification sink that records every event."""
    return []


@pytest.fixture
def trace_config():
    """Tracing enabled regardless of environment."""
    return MemoKitConfig(trace_enabled=True)


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider
