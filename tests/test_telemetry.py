# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_authproxy

from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode, Tracer

from coreason_authproxy.exceptions import MalformedTokenError, TransportError
from coreason_authproxy.models import ProviderData
from coreason_authproxy.providers.google import GoogleProviderIdentity
from coreason_authproxy.providers.myusa import MyUsaProviderIdentity


@pytest.fixture
def telemetry_setup() -> tuple[InMemorySpanExporter, Tracer]:
    """Sets up an OpenTelemetry tracer with an in-memory exporter."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return exporter, provider.get_tracer("test_tracer")


def test_google_success_span(
    telemetry_setup: tuple[InMemorySpanExporter, Tracer],
    make_id_token: Callable[[dict[str, Any]], str],
) -> None:
    exporter, tracer = telemetry_setup
    with patch("coreason_authproxy.providers.google.tracer", tracer):
        provider = GoogleProviderIdentity(ProviderData())
        provider.get_email_address({"id_token": make_id_token({"email": "u@example.com"})}, "")

    spans = exporter.get_finished_spans()
    assert len(spans) == 1
    assert spans[0].name == "google.get_email_address"
    assert spans[0].status.status_code == StatusCode.OK
    # The email is PII and stays out of span attributes
    assert "u@example.com" not in str(dict(spans[0].attributes or {}))


def test_google_failure_span(telemetry_setup: tuple[InMemorySpanExporter, Tracer]) -> None:
    exporter, tracer = telemetry_setup
    with patch("coreason_authproxy.providers.google.tracer", tracer):
        with pytest.raises(MalformedTokenError):
            GoogleProviderIdentity(ProviderData()).get_email_address({"id_token": "abc"}, "")

    span = exporter.get_finished_spans()[0]
    assert span.status.status_code == StatusCode.ERROR
    assert any(event.name == "exception" for event in span.events)


def test_myusa_failure_span(telemetry_setup: tuple[InMemorySpanExporter, Tracer]) -> None:
    exporter, tracer = telemetry_setup
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(502)))
    with patch("coreason_authproxy.providers.myusa.tracer", tracer):
        with pytest.raises(TransportError):
            MyUsaProviderIdentity(ProviderData(), client).get_email_address({}, "tok")

    span = exporter.get_finished_spans()[0]
    assert span.name == "myusa.get_email_address"
    assert span.status.status_code == StatusCode.ERROR
