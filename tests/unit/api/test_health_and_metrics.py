"""
Name: Health and Metrics Endpoint Tests

Responsibilities:
  - /healthz reports the in-memory store in test environments
  - /metrics exposes Prometheus text including authority counters
  - Request ids are propagated by the middleware
"""

import pytest
from fastapi.testclient import TestClient

from wikicore.api.main import app

pytestmark = pytest.mark.unit


def test_healthz_reports_in_memory_store():
    client = TestClient(app)

    response = client.get("/healthz")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["db"] == "in_memory"
    assert body["request_id"]


def test_request_id_is_echoed():
    client = TestClient(app)

    response = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"


def test_metrics_exposes_prometheus_text():
    client = TestClient(app)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
