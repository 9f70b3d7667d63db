"""Tests for the FastAPI application."""

import json

import pytest
from fastapi.testclient import TestClient

from building_grammar.api import app

SMALL = {
    "shape": "rectangle",
    "width_1": 400,
    "length_1": 300,
    "height": 400,
    "grid_height": 2,
    "bottom_tile_height": 50,
    "grid_bottom": {"columns": [2, 2]},
    "grid_top": {"columns": [1, 1]},
}


@pytest.fixture
def client():
    return TestClient(app)


class TestHealthEndpoint:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestGenerateEndpoint:
    def test_generate_returns_glb(self, client):
        r = client.post("/generate", json=SMALL)
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/octet-stream"
        assert r.content[:4] == b"glTF"

    def test_generate_has_metadata_header(self, client):
        r = client.post("/generate", json=SMALL)
        metadata = json.loads(r.headers["X-Build-Metadata"])
        assert metadata["is_watertight"] is True
        assert metadata["facade_count"] == 4
        assert metadata["door_count"] == 1
        assert len(metadata["bounding_box"]) == 6

    def test_unknown_design_is_400(self, client):
        body = {**SMALL, "window_top": {"design": 9}}
        r = client.post("/generate", json=body)
        assert r.status_code == 400
        assert r.json()["error_type"] == "UnknownStyleError"

    def test_missing_side_is_400(self, client):
        body = {**SMALL, "shape": "l_shape"}
        r = client.post("/generate", json=body)
        assert r.status_code == 400
        assert r.json()["error_type"] == "MissingParameterError"

    def test_invalid_params(self, client):
        r = client.post("/generate", json={**SMALL, "width_1": -1})
        assert r.status_code in (400, 422)


class TestExportEndpoints:
    def test_export_off(self, client):
        r = client.post("/export/off", json=SMALL)
        assert r.status_code == 200
        assert r.text.startswith("OFF")
        assert "building_rectangle.off" in r.headers["Content-Disposition"]

    def test_export_stl(self, client):
        r = client.post("/export/stl", json=SMALL)
        assert r.status_code == 200
        assert "attachment" in r.headers["Content-Disposition"]
        assert len(r.content) > 80  # STL header is 80 bytes


class TestEchoEndpoint:
    def test_echo(self, client):
        r = client.post("/parameters/echo", json=SMALL)
        assert r.status_code == 200
        assert "Shape Type = 1" in r.text
        assert "Grid Bottom Width = 2" in r.text
