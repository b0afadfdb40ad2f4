"""Tests for API key authentication middleware."""
from __future__ import annotations

import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient

from data_accounting.middleware.auth import APIKeyMiddleware


def _make_app(api_key: str | None = None, read_auth: bool = False) -> FastAPI:
    """Build a test app with public, read and write routes."""
    app = FastAPI()

    if api_key:
        app.add_middleware(
            APIKeyMiddleware,
            api_key=api_key,
            read_auth=read_auth,
        )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/data_accounting/v1/standard/request_hash")
    def request_hash():
        return {"statement": ""}

    @app.get("/data_accounting/v1/config")
    def config():
        return {"WitnessNetwork": "sepolia"}

    @app.put("/data_accounting/v1/config/{name}")
    def set_config(name: str):
        return {"name": name}

    return app


class TestNoApiKey(unittest.TestCase):
    """When API_KEY is not set, everything is open."""

    def setUp(self):
        self.client = TestClient(_make_app(api_key=None))

    def test_everything_open(self):
        self.assertEqual(self.client.get("/healthz").status_code, 200)
        self.assertEqual(self.client.get("/data_accounting/v1/config").status_code, 200)
        self.assertEqual(self.client.put("/data_accounting/v1/config/DomainID").status_code, 200)


class TestWithApiKey(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(_make_app(api_key="k3y"))

    def test_public_open(self):
        self.assertEqual(self.client.get("/healthz").status_code, 200)
        self.assertEqual(self.client.get("/data_accounting/v1/standard/request_hash").status_code, 200)

    def test_read_open_without_read_auth(self):
        self.assertEqual(self.client.get("/data_accounting/v1/config").status_code, 200)

    def test_write_requires_key(self):
        resp = self.client.put("/data_accounting/v1/config/DomainID")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"detail": "API key required"})

    def test_write_with_header(self):
        resp = self.client.put("/data_accounting/v1/config/DomainID", headers={"X-API-Key": "k3y"})
        self.assertEqual(resp.status_code, 200)

    def test_write_with_bearer(self):
        resp = self.client.put(
            "/data_accounting/v1/config/DomainID", headers={"Authorization": "Bearer k3y"},
        )
        self.assertEqual(resp.status_code, 200)

    def test_write_with_query_param(self):
        resp = self.client.put("/data_accounting/v1/config/DomainID?api_key=k3y")
        self.assertEqual(resp.status_code, 200)

    def test_wrong_key(self):
        resp = self.client.put("/data_accounting/v1/config/DomainID", headers={"X-API-Key": "nope"})
        self.assertEqual(resp.status_code, 401)


class TestReadAuth(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(_make_app(api_key="k3y", read_auth=True))

    def test_public_still_open(self):
        self.assertEqual(self.client.get("/healthz").status_code, 200)
        self.assertEqual(self.client.get("/data_accounting/v1/standard/request_hash").status_code, 200)

    def test_read_requires_key(self):
        self.assertEqual(self.client.get("/data_accounting/v1/config").status_code, 401)
        resp = self.client.get("/data_accounting/v1/config", headers={"X-API-Key": "k3y"})
        self.assertEqual(resp.status_code, 200)
