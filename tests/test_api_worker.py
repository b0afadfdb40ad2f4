"""Tests for the verification HTTP API."""
from __future__ import annotations

import os
import unittest
from unittest import mock

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from data_accounting.db.repositories import DBMerkleTreeStore, DBPageVerificationRepository
from data_accounting.db.tables import (
    PageVerificationRow,
    SettingRow,
    WitnessEventRow,
    WitnessMerkleNodeRow,
)
from data_accounting.entities.verification import VerificationHash
from data_accounting.merkle.hasher import Hasher
from data_accounting.merkle.service import WitnessTreeService
from data_accounting.results import ErrorKind, Failure
from data_accounting.workers.api_worker import _http_error, create_app


def _make_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine, tables=[
        PageVerificationRow.__table__,
        SettingRow.__table__,
        WitnessEventRow.__table__,
        WitnessMerkleNodeRow.__table__,
    ])
    return engine


class TestApiWorker(unittest.TestCase):
    def setUp(self):
        self.engine = _make_engine()
        self.hasher = Hasher()
        self.leaves = [self.hasher.get_hash_sum(f"rev {i}") for i in range(3)]
        with Session(self.engine) as session:
            self.event = WitnessTreeService(DBMerkleTreeStore(session), self.hasher).commit_event(
                self.leaves, witness_event_id="WIT_1", witness_network="sepolia",
            )
            DBPageVerificationRepository(session).add(
                VerificationHash(rev_id=5, verification_hash=self.leaves[0]),
            )

        with mock.patch.dict(os.environ, {"API_KEY": ""}):
            app = create_app(session_factory=lambda: Session(self.engine))
        self.client = TestClient(app)

    def _proof(self, **params):
        return self.client.get("/data_accounting/v1/standard/request_merkle_proof", params=params)

    def test_healthz(self):
        self.assertEqual(self.client.get("/healthz").json(), {"status": "ok"})

    def test_request_merkle_proof(self):
        resp = self._proof(var1="WIT_1", var2=self.leaves[0], var3="0")
        self.assertEqual(resp.status_code, 200)
        nodes = resp.json()["nodes"]
        self.assertEqual(len(nodes), 1)
        self.assertEqual(nodes[0]["depth"], 0)
        self.assertEqual(nodes[0]["left_leaf"], self.leaves[0])
        self.assertEqual(nodes[0]["successor"], self.hasher.combine(self.leaves[0], self.leaves[1]))

    def test_request_merkle_proof_missing_parameters(self):
        resp = self._proof(var2=self.leaves[0])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"], "missing_parameter")
        self.assertIn("witness_event_id", resp.json()["detail"]["message"])

        resp = self._proof(var1="WIT_1")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("page_verification_hash", resp.json()["detail"]["message"])

    def test_request_merkle_proof_not_found(self):
        resp = self._proof(var1="WIT_1", var2=self.leaves[0], var3="4")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"]["error"], "not_found")

    def test_request_merkle_proof_invalid_depth(self):
        resp = self._proof(var1="WIT_1", var2=self.leaves[0], var3="deep")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"], "invalid_parameter")

    def test_walk_to_root_over_http(self):
        current = self.leaves[2]
        depth = 0
        while current != self.event.recorded_root:
            resp = self._proof(var1="WIT_1", var2=current, var3=str(depth))
            self.assertEqual(resp.status_code, 200)
            node = resp.json()["nodes"][0]
            current = self.hasher.combine(node["left_leaf"], node["right_leaf"])
            depth += 1
        self.assertEqual(depth, 2)

    def test_request_hash(self):
        resp = self.client.get("/data_accounting/v1/standard/request_hash", params={"var1": "5"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["hashes"], [{"rev_id": 5, "verification_hash": self.leaves[0]}])
        self.assertEqual(
            body["statement"],
            f"I sign the following page verification_hash: [0x{self.leaves[0]}]",
        )

    def test_invalid_action(self):
        resp = self.client.get("/data_accounting/v1/standard/delete_everything", params={"var1": "1"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"], "invalid_action")

    def test_witness_event(self):
        resp = self.client.get("/data_accounting/v1/witness/WIT_1")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["recorded_root"], self.event.recorded_root)
        self.assertEqual(body["witness_network"], "sepolia")
        self.assertEqual(body["max_depth"], 1)

        self.assertEqual(self.client.get("/data_accounting/v1/witness/nope").status_code, 404)

    def test_config_roundtrip(self):
        resp = self.client.put("/data_accounting/v1/config/WitnessNetwork", json={"value": "mainnet"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"name": "WitnessNetwork", "value": "mainnet"})

        config = self.client.get("/data_accounting/v1/config").json()
        self.assertEqual(config["WitnessNetwork"], "mainnet")

    def test_config_unknown_key(self):
        resp = self.client.put("/data_accounting/v1/config/Sitename", json={"value": "x"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"], "unknown_config_key")


class TestErrorMapping(unittest.TestCase):
    def test_status_codes_by_kind(self):
        expected = {
            ErrorKind.MISSING_PARAMETER: 400,
            ErrorKind.INVALID_PARAMETER: 400,
            ErrorKind.UNKNOWN_CONFIG_KEY: 400,
            ErrorKind.NOT_FOUND: 404,
            ErrorKind.UNREADABLE_CONTENT: 422,
            ErrorKind.DATABASE_ERROR: 500,
        }
        for kind, code in expected.items():
            error = _http_error(Failure(kind, "boom"))
            self.assertEqual(error.status_code, code, kind)
            self.assertEqual(error.detail, {"error": str(kind), "message": "boom"})


class TestApiWorkerAuth(unittest.TestCase):
    def setUp(self):
        engine = _make_engine()
        with mock.patch.dict(os.environ, {"API_KEY": "secret"}):
            app = create_app(session_factory=lambda: Session(engine))
        self.client = TestClient(app)

    def test_config_write_requires_key(self):
        resp = self.client.put("/data_accounting/v1/config/WitnessNetwork", json={"value": "mainnet"})
        self.assertEqual(resp.status_code, 401)

        resp = self.client.put(
            "/data_accounting/v1/config/WitnessNetwork",
            json={"value": "mainnet"},
            headers={"X-API-Key": "secret"},
        )
        self.assertEqual(resp.status_code, 200)

    def test_proof_lookup_stays_public(self):
        resp = self.client.get(
            "/data_accounting/v1/standard/request_merkle_proof",
            params={"var1": "none", "var2": "abc"},
        )
        self.assertEqual(resp.status_code, 404)
