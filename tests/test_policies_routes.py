"""
Tests for the policy endpoints.
Uses TestClient without entering the lifespan, so no MongoDB connection
is opened; database access is patched per test.
"""
import json
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from app.main import app
from app.models.dataset import Dataset
from tests.conftest import make_collection, make_db

client = TestClient(app)

DATASET = {
    "id": 1,
    "name": "Weather Dataset",
    "description": "Hourly observations",
    "uuid": "0f8fad5b-d9cb-469f-a165-70867728950e",
}


def test_policy_types():
    res = client.get("/policies/types")
    assert res.status_code == 200
    assert [t["value"] for t in res.json()] == [
        "restrict_consumer", "restrict_connector", "time_limit", "usage_count",
    ]


def test_generate_inline_dataset():
    res = client.post("/policies/generate", json={
        "dataset": DATASET,
        "config": {"type": "usage_count", "maxUsageCount": 5},
        "issued": "2024-01-01T00:00:00Z",
    })
    assert res.status_code == 200
    body = res.json()

    ids = json.loads(body["idsPolicy"])
    assert ids["@id"].endswith(DATASET["uuid"])
    assert ids["ids:permission"][0]["ids:constraint"][0]["ids:rightOperand"][0]["@value"] == "5"

    odrl = json.loads(body["odrlPolicy"])
    assert odrl["dc:issued"] == "2024-01-01T00:00:00.000Z"
    assert odrl["permission"][0]["constraint"][0]["rightOperand"] == 5


def test_generate_coerces_invalid_usage_count():
    res = client.post("/policies/generate", json={
        "dataset": DATASET,
        "config": {"type": "usage_count", "maxUsageCount": "lots"},
    })
    assert res.status_code == 200
    odrl = json.loads(res.json()["odrlPolicy"])
    assert odrl["permission"][0]["constraint"][0]["rightOperand"] == 1


@pytest.mark.parametrize("raw_count", ["1e400", "NaN", "Infinity"])
def test_generate_non_finite_usage_count_falls_back_to_one(raw_count):
    body = '{"dataset": ' + json.dumps(DATASET) + ', "config": {"type": "usage_count", "maxUsageCount": ' + raw_count + '}}'
    res = client.post("/policies/generate", content=body, headers={"Content-Type": "application/json"})
    assert res.status_code == 200
    odrl = json.loads(res.json()["odrlPolicy"])
    assert odrl["permission"][0]["constraint"][0]["rightOperand"] == 1


def test_generate_rejects_unknown_type():
    res = client.post("/policies/generate", json={
        "dataset": DATASET,
        "config": {"type": "restrict_region"},
    })
    assert res.status_code == 422


def test_generate_for_catalog_dataset():
    with patch("app.services.policies_service.get_dataset_by_id", new=AsyncMock(return_value=Dataset(**DATASET))):
        res = client.post("/policies/generate/1", json={"type": "restrict_consumer", "consumers": ["c1", "c2"]})
    assert res.status_code == 200
    ids = json.loads(res.json()["idsPolicy"])
    odrl = json.loads(res.json()["odrlPolicy"])
    assert ids["ids:consumer"] == "c1"
    assert odrl["permission"][0]["assignee"] == "c1"


def test_generate_for_unknown_dataset_returns_404():
    db = make_db(resources=make_collection(find_one=None))
    with patch("app.services.datasets_service.get_db", return_value=db):
        res = client.post("/policies/generate/99", json={"type": "usage_count"})
    assert res.status_code == 404


def test_save_policy():
    policies = make_collection()
    db = make_db(policies=policies, resources=make_collection(find_one=dict(DATASET)))
    with patch("app.services.datasets_service.get_db", return_value=db), \
         patch("app.services.policies_service.get_db", return_value=db):
        res = client.post("/policies", json={
            "dataset_id": 1,
            "config": {"type": "restrict_connector", "connectors": ["connector-001"]},
        })

    assert res.status_code == 201
    assert res.json()["id"] == "665f1c2e9b1e8a3d4c2b1a00"

    stored = policies.insert_one.await_args.args[0]
    assert stored["dataset"]["uuid"] == DATASET["uuid"]
    assert stored["config"]["type"] == "restrict_connector"
    assert json.loads(stored["idsPolicy"])["ids:permission"][0]["ids:constraint"][0]["ids:rightOperand"][0]["@value"] == "connector-001"


def test_save_policy_storage_failure_returns_500():
    policies = make_collection()
    policies.insert_one = AsyncMock(side_effect=RuntimeError("connection refused"))
    db = make_db(policies=policies, resources=make_collection(find_one=dict(DATASET)))
    with patch("app.services.datasets_service.get_db", return_value=db), \
         patch("app.services.policies_service.get_db", return_value=db):
        res = client.post("/policies", json={"dataset_id": 1, "config": {"type": "usage_count"}})
    assert res.status_code == 500


def test_list_policies_by_dataset():
    stored = {
        "_id": "665f1c2e9b1e8a3d4c2b1a00",
        "dataset": DATASET,
        "config": {"type": "usage_count", "maxUsageCount": 3},
        "idsPolicy": "{}",
        "odrlPolicy": "{}",
        "created_at": "2024-01-01T00:00:00Z",
    }
    policies = make_collection(documents=[stored])
    with patch("app.services.policies_service.get_db", return_value=make_db(policies=policies)):
        res = client.get("/policies/by-dataset/1")

    assert res.status_code == 200
    assert res.json()[0]["id"] == "665f1c2e9b1e8a3d4c2b1a00"
    assert res.json()[0]["config"]["maxUsageCount"] == 3
    policies.find.assert_called_once_with({"dataset.id": 1})


@pytest.mark.parametrize("deleted_count, status", [(1, 200), (0, 404)])
def test_delete_policy(deleted_count, status):
    policies = make_collection(deleted_count=deleted_count)
    with patch("app.services.policies_service.get_db", return_value=make_db(policies=policies)):
        res = client.delete("/policies/665f1c2e9b1e8a3d4c2b1a00")
    assert res.status_code == status


def test_delete_policy_invalid_id():
    res = client.delete("/policies/not-an-object-id")
    assert res.status_code == 400
