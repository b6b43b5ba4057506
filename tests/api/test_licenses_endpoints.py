"""
License Endpoints Test Module.

Exercises the `/api/licenses/*` routes through FastAPI's TestClient. The
routes are thin adapters over the algebra and the matcher, so these tests
check the request/response contract; the semantics are covered by the
service unit tests.
"""

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from license_curator.main import app

client = TestClient(app)


# ==================================================================================
#                                     FIXTURES
# ==================================================================================

@pytest.fixture
def npm_revision():
    def _build(revision, license):
        return {
            "definition": {"coordinates": {"type": "npm", "name": "foo", "revision": revision}, "files": []},
            "harvest": {"clearlydefined": {"1.5.0": {"registryData": {"manifest": {"license": license}}}}},
        }
    return _build


# ==================================================================================
#                                   TEST: ALGEBRA
# ==================================================================================

def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "License Curator Backend is running"}


def test_normalize_endpoint():
    response = client.post("/api/licenses/normalize", json={"expression": "mit OR apache-2.0"})
    assert response.status_code == 200
    assert response.json() == {"normalized": "MIT OR Apache-2.0"}


def test_normalize_endpoint_blank_expression():
    response = client.post("/api/licenses/normalize", json={"expression": "  "})
    assert response.json() == {"normalized": None}


def test_expand_endpoint():
    response = client.post("/api/licenses/expand", json={"expression": "(MIT OR ISC) AND GPL-3.0"})
    assert response.status_code == 200
    assert response.json() == {
        "clauses": [["GPL-3.0", "ISC"], ["GPL-3.0", "MIT"]],
        "flattened": ["GPL-3.0", "ISC", "MIT"],
    }


@pytest.mark.parametrize("payload,expected", [
    ({"proposed": "Apache-2.0", "base": "MIT"}, "Apache-2.0 OR MIT"),
    ({"proposed": "MIT AND GPL-3.0", "base": "GPL-3.0", "mode": "AND"}, "GPL-3.0 AND MIT"),
    ({"proposed": "MIT", "base": "NOASSERTION", "mode": "OR"}, "MIT"),
])
def test_merge_endpoint(payload, expected):
    response = client.post("/api/licenses/merge", json=payload)
    assert response.status_code == 200
    assert response.json() == {"merged": expected}


def test_merge_endpoint_rejects_unknown_mode():
    response = client.post("/api/licenses/merge", json={"proposed": "MIT", "base": "ISC", "mode": "XOR"})
    assert response.status_code == 422


def test_satisfies_endpoint():
    response = client.post("/api/licenses/satisfies", json={"first": "MIT", "second": "MIT OR Apache-2.0"})
    assert response.json() == {"satisfies": True}
    response = client.post("/api/licenses/satisfies", json={"first": "GPL-3.0", "second": "MIT OR Apache-2.0"})
    assert response.json() == {"satisfies": False}


def test_lookup_endpoint():
    response = client.get("/api/licenses/lookup", params={"name": "Common Public License 1.0"})
    assert response.status_code == 200
    assert response.json() == {"license": "CPL-1.0"}


def test_lookup_endpoint_unknown_name():
    response = client.get("/api/licenses/lookup", params={"name": "Nothing Like This"})
    assert response.status_code == 404


# ==================================================================================
#                                   TEST: MATCHER
# ==================================================================================

def test_match_endpoint_matching(npm_revision):
    response = client.post(
        "/api/licenses/match",
        json={"source": npm_revision("1.0.0", "MIT"), "target": npm_revision("2.0.0", "MIT")},
    )
    assert response.status_code == 200
    assert response.json() == {
        "isMatching": True,
        "match": [{"policy": "harvest", "propPath": "registryData.manifest.license", "value": "MIT"}],
    }


def test_match_endpoint_mismatch(npm_revision):
    response = client.post(
        "/api/licenses/match",
        json={"source": npm_revision("1.0.0", "MIT"), "target": npm_revision("2.0.0", "ISC")},
    )
    body = response.json()
    assert body["isMatching"] is False
    assert body["mismatch"][0]["source"] == "MIT"
    assert body["mismatch"][0]["target"] == "ISC"
    assert "match" not in body


def test_match_endpoint_inconclusive_keeps_empty_mismatch():
    with patch("license_curator.api.licenses.LicenseMatcher.process") as mock_process:
        mock_process.return_value = {"isMatching": False, "mismatch": []}
        response = client.post(
            "/api/licenses/match",
            json={"source": {"definition": {"coordinates": {"type": "git"}}},
                  "target": {"definition": {"coordinates": {"type": "git"}}}},
        )
    assert response.json() == {"isMatching": False, "mismatch": []}


def test_match_endpoint_requires_definition():
    response = client.post("/api/licenses/match", json={"source": {}, "target": {}})
    assert response.status_code == 422
