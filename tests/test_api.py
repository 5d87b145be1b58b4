"""FastAPI endpoint tests using httpx.AsyncClient."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from api.main import app

CSV_PAPER = (
    "Question,Marks,CO,Module,QT\n"
    "Explain the process,5,CO1,M1,Theory\n"
    "Design a new system,5,CO2,M1,Design\n"
).encode("utf-8")


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["docs"] == "/docs"


async def test_evaluate_csv(client, scenario_sequence, form_data):
    resp = await client.post(
        "/api/evaluation/evaluate",
        files={"file": ("paper.csv", CSV_PAPER, "text/csv")},
        data={"FormData": json.dumps(form_data), "Sequence": json.dumps(scenario_sequence)},
    )
    assert resp.status_code == 200
    report = resp.json()
    assert report["Course Code"] == "CS501"
    collected = report["Collected Data"][0]
    assert collected["COData"] == {"1": 50.0, "2": 50.0}
    assert collected["FinalScore"] == pytest.approx(20.0)
    assert [q["Remark"] for q in collected["QuestionData"]] == [
        "Lower than Expected Blooms Level",
        "Higher than Expected Blooms Level",
    ]


async def test_evaluate_rejects_unsupported_file(client, scenario_sequence):
    resp = await client.post(
        "/api/evaluation/evaluate",
        files={"file": ("paper.pdf", b"%PDF-1.4", "application/pdf")},
        data={"Sequence": json.dumps(scenario_sequence)},
    )
    assert resp.status_code == 400
    assert "Invalid file format" in resp.json()["detail"]


async def test_evaluate_rejects_malformed_sequence(client):
    resp = await client.post(
        "/api/evaluation/evaluate",
        files={"file": ("paper.csv", CSV_PAPER, "text/csv")},
        data={"Sequence": "[{oops"},
    )
    assert resp.status_code == 400
    assert "Sequence" in resp.json()["detail"]


async def test_evaluate_requires_sequence(client):
    resp = await client.post(
        "/api/evaluation/evaluate",
        files={"file": ("paper.csv", CSV_PAPER, "text/csv")},
    )
    assert resp.status_code == 422


async def test_level_map(client):
    resp = await client.post("/api/evaluation/level-map", json={"sequence": [
        {"name": "CO1", "type": "CO", "weight": 50, "blooms": "Apply"},
        {"name": "CO2", "type": "CO", "weight": 50, "blooms": ["remember"]},
    ]})
    assert resp.status_code == 200
    data = resp.json()
    assert data["used_levels"] == ["apply", "remember"]
    assert data["level_map"] == {
        "create": 3, "evaluate": 4, "analyze": 5, "apply": 1, "understand": 6, "remember": 2,
    }


async def test_classify(client):
    resp = await client.post("/api/evaluation/classify", json={"text": "List and justify the choices"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["verbs"] == ["list", "justify"]
    assert data["highest_verb"] == "justify"
    assert data["level"] == "evaluate"
    assert data["ordinal"] == 2


async def test_classify_without_verbs(client):
    resp = await client.post("/api/evaluation/classify", json={"text": "What is a semaphore?"})
    assert resp.status_code == 200
    assert resp.json()["level"] is None
