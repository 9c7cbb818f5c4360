import pytest
import requests
from fastapi.testclient import TestClient

import api
from engine import TableEngine

client = TestClient(api.app)

@pytest.fixture(autouse=True)
def table(monkeypatch, fake_client):
    monkeypatch.setattr(api, "_engine", TableEngine(client=fake_client))
    return fake_client

def test_create_session():
    resp = client.post("/v1/table/session")
    assert resp.status_code == 200
    data = resp.json()
    assert data["session_id"] == "s-1"
    assert data["seat_on_turn"] == "North"
    assert data["auction"] == []
    assert data["auction_placeholder"] == "No bids yet"
    assert data["last_calls"] == {"North": "-", "East": "-", "South": "-", "West": "-"}
    assert data["availability"]["message"] == "New session created"
    assert [h["position"] for h in data["hands"]] == ["North", "East", "South", "West"]

def test_view_follows_keystrokes():
    client.post("/v1/table/session")
    data = client.get("/v1/table/view", params={"seat": "N", "bid": "1c"}).json()
    assert data["availability"] == {"disabled": False, "message": "New session created"}
    data = client.get("/v1/table/view", params={"seat": "E", "bid": "1c"}).json()
    assert data["availability"]["disabled"] is True
    assert "North" in data["availability"]["message"]

def test_view_without_session():
    data = client.get("/v1/table/view").json()
    assert data["session_id"] is None
    assert data["availability"] == {"disabled": True, "message": "no active session"}

def test_bid_flow(table):
    client.post("/v1/table/session")
    resp = client.post("/v1/table/bid", json={"seat": "North", "bid": "2nt"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["auction"] == [{"position": "North", "call": "2NT"}]
    assert data["seat_on_turn"] == "East"
    assert data["availability"]["message"] == "Bid accepted"

def test_local_rejections(table):
    assert client.post("/v1/table/bid", json={"seat": "N", "bid": "1C"}).status_code == 409
    client.post("/v1/table/session")
    out_of_turn = client.post("/v1/table/bid", json={"seat": "S", "bid": "1C"})
    assert out_of_turn.status_code == 409
    bad = client.post("/v1/table/bid", json={"seat": "N", "bid": "8C"})
    assert bad.status_code == 400
    assert client.post("/v1/table/bid", json={"seat": "Up", "bid": "1C"}).status_code == 400
    assert table.submitted == []

def test_remote_rejection_forwarded_verbatim(table):
    client.post("/v1/table/session")
    table.reject = (409, "it's North's turn")
    resp = client.post("/v1/table/bid", json={"seat": "N", "bid": "1C"})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "it's North's turn"

def test_unreachable_server(table, monkeypatch):
    def boom():
        raise requests.ConnectionError("connection refused")
    monkeypatch.setattr(table, "create_session", boom)
    resp = client.post("/v1/table/session")
    assert resp.status_code == 502

def test_refresh():
    assert client.post("/v1/table/refresh").status_code == 409
    client.post("/v1/table/session")
    assert client.post("/v1/table/refresh").json()["session_id"] == "s-1"

def test_advice():
    client.post("/v1/table/session")
    resp = client.post("/v1/table/advice", json={"seat": "South", "bid": "1n"})
    assert resp.status_code == 200
    assert resp.json() == {"is_recommended": True, "recommended_bid": "1NT"}
