import threading

import pytest
from fastapi.testclient import TestClient

from sms_extractor.config import Settings
from sms_extractor.main import create_app
from sms_extractor.ml.inference.model_loader import BackendLoader

from tests.conftest import StubBackend

API = "/api/v1"

@pytest.fixture
def client():
    with TestClient(create_app(Settings(_env_file=None))) as client:
        yield client

def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["health"] == "/health"

def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["backend"] == {"ready": True, "available": False, "status": "unavailable"}

def test_parse_sms(client):
    response = client.post(f"{API}/transactions/parse-sms", json={
        "sms_text": "Your account has been credited with Rs.2,500.00 from AMIT KUMAR on 01-Jan"
    })
    data = response.json()

    assert response.status_code == 200
    assert list(data.keys()) == ["type", "amount", "description", "fraud"]
    assert data["type"] == "credit"
    assert data["amount"] == 2500.0
    assert data["description"].startswith("Received from AMIT KUMAR")
    assert 10 <= len(data["description"].split()) <= 15
    assert data["fraud"] == False

def test_parse_fraud_sms(client):
    response = client.post(f"{API}/transactions/parse-sms", json={
        "sms_text": "URGENT: your account is suspended, verify now at this link"
    })

    assert response.status_code == 200
    assert response.json() == {"type": None, "amount": None, "description": None, "fraud": True}

def test_parse_blank_sms(client):
    response = client.post(f"{API}/transactions/parse-sms", json={"sms_text": "   "})

    assert response.status_code == 422
    assert response.json() == {"detail": "SMS text is empty"}

def test_parse_missing_field(client):
    response = client.post(f"{API}/transactions/parse-sms", json={})
    assert response.status_code == 422

def test_analyze_prompt(client):
    response = client.post(f"{API}/transactions/analyze-prompt", json={
        "prompt": 'Analyze this SMS: "INR 1250 paid to Zomato via UPI"'
    })
    data = response.json()

    assert response.status_code == 200
    assert data["type"] == "debit"
    assert data["amount"] == 1250.0
    assert data["description"].startswith("Transfer to Zomato")

def test_model_status(client):
    response = client.get(f"{API}/ml/status")

    assert response.status_code == 200
    assert response.json() == {"status": "unavailable", "status_code": 2, "ready": True, "backend": None}

def test_warmup_without_backend(client):
    response = client.post(f"{API}/ml/warmup")

    assert response.status_code == 200
    assert response.json() == {"warmed_up": False, "backend": None}

def test_loaded_backend_is_reported(tmp_path):
    model_file = tmp_path / "model.bin"
    model_file.write_bytes(b"model")
    loader = BackendLoader(factory=lambda model_bytes: StubBackend(), model_path=str(model_file))

    with TestClient(create_app(Settings(_env_file=None), backend_loader=loader)) as client:
        assert loader.wait_ready(5)
        status = client.get(f"{API}/ml/status").json()
        warmup = client.post(f"{API}/ml/warmup").json()

    assert status == {"status": "available", "status_code": 1, "ready": True, "backend": "stub"}
    assert warmup == {"warmed_up": True, "backend": "stub"}

def test_requests_before_ready_are_rejected(tmp_path):
    model_file = tmp_path / "model.bin"
    model_file.write_bytes(b"model")
    release = threading.Event()

    def factory(model_bytes):
        release.wait(5)
        return StubBackend()

    loader = BackendLoader(factory=factory, model_path=str(model_file))

    try:
        with TestClient(create_app(Settings(_env_file=None), backend_loader=loader)) as client:
            response = client.post(f"{API}/transactions/parse-sms", json={"sms_text": "INR 1250 paid to Zomato"})
            status = client.get(f"{API}/ml/status").json()
    finally:
        release.set()

    assert response.status_code == 503
    assert response.json() == {"detail": "Model not ready"}
    assert status["status"] == "downloading"
    assert status["ready"] == False
