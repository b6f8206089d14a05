# tests/test_health.py


def test_health_reports_ok(client) -> None:
    """The health endpoint answers without touching storage."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_root_describes_service(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"
