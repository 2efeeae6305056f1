import app.main


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health_reports_database(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] is True


def test_health_when_database_down(client, monkeypatch):
    monkeypatch.setattr(app.main, "check_db_connection", lambda: {"database": False})

    response = client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json()["success"] is False
