"""End-to-end test for the health endpoint."""


def test_health(client_for):
    response = client_for().get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["version"] == "0.1.0"
