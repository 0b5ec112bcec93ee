def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_api_v1_questionnaires(client):
    """Questionnaire router is mounted — unknown questions return 404."""
    response = client.get("/api/v1/questionnaires/questions/1/results")
    assert response.status_code == 404


def test_api_v1_bulk_requires_question(client):
    response = client.get("/api/v1/questionnaires/1/bulk")
    assert response.status_code == 422
