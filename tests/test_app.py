def test_health(client) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_unknown_endpoint_returns_json_404(client) -> None:
    response = client.get("/api/episode/does-not-exist")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Endpoint not found"}


def test_test_config_overrides_database(app) -> None:
    assert app.config['DB_CONFIG']['database'] == "quiz_show_test"
    assert app.config['STATS_MAX_WORKERS'] >= 1
