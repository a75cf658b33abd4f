"""Health probes — liveness always 200, readiness depends on a configured API key."""


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_ready_when_key_configured(client, use_mock_client):
    use_mock_client([], configured=True)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "ready"


async def test_not_ready_without_key(client, use_mock_client):
    mock = use_mock_client([], configured=False)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "api_key_missing"
    assert mock.calls == []
