import pytest
from redis.exceptions import ConnectionError as RedisConnectionError


@pytest.mark.asyncio
async def test_health_reports_redis_and_missing_key(api_client):
    resp = await api_client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["redis"] == "up"
    assert data["completion_api"] == "missing"


@pytest.mark.asyncio
async def test_readiness_fails_when_redis_down(api_client, fake_redis):
    async def broken_ping():
        raise RedisConnectionError("Connection refused")

    fake_redis.ping = broken_ping

    resp = await api_client.get("/health/ready")

    assert resp.status_code == 503
    assert resp.json() == {"ready": False, "failing": ["redis"]}


@pytest.mark.asyncio
async def test_store_failure_on_save_returns_500(api_client, fake_redis):
    async def broken_setex(*args):
        raise RedisConnectionError("Connection refused")

    fake_redis.setex = broken_setex

    resp = await api_client.post("/api/save-result", json={"title": "X"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to save result"}
    assert fake_redis.lists == {}


@pytest.mark.asyncio
async def test_liveness_and_root(api_client):
    assert (await api_client.get("/health/live")).json() == {"alive": True}
    assert (await api_client.get("/")).json()["status"] == "running"
