from datetime import timedelta

from app.core.auth import create_access_token, decode_token


def test_token_round_trip():
    payload = decode_token(create_access_token({"sub": "user-1"}))
    assert payload["sub"] == "user-1"


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(minutes=-1))
    assert decode_token(token) is None


def test_garbage_token_is_rejected():
    assert decode_token("not-a-jwt") is None


def test_health_root(client):
    assert client.get("/").json()["status"] == "healthy"
