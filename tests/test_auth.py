import pytest
from papernotes.shared.config import settings

@pytest.fixture
def real_auth(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_DEMO", False)

def test_demo_token(client):
    r = client.post("/auth/token", data={"username": "a", "password": "b"})
    assert r.json() == {"access_token": "demo", "token_type": "bearer", "demo": True}
    me = client.get("/auth/me", headers={"Authorization": "Bearer demo"}).json()
    assert me["user"]["sub"] == "demo-user"

def test_register_login_and_use_notes(client, real_auth):
    r = client.post("/auth/register", json={"email": "Ada@Example.com", "password": "secret1"})
    assert r.status_code == 201
    user_id = r.json()["user"]["id"]
    assert client.post("/auth/register", json={"email": "ada@example.com", "password": "secret1"}).status_code == 400

    assert client.post("/auth/token", data={"username": "ada@example.com", "password": "wrong"}).status_code == 401
    tok = client.post("/auth/token", data={"username": "ada@example.com", "password": "secret1"}).json()
    assert tok["demo"] is False
    headers = {"Authorization": f"Bearer {tok['access_token']}"}

    me = client.get("/auth/me", headers=headers).json()["user"]
    assert me["sub"] == user_id and me["email"] == "ada@example.com"

    # demo token is rejected once demo mode is off
    assert client.get("/notes", headers={"Authorization": "Bearer demo"}).status_code == 401
    n = client.post("/notes", json={"title": "mine"}, headers=headers).json()
    assert n["user_id"] == user_id

def test_change_password(client, real_auth):
    client.post("/auth/register", json={"email": "b@example.com", "password": "first1"})
    tok = client.post("/auth/token", data={"username": "b@example.com", "password": "first1"}).json()["access_token"]
    headers = {"Authorization": f"Bearer {tok}"}
    assert client.post("/auth/password", json={"password": "second2"}, headers=headers).status_code == 200
    assert client.post("/auth/token", data={"username": "b@example.com", "password": "first1"}).status_code == 401
    assert client.post("/auth/token", data={"username": "b@example.com", "password": "second2"}).status_code == 200

def test_password_change_for_demo_user(client):
    r = client.post("/auth/password", json={"password": "whatever"}, headers={"Authorization": "Bearer demo"})
    assert r.status_code == 400

def test_register_validation(client):
    assert client.post("/auth/register", json={"email": "not-an-email", "password": "secret1"}).status_code == 422
    assert client.post("/auth/register", json={"email": "c@example.com", "password": "123"}).status_code == 422
