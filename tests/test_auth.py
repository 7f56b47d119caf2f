"""Tests de l'authentification et des contrôles de rôle."""

from datetime import timedelta

import pytest

from app.core.config import jwt_settings
from app.security.password import hash_password, verify_password
from app.security.tokens import JWTSettings, create_access_token, decode_token


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_garbage_hash_is_false():
    assert verify_password("s3cret!", "not-a-bcrypt-hash") is False


def test_access_token_payload():
    token = create_access_token(user_id=7, email="a@b.re", role="EDITOR", name="Ana", settings=jwt_settings)
    decoded = decode_token(token, jwt_settings)
    assert decoded["sub"] == "7"
    assert decoded["role"] == "EDITOR"
    assert decoded["typ"] == "access"
    assert decoded["iss"] == jwt_settings.issuer


def test_login_success(client, editor):
    res = client.post("/api/auth/login", json={"email": "Editor@Cliiink.re", "password": "secret123"})
    assert res.status_code == 200
    body = res.json()
    assert body["token"]
    assert body["user"] == {"id": editor.id, "email": "editor@cliiink.re", "name": "editor", "role": "EDITOR"}


def test_login_missing_fields(client):
    res = client.post("/api/auth/login", json={"email": "x@y.re"})
    assert res.status_code == 400
    assert res.json() == {"error": "Email et mot de passe requis"}


@pytest.mark.parametrize("email,password", [
    ("editor@cliiink.re", "nope"),
    ("ghost@cliiink.re", "secret123"),
])
def test_login_bad_credentials(client, editor, email, password):
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 401
    assert res.json() == {"error": "Email ou mot de passe incorrect"}


def test_me_requires_token(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json() == {"error": "Token non fourni"}


def test_me_with_invalid_token(client):
    res = client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})
    assert res.status_code == 401
    assert res.json() == {"error": "Token invalide"}


def test_me_with_expired_token(client, editor):
    expired = JWTSettings(
        secret=jwt_settings.secret,
        issuer=jwt_settings.issuer,
        algorithm=jwt_settings.algorithm,
        access_ttl=timedelta(seconds=-10),
    )
    token = create_access_token(user_id=editor.id, email=editor.email, role="EDITOR", settings=expired)
    res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_me_returns_current_user(client, editor, editor_headers):
    res = client.get("/api/auth/me", headers=editor_headers)
    assert res.status_code == 200
    assert res.json()["email"] == "editor@cliiink.re"


def test_me_for_deleted_user(client, session, editor, editor_headers):
    session.delete(editor)
    session.commit()
    res = client.get("/api/auth/me", headers=editor_headers)
    assert res.status_code == 404
    assert res.json() == {"error": "Utilisateur non trouvé"}


def test_register_requires_admin(client, editor_headers):
    res = client.post(
        "/api/auth/register",
        json={"email": "new@cliiink.re", "password": "pw"},
        headers=editor_headers,
    )
    assert res.status_code == 403
    assert res.json() == {"error": "Accès refusé"}


def test_register_creates_editor_by_default(client, admin_headers):
    res = client.post(
        "/api/auth/register",
        json={"email": "New@Cliiink.re", "password": "pw123456", "name": "Nouveau"},
        headers=admin_headers,
    )
    assert res.status_code == 201
    assert res.json()["id"]

    login = client.post("/api/auth/login", json={"email": "new@cliiink.re", "password": "pw123456"})
    assert login.status_code == 200
    assert login.json()["user"]["role"] == "EDITOR"


def test_register_duplicate_email(client, admin, admin_headers):
    res = client.post(
        "/api/auth/register",
        json={"email": admin.email, "password": "pw"},
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Cet email est déjà utilisé"}


def test_change_password(client, editor, editor_headers):
    res = client.put(
        "/api/auth/password",
        json={"current_password": "secret123", "new_password": "newpass456"},
        headers=editor_headers,
    )
    assert res.status_code == 200

    old = client.post("/api/auth/login", json={"email": editor.email, "password": "secret123"})
    new = client.post("/api/auth/login", json={"email": editor.email, "password": "newpass456"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_wrong_current(client, editor_headers):
    res = client.put(
        "/api/auth/password",
        json={"current_password": "bad", "new_password": "newpass456"},
        headers=editor_headers,
    )
    assert res.status_code == 401
    assert res.json() == {"error": "Mot de passe actuel incorrect"}


def test_change_password_missing_fields(client, editor_headers):
    res = client.put("/api/auth/password", json={"new_password": "x"}, headers=editor_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Mot de passe actuel et nouveau requis"}


@pytest.mark.parametrize("method,url", [
    ("post", "/api/articles"),
    ("put", "/api/articles/1"),
    ("delete", "/api/articles/1"),
    ("post", "/api/bornes"),
    ("put", "/api/bornes/1"),
    ("delete", "/api/bornes/1"),
    ("post", "/api/partners"),
    ("put", "/api/partners/1"),
    ("delete", "/api/partners/1"),
    ("get", "/api/contact"),
    ("put", "/api/contact/1/archive"),
    ("post", "/api/stats/monthly"),
])
def test_write_routes_reject_anonymous_and_user_role(client, user_headers, method, url):
    kwargs = {"json": {}} if method in ("post", "put") else {}
    anonymous = getattr(client, method)(url, **kwargs)
    assert anonymous.status_code == 401

    forbidden = getattr(client, method)(url, headers=user_headers, **kwargs)
    assert forbidden.status_code == 403
    assert forbidden.json() == {"error": "Accès refusé"}
