"""
Tests for token issuance and verification.
"""

from datetime import timedelta

from jose import jwt

from app.auth.auth import build_claims, create_access_token, decode_token, get_password_hash, verify_password
from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET


class TestPasswords:
    def test_hash_verifies(self):
        hashed = get_password_hash("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:
    def test_claims_roundtrip(self, admin_user):
        token = create_access_token(build_claims(admin_user))
        payload = decode_token(token)

        assert payload["user_id"] == 1
        assert payload["email"] == "admin@loopi.test"
        assert payload["roles"] == ["admin"]
        assert payload["franchise_id"] == 1
        assert payload["store_id"] == 0
        assert payload["exp"] - payload["iat"] == ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def test_expired_token_is_rejected(self, admin_user):
        token = create_access_token(build_claims(admin_user), expires_delta=timedelta(seconds=-5))
        assert decode_token(token) is None

    def test_foreign_signature_is_rejected(self, admin_user):
        token = jwt.encode(build_claims(admin_user), JWT_SECRET + "-other", algorithm=JWT_ALGORITHM)
        assert decode_token(token) is None


class TestLoginRoute:
    def test_login_returns_bearer_token(self, test_client, admin_user):
        response = test_client.post("/auth/login", json={"email": "admin@loopi.test", "password": "adminpass123"})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 600
        assert decode_token(data["access_token"])["user_id"] == admin_user.id

    def test_wrong_password_is_401(self, test_client, admin_user):
        response = test_client.post("/auth/login", json={"email": "admin@loopi.test", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_issued_token_opens_protected_routes(self, test_client, admin_user, work_config):
        login = test_client.post("/auth/login", json={"email": "admin@loopi.test", "password": "adminpass123"})
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        response = test_client.get("/work-config", headers=headers)

        assert response.status_code == 200
        assert response.json()["diurnal_start"] == "06:00"

    def test_expired_token_is_401(self, test_client, admin_user):
        token = create_access_token(build_claims(admin_user), expires_delta=timedelta(minutes=-1))

        response = test_client.get("/work-config", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
