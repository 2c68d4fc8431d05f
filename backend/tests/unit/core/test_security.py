"""
Unit Tests for Security Module
Tests for: password hashing, token issue/verify
"""
import time

import pytest
from datetime import datetime, timedelta
from jose import jwt

from exam_portal.core.exceptions import InvalidTokenError
from exam_portal.core.security import (
    TokenClaims,
    TokenService,
    get_password_hash,
    verify_password,
)


SECRET = "unit-test-secret"


@pytest.fixture
def service() -> TokenService:
    return TokenService(secret_key=SECRET)


@pytest.fixture
def claims() -> TokenClaims:
    return TokenClaims(user_id="u-1", role="faculty", email="rao@college.edu")


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("testpassword123")

        assert hashed != "testpassword123"
        assert hashed.startswith("$2")

    def test_hash_different_each_time(self):
        """Bcrypt generates different salts"""
        assert get_password_hash("same") != get_password_hash("same")

    def test_verify_password(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("testpassword123", hashed) is True
        assert verify_password("wrongpassword", hashed) is False

    def test_long_password_truncated_to_72_bytes(self):
        """Bytes past the bcrypt limit do not change the outcome"""
        password = "x" * 72
        hashed = get_password_hash(password + "tail")

        assert verify_password(password, hashed) is True


class TestTokenService:
    """Test access token issue and verification"""

    def test_requires_secret(self):
        with pytest.raises(ValueError):
            TokenService(secret_key="")

    def test_round_trip(self, service, claims):
        token = service.issue(claims)

        assert service.verify(token) == claims

    def test_token_payload(self, service, claims):
        token = service.issue(claims)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["sub"] == "u-1"
        assert payload["role"] == "faculty"
        assert payload["email"] == "rao@college.edu"
        assert payload["type"] == "access"

    def test_default_expiry_is_seven_days(self, service, claims):
        payload = jwt.decode(service.issue(claims), SECRET, algorithms=["HS256"])
        expires_in = payload["exp"] - time.time()

        assert timedelta(days=6, hours=23).total_seconds() < expires_in <= timedelta(days=7).total_seconds() + 5

    def test_expired_token_rejected(self, service, claims):
        token = service.issue(claims, ttl=timedelta(seconds=-10))

        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_wrong_secret_rejected(self, service, claims):
        token = TokenService(secret_key="other-secret").issue(claims)

        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_tampered_token_rejected(self, service, claims):
        token = service.issue(claims)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload[:-2] + ("A" if payload[-2] != "A" else "B") + payload[-1], signature])

        with pytest.raises(InvalidTokenError):
            service.verify(tampered)

    def test_garbage_rejected(self, service):
        with pytest.raises(InvalidTokenError):
            service.verify("not.a.token")

    def test_non_access_token_rejected(self, service):
        token = jwt.encode(
            {"sub": "u-1", "role": "student", "email": "a@college.edu", "type": "refresh",
             "exp": datetime.utcnow() + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_missing_claims_rejected(self, service):
        token = jwt.encode(
            {"sub": "u-1", "type": "access", "exp": datetime.utcnow() + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            service.verify(token)
