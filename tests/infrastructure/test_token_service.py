"""Tests for bearer token issuance and verification."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from domain.enums import UserRole
from infrastructure.token_service import InvalidTokenError, MalformedTokenError, MissingTokenError, TokenAuthService


@pytest.mark.unit
@pytest.mark.auth
class TestTokenAuthService:
    """Test TokenAuthService."""

    def test_round_trip_returns_principal(self, auth_service: TokenAuthService) -> None:
        token = auth_service.issue_token("emp-1", UserRole.EMPLOYEE)

        principal = auth_service.verify_token(token)

        assert principal.id == "emp-1"
        assert principal.role == UserRole.EMPLOYEE

    def test_token_carries_expected_claims(self, auth_service: TokenAuthService, jwt_secret: str) -> None:
        issued_at = datetime(2030, 1, 1, tzinfo=UTC)

        token = auth_service.issue_token("admin-1", UserRole.ADMIN, issued_at=issued_at)

        payload = jwt.decode(token, jwt_secret, algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False})
        assert payload["id"] == "admin-1"
        assert payload["sub"] == "admin-1"
        assert payload["role"] == "admin"
        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600

    def test_token_is_valid_within_seven_days(self, auth_service: TokenAuthService) -> None:
        token = auth_service.issue_token("emp-1", UserRole.EMPLOYEE, issued_at=datetime.now(UTC) - timedelta(days=6, hours=23))

        assert auth_service.verify_token(token).id == "emp-1"

    def test_expired_token_is_rejected(self, auth_service: TokenAuthService) -> None:
        token = auth_service.issue_token("emp-1", UserRole.EMPLOYEE, issued_at=datetime.now(UTC) - timedelta(days=8))

        with pytest.raises(InvalidTokenError, match="expired"):
            auth_service.verify_token(token)

    def test_token_signed_with_other_secret_is_rejected(self, auth_service: TokenAuthService) -> None:
        now = datetime.now(UTC)
        forged = jwt.encode({"id": "admin-1", "role": "admin", "exp": now + timedelta(days=1)}, "another-secret-key-of-sufficient-length", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            auth_service.verify_token(forged)

    def test_unknown_role_is_rejected(self, auth_service: TokenAuthService, jwt_secret: str) -> None:
        token = jwt.encode({"id": "x", "role": "superuser", "exp": datetime.now(UTC) + timedelta(days=1)}, jwt_secret, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            auth_service.verify_token(token)

    def test_token_without_id_is_rejected(self, auth_service: TokenAuthService, jwt_secret: str) -> None:
        token = jwt.encode({"role": "admin", "exp": datetime.now(UTC) + timedelta(days=1)}, jwt_secret, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            auth_service.verify_token(token)

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, auth_service: TokenAuthService, header: str | None) -> None:
        with pytest.raises(MissingTokenError):
            auth_service.authenticate_header(header)

    @pytest.mark.parametrize("header", ["Bearer", "Basic abc", "Bearer a b", "token"])
    def test_malformed_header(self, auth_service: TokenAuthService, header: str) -> None:
        with pytest.raises(MalformedTokenError, match="Invalid token format"):
            auth_service.authenticate_header(header)

    def test_header_with_valid_token(self, auth_service: TokenAuthService) -> None:
        token = auth_service.issue_token("emp-1", UserRole.EMPLOYEE)

        assert auth_service.authenticate_header(f"Bearer {token}").id == "emp-1"

    def test_expires_in_seconds(self, auth_service: TokenAuthService) -> None:
        assert auth_service.expires_in_seconds == 604800
