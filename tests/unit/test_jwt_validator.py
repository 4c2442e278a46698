"""Unit tests for structural JWT validation."""

from __future__ import annotations

import pytest

from mercure_publisher.auth.validator import is_valid_jwt, validate_jwt
from mercure_publisher.errors import InvalidToken, PublishError

VALID_JWT = "eyJhbGciOiJIUzI1NiJ9.eyJtZXJjdXJlIjp7fX0.sig"


class TestValidateJwt:
    def test_accepts_signed_token(self):
        validate_jwt(VALID_JWT)

    def test_accepts_empty_signature(self):
        validate_jwt("eyJhbGciOiJub25lIn0.eyJtZXJjdXJlIjp7fX0.")

    def test_accepts_url_safe_characters(self):
        validate_jwt("a-b_c.D-E_F.g-h_i")

    @pytest.mark.parametrize(
        "token",
        [
            "not-a-jwt",
            "a.b",
            "a..c.d",
            "a.b.c.d",
            ".b.c",
            "a..c",
            "a.b.c d",
            "a.b.c\n",
            "a+b.c.d",
            "",
            "invalid",
        ],
    )
    def test_rejects_malformed(self, token: str):
        with pytest.raises(InvalidToken, match="not valid"):
            validate_jwt(token)

    def test_invalid_token_is_publish_error_and_value_error(self):
        with pytest.raises(PublishError):
            validate_jwt("nope")
        with pytest.raises(ValueError):
            validate_jwt("nope")

    def test_is_valid_jwt(self):
        assert is_valid_jwt(VALID_JWT)
        assert not is_valid_jwt("a.b")
