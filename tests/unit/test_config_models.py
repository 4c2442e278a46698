"""Unit tests for hub configuration Pydantic models."""

import pytest
from pydantic import ValidationError

from mercure_publisher.config.models import HubConfig, JwtAlgorithm, JwtConfig


class TestJwtConfig:
    def test_token_only(self):
        cfg = JwtConfig(token="a.b.c")
        assert cfg.token.get_secret_value() == "a.b.c"
        assert cfg.secret is None
        assert cfg.algorithm == JwtAlgorithm.HS256
        assert cfg.publish == ["*"]

    def test_secret_is_secret(self):
        cfg = JwtConfig(secret="s3cret")
        assert cfg.secret.get_secret_value() == "s3cret"
        assert "s3cret" not in str(cfg)

    def test_neither_raises(self):
        with pytest.raises(ValidationError, match="Exactly one"):
            JwtConfig()

    def test_both_raises(self):
        with pytest.raises(ValidationError, match="Exactly one"):
            JwtConfig(token="a.b.c", secret="s")

    def test_unknown_algorithm_raises(self):
        with pytest.raises(ValidationError):
            JwtConfig(secret="s", algorithm="RS256")

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError):
            JwtConfig(secret="s", ttl_seconds=0)

    def test_misspelled_field_rejected(self):
        with pytest.raises(ValidationError, match="secrett"):
            JwtConfig(token="a.b.c", secrett="s")


class TestHubConfig:
    def test_defaults(self):
        cfg = HubConfig(url="https://example.com/hub", jwt={"token": "a.b.c"})
        assert cfg.timeout_seconds == 10.0

    def test_url_scheme_required(self):
        with pytest.raises(ValidationError, match="http"):
            HubConfig(url="example.com/hub", jwt={"token": "a.b.c"})

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            HubConfig(
                url="https://example.com/hub",
                timeout_seconds=0,
                jwt={"token": "a.b.c"},
            )

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            HubConfig(url="https://example.com/hub", jwt={"token": "a.b.c"}, foo=1)
