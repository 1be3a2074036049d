"""Settings validation tests."""

import pytest

from inkwell.config import DEFAULT_JWT_SECRET, Settings


def test_default_secret_rejected_in_production():
    with pytest.raises(ValueError):
        Settings(environment="production", jwt_secret=DEFAULT_JWT_SECRET)


def test_default_secret_allowed_in_development():
    s = Settings(environment="development", jwt_secret=DEFAULT_JWT_SECRET)
    assert not s.is_production


def test_production_with_real_secret():
    s = Settings(environment="production", jwt_secret="x" * 43)
    assert s.is_production
    assert s.token_ttl_seconds == 604800
