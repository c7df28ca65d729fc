"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from config.settings import DEV_JWT_SECRET, Settings


class TestSettings:
    def test_dev_secret_fallback(self):
        settings = Settings(_env_file=None, jwt_secret="")
        assert settings.signing_key == DEV_JWT_SECRET
        assert settings.uses_dev_secret is True

    def test_configured_secret(self):
        settings = Settings(_env_file=None, jwt_secret="s3cret")
        assert settings.signing_key == "s3cret"
        assert settings.uses_dev_secret is False

    def test_name_length_within_column_size(self):
        assert Settings(_env_file=None, name_max_length=50).name_max_length == 50
        with pytest.raises(ValidationError):
            Settings(_env_file=None, name_max_length=101)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, name_max_length=0)
