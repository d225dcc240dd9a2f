"""
Test suite for CredentialProvider component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
from unittest.mock import Mock
from shop_lister.credential_provider import (
    CredentialProvider, Credentials, NotConfiguredError, NOT_CONFIGURED_MESSAGE
)


KEY_ENV = "TEST_SHOP_LISTER_KEY"
SECRET_ENV = "TEST_SHOP_LISTER_SECRET"

COMPLETE_SETTINGS = {
    'endpoint_url': "https://shop.test",
    'api_key': "ck_123",
    'api_secret': "cs_456"
}


def make_provider(settings):
    store = Mock()
    store.get_all.return_value = dict(settings)
    return CredentialProvider(store, api_key_env=KEY_ENV, api_secret_env=SECRET_ENV)


@pytest.fixture(autouse=True)
def clear_credential_env(monkeypatch):
    monkeypatch.delenv(KEY_ENV, raising=False)
    monkeypatch.delenv(SECRET_ENV, raising=False)


class TestCredentialProvider:
    """Test suite for endpoint and Basic Auth credential resolution"""

    def test_get_credentials_with_complete_settings_returns_credentials(self):
        """
        Test that all three stored values produce Credentials
        """
        # Arrange
        provider = make_provider(COMPLETE_SETTINGS)

        # Act
        result = provider.get_credentials()

        # Assert
        assert result == Credentials(base_url="https://shop.test", username="ck_123", password="cs_456")

    @pytest.mark.parametrize("missing_key", ['endpoint_url', 'api_key', 'api_secret'])
    def test_get_credentials_with_missing_value_raises_not_configured_error(self, missing_key):
        """
        Test that any absent value means the API is not configured
        """
        # Arrange
        settings = {k: v for k, v in COMPLETE_SETTINGS.items() if k != missing_key}
        provider = make_provider(settings)

        # Act & Assert
        with pytest.raises(NotConfiguredError) as exc_info:
            provider.get_credentials()

        assert str(exc_info.value) == NOT_CONFIGURED_MESSAGE

    @pytest.mark.parametrize("empty_value", ["", "   "])
    def test_get_credentials_with_empty_value_raises_not_configured_error(self, empty_value):
        """
        Test that empty or whitespace-only values count as absent
        """
        # Arrange
        provider = make_provider({**COMPLETE_SETTINGS, 'endpoint_url': empty_value})

        # Act & Assert
        with pytest.raises(NotConfiguredError):
            provider.get_credentials()

    def test_not_configured_message_points_to_settings(self):
        """
        Test that the message tells the user where to configure the API
        """
        # Act
        error = NotConfiguredError()

        # Assert
        assert "not configured" in str(error)
        assert "settings" in str(error)

    def test_get_credentials_prefers_environment_secrets(self, monkeypatch):
        """
        Test that environment variables override the stored key and secret
        """
        # Arrange
        monkeypatch.setenv(KEY_ENV, "ck_env")
        monkeypatch.setenv(SECRET_ENV, "cs_env")
        provider = make_provider(COMPLETE_SETTINGS)

        # Act
        result = provider.get_credentials()

        # Assert
        assert result.username == "ck_env"
        assert result.password == "cs_env"

    def test_get_credentials_with_environment_secret_needs_no_stored_secret(self, monkeypatch):
        """
        Test that the secret does not have to be persisted when supplied via environment
        """
        # Arrange
        monkeypatch.setenv(SECRET_ENV, "cs_env")
        provider = make_provider({'endpoint_url': "https://shop.test", 'api_key': "ck_123"})

        # Act
        result = provider.get_credentials()

        # Assert
        assert result.password == "cs_env"

    def test_get_credentials_reads_a_fresh_snapshot_each_call(self):
        """
        Test that changed settings are picked up on the next call
        """
        # Arrange
        store = Mock()
        store.get_all.side_effect = [
            {},
            dict(COMPLETE_SETTINGS)
        ]
        provider = CredentialProvider(store, api_key_env=KEY_ENV, api_secret_env=SECRET_ENV)

        # Act & Assert
        with pytest.raises(NotConfiguredError):
            provider.get_credentials()
        assert provider.get_credentials().base_url == "https://shop.test"
        assert store.get_all.call_count == 2

    def test_acquire_clears_secret_when_block_exits(self):
        """
        Test that scoped acquisition drops the password after use
        """
        # Arrange
        provider = make_provider(COMPLETE_SETTINGS)

        # Act
        with provider.acquire() as credentials:
            password_inside = credentials.password

        # Assert
        assert password_inside == "cs_456"
        assert credentials.password == ""

    def test_acquire_clears_secret_when_block_raises(self):
        """
        Test that the secret is dropped even if the request fails
        """
        # Arrange
        provider = make_provider(COMPLETE_SETTINGS)

        # Act
        with pytest.raises(RuntimeError):
            with provider.acquire() as credentials:
                raise RuntimeError("request failed")

        # Assert
        assert credentials.password == ""

    def test_credentials_repr_masks_password(self):
        """
        Test that the secret never appears in repr output
        """
        # Arrange
        credentials = Credentials(base_url="https://shop.test", username="ck_123", password="cs_456")

        # Act
        text = repr(credentials)

        # Assert
        assert "cs_456" not in text
        assert "ck_123" in text
