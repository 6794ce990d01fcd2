from unittest.mock import patch

from lambda_envelope.config import EnvelopeConfig
from lambda_envelope.core.http_client import HttpClientFactory


class TestHttpClientFactory:
    @patch("httpx.AsyncClient")
    def test_create_async_client_uses_config(self, mock_client):
        """VERIFY_SSL and HTTP_TIMEOUT come from config"""
        config = EnvelopeConfig(_env_file=None, VERIFY_SSL=True, HTTP_TIMEOUT=12.5)
        factory = HttpClientFactory(config)
        factory.create_async_client()

        mock_client.assert_called_once()
        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is True
        assert kwargs["timeout"] == 12.5
        assert kwargs["trust_env"] is False

    @patch("httpx.AsyncClient")
    def test_create_async_client_explicit_verify(self, mock_client):
        """Explicit verify overrides VERIFY_SSL"""
        config = EnvelopeConfig(_env_file=None, VERIFY_SSL=True)
        HttpClientFactory(config).create_async_client(verify=False)

        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is False

    @patch("urllib3.disable_warnings")
    def test_configure_global_settings_disable_warnings(self, mock_disable):
        """VERIFY_SSL=False should trigger disable_warnings"""
        config = EnvelopeConfig(_env_file=None, VERIFY_SSL=False)
        HttpClientFactory(config).configure_global_settings()

        mock_disable.assert_called_once()

    @patch("urllib3.disable_warnings")
    def test_configure_global_settings_no_disable_warnings(self, mock_disable):
        """VERIFY_SSL=True should NOT trigger disable_warnings"""
        config = EnvelopeConfig(_env_file=None, VERIFY_SSL=True)
        HttpClientFactory(config).configure_global_settings()

        mock_disable.assert_not_called()
