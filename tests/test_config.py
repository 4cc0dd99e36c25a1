import pytest

from livekit_facade import ConfigurationError, ConnectionConfig


class TestConnectionConfig:
    def test_defaults(self):
        config = ConnectionConfig.from_env({})
        assert config.url == "ws://localhost:7880"
        assert (config.api_key, config.api_secret) == ("devkey", "secret")

    def test_from_env(self):
        config = ConnectionConfig.from_env(
            {
                "LIVEKIT_URL": "wss://lk.example.com",
                "LIVEKIT_API_KEY": "key",
                "LIVEKIT_API_SECRET": "s3cr3t",
            }
        )
        assert config.url == "wss://lk.example.com"
        assert config.http_url == "https://lk.example.com"

    def test_from_host(self):
        assert ConnectionConfig.from_host("localhost", 7880, "k", "s").http_url == "http://localhost:7880"

    @pytest.mark.parametrize("url", ["localhost:7880", "ftp://lk.example.com"])
    def test_invalid_url(self, url):
        with pytest.raises(ConfigurationError):
            ConnectionConfig(url=url)

    def test_empty_secret(self):
        with pytest.raises(ValueError):
            ConnectionConfig(api_secret="")
