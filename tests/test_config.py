"""Tests for config.py — env loading, credential checks, base URL, constants."""

import pytest

from vitally_mcp import config
from vitally_mcp.exceptions import SetupError


class TestLoadEnv:
    @pytest.fixture(autouse=True)
    def _clean_environ(self, monkeypatch):
        """Remove known keys from os.environ so file-parsing tests are isolated."""
        for key in config.ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

    def test_basic_key_value(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("FOO=bar\nBAZ=qux\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"FOO": "bar", "BAZ": "qux"}

    def test_strips_whitespace(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("  KEY  =  value  \n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"KEY": "value"}

    def test_skips_comments_and_blank_lines(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\nA=1\n\n\nB=2\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"A": "1", "B": "2"}

    def test_value_with_equals_sign(self, tmp_path, monkeypatch):
        """Values can contain = signs (split on first only)."""
        env_file = tmp_path / ".env"
        env_file.write_text("VITALLY_API_KEY=sk_abc==\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"VITALLY_API_KEY": "sk_abc=="}

    def test_missing_file_returns_empty(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "nonexistent"))
        assert config.load_env() == {}


class TestLoadEnvOsEnviron:
    """Known VITALLY_* keys in os.environ override the .env file (MCP host settings)."""

    @pytest.fixture(autouse=True)
    def _clean_environ(self, monkeypatch):
        for key in config.ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

    def test_environ_without_env_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "nonexistent"))
        monkeypatch.setenv("VITALLY_API_KEY", "from-environ")
        assert config.load_env()["VITALLY_API_KEY"] == "from-environ"

    def test_environ_overrides_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("VITALLY_SUBDOMAIN=from-file\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        monkeypatch.setenv("VITALLY_SUBDOMAIN", "from-environ")
        assert config.load_env()["VITALLY_SUBDOMAIN"] == "from-environ"

    def test_empty_environ_value_does_not_override(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("VITALLY_SUBDOMAIN=from-file\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        monkeypatch.setenv("VITALLY_SUBDOMAIN", "")
        assert config.load_env()["VITALLY_SUBDOMAIN"] == "from-file"

    def test_unknown_keys_not_pulled_from_environ(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "nonexistent"))
        monkeypatch.setenv("RANDOM_KEY", "should-not-appear")
        assert "RANDOM_KEY" not in config.load_env()


class TestEnvParsers:
    """_env_int, _env_float and _env_bool fall back on bad values."""

    def test_env_int_valid(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"K": "42"})
        assert config._env_int("K", 10) == 42

    def test_env_int_bad_value_returns_default(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"K": "not_a_number"})
        assert config._env_int("K", 30) == 30

    def test_env_int_empty_returns_default(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"K": ""})
        assert config._env_int("K", 99) == 99

    def test_env_float_valid(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"K": "0.25"})
        assert config._env_float("K", 1.0) == 0.25

    def test_env_float_bad_value_returns_default(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"K": "abc"})
        assert config._env_float("K", 1.0) == 1.0

    def test_env_bool_truthy(self, monkeypatch):
        for val in ("1", "true", "yes", "on", "True", "YES"):
            monkeypatch.setattr(config, "env", {"K": val})
            assert config._env_bool("K") is True

    def test_env_bool_falsy(self, monkeypatch):
        for val in ("0", "false", "no", "off", "anything"):
            monkeypatch.setattr(config, "env", {"K": val})
            assert config._env_bool("K") is False

    def test_env_bool_missing_uses_default(self, monkeypatch):
        monkeypatch.setattr(config, "env", {})
        assert config._env_bool("K", True) is True


class TestRequireCredentials:
    def test_returns_configured_values(self):
        assert config.require_credentials() == ("fake-key", "acme")

    def test_explicit_values_stripped(self):
        assert config.require_credentials(" k ", " globex ") == ("k", "globex")

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(config, "API_KEY", "")
        with pytest.raises(SetupError) as exc_info:
            config.require_credentials()
        msg = str(exc_info.value)
        assert msg.startswith("[SETUP_NEEDED]")
        assert "VITALLY_API_KEY" in msg
        assert "VITALLY_SUBDOMAIN" not in msg

    def test_missing_subdomain(self, monkeypatch):
        monkeypatch.setattr(config, "SUBDOMAIN", "")
        with pytest.raises(SetupError, match="VITALLY_SUBDOMAIN"):
            config.require_credentials()

    def test_explicit_empty_overrides_config(self):
        with pytest.raises(SetupError, match="VITALLY_API_KEY"):
            config.require_credentials(api_key="")


class TestBaseUrl:
    def test_us_default(self):
        assert config.base_url() == "https://acme.rest.vitally.io"

    def test_us_explicit_subdomain(self):
        assert config.base_url("globex", "US") == "https://globex.rest.vitally.io"

    def test_eu_ignores_subdomain(self):
        assert config.base_url("globex", "EU") == "https://rest.vitally-eu.io"

    def test_eu_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "DATA_CENTER", "EU")
        assert config.base_url() == config.EU_BASE_URL

    def test_case_insensitive(self):
        assert config.base_url(data_center="eu") == config.EU_BASE_URL

    def test_unknown_data_center(self):
        with pytest.raises(SetupError, match="VITALLY_DATA_CENTER"):
            config.base_url(data_center="AU")


class TestConstants:
    def test_list_limits(self):
        assert config.DEFAULT_LIST_LIMIT == 20
        assert config.MAX_LIST_LIMIT == 100

    def test_valid_sort_fields(self):
        assert config.VALID_SORT_FIELDS == {"createdAt", "updatedAt"}

    def test_valid_account_statuses(self):
        assert config.VALID_ACCOUNT_STATUSES == {"active", "churned", "activeOrChurned"}

    def test_valid_nps_targets(self):
        assert config.VALID_NPS_TARGETS == {"accounts", "organization"}

    def test_sample_rate_clamped(self):
        assert 0.0 <= config.HTTP_LOG_SAMPLE_RATE <= 1.0
