"""Tests for config and environment variable handling."""

import os

import pytest

from moviesearch.config import (
    check_env,
    get_base_url,
    get_omdb_key,
    get_timeout,
    save_key,
    validate_setting,
)
from moviesearch.errors import ConfigurationError


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    import moviesearch.config as config
    monkeypatch.setattr(config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(config, "PERSISTENT_ENV", tmp_path / ".env")
    return tmp_path


class TestCheckEnv:
    def test_returns_all_vars(self):
        var_names = [name for name, _, _, _ in check_env()]
        assert "OMDB_API_KEY" in var_names
        assert "API_TIMEOUT" in var_names

    def test_detects_set_var(self, monkeypatch):
        monkeypatch.setenv("OMDB_API_KEY", "test-key")
        omdb = next(s for s in check_env() if s[0] == "OMDB_API_KEY")
        assert omdb[1] is True

    def test_detects_unset_var(self, monkeypatch):
        monkeypatch.delenv("OMDB_API_KEY", raising=False)
        omdb = next(s for s in check_env() if s[0] == "OMDB_API_KEY")
        assert omdb[1] is False

    def test_reports_malformed_key(self, monkeypatch):
        monkeypatch.setenv("OMDB_API_KEY", "not-a-key")
        omdb = next(s for s in check_env() if s[0] == "OMDB_API_KEY")
        assert omdb[1] is True
        assert "8 hex characters" in omdb[3]

    def test_well_formed_key_has_no_problem(self, monkeypatch):
        monkeypatch.setenv("OMDB_API_KEY", "a1b2c3d4")
        omdb = next(s for s in check_env() if s[0] == "OMDB_API_KEY")
        assert omdb[3] is None

    def test_unset_var_has_no_problem(self, monkeypatch):
        monkeypatch.delenv("OMDB_BASE_URL", raising=False)
        base = next(s for s in check_env() if s[0] == "OMDB_BASE_URL")
        assert base[1] is False
        assert base[3] is None


class TestValidateSetting:
    @pytest.mark.parametrize("value", ["a1b2c3d4", "DEADBEEF"])
    def test_valid_keys(self, value):
        assert validate_setting("OMDB_API_KEY", value) is None

    @pytest.mark.parametrize("value", ["abc", "a1b2c3d4e5", "zzzzzzzz"])
    def test_invalid_keys(self, value):
        assert validate_setting("OMDB_API_KEY", value) is not None

    def test_base_url_must_be_absolute(self):
        assert validate_setting("OMDB_BASE_URL", "https://www.omdbapi.com/") is None
        assert "absolute" in validate_setting("OMDB_BASE_URL", "omdbapi.com")
        assert "absolute" in validate_setting("OMDB_BASE_URL", "ftp://omdbapi.com/")

    def test_timeout(self):
        assert validate_setting("API_TIMEOUT", "30") is None
        assert "number" in validate_setting("API_TIMEOUT", "soon")
        assert "greater than zero" in validate_setting("API_TIMEOUT", "0")


class TestGetOmdbKey:
    def test_returns_key(self, monkeypatch):
        monkeypatch.setenv("OMDB_API_KEY", "abc123")
        assert get_omdb_key() == "abc123"

    def test_raises_when_missing(self, monkeypatch):
        monkeypatch.delenv("OMDB_API_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="OMDB_API_KEY"):
            get_omdb_key()

    def test_blank_counts_as_missing(self, monkeypatch):
        monkeypatch.setenv("OMDB_API_KEY", "   ")
        with pytest.raises(ValueError):
            get_omdb_key()


class TestTuning:
    def test_timeout_default(self, monkeypatch):
        monkeypatch.delenv("API_TIMEOUT", raising=False)
        assert get_timeout() == 15.0

    def test_timeout_unreadable(self, monkeypatch):
        monkeypatch.setenv("API_TIMEOUT", "soon")
        assert get_timeout() == 15.0

    def test_base_url_override(self, monkeypatch):
        monkeypatch.setenv("OMDB_BASE_URL", "http://localhost:8080/")
        assert get_base_url() == "http://localhost:8080/"


class TestSaveKey:
    def test_save_new_key(self, config_dir, monkeypatch):
        monkeypatch.delenv("OMDB_API_KEY", raising=False)
        path = save_key("OMDB_API_KEY", "k-123")
        assert path == config_dir / ".env"
        assert "OMDB_API_KEY=k-123" in path.read_text()

    def test_update_existing_key(self, config_dir, monkeypatch):
        monkeypatch.delenv("OMDB_API_KEY", raising=False)
        save_key("OMDB_API_KEY", "old-value")
        save_key("OMDB_API_KEY", "new-value")

        content = (config_dir / ".env").read_text()
        assert "OMDB_API_KEY=new-value" in content
        assert "old-value" not in content

    def test_preserves_other_keys(self, config_dir, monkeypatch):
        monkeypatch.delenv("OMDB_API_KEY", raising=False)
        monkeypatch.delenv("API_TIMEOUT", raising=False)
        save_key("OMDB_API_KEY", "k")
        save_key("API_TIMEOUT", "30")

        content = (config_dir / ".env").read_text()
        assert "OMDB_API_KEY=k" in content
        assert "API_TIMEOUT=30" in content

    def test_sets_in_current_process(self, config_dir, monkeypatch):
        monkeypatch.delenv("OMDB_API_KEY", raising=False)
        save_key("OMDB_API_KEY", "live")
        assert os.environ.get("OMDB_API_KEY") == "live"
