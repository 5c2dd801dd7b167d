"""Tests for configuration loading."""

import pytest

ENV_VARS = ('SPLINE_API_KEY', 'SPLINE_API_URL', 'SPLINE_TIMEOUT', 'OPENAI_API_KEY', 'PORT', 'HOST')


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every variable the loader reads; values loaded from .env files are undone too."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, 'placeholder')
        monkeypatch.delenv(name)
    return monkeypatch


class TestResolveEnvFile:

    def test_explicit_path(self, tmp_path):
        from spline_mcp.config import resolve_env_file

        env_file = tmp_path / 'prod.env'
        env_file.write_text('SPLINE_API_KEY=abc\n')

        assert resolve_env_file(str(env_file)) == env_file

    def test_explicit_path_missing(self, tmp_path):
        from spline_mcp.config import ConfigError, resolve_env_file

        with pytest.raises(ConfigError, match='Config file not found'):
            resolve_env_file(str(tmp_path / 'missing.env'))

    def test_local_env(self, tmp_path):
        from spline_mcp.config import resolve_env_file

        (tmp_path / '.env').write_text('PORT=1\n')

        assert resolve_env_file(cwd=tmp_path) == tmp_path / '.env'


class TestLoadSettings:

    def test_defaults(self, clean_env, tmp_path):
        from spline_mcp.config import DEFAULT_API_URL, load_settings

        settings = load_settings(cwd=tmp_path)

        assert settings.api.base_url == DEFAULT_API_URL
        assert settings.api.api_key is None
        assert settings.api.timeout == 30.0
        assert settings.port == 3000
        assert settings.host == '0.0.0.0'

    def test_environment_values(self, clean_env, tmp_path):
        from spline_mcp.config import load_settings

        clean_env.setenv('SPLINE_API_KEY', 'secret')
        clean_env.setenv('SPLINE_API_URL', 'https://staging.spline.test')
        clean_env.setenv('SPLINE_TIMEOUT', '12.5')
        clean_env.setenv('OPENAI_API_KEY', 'sk-test')
        clean_env.setenv('PORT', '8123')

        settings = load_settings(cwd=tmp_path)

        assert settings.api.api_key == 'secret'
        assert settings.api.base_url == 'https://staging.spline.test'
        assert settings.api.timeout == 12.5
        assert settings.openai.api_key == 'sk-test'
        assert settings.openai.timeout == 12.5
        assert settings.port == 8123

    def test_invalid_numbers_fall_back(self, clean_env, tmp_path):
        from spline_mcp.config import load_settings

        clean_env.setenv('SPLINE_TIMEOUT', 'soon')
        clean_env.setenv('PORT', 'http')

        settings = load_settings(cwd=tmp_path)

        assert settings.api.timeout == 30.0
        assert settings.port == 3000

    def test_env_file_is_loaded(self, clean_env, tmp_path):
        from spline_mcp.config import load_settings

        env_file = tmp_path / 'spline.env'
        env_file.write_text('SPLINE_API_KEY=from-file\nPORT=9000\n')

        settings = load_settings(str(env_file))

        assert settings.api.api_key == 'from-file'
        assert settings.port == 9000
        assert settings.env_file == env_file

    def test_environment_wins_over_file(self, clean_env, tmp_path):
        from spline_mcp.config import load_settings

        (tmp_path / '.env').write_text('SPLINE_API_KEY=from-file\n')
        clean_env.setenv('SPLINE_API_KEY', 'from-env')

        assert load_settings(cwd=tmp_path).api.api_key == 'from-env'
