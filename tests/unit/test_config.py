import pytest

from src.core.config import Settings, get_settings
from src.core.database import async_database_url
from src.core.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No backend env vars and no .env file in the working directory."""
    monkeypatch.chdir(tmp_path)
    for name in ("BACKEND_URL", "ANON_KEY", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestSettings:

    def test_missing_backend_config_is_fatal(self, clean_env):
        with pytest.raises(ConfigurationError) as exc:
            get_settings()
        assert "BACKEND_URL" in str(exc.value)

    def test_loads_from_environment_once(self, clean_env):
        clean_env.setenv("BACKEND_URL", "http://intel.test/")
        clean_env.setenv("ANON_KEY", "anon")
        settings = get_settings()
        assert settings.backend_url == "http://intel.test"
        assert settings.anon_key == "anon"
        assert settings.autocomplete_limit == 6
        assert settings.search_page_size == 20
        assert get_settings() is settings

    def test_blank_anon_key_rejected(self, clean_env):
        clean_env.setenv("BACKEND_URL", "http://intel.test")
        clean_env.setenv("ANON_KEY", "  ")
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_settings_are_frozen(self, tmp_path):
        settings = Settings(backend_url="http://x", anon_key="k", database_url="sqlite:///x.db")
        with pytest.raises(Exception):
            settings.anon_key = "other"

    def test_rejects_unsupported_database(self):
        with pytest.raises(Exception):
            Settings(backend_url="http://x", anon_key="k", database_url="mysql://u:p@h/db")

    def test_storage_dir_defaults_under_project(self):
        settings = Settings(backend_url="http://x", anon_key="k")
        assert settings.storage_dir == settings.project_root / "data" / "storage"


class TestDatabaseUrl:

    def test_async_drivers(self):
        assert async_database_url("postgresql://u:p@h:5432/db") == "postgresql+asyncpg://u:p@h:5432/db"
        assert async_database_url("sqlite:///tmp/x.db") == "sqlite+aiosqlite:///tmp/x.db"
        assert async_database_url("postgresql+asyncpg://h/db") == "postgresql+asyncpg://h/db"
