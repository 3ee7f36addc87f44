import os
import sys
from unittest.mock import patch

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.engine import make_url

import noticeboard.db.database as dbmod


class TestDatabaseConfig:
    """Engine URL resolution and runtime detection."""

    def test_database_url_wins(self):
        with patch.dict(os.environ, {"DATABASE_URL": "postgresql://u:p@db:5432/school"}):
            assert dbmod._get_database_url() == "postgresql://u:p@db:5432/school"

    def test_url_from_components(self):
        env = {
            "POSTGRES_USER": "u",
            "POSTGRES_PASSWORD": "p",
            "POSTGRES_HOST": "db",
            "POSTGRES_PORT": "5433",
            "POSTGRES_DB": "school",
        }
        with patch.dict(os.environ, env, clear=True):
            assert dbmod._get_database_url() == "postgresql://u:p@db:5433/school"

    def test_missing_components_are_named(self):
        with patch.dict(os.environ, {"POSTGRES_USER": "u"}, clear=True):
            with pytest.raises(ValueError) as exc_info:
                dbmod._get_database_url()
        assert "POSTGRES_PASSWORD" in str(exc_info.value)
        assert "POSTGRES_USER" not in str(exc_info.value)

    def test_is_pytest_runtime_explicit_env(self):
        with patch.dict(os.environ, {"PYTEST_RUNNING": "1"}):
            assert dbmod._is_pytest_runtime() is True

    def test_is_pytest_runtime_false_case(self):
        with patch.dict(os.environ, {}, clear=True), \
             patch.dict(sys.modules, {k: v for k, v in sys.modules.items() if k != "pytest"}, clear=True):
            assert dbmod._is_pytest_runtime() is False

    @pytest.mark.skipif(not dbmod._is_sqlite_memory(dbmod.engine.url), reason="external database configured")
    def test_in_memory_engine_has_schema(self):
        db = next(dbmod.get_db())
        try:
            assert db.execute(text("SELECT count(*) FROM notices")).scalar() == 0
        finally:
            db.close()


class TestInMemoryDetection:
    """The eager schema build keys off the parsed URL, not its rendered string."""

    @pytest.mark.parametrize(
        "url",
        ["sqlite+pysqlite:///:memory:", "sqlite:///:memory:", "sqlite://"],
    )
    def test_memory_urls(self, url):
        assert dbmod._is_sqlite_memory(url) is True

    def test_memory_url_object(self):
        url = make_url("sqlite+pysqlite:///:memory:")
        assert dbmod._is_sqlite_memory(url) is True

    @pytest.mark.parametrize(
        "url",
        ["sqlite:////tmp/noticeboard.db", "postgresql://u:p@db:5432/school"],
    )
    def test_other_urls(self, url):
        assert dbmod._is_sqlite_memory(url) is False

    @pytest.mark.skipif(not dbmod._is_sqlite_memory(dbmod.engine.url), reason="external database configured")
    def test_module_engine_has_tables(self):
        assert "notices" in inspect(dbmod.engine).get_table_names()
