"""Unit tests for engine and session construction."""

import pytest
from unittest.mock import patch

from sqlalchemy import create_engine, inspect

from src.db import session as db_session


class TestEngine:
    """Tests for lazy engine creation and schema setup."""

    @pytest.fixture(autouse=True)
    def clear_engine_cache(self):
        db_session.get_engine.cache_clear()
        yield
        db_session.get_engine.cache_clear()

    def test_sqlite_directory_created(self, tmp_path) -> None:
        db_file = tmp_path / "nested" / "portfolio.db"

        engine = db_session.create_db_engine(f"sqlite:///{db_file}")

        assert db_file.parent.is_dir()
        engine.dispose()

    def test_engine_not_built_until_first_use(self) -> None:
        with patch("src.db.session.create_db_engine") as mock_create:
            mock_create.return_value = create_engine("sqlite://")
            assert mock_create.call_count == 0

            session = db_session.get_session()
            db_session.get_session()

            assert mock_create.call_count == 1
            assert session.get_bind() is mock_create.return_value
            session.close()

    def test_init_db_creates_tables(self) -> None:
        engine = create_engine("sqlite://")

        db_session.init_db(engine)

        tables = set(inspect(engine).get_table_names())
        assert {"benchmark_prices", "exchange_rates"} <= tables
