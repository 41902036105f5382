"""Tests for the database engine and session management module."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import inspect

import pharmacy_finder.core.database as db_module
from pharmacy_finder.core.database import (
    create_tables,
    dispose_engine,
    get_engine,
    get_session_factory,
    init_engine,
)


class TestGetEngine:
    """Tests for get_engine."""

    def test_raises_when_not_initialized(self) -> None:
        # Save and clear module state
        original_engine = db_module._engine
        db_module._engine = None
        try:
            with pytest.raises(RuntimeError, match="Database engine not initialized"):
                get_engine()
        finally:
            db_module._engine = original_engine

    async def test_returns_engine_when_initialized(self) -> None:
        engine = init_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert get_engine() is engine
        finally:
            await dispose_engine()


class TestGetSessionFactory:
    """Tests for get_session_factory."""

    def test_raises_when_not_initialized(self) -> None:
        original_factory = db_module._session_factory
        db_module._session_factory = None
        try:
            with pytest.raises(RuntimeError, match="Session factory not initialized"):
                get_session_factory()
        finally:
            db_module._session_factory = original_factory


class TestInitEngine:
    """Tests for init_engine."""

    async def test_creates_engine_and_factory(self) -> None:
        engine = init_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert engine is not None
            assert get_session_factory() is not None
        finally:
            await dispose_engine()

    def test_passes_engine_options(self) -> None:
        with patch("pharmacy_finder.core.database.create_async_engine", return_value=MagicMock()) as mock_create:
            init_engine("sqlite+aiosqlite:///./pharmacy-finder.db", echo=False)
            mock_create.assert_called_once_with("sqlite+aiosqlite:///./pharmacy-finder.db", echo=False)
        db_module._engine = None
        db_module._session_factory = None


class TestCreateTables:
    async def test_creates_key_value_table(self, tmp_path: Path) -> None:
        engine = init_engine(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
        try:
            await create_tables()
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            assert "key_value_entries" in tables
        finally:
            await dispose_engine()


class TestDisposeEngine:
    """Tests for dispose_engine."""

    async def test_disposes_engine(self) -> None:
        init_engine("sqlite+aiosqlite:///:memory:")
        await dispose_engine()
        assert db_module._engine is None
        assert db_module._session_factory is None

    async def test_dispose_when_no_engine(self) -> None:
        original = db_module._engine
        db_module._engine = None
        try:
            await dispose_engine()  # Should not raise
        finally:
            db_module._engine = original
