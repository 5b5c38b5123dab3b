"""Unit tests for database engine options and request sessions"""

import pytest
from unittest.mock import MagicMock, patch
from aqsati.config import settings
from aqsati.infrastructure.database.session import engine_options, get_db


def test_sqlite_allows_cross_thread_use():
    assert engine_options("sqlite:///./aqsati.db") == {"connect_args": {"check_same_thread": False}}


def test_postgres_uses_configured_pool():
    options = engine_options("postgresql+psycopg2://u:p@db:5432/aqsati")

    assert options["pool_pre_ping"] is True
    assert options["pool_size"] == settings.db_pool_size
    assert options["max_overflow"] == settings.db_max_overflow
    assert options["pool_recycle"] == settings.db_pool_recycle_seconds


@patch("aqsati.infrastructure.database.session.SessionLocal")
def test_get_db_closes_session(mock_session_local: MagicMock):
    session = mock_session_local.return_value
    gen = get_db()

    assert next(gen) is session
    with pytest.raises(StopIteration):
        next(gen)

    session.rollback.assert_not_called()
    session.close.assert_called_once()


@patch("aqsati.infrastructure.database.session.SessionLocal")
def test_get_db_rolls_back_on_error(mock_session_local: MagicMock):
    session = mock_session_local.return_value
    gen = get_db()
    next(gen)

    with pytest.raises(RuntimeError):
        gen.throw(RuntimeError("handler failed"))

    session.rollback.assert_called_once()
    session.close.assert_called_once()
