"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import make_test_engine, make_session_factory


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring a database engine (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def sqlite_engine():
    """Function-scoped in-memory SQLite engine with all tables created."""
    engine = make_test_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return make_session_factory(sqlite_engine)
