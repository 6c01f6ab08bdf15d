"""
Shared pytest fixtures for Energy War tests.

This module provides:
- engine: TurnEngine with predictable tokens
- memory_store / failing_store: in-memory GameStore doubles
- registry: GameRegistry over the in-memory store
- client: FastAPI TestClient with the registry dependency overridden
- Custom markers for test categorization
"""

from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient

from services import get_registry
from services.game_registry import GameRegistry
from services.turn_engine import TurnEngine
from tests.factories import counting_tokens
from tests.mocks import InMemoryGameStore, FailingGameStore


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests touching a real SQLite file")


# =============================================================================
# Engine / Registry Fixtures
# =============================================================================


@pytest.fixture
def engine() -> TurnEngine:
    """TurnEngine whose tokens are token-1, token-2, ..."""
    return TurnEngine(token_factory=counting_tokens())


@pytest.fixture
def memory_store() -> InMemoryGameStore:
    return InMemoryGameStore()


@pytest.fixture
def failing_store() -> FailingGameStore:
    return FailingGameStore()


@pytest.fixture
def game_ids():
    """Id factory returning game1, game2, ..."""
    counter = itertools.count(1)
    return lambda: f"game{next(counter)}"


@pytest.fixture
def registry(memory_store: InMemoryGameStore, engine: TurnEngine, game_ids) -> GameRegistry:
    return GameRegistry(memory_store, engine=engine, id_factory=game_ids)


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def client(registry: GameRegistry):
    """TestClient wired to the in-memory registry.

    The client is not entered as a context manager, so the app lifespan
    (SQLite store, scheduler) does not run.
    """
    from main import app

    app.dependency_overrides[get_registry] = lambda: registry
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
