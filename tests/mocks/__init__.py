"""Test doubles for the persistence layer."""

from .store import InMemoryGameStore, FailingGameStore

__all__ = ["InMemoryGameStore", "FailingGameStore"]
