"""Mock providers for testing."""

from .persistence import InMemoryStore, MockPersistenceProvider, SeededPersistenceProvider
from .container import build_app_container, build_test_container

__all__ = [
    "InMemoryStore",
    "MockPersistenceProvider",
    "SeededPersistenceProvider",
    "build_app_container",
    "build_test_container",
]
