from .repository import InMemoryRepository

__all__ = ["InMemoryRepository"]
