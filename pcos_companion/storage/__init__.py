"""Storage module - key-value persistence for profile, history and chat records."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .memory_storage import MemoryStorage

__all__ = ['StorageInterface', 'LocalStorage', 'MemoryStorage']
