"""
Cache Module
Key/value store backends and the cached namespaces built on them
"""

from .manager import CacheManager, InMemoryStore, KeyValueStore, RedisStore, create_store

__all__ = [
    "CacheManager",
    "KeyValueStore",
    "InMemoryStore",
    "RedisStore",
    "create_store",
]
