"""
Local Storage Package

The key-value surface and the validated local durable store built on it.
"""

from .kv import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .local_store import EventQueue, LocalStore, ProgressQueue

__all__ = [
    'JsonFileKeyValueStore', 'KeyValueStore', 'MemoryKeyValueStore',
    'EventQueue', 'LocalStore', 'ProgressQueue'
]
