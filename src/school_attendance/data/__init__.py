from .key_value_store import JsonKeyValueStore

__all__ = ["JsonKeyValueStore"]
