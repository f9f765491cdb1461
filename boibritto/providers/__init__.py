from .storage_provider import DuplicateRecordError, SQLiteStorage, get_storage_provider

__all__ = ["DuplicateRecordError", "SQLiteStorage", "get_storage_provider"]
