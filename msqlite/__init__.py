"""Object layer over SQLite: a storage, prepared statements, a table helper and scoped transactions."""

__version__ = "1.99.8.0"