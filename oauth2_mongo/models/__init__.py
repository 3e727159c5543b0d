"""Entities persisted by the storage adapter, and their document mappings."""
