"""MongoDB storage for the entities of an OAuth2 server."""
from .storage import MongoDBStorage
from .config import StorageConfig, DEFAULT_COLLECTIONS
from .credentials import encrypt_credentials, verify_credentials
from .integration import setup_oauth2_storage, storage_from_config

__all__ = [
    "MongoDBStorage",
    "StorageConfig",
    "DEFAULT_COLLECTIONS",
    "encrypt_credentials",
    "verify_credentials",
    "setup_oauth2_storage",
    "storage_from_config"
]
