"""Default storage settings."""

# LOGLEVEL
LOGLEVEL = "WARNING"

# MongoDB settings
MONGO_URI = "mongodb://localhost:27017"
MONGO_DATABASE = "oauth2"

# Collection overrides: logical kind (e.g. "client_table") to collection name.
# Any kind not listed here uses the default collection name.
OAUTH2_STORAGE_COLLECTIONS: dict = {}
