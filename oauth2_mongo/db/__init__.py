"""Database connection utilities."""
