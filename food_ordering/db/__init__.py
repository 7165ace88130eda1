"""Database engine and models."""
