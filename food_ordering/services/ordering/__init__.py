"""Order models and pricing."""
