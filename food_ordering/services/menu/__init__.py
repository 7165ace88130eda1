"""Menu providers."""
