"""Voice ordering backend for Azure Communication Services."""
