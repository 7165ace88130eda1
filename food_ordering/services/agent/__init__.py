"""Conversational agent bridge."""
