"""Configuration, logging and dependency wiring."""
