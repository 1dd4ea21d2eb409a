"""Configuration, logging and timing utilities."""
