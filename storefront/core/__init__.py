"""Configuration, logging, locales and shared utilities."""
