"""Locale-specific parsers and configurations."""
