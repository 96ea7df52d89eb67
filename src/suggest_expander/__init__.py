"""Keyword expansion over an autocomplete endpoint."""

__version__ = "0.1.0"
