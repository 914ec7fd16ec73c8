"""Catalog service: items, categories and content-addressed images."""

__version__ = "0.1.0"
