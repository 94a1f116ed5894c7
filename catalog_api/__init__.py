"""Catalog API - product and variant catalog backend."""

__version__ = "0.1.0"
