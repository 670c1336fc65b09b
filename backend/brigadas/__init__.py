"""Brigadas API - firefighting brigade and equipment inventory service."""

__version__ = "1.0.0"
