"""Registrar - Student registration and class enrollment service."""

__version__ = "0.1.0"
