"""Headless full-page screenshot capture."""

__version__ = "0.1.0"
