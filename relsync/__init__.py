"""Synchronize CI build artifacts to a GitHub release."""

__version__ = "0.3.0"
