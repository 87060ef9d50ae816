"""Command-line client for the support chat."""

from .app import app, main

__all__ = ["app", "main"]
