"""Web endpoints for recipe ingredient analysis."""

from .app import create_app

__all__ = ["create_app"]
