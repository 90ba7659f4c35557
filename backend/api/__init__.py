"""
AmCbunq API package.

Provides the FastAPI application for edge routing and email verification.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
