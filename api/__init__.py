"""
Profile sync API package.

Provides the FastAPI application for the identity webhook and
profile administration service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
