"""
Client portal API package.

Provides the FastAPI application for the agency/client collaboration portal.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
