"""
MediaHub Backend Package

This package contains the FastAPI application and supporting modules for
storing uploaded media files, recording their metadata and serving them back.
"""

from .main import app, create_app  # noqa: F401
