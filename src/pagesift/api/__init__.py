"""
HTTP API for Pagesift.
"""
from .app import create_app

__all__ = ["create_app"]
