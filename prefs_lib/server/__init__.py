"""HTTP server exposing the persistence service and the preferences API."""
from .app import create_app

__all__ = ["create_app"]
