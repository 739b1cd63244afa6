"""
Heads-up Server - FastAPI layer over the table controller
"""

from headsup.server.app import app, create_app

__all__ = ["app", "create_app"]
