"""
Flask REST API for the Tibia house listings.

Provides endpoints for:
- Town names
- House listings per world and town
- Health checks
"""

from tibiahouses.api.server import create_app
from tibiahouses.api.routes import register_routes

__all__ = [
    "create_app",
    "register_routes",
]
