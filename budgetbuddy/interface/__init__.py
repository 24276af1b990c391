"""Mini README: Outward-facing interfaces for Budget Buddy.

Exports the FastAPI application factory that serves the budget store as a
JSON API for mobile or web front ends.
"""

from .web_app import create_application

__all__ = ["create_application"]
