"""Lambda handlers for the Surf Spot Ranker API."""

from .surf_handler import handler

__all__ = ["handler"]
