"""Utility functions for the surf ranking engine."""

from .dynamodb_utils import from_dynamodb, query_all, scan_all, to_dynamodb
from .geo_utils import find_within_radius, haversine_distance

__all__ = [
    "find_within_radius",
    "from_dynamodb",
    "haversine_distance",
    "query_all",
    "scan_all",
    "to_dynamodb",
]
