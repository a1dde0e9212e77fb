"""DynamoDB type conversion utilities.

DynamoDB stores numbers as Decimal and has no datetime type, while the
pydantic models use float and datetime. These helpers convert item payloads
in both directions.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any


def to_dynamodb(obj: Any) -> Any:
    """
    Recursively convert Python values to DynamoDB-compatible ones.

    Floats become Decimal (via str, rounded to 6 places), ints become
    Decimal, datetimes become ISO strings, None values inside dicts are
    dropped.
    """
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, float):
        return Decimal(str(round(obj, 6)))
    if isinstance(obj, int):
        return Decimal(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {key: to_dynamodb(value) for key, value in obj.items() if value is not None}
    if isinstance(obj, (list, tuple)):
        return [to_dynamodb(item) for item in obj]
    return obj


def from_dynamodb(obj: Any) -> Any:
    """Recursively convert Decimal values back to int or float."""
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    if isinstance(obj, dict):
        return {key: from_dynamodb(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [from_dynamodb(item) for item in obj]
    return obj


def scan_all(table, **scan_kwargs) -> list[dict[str, Any]]:
    """Scan a table following LastEvaluatedKey pagination."""
    items: list[dict[str, Any]] = []
    start_key = None
    while True:
        if start_key:
            scan_kwargs["ExclusiveStartKey"] = start_key
        response = table.scan(**scan_kwargs)
        items.extend(from_dynamodb(item) for item in response.get("Items", []))
        start_key = response.get("LastEvaluatedKey")
        if start_key is None:
            return items


def query_all(table, **query_kwargs) -> list[dict[str, Any]]:
    """Query a table following LastEvaluatedKey pagination."""
    items: list[dict[str, Any]] = []
    start_key = None
    while True:
        if start_key:
            query_kwargs["ExclusiveStartKey"] = start_key
        response = table.query(**query_kwargs)
        items.extend(from_dynamodb(item) for item in response.get("Items", []))
        start_key = response.get("LastEvaluatedKey")
        if start_key is None:
            return items
