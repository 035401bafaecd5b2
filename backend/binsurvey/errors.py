# backend/binsurvey/errors.py
from typing import Any, Iterable


class StorageError(Exception):
    """The backing store failed. Details are logged, never returned to clients."""

    def __init__(self, operation: str, original: Exception | None = None):
        self.operation = operation
        self.original = original
        super().__init__(f"storage operation '{operation}' failed")


class PhotoError(Exception):
    """Uploaded photo was rejected (not an image, or too large)."""


def validation_details(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    # pydantic の errors() から JSON 化できる項目だけを残す
    return [
        {
            "loc": [str(p) for p in err.get("loc", ())],
            "msg": err.get("msg"),
            "type": err.get("type"),
        }
        for err in errors
    ]
