"""
Pipeline exceptions.
"""
from typing import Any, Optional


class InvalidInputError(ValueError):
    """
    Raised for structurally impossible input records.

    Examples are a negative or non-finite distance, or a start date that
    cannot be parsed. These point at a bug in the upstream transform layer.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
