"""
Enum definitions for the Employee Records Service
"""

from enum import Enum

class StoreErrorType(str, Enum):
    """
    Failure kinds reported by the storage layer.

    - NOT_FOUND: the operation targeted an id with no row
    - CONFLICT: insert collided with an existing primary key
    - DATABASE_ERROR: any other database failure
    """
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DATABASE_ERROR = "DATABASE_ERROR"
