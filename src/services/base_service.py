"""
Base service layer for database-backed resources
"""

import logging
from typing import Any, List, Optional
from dataclasses import dataclass

from models.enums import StoreErrorType

logger = logging.getLogger(__name__)

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Any]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[StoreErrorType] = None

    @classmethod
    def ok(cls, data: Optional[List[Any]] = None) -> "ServiceResult":
        data = data if data is not None else []
        return cls(success=True, data=data, count=len(data))

    @classmethod
    def failure(cls, error_type: StoreErrorType, error: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)


class BaseService:
    """Base service holding the shared connection pool"""

    def __init__(self, resource_name: str, db_pool):
        if db_pool is None:
            raise RuntimeError("Database pool not initialized")
        self.resource_name = resource_name
        self.db_pool = db_pool
        logger.info(f"BaseService initialized for resource: {resource_name}")
