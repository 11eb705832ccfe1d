"""
Common Pydantic schemas shared across endpoints.
"""
from pydantic import BaseModel
from typing import List, Any


class PaginatedResponse(BaseModel):
    """Standard paginated response wrapper."""
    data: List[Any]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def create(cls, data: List[Any], total: int, page: int, page_size: int):
        """Factory method to create paginated response."""
        total_pages = (total + page_size - 1) // page_size
        return cls(
            data=data,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages
        )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    database: str
