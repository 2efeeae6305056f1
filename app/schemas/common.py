from typing import Generic, List
from ..utils.constants import AppConstants
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case or camelCase accepted"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PaginationInfo(CamelModel):
    """Pagination information"""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class PaginationParams(BaseModel):
    """Pagination query parameters with constants"""

    page: int = Field(default=AppConstants.DEFAULT_PAGE, ge=1)
    limit: int = Field(
        default=AppConstants.DEFAULT_PAGE_SIZE, ge=1, le=AppConstants.MAX_PAGE_SIZE
    )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def info(self, total_items: int) -> PaginationInfo:
        total_pages = (total_items + self.limit - 1) // self.limit
        return PaginationInfo(
            current_page=self.page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=self.limit,
        )


class Page(Generic[T]):
    """One page of query results plus its pagination block"""

    def __init__(self, items: List[T], pagination: PaginationInfo):
        self.items = items
        self.pagination = pagination
