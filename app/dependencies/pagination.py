from fastapi import Query
from ..schemas.common import PaginationParams
from ..utils.constants import AppConstants


def pagination_params(
    page: int = Query(AppConstants.DEFAULT_PAGE, ge=1, description="Page number"),
    limit: int = Query(
        AppConstants.DEFAULT_PAGE_SIZE,
        ge=1,
        le=AppConstants.MAX_PAGE_SIZE,
        description="Items per page",
    ),
) -> PaginationParams:
    """page/limit query parameters, validated before any handler runs"""
    return PaginationParams(page=page, limit=limit)
