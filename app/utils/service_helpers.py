from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy.orm import Query
from ..schemas.common import Page, PaginationParams
from .constants import AppConstants

CENT = Decimal(1).scaleb(-AppConstants.CURRENCY_DECIMAL_PLACES)


def paginate(query: Query, pagination: PaginationParams) -> Page:
    """Apply offset/limit to an ordered query and count the full result"""
    total_items = query.order_by(None).count()
    items = query.offset(pagination.offset).limit(pagination.limit).all()
    return Page(items=items, pagination=pagination.info(total_items))


def round_currency(amount) -> Decimal:
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
