import math

from sqlalchemy.orm import Query

def paginate(query: Query, page: int = 1, limit: int = 10) -> dict:
    """Run ``query`` for one page and return ``{"meta": ..., "data": [...]}``.

    ``page`` is 1-based. ``last_page`` is never below 1, even for an empty
    result, so clients can always render a pager.
    """
    page = max(page, 1)
    limit = max(limit, 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return {
        "meta": {
            "total": total,
            "per_page": limit,
            "current_page": page,
            "last_page": max(math.ceil(total / limit), 1),
            "first_page": 1,
        },
        "data": items,
    }
