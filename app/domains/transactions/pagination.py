import math
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, limit: int) -> List[T]:
    """
    Return the slice [(page-1)*limit, page*limit) of items.

    Pages past the end, and page/limit values below 1, give an empty list
    instead of wrapping around with negative indexes.
    """
    if page < 1 or limit < 1:
        return []
    start = (page - 1) * limit
    return list(items[start:start + limit])


def total_pages(total: int, limit: int) -> int:
    if limit < 1:
        return 0
    return math.ceil(total / limit)
