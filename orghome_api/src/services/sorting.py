"""
Mapping of the ``sort`` query parameter to a repository search ordering.
"""
from __future__ import annotations

from typing import Optional, Tuple

from src.repositories.repository import SearchOrderBy

DEFAULT_SORT_TYPE = "recentupdate"

SORT_ORDERS: dict[str, SearchOrderBy] = {
    "newest": SearchOrderBy.NEWEST,
    "oldest": SearchOrderBy.OLDEST,
    "recentupdate": SearchOrderBy.RECENT_UPDATED,
    "leastupdate": SearchOrderBy.LEAST_UPDATED,
    "reversealphabetically": SearchOrderBy.ALPHABETICALLY_REVERSE,
    "alphabetically": SearchOrderBy.ALPHABETICALLY,
    "moststars": SearchOrderBy.STARS_REVERSE,
    "feweststars": SearchOrderBy.STARS,
    "mostforks": SearchOrderBy.FORKS_REVERSE,
    "fewestforks": SearchOrderBy.FORKS,
}


# PUBLIC_INTERFACE
def map_query_sort_to_order(raw: Optional[str]) -> Tuple[str, SearchOrderBy]:
    """
    Resolve a raw ``sort`` value to (sort_type, order).

    Never fails: empty or unknown values fall back to ``recentupdate``.
    Matching is exact, as the labels are what the page links send back.
    """
    if raw and raw in SORT_ORDERS:
        return raw, SORT_ORDERS[raw]
    return DEFAULT_SORT_TYPE, SORT_ORDERS[DEFAULT_SORT_TYPE]
