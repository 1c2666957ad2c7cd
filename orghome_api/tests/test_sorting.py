import pytest

from src.repositories.repository import SearchOrderBy
from src.services.sorting import SORT_ORDERS, map_query_sort_to_order


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("newest", SearchOrderBy.NEWEST),
        ("oldest", SearchOrderBy.OLDEST),
        ("recentupdate", SearchOrderBy.RECENT_UPDATED),
        ("leastupdate", SearchOrderBy.LEAST_UPDATED),
        ("alphabetically", SearchOrderBy.ALPHABETICALLY),
        ("reversealphabetically", SearchOrderBy.ALPHABETICALLY_REVERSE),
        ("moststars", SearchOrderBy.STARS_REVERSE),
        ("feweststars", SearchOrderBy.STARS),
        ("mostforks", SearchOrderBy.FORKS_REVERSE),
        ("fewestforks", SearchOrderBy.FORKS),
    ],
)
def test_known_sort_values_keep_their_label(raw, expected):
    assert map_query_sort_to_order(raw) == (raw, expected)


@pytest.mark.parametrize("raw", [None, "", "stars", "MostStars", " newest", "random"])
def test_unknown_sort_values_fall_back_to_recent_update(raw):
    assert map_query_sort_to_order(raw) == ("recentupdate", SearchOrderBy.RECENT_UPDATED)


def test_every_order_has_a_label():
    assert set(SORT_ORDERS.values()) == set(SearchOrderBy)


def test_order_clauses_break_ties_on_id():
    clauses = SearchOrderBy.STARS_REVERSE.clauses()
    assert len(clauses) == 2
    assert "num_stars DESC" in str(clauses[0])
    assert "id ASC" in str(clauses[1])
