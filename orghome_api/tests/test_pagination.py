from urllib.parse import parse_qs, urlsplit

import pytest

from src.services.org_home import normalize_page
from src.services.pagination import Paginator


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 1), ("", 1), ("abc", 1), ("0", 1), ("-3", 1), (0, 1), (-1, 1), ("2", 2), (7, 7)],
)
def test_normalize_page(raw, expected):
    assert normalize_page(raw) == expected


def test_total_pages_and_neighbours():
    pager = Paginator(total=30, page_size=20, current=2, window=5)
    assert pager.total_pages == 2
    assert pager.current == 2
    assert pager.previous == 1
    assert pager.next is None
    assert pager.page_numbers() == [1, 2]


def test_current_page_is_clamped_into_range():
    assert Paginator(total=30, page_size=20, current=9, window=5).current == 2
    assert Paginator(total=0, page_size=20, current=3, window=5).current == 1


def test_window_is_centred_and_shifted_at_edges():
    assert Paginator(total=200, page_size=10, current=10, window=5).page_numbers() == [8, 9, 10, 11, 12]
    assert Paginator(total=200, page_size=10, current=1, window=5).page_numbers() == [1, 2, 3, 4, 5]
    assert Paginator(total=200, page_size=10, current=20, window=5).page_numbers() == [16, 17, 18, 19, 20]


def test_empty_listing_has_no_pages():
    pager = Paginator(total=0, page_size=20, current=1, window=5)
    assert pager.total_pages == 0
    assert pager.page_numbers() == []
    assert pager.next is None


def test_links_carry_params_and_skip_empty_values():
    pager = Paginator(total=45, page_size=20, current=1, window=5)
    pager.set_default_params({"sort": "moststars", "q": ""})
    pager.add_param("language", "go")

    read = pager.to_read("/acme/")
    assert read.params == {"sort": "moststars", "language": "go"}
    assert [p.num for p in read.pages] == [1, 2, 3]
    assert [p.is_current for p in read.pages] == [True, False, False]

    link = urlsplit(read.pages[1].link)
    assert link.path == "/acme/"
    assert parse_qs(link.query) == {"page": ["2"], "sort": ["moststars"], "language": ["go"]}
