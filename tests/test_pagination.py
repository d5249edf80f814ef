import pytest

from dataengine.analytics.pagination import clamp_page_params, page
from dataengine.data.loader import load_csv


@pytest.fixture
def numbers():
    text = "i,label\n" + "".join(f"{i},row{i}\n" for i in range(25))
    return load_csv(text.encode())


@pytest.mark.parametrize(
    "start, limit, expected",
    [
        (None, None, (0, 100)),
        ("", "", (0, 100)),
        ("-5", "abc", (0, 100)),
        ("3", "0", (3, 100)),
        ("x", "-1", (0, 100)),
        (" 7 ", "20", (7, 20)),
        (0, 5000, (0, 1000)),
        (10, 1000, (10, 1000)),
        ("2.5", "1e2", (0, 100)),
    ],
)
def test_clamp_page_params(start, limit, expected):
    assert clamp_page_params(start, limit) == expected


def test_first_page_of_people(people):
    result = page(people, 0, 2)
    assert result.rows == [["Alice", 30], ["Bob", None]]
    assert result.total == 3
    assert (result.start, result.limit) == (0, 2)
    assert result.columns == ["name", "age"]


def test_start_past_end_is_empty_page_with_true_total(people):
    for start in (3, 4, 1000):
        result = page(people, start, 10)
        assert result.rows == []
        assert result.is_empty
        assert result.total == 3


@pytest.mark.parametrize("start", [0, 1, 12, 24, 25, 40])
@pytest.mark.parametrize("limit", [1, 5, 24, 25, 100])
def test_page_bounds(numbers, start, limit):
    result = page(numbers, start, limit)
    assert 0 <= len(result.rows) <= limit
    assert len(result.rows) == max(0, min(limit, 25 - start))
    assert result.total == 25
    # rows keep file order
    assert [r[0] for r in result.rows] == [float(i) for i in range(start, min(start + limit, 25))]


def test_page_is_idempotent(numbers):
    first = page(numbers, 5, 7)
    second = page(numbers, 5, 7)
    assert first == second
    assert numbers.row_count == 25


def test_invalid_params_use_defaults(numbers):
    result = page(numbers, "nope", "-3")
    assert (result.start, result.limit) == (0, 100)
    assert len(result.rows) == 25


def test_header_only_dataset_pages_empty():
    ds = load_csv(b"a,b\n")
    result = page(ds)
    assert result.rows == []
    assert result.total == 0
    assert result.columns == ["a", "b"]
