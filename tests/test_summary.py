import math

import pytest

from dataengine.analytics.summary import summarize
from dataengine.data.loader import load_csv
from dataengine.data.schemas import CategoricalSummary, NumericSummary


def test_people_summary(people):
    name, age = summarize(people)

    assert isinstance(age, NumericSummary)
    assert (age.count, age.null_count) == (2, 1)
    assert (age.min, age.max, age.mean) == (25.0, 30.0, 27.5)
    # sample standard deviation of [30, 25]
    assert age.stddev == pytest.approx(math.sqrt(12.5))
    assert age.median == pytest.approx(27.5)

    assert isinstance(name, CategoricalSummary)
    assert (name.count, name.null_count, name.distinct_count) == (3, 0, 3)
    # all values tie at one occurrence; the smallest wins
    assert (name.top, name.top_count) == ("Alice", 1)


def test_summary_order_matches_columns():
    ds = load_csv(b"z,a,m\n1,x,2\n")
    assert [s.name for s in summarize(ds)] == ["z", "a", "m"]


def test_all_null_numeric_column_has_no_aggregates():
    ds = load_csv(b"id,score\n1,\n2,NA\n3,\n")
    score = summarize(ds)[1]
    assert score.count == 0
    assert score.null_count == 3
    for field in ("min", "max", "mean", "stddev", "p25", "median", "p75"):
        assert getattr(score, field) is None


def test_single_value_has_no_sample_stddev():
    s = summarize(load_csv(b"v\n4\n"))[0]
    assert (s.count, s.mean, s.min, s.max) == (1, 4.0, 4.0, 4.0)
    assert s.stddev is None


def test_quartiles_use_linear_interpolation():
    s = summarize(load_csv(b"v\n4\n1\n3\n2\n"))[0]
    assert (s.p25, s.median, s.p75) == (1.75, 2.5, 3.25)
    assert s.stddev == pytest.approx(math.sqrt(5 / 3))


def test_categorical_counts_and_top():
    ds = load_csv(b"color\nred\nblue\n\nred\nblue\ngreen\n")
    s = summarize(ds)[0]
    assert s.count == 5
    assert s.distinct_count == 3
    assert (s.top, s.top_count) == ("blue", 2)


def test_categorical_nulls_are_not_values():
    s = summarize(load_csv(b"a\nx\nNA\ny\nx\n"))[0]
    assert isinstance(s, CategoricalSummary)
    assert (s.count, s.null_count, s.distinct_count) == (3, 1, 2)
    assert (s.top, s.top_count) == ("x", 2)


def test_summary_is_deterministic_and_read_only(people):
    before = people.frame.copy()
    assert summarize(people) == summarize(people)
    assert people.frame.equals(before)


def test_to_dict_shapes(people):
    name, age = (s.to_dict() for s in summarize(people))
    assert name["type"] == "categorical"
    assert "mean" not in name
    assert age["type"] == "numeric"
    assert age["count"] == 2
    assert "distinct_count" not in age


def test_values_near_float_limit_do_not_overflow():
    (s,) = summarize(load_csv(b"v\n1e308\n1e308\n"))
    assert s.mean == 1e308
    assert s.stddev == 0.0
    assert (s.min, s.median, s.max) == (1e308, 1e308, 1e308)


def test_mixed_sign_extremes_keep_representable_aggregates():
    (s,) = summarize(load_csv(b"v\n1.5e308\n-1.5e308\n1.5e308\n-1.5e308\n"))
    assert s.mean == 0.0
    assert s.median == 0.0
    assert s.p25 == -1.5e308
    assert s.stddev == pytest.approx(1.5e308 * math.sqrt(4 / 3))
