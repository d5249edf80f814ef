from dataengine.config import DEFAULT_NULL_VALUES, parse_null_values


def test_null_values_default():
    assert parse_null_values(None) == frozenset(DEFAULT_NULL_VALUES)


def test_null_values_env_tokens_are_stripped():
    assert parse_null_values("NA, <nil> ,  null") == {"", "NA", "<nil>", "null"}


def test_null_values_always_include_empty_cell():
    assert "" in parse_null_values("missing")
