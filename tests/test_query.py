from urllib.parse import parse_qsl

from httputil.query import append_query, build_query, flatten_params


def test_build_query_sorts_keys() -> None:
    assert build_query({"b": "2", "a": "1"}) == "a=1&b=2"


def test_build_query_round_trips_flat_maps() -> None:
    params = {"zeta": "last", "alpha": "a b&c", "mid": "ü/?=", "empty": ""}
    decoded = parse_qsl(build_query(params), keep_blank_values=True)
    assert dict(decoded) == params
    assert [k for k, _ in decoded] == sorted(params)


def test_build_query_stringifies_scalars() -> None:
    query = build_query({"n": 3, "f": 1.5, "t": True, "no": False, "none": None})
    assert dict(parse_qsl(query, keep_blank_values=True)) == {
        "n": "3",
        "f": "1.5",
        "t": "true",
        "no": "false",
        "none": "",
    }


def test_flatten_params_nested_values() -> None:
    pairs = flatten_params({"filter": {"year": 2020, "tag": ["x", "y"]}, "a": 1})
    assert pairs == [
        ("a", "1"),
        ("filter[tag][0]", "x"),
        ("filter[tag][1]", "y"),
        ("filter[year]", "2020"),
    ]


def test_build_query_empty() -> None:
    assert build_query({}) == ""


def test_append_query_picks_separator() -> None:
    assert append_query("http://x/y", "a=1") == "http://x/y?a=1"
    assert append_query("http://x/y?z=0", "a=1") == "http://x/y?z=0&a=1"
    assert append_query("http://x/y", "") == "http://x/y"
