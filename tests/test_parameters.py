# pyright: reportUnknownParameterType=false, reportMissingParameterType=false
from conduit.networking.http import CachePolicy, HTTPHeaderField, HTTPMethod
from conduit.networking.parameters import (
    HeaderItem,
    QueryItem,
    URLParameter,
    format_query_value,
    header_items,
    query_items,
)


def test_query_item_from_parameter():
    assert URLParameter.PAGE.query_item(2) == QueryItem("page", "2")
    assert URLParameter.LATITUDE.query_item(1.5) == QueryItem("lat", "1.5")
    assert URLParameter.QUERY.query_item(None) == QueryItem("query", None)


def test_booleans_render_lowercase():
    assert format_query_value(True) == "true"
    assert format_query_value(False) == "false"


def test_query_items_skip_conditionals_and_keep_duplicates():
    include_sort = False
    items = query_items(
        URLParameter.PAGE.query_item(1),
        URLParameter.SORT_BY.query_item("name") if include_sort else None,
        ("page", "2"),
        (URLParameter.FILTER, "open"),
    )

    assert items == [
        QueryItem("page", "1"),
        QueryItem("page", "2"),
        QueryItem("filter", "open"),
    ]


def test_header_items_last_write_wins():
    headers = header_items(
        HeaderItem(HTTPHeaderField.ACCEPT, "text/plain"),
        None,
        HeaderItem(HTTPHeaderField.ACCEPT, "application/json"),
        HeaderItem("X-Skip", None),
        ("X-Trace", "abc"),
    )

    assert headers == {"Accept": "application/json", "X-Trace": "abc"}


def test_method_placement():
    assert HTTPMethod.GET.carries_query
    assert HTTPMethod.DELETE.carries_query
    assert not HTTPMethod.POST.carries_query
    assert not HTTPMethod.PUT.carries_query
    assert not HTTPMethod.PATCH.carries_query


def test_cache_policy_headers():
    assert CachePolicy.USE_PROTOCOL_CACHE_POLICY.cache_control is None
    assert CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA.cache_control == (
        "no-cache"
    )
    assert CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD.cache_control == "max-stale"
