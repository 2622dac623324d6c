"""Tests for URL assembly and query string encoding."""

from datetime import date

import pytest

from openapi_runtime.config import ClientConfig
from openapi_runtime.models import (
    UNSET,
    ArrayStyle,
    ObjectStyle,
    OperationDescriptor,
    QueryStyle,
)
from openapi_runtime.request.url import get_query_string, get_url, stringify


class TestQueryString:
    """Query parameter serialization."""

    def test_repeat_style_keeps_declaration_order(self) -> None:
        qs = get_query_string({"tags": ["x", "y"], "active": True})
        assert qs == "?tags=x&tags=y&active=true"

    def test_absent_and_empty_values_are_omitted(self) -> None:
        qs = get_query_string(
            {"a": None, "b": UNSET, "c": [], "d": {}, "e": [None], "f": 0}
        )
        assert qs == "?f=0"

    def test_empty_params_give_empty_string(self) -> None:
        assert get_query_string({}) == ""
        assert get_query_string({"a": None}) == ""

    @pytest.mark.parametrize(
        ("style", "expected"),
        [
            (ArrayStyle.COMMA, "?ids=1,2,3"),
            (ArrayStyle.PIPE, "?ids=1%7C2%7C3"),
            (ArrayStyle.SPACE, "?ids=1%202%203"),
        ],
    )
    def test_delimited_array_styles(self, style: ArrayStyle, expected: str) -> None:
        qs = get_query_string({"ids": [1, 2, 3]}, default_style=QueryStyle(array=style))
        assert qs == expected

    def test_deep_object_style(self) -> None:
        qs = get_query_string({"filter": {"name": "bob", "age": 3}})
        assert qs == "?filter%5Bname%5D=bob&filter%5Bage%5D=3"

    def test_form_object_style_explodes_keys(self) -> None:
        qs = get_query_string(
            {"filter": {"name": "bob", "age": 3}},
            styles={"filter": QueryStyle(object=ObjectStyle.FORM)},
        )
        assert qs == "?name=bob&age=3"

    def test_per_parameter_style_overrides_default(self) -> None:
        qs = get_query_string(
            {"a": ["1", "2"], "b": ["3", "4"]},
            styles={"b": QueryStyle(array=ArrayStyle.COMMA)},
        )
        assert qs == "?a=1&a=2&b=3,4"

    def test_values_are_percent_encoded(self) -> None:
        qs = get_query_string({"q": "a b&c=d/é"})
        assert qs == "?q=a%20b%26c%3Dd%2F%C3%A9"

    def test_dates_use_iso_format(self) -> None:
        assert get_query_string({"since": date(2024, 1, 31)}) == "?since=2024-01-31"


class TestStringify:
    def test_booleans_are_lowercase(self) -> None:
        assert stringify(True) == "true"
        assert stringify(False) == "false"

    def test_numbers(self) -> None:
        assert stringify(1.5) == "1.5"


class TestGetUrl:
    """Path template substitution."""

    def test_substitutes_and_encodes_path_params(self) -> None:
        config = ClientConfig(base="https://api.example.com/")
        options = OperationDescriptor(
            method="GET",
            url="/users/{userId}/files/{name}",
            path={"userId": 7, "name": "a b/c"},
        )
        assert get_url(config, options) == "https://api.example.com/users/7/files/a%20b%2Fc"

    def test_api_version_placeholder(self) -> None:
        config = ClientConfig(base="https://api.example.com", version="2.1")
        options = OperationDescriptor(method="GET", url="/v{api-version}/items")
        assert get_url(config, options) == "https://api.example.com/v2.1/items"

    def test_missing_path_param_keeps_placeholder(self) -> None:
        config = ClientConfig()
        options = OperationDescriptor(method="GET", url="/items/{id}")
        assert get_url(config, options) == "/items/{id}"

    def test_custom_path_encoder(self) -> None:
        config = ClientConfig(encode_path=lambda value: value.upper())
        options = OperationDescriptor(method="GET", url="/items/{id}", path={"id": "abc"})
        assert get_url(config, options) == "/items/ABC"

    def test_appends_query_with_config_default_style(self) -> None:
        config = ClientConfig(
            base="https://api.example.com",
            query_style=QueryStyle(array=ArrayStyle.COMMA),
        )
        options = OperationDescriptor(
            method="GET", url="/search", query={"tags": ["x", "y"], "page": None}
        )
        assert get_url(config, options) == "https://api.example.com/search?tags=x,y"
