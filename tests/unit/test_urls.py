import pytest

from jsonrest.application.urls import build_url
from jsonrest.domain.errors import InvalidURLError

SCHEMES = frozenset({"http", "https"})


@pytest.mark.parametrize("url", ["://foobar.com", "foobar.com/path", "foo://bar.com", "http://", "http://[::1"])
def test_build_url_rejects_malformed(url):
    with pytest.raises(InvalidURLError):
        build_url(url, None, SCHEMES)


def test_build_url_without_params_is_untouched():
    assert build_url("https://api.example.com/v1?z=1&a=2", None, SCHEMES) == "https://api.example.com/v1?z=1&a=2"


def test_build_url_merges_and_overwrites_params():
    out = build_url("http://example.com/items?page=1&foo=old", {"foo": "bar", "q": "a b"}, SCHEMES)
    assert out == "http://example.com/items?foo=bar&page=1&q=a+b"


def test_build_url_keeps_fragment_and_blank_values():
    out = build_url("http://example.com/?empty=#frag", {"k": "v"}, SCHEMES)
    assert out == "http://example.com/?empty=&k=v#frag"


def test_scheme_is_case_insensitive():
    assert build_url("HTTP://example.com", None, SCHEMES) == "HTTP://example.com"
