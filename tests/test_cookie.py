from datetime import UTC, datetime

import pytest
from pyexchange.cookie import Cookie, extract_cookies, parse_set_cookie

NOW = datetime(2024, 1, 1, tzinfo=UTC)


def test_parse_full() -> None:
    cookie = parse_set_cookie("sid=abc; Max-Age=432000; Domain=LocalHost; Path=/; Secure; HttpOnly")
    assert cookie == Cookie(
        name="sid", value="abc", domain="localhost", path="/", max_age=432000, is_secure=True, version=1
    )


def test_parse_minimal() -> None:
    assert parse_set_cookie("a=1") == Cookie(name="a", value="1")


@pytest.mark.parametrize(
    ("header", "value"),
    [
        ("a=", ""),
        ("a=b=c", "b=c"),
        ('a="quoted value"', "quoted value"),
        ("a=  with spaces  ", "with spaces"),
    ],
)
def test_parse_value(header: str, value: str) -> None:
    cookie = parse_set_cookie(header)
    assert cookie is not None
    assert cookie.value == value


@pytest.mark.parametrize("header", ["", "novalue", "=value", " ; Path=/"])
def test_parse_no_name(header: str) -> None:
    assert parse_set_cookie(header) is None


def test_attribute_names_case_insensitive() -> None:
    cookie = parse_set_cookie("a=1; max-age=10; DOMAIN=example.com; pAtH=/x; SECURE")
    assert cookie is not None
    assert (cookie.max_age, cookie.domain, cookie.path, cookie.is_secure) == (10, "example.com", "/x", True)


def test_expires() -> None:
    cookie = parse_set_cookie("a=1; Expires=Tue, 02 Jan 2024 00:00:00 GMT", now=NOW)
    assert cookie is not None
    assert cookie.max_age == 86400
    assert cookie.version == 0


def test_expires_in_past() -> None:
    cookie = parse_set_cookie("a=1; Expires=Thu, 01 Jan 1970 00:00:00 GMT", now=NOW)
    assert cookie is not None
    assert cookie.max_age == 0


def test_max_age_wins_over_expires() -> None:
    cookie = parse_set_cookie("a=1; Expires=Tue, 02 Jan 2024 00:00:00 GMT; Max-Age=5", now=NOW)
    assert cookie is not None
    assert cookie.max_age == 5


@pytest.mark.parametrize("header", ["a=1; Max-Age=soon", "a=1; Expires=never"])
def test_invalid_lifetime(header: str) -> None:
    cookie = parse_set_cookie(header, now=NOW)
    assert cookie is not None
    assert cookie.max_age == -1


def test_version() -> None:
    cookie = parse_set_cookie("a=1; Version=1")
    assert cookie is not None
    assert cookie.version == 1


def test_extract_last_wins() -> None:
    cookies = extract_cookies(["a=1", "invalid", "b=2; Path=/", "a=3"])
    assert list(cookies) == ["a", "b"]
    assert cookies["a"].value == "3"
    assert cookies["b"].path == "/"


def test_extract_empty() -> None:
    assert extract_cookies([]) == {}


def test_cookie_is_read_only() -> None:
    cookie = Cookie(name="a", value="1")
    with pytest.raises(AttributeError):
        cookie.value = "2"  # type: ignore[misc]
