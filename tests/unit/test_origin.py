"""Tests for first-party / third-party origin classification."""

import pytest

from scriptwatch.inventory.models import Origin
from scriptwatch.inventory.origin import classify

PAGE = "https://pay.example.com/checkout"


def test_same_host_is_first_party():
    assert classify(PAGE, "https://pay.example.com/app.js") == Origin.FIRST_PARTY


def test_other_host_is_third_party():
    assert classify(PAGE, "https://cdn.other.com/a.js") == Origin.THIRD_PARTY


def test_inline_is_unknown():
    assert classify(PAGE, None) == Origin.UNKNOWN
    assert classify(PAGE, "") == Origin.UNKNOWN


def test_relative_path_resolves_against_page():
    assert classify(PAGE, "/relative/app.js") == Origin.FIRST_PARTY
    assert classify(PAGE, "app.js") == Origin.FIRST_PARTY
    assert classify(PAGE, "../static/app.js") == Origin.FIRST_PARTY


def test_protocol_relative_url():
    assert classify(PAGE, "//pay.example.com/app.js") == Origin.FIRST_PARTY
    assert classify(PAGE, "//js.stripe.com/v3/") == Origin.THIRD_PARTY


def test_host_comparison_is_case_insensitive():
    assert classify("https://PAY.example.com/", "https://pay.EXAMPLE.com/a.js") == (
        Origin.FIRST_PARTY
    )


def test_subdomain_is_third_party():
    assert classify(PAGE, "https://static.pay.example.com/a.js") == Origin.THIRD_PARTY
    assert classify(PAGE, "https://example.com/a.js") == Origin.THIRD_PARTY


def test_port_and_scheme_ignored():
    assert classify(PAGE, "http://pay.example.com:8443/a.js") == Origin.FIRST_PARTY


@pytest.mark.parametrize("page_url", ["not a url", "/checkout", "", "pay.example.com"])
def test_unparsable_page_url_is_unknown(page_url):
    assert classify(page_url, "https://cdn.other.com/a.js") == Origin.UNKNOWN


def test_invalid_script_port_is_unknown():
    assert classify(PAGE, "https://cdn.other.com:99999/a.js") == Origin.UNKNOWN


def test_malformed_ipv6_is_unknown():
    assert classify(PAGE, "https://[::1/a.js") == Origin.UNKNOWN


def test_data_url_is_third_party():
    assert classify(PAGE, "data:text/javascript,alert(1)") == Origin.THIRD_PARTY


def test_deterministic():
    results = {classify(PAGE, "https://cdn.other.com/a.js") for _ in range(5)}
    assert results == {Origin.THIRD_PARTY}
