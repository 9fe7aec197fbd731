"""Tests for URL canonicalization helpers."""

import pytest

from prefilter.normalization import extract_domain, get_etld_plus_one, normalize_url


class TestNormalizeUrl:
    """Test suite for normalize_url."""

    def test_lowercases_host_strips_tracking_and_sorts(self):
        """Test the canonical example from the docs."""
        assert normalize_url("http://BIT.LY/x?utm_source=a&z=1&a=2") == "http://bit.ly/x?a=2&z=1"

    def test_removes_every_tracking_parameter(self):
        """Test that all known tracking parameters are dropped."""
        url = (
            "https://example.com/p?utm_source=s&utm_medium=m&utm_campaign=c"
            "&utm_content=x&utm_term=t&fbclid=f&gclid=g&id=7"
        )
        assert normalize_url(url) == "https://example.com/p?id=7"

    def test_query_removed_when_only_tracking(self):
        """Test that no dangling '?' is left behind."""
        assert normalize_url("http://a.com/x?utm_source=t&fbclid=1") == "http://a.com/x"

    def test_repeated_keys_keep_relative_order(self):
        """Test that sorting by name is stable for repeated parameters."""
        assert normalize_url("http://a.com/?b=1&a=2&b=0") == "http://a.com/?a=2&b=1&b=0"

    def test_blank_values_kept(self):
        """Test that parameters without a value survive."""
        assert normalize_url("http://a.com/?y=1&x=") == "http://a.com/?x=&y=1"

    def test_fragment_and_path_case_kept(self):
        """Test that only scheme and host are lowercased."""
        assert normalize_url("HTTPS://Example.COM/Path?b=2&a=1#Frag") == (
            "https://example.com/Path?a=1&b=2#Frag"
        )

    def test_empty_path_becomes_root(self):
        """Test that an http URL without a path gets '/'."""
        assert normalize_url("https://Example.com") == "https://example.com/"

    def test_userinfo_case_kept(self):
        """Test that only the host part of the netloc is lowercased."""
        assert normalize_url("http://User@EXAMPLE.com/") == "http://User@example.com/"

    def test_port_kept(self):
        """Test that an explicit port is preserved."""
        assert normalize_url("http://Example.com:8080/a") == "http://example.com:8080/a"

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("http://A.com:80/x", "http://a.com/x"),
            ("https://a.com:443", "https://a.com/"),
            ("http://user@a.com:80/", "http://user@a.com/"),
            ("http://[::1]:80/", "http://[::1]/"),
        ],
    )
    def test_default_port_dropped(self, url, expected):
        assert normalize_url(url) == expected

    def test_other_scheme_default_port_kept(self):
        """Test that ports are only dropped when they are the scheme's default."""
        assert normalize_url("https://a.com:80/") == "https://a.com:80/"
        assert normalize_url("http://a.com:443/") == "http://a.com:443/"

    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "",
            "www.example.com/path",
            "http://[::1",
            "mailto:",
        ],
    )
    def test_unparsable_returned_unchanged(self, url):
        """Test that input without a scheme and host comes back as-is."""
        assert normalize_url(url) == url

    def test_idempotent(self):
        """Test that canonical URLs are fixed points."""
        once = normalize_url("http://BIT.LY/x?utm_source=a&z=1&a=2")
        assert normalize_url(once) == once


class TestExtractDomain:
    """Test suite for extract_domain."""

    def test_returns_lowercased_host(self):
        """Test host extraction without port or path."""
        assert extract_domain("https://WWW.Example.com:443/path?q=1") == "www.example.com"

    @pytest.mark.parametrize("url", ["nope", "", "http://[::1", "/relative/path"])
    def test_unparsable_returns_none(self, url):
        """Test that malformed URLs give None instead of raising."""
        assert extract_domain(url) is None


class TestGetEtldPlusOne:
    """Test suite for the naive registrable-domain heuristic."""

    def test_last_two_labels(self):
        """Test the basic subdomain case."""
        assert get_etld_plus_one("a.b.example.com") == "example.com"

    def test_two_labels_unchanged(self):
        """Test that a bare domain is returned as-is."""
        assert get_etld_plus_one("example.com") == "example.com"

    def test_single_label_unchanged(self):
        """Test that a single label has nothing to trim."""
        assert get_etld_plus_one("localhost") == "localhost"

    def test_multi_label_suffix_is_known_limitation(self):
        """Test that public suffixes like co.uk are not recognized."""
        assert get_etld_plus_one("shop.example.co.uk") == "co.uk"
