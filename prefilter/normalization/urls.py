"""URL canonicalization helpers.

These never raise on malformed input: normalize_url() hands back the input
unchanged and extract_domain() returns None.
"""

from typing import Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit, urlunsplit

TRACKING_PARAMS = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_content",
        "utm_term",
        "fbclid",
        "gclid",
    }
)

# Schemes whose URLs always carry a path, as browsers serialize them
_HIERARCHICAL_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

_DEFAULT_PORTS = {"http": "80", "https": "443"}


def _split(url: str) -> Optional[SplitResult]:
    """Split ``url``, or return None when it is not an absolute URL with a host."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not hostname:
        return None
    return parts


def _canonical_netloc(scheme: str, netloc: str) -> str:
    """Lowercase the host[:port] part of a netloc and drop the scheme's default port.

    Any userinfo is kept as written.
    """
    userinfo, sep, hostport = netloc.rpartition("@")
    hostport = hostport.lower()
    default_port = _DEFAULT_PORTS.get(scheme)
    if default_port and hostport.endswith(f":{default_port}"):
        hostport = hostport[: -len(default_port) - 1]
    return f"{userinfo}{sep}{hostport}"


def normalize_url(url: str) -> str:
    """Canonicalize a URL for comparison and deduplication.

    - scheme and host are lowercased
    - default ports (:80 for http, :443 for https) are dropped
    - tracking parameters (utm_*, fbclid, gclid) are removed
    - remaining query parameters are sorted by name (stable for repeats)

    Args:
        url: URL to canonicalize

    Returns:
        Canonical URL, or ``url`` unchanged if it cannot be parsed

    Example:
        >>> normalize_url("http://BIT.LY/x?utm_source=a&z=1&a=2")
        'http://bit.ly/x?a=2&z=1'
    """
    parts = _split(url)
    if parts is None:
        return url

    params = [
        (name, value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
        if name not in TRACKING_PARAMS
    ]
    params.sort(key=_param_name)

    scheme = parts.scheme.lower()
    path = parts.path
    if not path and scheme in _HIERARCHICAL_SCHEMES:
        path = "/"

    return urlunsplit(
        (
            scheme,
            _canonical_netloc(scheme, parts.netloc),
            path,
            urlencode(params),
            parts.fragment,
        )
    )


def _param_name(param: Tuple[str, str]) -> str:
    return param[0]


def extract_domain(url: str) -> Optional[str]:
    """Return the (lowercased) host of ``url``, or None if it cannot be parsed.

    Example:
        >>> extract_domain("https://www.example.com/path")
        'www.example.com'
    """
    parts = _split(url)
    if parts is None:
        return None
    return parts.hostname


def get_etld_plus_one(hostname: str) -> str:
    """Approximate the registrable domain as the last two labels of ``hostname``.

    This is a heuristic, not a public-suffix lookup: multi-label suffixes
    come out wrong (``shop.example.co.uk`` gives ``co.uk``).

    Example:
        >>> get_etld_plus_one("a.b.example.com")
        'example.com'
    """
    labels = hostname.split(".")
    if len(labels) >= 2:
        return ".".join(labels[-2:])
    return hostname
