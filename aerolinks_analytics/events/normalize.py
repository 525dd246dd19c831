"""
Read-time normalization of optional event fields.

Both functions are total: every input (including None) maps to exactly one
canonical bucket, and neither ever raises.
"""

import ipaddress
from typing import Optional
from urllib.parse import urlsplit

DIRECT = "(direct)"
UNKNOWN_DEVICE = "unknown"
KNOWN_DEVICES = frozenset({"desktop", "mobile", "tablet", "wearable"})

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}

# characters a URL host can never contain
_FORBIDDEN_HOST_CHARS = frozenset("<>\"^|`{}%#/?@\\[]")


def normalize_device(device: Optional[str]) -> str:
    """Map a raw device string to desktop/mobile/tablet/wearable, else 'unknown'."""
    if not device:
        return UNKNOWN_DEVICE
    normalized = device.lower()
    return normalized if normalized in KNOWN_DEVICES else UNKNOWN_DEVICE


def normalize_referrer(referrer: Optional[str]) -> str:
    """
    Reduce a referrer URL to its host, or '(direct)'.

    Rules:
        - None, empty or whitespace-only -> '(direct)'.
        - Absolute URL with a host -> lowercased host, userinfo dropped,
          port kept only when it differs from the scheme default.
        - Anything else (no scheme, no host, bad port, a host with forbidden
          characters, an invalid IP literal or IDNA name) -> '(direct)'.

    Example:
        >>> normalize_referrer("https://x.com/page?q=1")
        'x.com'
        >>> normalize_referrer("not a url")
        '(direct)'
    """
    if not referrer:
        return DIRECT
    trimmed = referrer.strip()
    if not trimmed:
        return DIRECT
    try:
        parts = urlsplit(trimmed)
        host = parts.hostname
        port = parts.port
    except ValueError:
        return DIRECT
    if not parts.scheme or not host:
        return DIRECT
    host = _clean_host(host)
    if host is None:
        return DIRECT
    if port is not None and _DEFAULT_PORTS.get(parts.scheme.lower()) != port:
        host = f"{host}:{port}"
    return host


def _clean_host(host: str) -> Optional[str]:
    """Canonical host for a parsed URL, or None when no URL parser would accept it."""
    if ":" in host:
        try:
            return f"[{ipaddress.IPv6Address(host).compressed}]"
        except ValueError:
            return None
    for ch in host:
        if ch in _FORBIDDEN_HOST_CHARS or ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F:
            return None
    if host.rsplit(".", 1)[-1].isdigit():
        try:
            return str(ipaddress.IPv4Address(host))
        except ValueError:
            return None
    if host.isascii():
        return host
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        return None
