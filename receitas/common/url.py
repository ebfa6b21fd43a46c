from __future__ import annotations

from urllib.parse import urlsplit

from .errors import InvalidInput

_ALLOWED_SCHEMES = {"http", "https"}
_DEFAULT_PORTS = {"http": 80, "https": 443}


def validate_source_url(raw: str | None) -> str:
    """Return ``raw`` if it is an absolute http(s) URL, else raise InvalidInput."""
    if raw is None or not raw.strip():
        raise InvalidInput("Missing url")
    raw = raw.strip()

    try:
        parsed = urlsplit(raw)
        # .port raises ValueError on garbage ports
        hostname, _ = parsed.hostname, parsed.port
    except ValueError:
        raise InvalidInput("Invalid url") from None

    if not parsed.scheme:
        raise InvalidInput("Invalid url")
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidInput("Only http/https allowed")
    if not hostname:
        raise InvalidInput("Invalid url")
    return raw


def origin_of(url: str) -> str:
    """scheme://host[:port] with userinfo dropped and default ports omitted."""
    parsed = urlsplit(url)
    scheme = parsed.scheme.lower()
    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parsed.port
    if port is None or port == _DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"
