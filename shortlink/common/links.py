"""Short URL assembly."""

from typing import Dict, Optional
from urllib.parse import quote

from .headers import extract_forwarded_headers
from ..shortcode import ShortCodeGenerator


def normalize_path_prefix(path_prefix: Optional[str]) -> str:
    """Canonical form of a path prefix: ``""`` or ``/seg[/seg...]``.

    Empty segments are dropped and the rest percent-encoded, so ``s/``,
    ``/s`` and ``//s//`` all become ``/s``.
    """
    segments = [s for s in (path_prefix or "").split("/") if s]
    if not segments:
        return ""
    return "/" + "/".join(quote(s, safe="") for s in segments)


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Public origin the short URL should use.

    X-Forwarded-Proto and X-Forwarded-Host win when both are present, then the
    request's own scheme and Host, then the configured BASE_URL.
    """
    forwarded = extract_forwarded_headers(headers)
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        proto = forwarded["forwarded_proto"].split(",")[0].strip()
        host = forwarded["forwarded_host"].split(",")[0].strip()
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Fully qualified short URL, e.g. ``https://sho.rt/s/aZ3k9Q``.

    Args:
        short_code: Issued short code
        base_url: Public origin, with or without a trailing slash
        path_prefix: Optional prefix the redirect route is mounted under

    Raises:
        ValueError: If short_code could not have been issued by this service
    """
    if not ShortCodeGenerator.is_valid_format(short_code):
        raise ValueError(f"Not a short code: {short_code!r}")
    return f"{base_url.rstrip('/')}{normalize_path_prefix(path_prefix)}/{short_code}"
