"""Header parsing utilities for URL shortener."""

from typing import Dict, Optional


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.

    Args:
        headers: Request headers dictionary

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def get_client_ip(peer_host: Optional[str]) -> str:
    """Client address used as the rate limit key.

    This is the socket peer only. X-Forwarded-For is client controlled; uvicorn
    replaces the peer with it for proxies listed in FORWARDED_ALLOW_IPS.
    """
    return peer_host or "unknown"
