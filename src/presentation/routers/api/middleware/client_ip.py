"""Client address extraction.

Forwarding headers (X-Forwarded-For, then X-Real-IP) are only read when
``TRUST_FORWARDED_IP`` is enabled, i.e. when the service sits behind a
proxy that overwrites them. The first X-Forwarded-For entry is the original
client, the rest is the proxy chain.

Every candidate must parse as an IPv4 or IPv6 address. A malformed value
falls through to the next source.
"""

import ipaddress

from starlette.requests import Request

from src.core.config import settings

UNKNOWN_CLIENT = "unknown"


def parse_ip(value: str | None) -> str | None:
    """Normalized address, or None when ``value`` is not an IP address."""
    if not value:
        return None
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def get_client_ip(request: Request) -> str | None:
    """Best-known source address of the request, None when unavailable."""
    if settings.trust_forwarded_ip:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            first = parse_ip(forwarded_for.split(",")[0])
            if first:
                return first

        real_ip = parse_ip(request.headers.get("X-Real-IP"))
        if real_ip:
            return real_ip

    if request.client:
        return parse_ip(request.client.host)

    return None
