"""
Client key detection behind reverse proxies.

The key is a best-effort caller IP used only to bucket rate-limit state.
Proxy headers are untrusted, so the result is never used for anything else.
"""

from typing import Mapping, Optional

UNKNOWN_CLIENT = "unknown"


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                return candidate
    return value


def _usable(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == UNKNOWN_CLIENT:
        return None
    return value


def identify_client(headers: Mapping[str, str], peer_address: Optional[str] = None) -> str:
    """
    Resolve the client key for a request.

    Order (first usable value wins):
    1. X-Forwarded-For: left-most entry that is not empty or "unknown"
       (proxies that could not see the caller write "unknown" in their slot)
    2. X-Real-IP
    3. The transport peer address
    4. The literal "unknown"

    Examples:
        >>> identify_client({"X-Forwarded-For": "unknown, 203.0.113.5"})
        '203.0.113.5'
        >>> identify_client({}, None)
        'unknown'
    """
    forwarded_for = _header(headers, "X-Forwarded-For")
    if forwarded_for:
        for hop in forwarded_for.split(","):
            client = _usable(hop)
            if client:
                return client

    real_ip = _usable(_header(headers, "X-Real-IP"))
    if real_ip:
        return real_ip

    peer = _usable(peer_address)
    if peer:
        return peer

    return UNKNOWN_CLIENT
