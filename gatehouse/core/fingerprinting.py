"""Client identification helpers.

Derives the client IP behind a reverse proxy, a stable client fingerprint
(SHA-256 of IP and User-Agent), and a coarse device description for the
session list.

Fingerprint Components:
- Client IP (socket peer, or the forwarded client when the peer is a trusted
  proxy)
- User-Agent header

Security:
- SHA256 hash (64 hex characters), not reversible
- Used to spot a session token showing up from a different client
"""

import hashlib
import ipaddress
from collections.abc import Collection
from dataclasses import dataclass

from starlette.requests import Request

from gatehouse.core.constants import USER_AGENT_MAX_LENGTH


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceInfo:
    """Parsed User-Agent."""

    browser: str
    os: str
    device_type: str

    @property
    def device_name(self) -> str:
        """Human-readable label, e.g. "Chrome on macOS"."""
        return f"{self.browser} on {self.os}"


def is_trusted_proxy(peer: str | None, trusted_proxies: Collection[str]) -> bool:
    """True when the socket peer is listed (IP, CIDR range, name, or "*").

    Examples:
        >>> is_trusted_proxy("10.0.0.5", ["10.0.0.0/8"])
        True
        >>> is_trusted_proxy("203.0.113.9", [])
        False
    """
    if not peer or not trusted_proxies:
        return False
    if "*" in trusted_proxies or peer in trusted_proxies:
        return True
    try:
        address = ipaddress.ip_address(peer)
    except ValueError:
        return False
    for entry in trusted_proxies:
        try:
            network = ipaddress.ip_network(entry, strict=False)
        except ValueError:
            continue
        if address in network:
            return True
    return False


def get_client_ip(request: Request, trusted_proxies: Collection[str] = ()) -> str:
    """Extract client IP address from request.

    Forwarding headers are only believed when the socket peer is a trusted
    proxy. Then the first X-Forwarded-For entry (client; the rest is the proxy
    chain) wins, then X-Real-IP. Otherwise the socket peer is the client.

    Returns:
        Client IP address, or "unknown" when none is available.
    """
    peer = request.client.host if request.client else None

    if is_trusted_proxy(peer, trusted_proxies):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            first = forwarded_for.split(",")[0].strip()
            if first:
                return first

        real_ip = request.headers.get("X-Real-IP")
        if real_ip and real_ip.strip():
            return real_ip.strip()

    return peer or "unknown"


def get_user_agent(request: Request) -> str:
    """User-Agent header, truncated for storage."""
    return request.headers.get("user-agent", "")[:USER_AGENT_MAX_LENGTH]


def client_fingerprint(ip_address: str | None, user_agent: str | None) -> str:
    """SHA-256 of ``ip|user_agent`` (64 hex characters).

    Examples:
        >>> len(client_fingerprint("10.0.0.1", "Mozilla/5.0"))
        64
    """
    raw = f"{ip_address or ''}|{user_agent or ''}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def parse_user_agent(user_agent: str | None) -> DeviceInfo:
    """Parse User-Agent string into device info components.

    Simple substring parsing, not comprehensive. Mobile platforms are checked
    before desktop ones because iOS and Android agents also mention
    "Mac OS X" and "Linux".

    Examples:
        >>> parse_user_agent("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)").os
        'iOS'
    """
    ua_lower = (user_agent or "").lower()

    if "edg" in ua_lower:
        browser = "Edge"
    elif "opr" in ua_lower or "opera" in ua_lower:
        browser = "Opera"
    elif "firefox" in ua_lower or "fxios" in ua_lower:
        browser = "Firefox"
    elif "chrome" in ua_lower or "crios" in ua_lower:
        browser = "Chrome"
    elif "safari" in ua_lower:
        browser = "Safari"
    else:
        browser = "Unknown Browser"

    if "iphone" in ua_lower or "ipad" in ua_lower:
        os_name = "iOS"
    elif "android" in ua_lower:
        os_name = "Android"
    elif "mac os x" in ua_lower or "macintosh" in ua_lower:
        os_name = "macOS"
    elif "windows" in ua_lower:
        os_name = "Windows"
    elif "linux" in ua_lower:
        os_name = "Linux"
    else:
        os_name = "Unknown OS"

    if "ipad" in ua_lower or "tablet" in ua_lower:
        device_type = "tablet"
    elif "mobile" in ua_lower or "iphone" in ua_lower or "android" in ua_lower:
        device_type = "mobile"
    else:
        device_type = "desktop"

    return DeviceInfo(browser=browser, os=os_name, device_type=device_type)
