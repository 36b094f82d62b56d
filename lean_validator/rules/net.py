"""
Network address rules.

Each factory returns a single-argument predicate.
"""
import ipaddress
import re
from typing import Callable, Optional, Union
from urllib.parse import urlparse

MAC_PATTERN = re.compile(
    r"^[0-9A-Fa-f]{2}([:-])(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$"
    r"|^[0-9A-Fa-f]{4}\.[0-9A-Fa-f]{4}\.[0-9A-Fa-f]{4}$"
)
UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def _parse_ip(value: object) -> Optional[Union[ipaddress.IPv4Address, ipaddress.IPv6Address]]:
    if not isinstance(value, str):
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def ip(version: Optional[int] = None) -> Callable[[object], bool]:
    """IP address; *version* 4 or 6 restricts the family."""

    def check(value: object) -> bool:
        address = _parse_ip(value)
        if address is None:
            return False
        return version is None or address.version == version

    return check


def ipv4() -> Callable[[object], bool]:
    return ip(4)


def ipv6() -> Callable[[object], bool]:
    return ip(6)


def public_ip() -> Callable[[object], bool]:
    """IP address outside the private and reserved ranges."""

    def check(value: object) -> bool:
        address = _parse_ip(value)
        if address is None:
            return False
        return not (address.is_private or address.is_reserved or address.is_loopback)

    return check


def mac() -> Callable[[object], bool]:
    """MAC address with ':' or '-' separators, or dotted 4-hex groups."""

    def check(value: object) -> bool:
        return isinstance(value, str) and MAC_PATTERN.fullmatch(value) is not None

    return check


def uuid() -> Callable[[object], bool]:
    def check(value: object) -> bool:
        return isinstance(value, str) and UUID_PATTERN.fullmatch(value) is not None

    return check


def url() -> Callable[[object], bool]:
    def check(value: object) -> bool:
        if not isinstance(value, str):
            return False
        parsed = urlparse(value)
        return bool(parsed.scheme) and bool(parsed.netloc)

    return check


def domain() -> Callable[[object], bool]:
    """Host name: dot-separated labels, no leading/trailing hyphen."""

    def check(value: object) -> bool:
        if not isinstance(value, str) or value == "" or len(value) > 253:
            return False
        return all(HOSTNAME_LABEL.match(label) for label in value.split("."))

    return check
