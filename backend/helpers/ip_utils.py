"""
IP address utilities for privacy-friendly logging.

Share events are logged with an anonymized client address so traffic
patterns stay visible without storing a visitor's full IP.
"""

import ipaddress
from typing import Optional


def anonymize_ip(ip: Optional[str]) -> Optional[str]:
    """
    Anonymize an IP address before it is logged.

    For IPv4: Zeros the last octet (e.g., 192.168.1.100 -> 192.168.1.0)
    For IPv6: Keeps the first 48 bits (e.g., 2001:db8:1::1 -> 2001:db8:1::)

    Args:
        ip: IP address string or None

    Returns:
        Anonymized IP address, the input unchanged if it is not an IP
        (e.g. the "unknown" client bucket), or None if input is None
    """
    if ip is None:
        return None

    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return ip

    if isinstance(addr, ipaddress.IPv4Address):
        octets = str(addr).split(".")
        octets[3] = "0"
        return ".".join(octets)

    network = ipaddress.IPv6Network(f"{addr}/48", strict=False)
    return str(network.network_address)


def is_valid_ip(ip: Optional[str]) -> bool:
    """
    Validate an IP address string.

    Args:
        ip: IP address string to validate

    Returns:
        True if valid IPv4 or IPv6 address, False otherwise
    """
    if ip is None:
        return False

    try:
        ipaddress.ip_address(ip)
        return True
    except ValueError:
        return False
