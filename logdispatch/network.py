"""Host lookups and one-shot UDP/TCP senders."""

import ipaddress
import socket
from typing import Optional, Union

import psutil

UNKNOWN = "Unknown"


def get_hostname() -> str:
    try:
        return socket.gethostname() or UNKNOWN
    except OSError:
        return UNKNOWN


def get_local_ip() -> str:
    """First non-loopback IPv4 address across the local interfaces."""
    try:
        interfaces = psutil.net_if_addrs()
    except (OSError, psutil.Error):
        return UNKNOWN

    for addrs in interfaces.values():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            try:
                ip = ipaddress.IPv4Address(addr.address)
            except ValueError:
                continue
            if not ip.is_loopback:
                return str(ip)
    return UNKNOWN


def _port(port: Union[int, str]) -> int:
    value = int(port)
    if not 0 <= value <= 65535:
        raise ValueError(f"port out of range: {port}")
    return value


def send_udp(host: str, port: Union[int, str], payload: bytes,
             timeout: Optional[float] = None) -> None:
    """Send ``payload`` as a single datagram to whichever address ``host`` resolves to first."""
    infos = socket.getaddrinfo(host, _port(port), type=socket.SOCK_DGRAM)
    family, socktype, proto, _, address = infos[0]
    with socket.socket(family, socktype, proto) as sock:
        sock.settimeout(timeout)
        sock.sendto(payload, address)


def send_tcp(host: str, port: Union[int, str], payload: bytes,
             timeout: Optional[float] = None) -> None:
    """Open a connection, write ``payload`` plus a newline, close."""
    address = (host, _port(port))
    with socket.create_connection(address, timeout=timeout) as sock:
        sock.sendall(payload + b"\n")
