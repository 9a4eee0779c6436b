"""Normalisation of DNS resolver addresses."""

from __future__ import annotations

from collections.abc import Iterable

from .requests import _parse_ip

DEFAULT_DNS_PORT = "53"


def _split_host_port(addr: str) -> tuple[str, str] | None:
    """Split 'host:port' or '[host]:port'; None when addr lacks that shape."""
    if addr.startswith("["):
        end = addr.find("]")
        if end == -1 or addr[end + 1:end + 2] != ":":
            return None
        host, port = addr[1:end], addr[end + 2:]
        if "[" in host or "]" in host or "]" in port:
            return None
        return host, port

    host, sep, port = addr.rpartition(":")
    if not sep or ":" in host:
        return None
    if "[" in host or "]" in host or "[" in port or "]" in port:
        return None
    return host, port


def _join_host_port(host: str, port: str) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def check_addresses(addrs: Iterable[str]) -> list[str]:
    """Keep addresses whose host is an IP, adding the DNS port where none is given."""
    result = []
    for addr in addrs:
        parts = _split_host_port(addr)
        host, port = parts if parts is not None else (addr, DEFAULT_DNS_PORT)
        if _parse_ip(host) is None:
            continue
        result.append(_join_host_port(host, port))
    return result