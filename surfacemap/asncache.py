"""A searchable cache of autonomous system and netblock information."""

from __future__ import annotations

import ipaddress
import threading

from .requests import ASNRequest, IPAddress, IPNetwork, Tag, _parse_cidr, _parse_ip

_RESERVED_NETWORKS = tuple(
    ipaddress.ip_network(cidr)
    for cidr in (
        "192.168.0.0/16",
        "172.16.0.0/12",
        "10.0.0.0/8",
        "127.0.0.0/8",
        "224.0.0.0/4",
        "240.0.0.0/4",
        "100.64.0.0/10",
        "198.18.0.0/15",
        "169.254.0.0/16",
        "192.88.99.0/24",
        "192.0.0.0/24",
        "192.0.2.0/24",
        "192.94.77.0/24",
        "192.94.78.0/24",
        "192.52.193.0/24",
        "192.12.109.0/24",
        "192.31.196.0/24",
        "192.0.0.0/29",
    )
)


def _contains(network: IPNetwork, ip: IPAddress) -> bool:
    return network.version == ip.version and ip in network


def is_reserved_address(addr: str) -> str | None:
    """Return the reserved block holding addr, or None if it is not reserved."""
    ip = _parse_ip(addr)
    if ip is None:
        return None
    for block in _RESERVED_NETWORKS:
        if _contains(block, ip):
            return str(block)
    return None


class ASNCache:
    """Thread-safe store of ASN records, searchable by ASN, address or description."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache: dict[int, ASNRequest] = {}
        self._ranger: dict[IPNetwork, ASNRequest] = {}

    def update(self, req: ASNRequest) -> None:
        """Save the information in req, merging it into any existing entry."""
        with self._lock:
            known = self._cache.get(req.asn)
            if known is None:
                self._cache[req.asn] = req
                if not req.netblocks:
                    req.netblocks = [req.prefix]
                return

            if not known.cc and req.cc:
                known.cc = req.cc
            if not known.registry and req.registry:
                known.registry = req.registry
            if known.allocation_date is None and req.allocation_date is not None:
                known.allocation_date = req.allocation_date
            if len(known.description) < len(req.description):
                known.description = req.description

            for cidr in [req.prefix, *req.netblocks]:
                if cidr not in known.netblocks:
                    known.netblocks.append(cidr)

    def description_search(self, s: str) -> list[ASNRequest]:
        """Return the entries whose description contains s."""
        with self._lock:
            return [entry for entry in self._cache.values() if s in entry.description]

    def asn_search(self, asn: int) -> ASNRequest | None:
        """Return the entry for asn, or None when it is not cached."""
        with self._lock:
            return self._cache.get(asn)

    def addr_search(self, addr: str) -> ASNRequest | None:
        """Return the ASN information for the netblock holding addr, or None."""
        with self._lock:
            ip = _parse_ip(addr)
            if ip is None:
                return None

            reserved = is_reserved_address(addr)
            if reserved is not None:
                return ASNRequest(
                    address=addr,
                    asn=0,
                    prefix=reserved,
                    description="Reserved Network Address Blocks",
                    tag=Tag.RIR,
                    source="RIR",
                )

            found = self._search_ranger(ip)
            if found is None:
                self._index_address(ip)
                found = self._search_ranger(ip)
                if found is None:
                    return None

            network, data = found
            prefix = str(network)
            return ASNRequest(
                address=addr,
                asn=data.asn,
                cc=data.cc,
                prefix=prefix,
                netblocks=list(dict.fromkeys([prefix, *data.netblocks])),
                description=data.description,
                tag=Tag.RIR,
                source="RIR",
            )

    def _search_ranger(self, ip: IPAddress) -> tuple[IPNetwork, ASNRequest] | None:
        containing = [
            (network, data) for network, data in self._ranger.items() if _contains(network, ip)
        ]
        if not containing:
            return None
        return min(containing, key=lambda item: item[0].prefixlen)

    def _index_address(self, ip: IPAddress) -> None:
        """Index the most specific cached netblock that holds ip."""
        best: tuple[IPNetwork, ASNRequest] | None = None
        for record in self._cache.values():
            for netblock in record.netblocks:
                network = _parse_cidr(netblock)
                if network is None or network.prefixlen == 0:
                    continue
                if not _contains(network, ip):
                    continue
                if best is not None and best[0].prefixlen > network.prefixlen:
                    continue
                best = (network, record)

        if best is not None:
            network, record = best
            self._ranger[network] = record