"""Request and result records passed between enumeration services."""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


class Tag(str, Enum):
    """How a piece of information was discovered."""

    NONE = "none"
    ALT = "alt"
    GUESS = "guess"
    ARCHIVE = "archive"
    API = "api"
    AXFR = "axfr"
    BRUTE = "brute"
    CERT = "cert"
    CRAWL = "crawl"
    DNS = "dns"
    RIR = "rir"
    EXTERNAL = "ext"
    SCRAPE = "scrape"


class Topic(str, Enum):
    """Publish/subscribe topics shared by the services."""

    NEW_NAME = "surfacemap:newname"
    NEW_ADDR = "surfacemap:newaddr"
    SUB_DISCOVERED = "surfacemap:newsub"
    ASN_REQUEST = "surfacemap:asnreq"
    NEW_ASN = "surfacemap:newasn"
    WHOIS_REQUEST = "surfacemap:whoisreq"
    NEW_WHOIS = "surfacemap:whoisinfo"
    LOG = "surfacemap:log"
    OUTPUT = "surfacemap:output"


_TRUSTED_TAGS = (Tag.ARCHIVE, Tag.AXFR, Tag.CERT, Tag.CRAWL, Tag.DNS)

_MAX_NAME_LENGTH = 256
_MAX_LABEL_LENGTH = 63
_NAME_PIECE = re.compile(r"\\(?:[0-9]{3}|.)?|.", re.DOTALL)
_DECIMAL = re.compile(r"[0-9]+")


def _parse_ip(addr: str) -> IPAddress | None:
    """Parse a textual IP address; IPv4-mapped IPv6 addresses become IPv4."""
    if not isinstance(addr, str) or "%" in addr:
        return None
    try:
        ip = ipaddress.ip_address(addr)
    except ValueError:
        return None
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def _parse_cidr(cidr: str) -> IPNetwork | None:
    """Parse 'address/bits' notation, allowing host bits to be set."""
    if not isinstance(cidr, str):
        return None
    addr, sep, bits = cidr.partition("/")
    if not sep or not _DECIMAL.fullmatch(bits) or "%" in addr:
        return None
    try:
        ip = ipaddress.ip_address(addr)
        return ipaddress.ip_network(f"{ip}/{int(bits)}", strict=False)
    except ValueError:
        return None


def _is_fqdn(name: str) -> bool:
    if not name.endswith("."):
        return False
    head = name[:-1]
    backslashes = len(head) - len(head.rstrip("\\"))
    return backslashes % 2 == 0


def _is_domain_name(name: str) -> bool:
    """Check that a name is syntactically usable as a DNS domain name."""
    if not name:
        return False
    if not _is_fqdn(name):
        name += "."
    if name == ".":
        return True

    offset = 0
    label_length = 0
    was_dot = False
    first = True
    for piece in _NAME_PIECE.findall(name):
        if piece == ".":
            if first or was_dot:
                return False
            was_dot = True
            if label_length > _MAX_LABEL_LENGTH:
                return False
            offset += 1 + label_length
            if offset > _MAX_NAME_LENGTH:
                return False
            label_length = 0
        else:
            was_dot = False
            label_length += 1
        first = False
    return True


def _labels(name: str) -> list[str]:
    if _is_fqdn(name):
        name = name[:-1]
    if not name:
        return []
    return [label.lower() for label in name.split(".")]


def _is_subdomain(parent: str, child: str) -> bool:
    """Report whether child equals parent or lies beneath it."""
    parent_labels = _labels(parent)
    child_labels = _labels(child)
    if len(parent_labels) > len(child_labels):
        return False
    return child_labels[len(child_labels) - len(parent_labels):] == parent_labels


def _valid_name_in_domain(name: str, domain: str) -> bool:
    return (
        _is_domain_name(name)
        and _is_domain_name(domain)
        and _is_subdomain(domain, name)
    )


def _remove_asterisk_label(name: str) -> str:
    index = name.rfind("*.")
    if index == -1:
        return name
    return name[index + 2:]


def _processed_flag() -> bool:
    return field(default=False, compare=False, repr=False, kw_only=True)


@dataclass
class DNSAnswer:
    """A single DNS resource record."""

    name: str = ""
    type: int = 0
    ttl: int = 0
    data: str = ""


@dataclass
class DNSRequest:
    """A DNS name travelling through the processing pipeline."""

    name: str = ""
    domain: str = ""
    records: list[DNSAnswer] = field(default_factory=list)
    tag: str = ""
    source: str = ""
    processed: bool = _processed_flag()

    def clone(self) -> DNSRequest:
        return replace(self, records=list(self.records), processed=False)

    def mark_as_processed(self) -> None:
        """Record that the pipeline has finished with this item."""
        self.processed = True

    def valid(self) -> bool:
        return _valid_name_in_domain(self.name, self.domain)


@dataclass
class ResolvedRequest:
    """A DNS name that has been resolved."""

    name: str = ""
    domain: str = ""
    records: list[DNSAnswer] = field(default_factory=list)
    tag: str = ""
    source: str = ""
    processed: bool = _processed_flag()

    def clone(self) -> ResolvedRequest:
        return replace(self, records=list(self.records), processed=False)

    def mark_as_processed(self) -> None:
        """Record that the pipeline has finished with this item."""
        self.processed = True

    def valid(self) -> bool:
        return _valid_name_in_domain(self.name, self.domain)


@dataclass
class SubdomainRequest:
    """A subdomain found during enumeration."""

    name: str = ""
    domain: str = ""
    records: list[DNSAnswer] = field(default_factory=list)
    tag: str = ""
    source: str = ""
    times: int = 0
    processed: bool = _processed_flag()

    def clone(self) -> SubdomainRequest:
        # The repeat counter is not carried over to a clone.
        return replace(self, records=list(self.records), times=0, processed=False)

    def mark_as_processed(self) -> None:
        """Record that the pipeline has finished with this item."""
        self.processed = True

    def valid(self) -> bool:
        return _valid_name_in_domain(self.name, self.domain) and self.times != 0


@dataclass
class ZoneXFRRequest:
    """A zone transfer to attempt against a name server."""

    name: str = ""
    domain: str = ""
    server: str = ""
    tag: str = ""
    source: str = ""
    processed: bool = _processed_flag()

    def clone(self) -> ZoneXFRRequest:
        return replace(self, processed=False)

    def mark_as_processed(self) -> None:
        """Record that the pipeline has finished with this item."""
        self.processed = True


@dataclass
class AddrRequest:
    """A network address travelling through the processing pipeline."""

    address: str = ""
    in_scope: bool = False
    domain: str = ""
    tag: str = ""
    source: str = ""
    processed: bool = _processed_flag()

    def clone(self) -> AddrRequest:
        return replace(self, processed=False)

    def mark_as_processed(self) -> None:
        """Record that the pipeline has finished with this item."""
        self.processed = True

    def valid(self) -> bool:
        if _parse_ip(self.address) is None:
            return False
        return not self.domain or _is_domain_name(self.domain)


@dataclass
class ASNRequest:
    """Autonomous system and netblock information."""

    address: str = ""
    asn: int = 0
    prefix: str = ""
    cc: str = ""
    registry: str = ""
    allocation_date: datetime | None = None
    description: str = ""
    netblocks: list[str] = field(default_factory=list)
    tag: str = ""
    source: str = ""
    processed: bool = _processed_flag()

    def clone(self) -> ASNRequest:
        return replace(self, netblocks=list(self.netblocks), processed=False)

    def mark_as_processed(self) -> None:
        """Record that the pipeline has finished with this item."""
        self.processed = True

    def valid(self) -> bool:
        if _parse_ip(self.address) is None:
            return False
        if _parse_cidr(self.prefix) is None:
            return False
        return all(_parse_cidr(netblock) is not None for netblock in self.netblocks)


@dataclass
class WhoisRequest:
    """Data used for reverse whois lookups."""

    domain: str = ""
    company: str = ""
    email: str = ""
    new_domains: list[str] = field(default_factory=list)
    tag: str = ""
    source: str = ""


@dataclass
class AddressInfo:
    """Addressing details attached to an output record."""

    address: IPAddress | None = None
    netblock: IPNetwork | None = None
    cidr_str: str = ""
    asn: int = 0
    description: str = ""


@dataclass
class Output:
    """Everything collected for one enumerated DNS name."""

    name: str = ""
    domain: str = ""
    addresses: list[AddressInfo] = field(default_factory=list)
    tag: str = ""
    sources: list[str] = field(default_factory=list)
    processed: bool = _processed_flag()

    def clone(self) -> Output:
        return replace(
            self,
            addresses=list(self.addresses),
            sources=list(self.sources),
            processed=False,
        )

    def mark_as_processed(self) -> None:
        """Record that the pipeline has finished with this item."""
        self.processed = True

    def complete(self, passive: bool) -> bool:
        """Report whether all required fields have been populated."""
        if not (self.name and self.domain and self.tag and self.sources):
            return False
        if not all(self.sources):
            return False
        if passive:
            return True
        return all(
            info.address is not None
            and info.netblock is not None
            and info.cidr_str
            and info.description
            for info in self.addresses
        )


def trusted_tag(tag: str) -> bool:
    """Return True for tags that should be trusted even against DNS wildcards."""
    return tag in _TRUSTED_TAGS


def sanitize_dns_request(req: DNSRequest) -> DNSRequest:
    """Normalise the name and domain of a request in place and return it."""
    name = req.name.lower().strip()
    name = _remove_asterisk_label(name)
    req.name = name.strip(".")
    req.domain = req.domain.lower().strip().strip(".")
    return req