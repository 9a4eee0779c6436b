# surfacemap

Building blocks for mapping an organisation's external attack surface: the
records passed between discovery services, an in-memory cache of autonomous
system (ASN) information, and exporters that write a discovered graph in
several visualisation formats. It has no dependencies outside the standard
library.

## What is in the package

- `surfacemap.requests`
  - Records: `DNSAnswer`, `DNSRequest`, `ResolvedRequest`, `SubdomainRequest`,
    `ZoneXFRRequest`, `AddrRequest`, `ASNRequest`, `WhoisRequest`,
    `AddressInfo` and `Output`.
  - Pipeline methods: the pipeline records have `clone()` and
    `mark_as_processed()`. Most of them also have `valid()`, which checks the
    DNS name syntax and that the name lies within the domain. `AddrRequest`
    and `ASNRequest` check their IP addresses and CIDR blocks instead.
    `SubdomainRequest` also needs a non-zero `times`.
  - `Output.complete(passive)` reports whether the required fields are
    filled in.
  - `Tag` and `Topic` are string enums.
  - `trusted_tag(tag)` is true for `archive`, `axfr`, `cert`, `crawl` and
    `dns`.
  - `sanitize_dns_request(req)` lower-cases and trims the name and domain and
    drops a leading wildcard label.
- `surfacemap.asncache`
  - `ASNCache` is a thread-safe store with four operations:
    - `update(req)` merges new details into an existing ASN entry.
    - `asn_search(asn)` looks an entry up by ASN.
    - `description_search(s)` finds entries by a substring of the description.
    - `addr_search(addr)` finds the most specific cached netblock that holds
      an address.
  - `is_reserved_address(addr)` returns the reserved block that holds an
    address (private, loopback, multicast and similar), or `None`.
    `addr_search` answers reserved addresses with ASN 0.
- `surfacemap.graph`
  - `Quad` is a subject/predicate/object statement. `Node` and `Edge` are the
    types the exporters use.
  - `viz_data(quads, uuids)` turns the quads of the given event IDs into
    nodes and edges. Names get their display types: domain, subdomain, ns,
    mx, ptr or address.
- Exporters. Each one writes to any text stream:
  - `surfacemap.d3.write_d3_data` writes an HTML page with a D3 force layout.
    The page loads the D3 library from its public CDN.
  - `surfacemap.dot.write_dot_data` writes a Graphviz DOT digraph.
  - `surfacemap.gexf.write_gexf_data` writes a GEXF 1.3 document for Gephi.
  - `surfacemap.graphistry.write_graphistry_data` writes Graphistry edge-list
    JSON.
  - `surfacemap.maltego.write_maltego_data` writes a Maltego CSV table. It
    walks outward from the autonomous-system nodes.
    `cidr_to_maltego_netblock(cidr)` renders `first-last` ranges.
- `surfacemap.system`
  - `System` and `Service` protocols.
  - `populate_cache(asn, system, stop_event=None)` sends an `ASNRequest` to
    each data source's input queue and waits a second. It then stores any ASN
    answer from the source's output queue in the system cache.
- `surfacemap.simple`: `SimpleSystem`, a `System` that holds one data source,
  one graph and the shared resources.
- `surfacemap.addresses`: `check_addresses(addrs)` keeps resolver addresses
  whose host is an IP address and adds port 53 where no port is given.

## Installation

```
pip install .
```

## Examples

Caching ASN information and looking up an address:

```python
from surfacemap.asncache import ASNCache
from surfacemap.requests import ASNRequest

cache = ASNCache()
cache.update(ASNRequest(address="72.237.4.113", asn=26808,
                        prefix="72.237.4.0/24", description="UTICA-COLLEGE"))
entry = cache.addr_search("72.237.4.120")
print(entry.asn, entry.prefix)   # 26808 72.237.4.0/24
```

Turning quads into a graph and writing it as Graphviz DOT:

```python
import sys
from surfacemap.graph import Node, Edge
from surfacemap.dot import write_dot_data

nodes = [
    Node(id=0, type="domain", label="example.com", title="domain: example.com", source="DNS"),
    Node(id=1, type="address", label="192.0.2.10", title="address: 192.0.2.10", source="DNS"),
]
edges = [Edge(from_=0, to=1, title="a_record")]
write_dot_data(sys.stdout, nodes, edges)
```

Normalising resolver addresses:

```python
from surfacemap.addresses import check_addresses

check_addresses(["1.1.1.1", "8.8.8.8:80", "NotAnIP"])
# ['1.1.1.1:53', '8.8.8.8:80']
```

## What it does not do

`surfacemap` is a library only. It has none of the following:

- A command-line program.
- A DNS resolver or resolver pool. `SimpleSystem` only holds whatever pool
  objects you give it.
- Graph database storage. `viz_data` works on quads that you supply.
- Bundled IP-to-ASN data. The `ASNCache` holds only what you add with
  `update`.
- A system that runs many data sources concurrently. Use `SimpleSystem`, or
  write your own class that follows the `System` protocol.

## Running the tests

```
pip install ".[test]"
pytest
```