import io

import pytest

from surfacemap.graph import Edge, Node
from surfacemap.maltego import cidr_to_maltego_netblock, write_maltego_data

HEADER = (
    "maltego.Domain,maltego.DNSName,maltego.NSRecord,maltego.MXRecord,"
    "maltego.IPv4Address,maltego.Netblock,maltego.AS,maltego.Company,maltego.DNSName\n"
)


def sample_nodes():
    return [
        Node(0, "domain", "owasp.org", "domain: owasp.org", "DNS", "fqdn"),
        Node(1, "address", "205.251.199.98", "address: 205.251.199.98", "DNS", "ipaddr"),
    ]


def sample_edges():
    return [Edge(from_=0, to=1, label="", title="a_record")]


def render(nodes, edges):
    buf = io.StringIO()
    write_maltego_data(buf, nodes, edges)
    return buf.getvalue()


def test_write_maltego_data_without_as_writes_header_only():
    output = render(sample_nodes(), sample_edges())
    assert output == HEADER


def test_write_maltego_data_walks_from_as():
    nodes = [
        Node(0, "as", "26808", "as: 26808, Desc: UTICA-COLLEGE", "RIR", "as"),
        Node(1, "netblock", "72.237.4.0/24", "netblock: 72.237.4.0/24", "RIR", "netblock"),
        Node(2, "address", "72.237.4.113", "address: 72.237.4.113", "DNS", "ipaddr"),
        Node(3, "subdomain", "www.example.com", "subdomain: www.example.com", "DNS", "fqdn"),
    ]
    edges = [
        Edge(from_=0, to=1, title="prefix"),
        Edge(from_=1, to=2, title="contains"),
        Edge(from_=3, to=2, title="a_record"),
    ]
    assert render(nodes, edges).splitlines() == [
        HEADER.rstrip("\n"),
        ",,,,,,26808,UTICA-COLLEGE,",
        ",,,,,72.237.4.0-72.237.4.255,26808,,",
        ",,,,72.237.4.113,72.237.4.0-72.237.4.255,,,",
        ",,,,72.237.4.113,72.237.4.0-72.237.4.255,,,",
        ",www.example.com,,,72.237.4.113,,,,",
        ",www.example.com,,,72.237.4.113,,,,",
    ]


def test_as_title_without_description_is_rejected():
    with pytest.raises(ValueError):
        render([Node(0, "as", "1", "as 1", "RIR", "as")], [])


@pytest.mark.parametrize(
    ("cidr", "expected"),
    [
        ("", ""),
        ("193.0.2.1/16", "193.0.0.0-193.0.255.255"),
        ("193.0.2.1/66", ""),
        ("\t192.0.2.1/24", ""),
        ("192.0.2.1/24,", ""),
    ],
    ids=["empty", "valid", "invalid", "whitespace", "extraneous_comma"],
)
def test_cidr_to_maltego_netblock(cidr, expected):
    assert cidr_to_maltego_netblock(cidr) == expected