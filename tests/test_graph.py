from surfacemap.graph import Edge, Node, Quad, viz_data

EVENT = "barbazz"


def a_record_quads():
    return [
        Quad(EVENT, "type", "event"),
        Quad(EVENT, "domain", "example.domain"),
        Quad(EVENT, "test", "dev.example.domain"),
        Quad(EVENT, "test", "127.0.0.1"),
        Quad(EVENT, "test", "example.domain"),
        Quad("dev.example.domain", "type", "fqdn"),
        Quad("dev.example.domain", "root", "example.domain"),
        Quad("dev.example.domain", "a_record", "127.0.0.1"),
        Quad("example.domain", "type", "fqdn"),
        Quad("127.0.0.1", "type", "ipaddr"),
    ]


def test_viz_data_nodes():
    nodes, _ = viz_data(a_record_quads(), [EVENT])
    assert nodes == [
        Node(0, "subdomain", "dev.example.domain", "subdomain: dev.example.domain", "test", "fqdn"),
        Node(1, "domain", "example.domain", "domain: example.domain", "test", "fqdn"),
        Node(2, "address", "127.0.0.1", "address: 127.0.0.1", "test", "ipaddr"),
    ]


def test_viz_data_edges():
    _, edges = viz_data(a_record_quads(), [EVENT])
    assert edges == [
        Edge(from_=0, to=1, title="root"),
        Edge(from_=0, to=2, title="a_record"),
    ]


def test_unknown_event_yields_nothing():
    nodes, edges = viz_data(a_record_quads(), ["other"])
    assert nodes == []
    assert edges == []


def test_iri_and_quoted_values_are_stripped():
    quads = [
        Quad("<ev>", "<test>", "<host.example.com>"),
        Quad("<host.example.com>", "<type>", '"fqdn"'),
    ]
    nodes, _ = viz_data(quads, ["ev"])
    assert [(n.label, n.type, n.source) for n in nodes] == [
        ("host.example.com", "subdomain", "test")
    ]


def test_tld_nodes_are_skipped():
    quads = [
        Quad(EVENT, "test", "domain"),
        Quad("domain", "type", "fqdn"),
        Quad("example.domain", "tld", "domain"),
    ]
    nodes, _ = viz_data(quads, [EVENT])
    assert nodes == []


def test_as_node_title_has_description():
    quads = [
        Quad(EVENT, "rir", "26808"),
        Quad("26808", "type", "as"),
        Quad("26808", "description", "UTICA-COLLEGE"),
    ]
    nodes, _ = viz_data(quads, [EVENT])
    assert nodes[0].title == "as: 26808, Desc: UTICA-COLLEGE"


def test_ns_mx_and_ptr_types():
    quads = [
        Quad(EVENT, "dns", "ns1.example.com"),
        Quad(EVENT, "dns", "mail.example.com"),
        Quad(EVENT, "dns", "1.0.0.127.in-addr.arpa"),
        Quad("example.com", "ns_record", "ns1.example.com"),
        Quad("example.com", "mx_record", "mail.example.com"),
        Quad("ns1.example.com", "type", "fqdn"),
        Quad("mail.example.com", "type", "fqdn"),
        Quad("1.0.0.127.in-addr.arpa", "type", "fqdn"),
        Quad("1.0.0.127.in-addr.arpa", "ptr_record", "host.example.com"),
    ]
    nodes, _ = viz_data(quads, [EVENT])
    assert {n.label: n.type for n in nodes} == {
        "ns1.example.com": "ns",
        "mail.example.com": "mx",
        "1.0.0.127.in-addr.arpa": "ptr",
    }


def test_nodes_without_source_are_skipped():
    quads = [
        Quad(EVENT, "domain", "example.com"),
        Quad("example.com", "type", "fqdn"),
    ]
    nodes, _ = viz_data(quads, [EVENT])
    assert nodes == []