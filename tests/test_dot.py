import io

from surfacemap.dot import write_dot_data
from surfacemap.graph import Edge, Node


def sample_nodes():
    return [
        Node(0, "domain", "owasp.org", "domain: owasp.org", "DNS", "fqdn"),
        Node(1, "address", "205.251.199.98", "address: 205.251.199.98", "DNS", "ipaddr"),
    ]


def sample_edges():
    return [Edge(from_=0, to=1, label="", title="a_record")]


EXPECTED = """
digraph "Surface Map Network Mapping" {
\tsize = "7.5,10"; ranksep="2.5 equally"; ratio=auto;


        node [label="owasp.org",color="red",type="domain",source="DNS"]; n1;

        node [label="205.251.199.98",color="orange",type="address",source="DNS"]; n2;



        n1 -> n2 [label="a_record"];

}
"""


def test_write_dot_data_happy_path():
    buf = io.StringIO()
    write_dot_data(buf, sample_nodes(), sample_edges())
    output = buf.getvalue()
    assert 'digraph "Surface Map Network Mapping"' in output
    assert output == EXPECTED


def test_unknown_type_has_empty_color():
    buf = io.StringIO()
    write_dot_data(buf, [Node(0, "company", "Acme", "", "x", "")], [])
    assert 'node [label="Acme",color="",type="company",source="x"]; n1;' in buf.getvalue()


def test_empty_graph():
    buf = io.StringIO()
    write_dot_data(buf, [], [])
    assert buf.getvalue().endswith("ratio=auto;\n\n\n\n\n}\n")