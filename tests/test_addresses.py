import pytest

from surfacemap.addresses import check_addresses


@pytest.mark.parametrize(
    "addrs, expected",
    [
        (["1.1.1.1"], ["1.1.1.1:53"]),
        (["1.1.1.1:58"], ["1.1.1.1:58"]),
        (
            ["1.1.1.1", "8.8.8.8:80", "111.111.111.111"],
            ["1.1.1.1:53", "8.8.8.8:80", "111.111.111.111:53"],
        ),
        (["NotAnIP"], []),
        (["300.300.300.300:53"], []),
        (
            ["192.168.61.221", "NotAnIP:80", "111.111.111.111:111"],
            ["192.168.61.221:53", "111.111.111.111:111"],
        ),
    ],
    ids=[
        "ip_without_port",
        "ip_with_port",
        "multiple_ips",
        "invalid_ip",
        "invalid_ip_with_port",
        "valid_and_invalid",
    ],
)
def test_check_addresses(addrs, expected):
    assert check_addresses(addrs) == expected


def test_ipv6_without_port_is_bracketed():
    assert check_addresses(["2001:db8::1"]) == ["[2001:db8::1]:53"]


def test_ipv6_with_port_keeps_port():
    assert check_addresses(["[2001:db8::1]:5353"]) == ["[2001:db8::1]:5353"]


def test_empty_input():
    assert check_addresses([]) == []


def test_output_is_idempotent():
    once = check_addresses(["1.1.1.1", "[2001:db8::1]:54", "8.8.8.8:80"])
    assert check_addresses(once) == once