import queue
import threading

from surfacemap.asncache import ASNCache
from surfacemap.requests import ASNRequest, DNSRequest
from surfacemap.system import populate_cache


class FakeService:
    def __init__(self):
        self.input = queue.Queue()
        self.output = queue.Queue()

    def start(self):
        pass

    def stop(self):
        pass


class FakeSystem:
    def __init__(self, sources):
        self._sources = sources
        self._cache = ASNCache()

    def data_sources(self):
        return list(self._sources)

    def cache(self):
        return self._cache


def test_populate_cache_sends_request_and_skips_answers_when_stopped():
    src = FakeService()
    src.output.put(ASNRequest(asn=26808, prefix="72.237.4.0/24", address="72.237.4.113"))
    system = FakeSystem([src])
    stop = threading.Event()
    stop.set()

    populate_cache(26808, system, stop)

    sent = src.input.get_nowait()
    assert isinstance(sent, ASNRequest)
    assert sent.asn == 26808
    assert system.cache().asn_search(26808) is None
    assert src.output.qsize() == 1


def test_populate_cache_stores_asn_answers():
    src = FakeService()
    answer = ASNRequest(
        asn=26808,
        prefix="72.237.4.0/24",
        address="72.237.4.113",
        description="UTICA-COLLEGE",
    )
    src.output.put(answer)
    system = FakeSystem([src])

    populate_cache(26808, system, threading.Event())

    cached = system.cache().asn_search(26808)
    assert cached is answer
    assert cached.netblocks == ["72.237.4.0/24"]
    assert system.cache().addr_search("72.237.4.120").asn == 26808


def test_populate_cache_ignores_other_answers():
    src = FakeService()
    src.output.put(DNSRequest(name="example.com", domain="example.com"))
    system = FakeSystem([src])

    populate_cache(26808, system, threading.Event())

    assert system.cache().asn_search(26808) is None
    assert src.input.get_nowait().asn == 26808


def test_populate_cache_without_sources_leaves_cache_empty():
    system = FakeSystem([])
    populate_cache(26808, system)
    assert system.cache().description_search("") == []